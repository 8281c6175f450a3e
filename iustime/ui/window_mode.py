# Rev 0.2.0

# iustime/ui/window_mode.py
from PySide6.QtCore import Qt, QRect
from PySide6.QtGui import QGuiApplication


def _available(win) -> QRect:
    screen = QGuiApplication.screenAt(win.frameGeometry().center()) or QGuiApplication.primaryScreen()
    return screen.availableGeometry()


def apply_window_settings(win, settings: dict) -> None:
    """
    Size the main window from the `main_window` settings section.
    The requested size is capped to the available screen area.
    """
    rect = _available(win)
    w = min(int(settings.get("width", 1280)), rect.width())
    h = min(int(settings.get("height", 760)), rect.height())
    win.resize(w, h)
    win.setWindowFlag(Qt.WindowMaximizeButtonHint, True)
    if settings.get("is_maximized"):
        win.showMaximized()
    else:
        win.show()


def window_settings(win) -> dict:
    size = win.normalGeometry().size() if win.isMaximized() else win.size()
    return {"width": size.width(), "height": size.height(), "is_maximized": win.isMaximized()}


def lock_dialog_fixed(win, *, width_ratio=0.45, height_ratio=0.6):
    """
    For modal editors: non-resizable, sized as a fraction of the current screen.
    """
    rect = _available(win)
    win.setFixedSize(int(rect.width() * width_ratio), int(rect.height() * height_ratio))
    win.setWindowFlag(Qt.WindowMaximizeButtonHint, False)
