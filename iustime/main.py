# Rev 0.2.0

# iustime/main.py  (Rev 0.2.0)
import sys
from PySide6.QtGui import QGuiApplication, QFont
from PySide6.QtCore import Qt, QCoreApplication
from PySide6.QtWidgets import QApplication, QDialog

from iustime.app_context import AppContext
from iustime.services.auth_service import Session
from iustime.ui.dialogs.login_dialog import LoginDialog
from iustime.ui.main_window import MainWindow
from iustime.utils.logging_setup import setup_logging
from iustime.utils.paths import DB_PATH, ensure_dirs


def _start_session(app: QApplication, ctx: AppContext) -> bool:
    """Login, then open the main window. False when the user cancels."""
    login = LoginDialog(ctx.store.users.list())
    if login.exec() != QDialog.Accepted or login.user() is None:
        return False

    session = Session.start(login.user(), [line.id for line in ctx.store.lines.list()])
    win = MainWindow(ctx=ctx, session=session)

    def _relogin():
        # runs before the old window closes, so the app stays alive meanwhile
        if not _start_session(app, ctx):
            app.quit()

    win.logoutRequested.connect(_relogin)
    win.show_restored()
    # Keep a strong ref to the current window
    app.setProperty("mainWindow", win)
    return True


def main():
    QGuiApplication.setHighDpiScaleFactorRoundingPolicy(
        Qt.HighDpiScaleFactorRoundingPolicy.PassThrough
    )
    app = QApplication(sys.argv)
    QCoreApplication.setApplicationName("iustime")
    app.setFont(QFont("Sans Serif", 10))

    ensure_dirs()
    logfile = setup_logging("iustime")
    print(f"[logging] Writing to: {logfile}")

    # --- DI wiring ---
    ctx = AppContext.create(DB_PATH)
    app.aboutToQuit.connect(ctx.close)

    if not _start_session(app, ctx):
        ctx.close()
        return 0

    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
