# Rev 0.2.0

# ============================
# File: iustime/ui/workspace.py
# ============================
from __future__ import annotations
from typing import Dict, Optional
from PySide6.QtCore import Signal
from PySide6.QtWidgets import QWidget, QStackedWidget, QVBoxLayout


class WorkspaceStack(QWidget):
    """Keyed stack of view panels; panels with a `refresh()` are refreshed on show."""

    panelShown = Signal(str)

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._stack = QStackedWidget(self)
        self._panels: Dict[str, QWidget] = {}
        lay = QVBoxLayout(self)
        lay.setContentsMargins(0, 0, 0, 0)
        lay.addWidget(self._stack)

    def add_panel(self, key: str, panel: QWidget) -> None:
        self._panels[key] = panel
        self._stack.addWidget(panel)

    def panel(self, key: str) -> Optional[QWidget]:
        return self._panels.get(key)

    def show_panel(self, key: str) -> bool:
        panel = self._panels.get(key)
        if panel is None:
            return False
        refresh = getattr(panel, "refresh", None)
        if callable(refresh):
            refresh()
        self._stack.setCurrentWidget(panel)
        self.panelShown.emit(key)
        return True

    def current_key(self) -> Optional[str]:
        current = self._stack.currentWidget()
        for k, w in self._panels.items():
            if w is current:
                return k
        return None
