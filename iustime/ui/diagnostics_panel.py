# iustime diagnostics panel
# Rev 0.2.0

from __future__ import annotations
from pathlib import Path
from typing import Optional

from PySide6.QtWidgets import QWidget, QVBoxLayout, QHBoxLayout, QPlainTextEdit, QPushButton, QLabel

from iustime.utils.logging_setup import current_log_file

_TAIL_LINES = 500


def _log_file() -> Optional[Path]:
    path = current_log_file()
    return path if path is not None and path.exists() else None


class DiagnosticsPanel(QWidget):
    """Tail of the rotating log file with manual refresh."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setObjectName("DiagnosticsPanel")

        self._path_lbl = QLabel("")
        self.text = QPlainTextEdit(self)
        self.text.setReadOnly(True)
        self.text.setLineWrapMode(QPlainTextEdit.NoWrap)

        self.btn_refresh = QPushButton("Actualizar log", self)
        self.btn_refresh.clicked.connect(self.refresh)

        bar = QHBoxLayout()
        bar.addWidget(self._path_lbl, 1)
        bar.addWidget(self.btn_refresh)

        layout = QVBoxLayout(self)
        layout.addLayout(bar)
        layout.addWidget(self.text, 1)

        self.refresh()

    def refresh(self):
        path = _log_file()
        if path is None:
            self._path_lbl.setText("(sin archivo de log)")
            self.text.setPlainText("")
            return
        self._path_lbl.setText(str(path))
        try:
            with open(path, "r", encoding="utf-8", errors="ignore") as f:
                lines = f.readlines()[-_TAIL_LINES:]
        except OSError as e:
            self.text.setPlainText(f"<error reading log>\n{e}")
            return
        self.text.setPlainText("".join(lines))
        self.text.verticalScrollBar().setValue(self.text.verticalScrollBar().maximum())
