# iustime/ui/dialogs/login_dialog.py
# Rev 0.2.0
from __future__ import annotations
from typing import Optional, Sequence

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QDialog, QVBoxLayout, QFormLayout, QLineEdit, QDialogButtonBox, QLabel, QWidget
)

from iustime.models.entities import User
from iustime.services.auth_service import authenticate
from iustime.utils.logging_setup import get_logger


class LoginDialog(QDialog):
    """Email + password; `user()` holds the authenticated user after accept()."""

    def __init__(self, users: Sequence[User], parent: QWidget | None = None):
        super().__init__(parent)
        self.setWindowTitle("IUSTIME - Iniciar sesión")
        self._log = get_logger("LoginDialog")
        self._users = users
        self._user: Optional[User] = None

        self._email = QLineEdit()
        self._email.setPlaceholderText("usuario@iustime.com")
        self._password = QLineEdit()
        self._password.setEchoMode(QLineEdit.Password)

        self._error = QLabel("")
        self._error.setStyleSheet("color: #c62828;")
        self._error.setVisible(False)

        form = QFormLayout()
        form.addRow("Email:", self._email)
        form.addRow("Contraseña:", self._password)

        btns = QDialogButtonBox(QDialogButtonBox.Ok | QDialogButtonBox.Cancel)
        btns.button(QDialogButtonBox.Ok).setText("Ingresar")
        btns.accepted.connect(self._try_login)
        btns.rejected.connect(self.reject)

        root = QVBoxLayout(self)
        root.addLayout(form)
        root.addWidget(self._error)
        root.addWidget(btns)
        self.setMinimumWidth(360)
        self._email.setFocus(Qt.OtherFocusReason)

    def _try_login(self) -> None:
        user = authenticate(self._users, self._email.text(), self._password.text())
        if user is None:
            self._log.info("Failed login for %r", self._email.text().strip())
            self._error.setText("Credenciales inválidas.")
            self._error.setVisible(True)
            self._password.clear()
            return
        self._log.info("User %s logged in (%s)", user.email, user.role)
        self._user = user
        self.accept()

    def user(self) -> Optional[User]:
        return self._user
