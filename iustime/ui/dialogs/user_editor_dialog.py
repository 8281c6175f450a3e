# iustime/ui/dialogs/user_editor_dialog.py
# Rev 0.2.0
from __future__ import annotations
import dataclasses
from typing import Sequence

from PySide6.QtWidgets import (
    QDialog, QVBoxLayout, QFormLayout, QLineEdit, QComboBox, QDialogButtonBox, QWidget
)

from iustime.models.entities import User, WorkLine
from iustime.ui.form_helpers import select_data

_ROLE_LABELS = {"ADMIN": "Administrador", "USER": "Usuario estándar"}


class UserEditorDialog(QDialog):
    """Standard users must be assigned to a work line; admins carry none."""

    def __init__(self, user: User, *, lines: Sequence[WorkLine], parent: QWidget | None = None):
        super().__init__(parent)
        self._user = user
        self.setWindowTitle("Editar usuario" if user.id else "Nuevo usuario")

        self._name = QLineEdit(user.name)
        self._email = QLineEdit(user.email)
        self._password = QLineEdit(user.password)
        self._password.setEchoMode(QLineEdit.Password)
        self._role = QComboBox()
        for role, label in _ROLE_LABELS.items():
            self._role.addItem(label, role)
        select_data(self._role, user.role)
        self._line = QComboBox()
        self._line.addItem("(Sin asignar)", None)
        for line in lines:
            self._line.addItem(line.name, line.id)
        select_data(self._line, user.assigned_line_id)
        self._role.currentIndexChanged.connect(self._on_role_changed)

        form = QFormLayout()
        form.addRow("Nombre:", self._name)
        form.addRow("Email:", self._email)
        form.addRow("Contraseña:", self._password)
        form.addRow("Rol:", self._role)
        form.addRow("Línea asignada:", self._line)

        btns = QDialogButtonBox(QDialogButtonBox.Save | QDialogButtonBox.Cancel)
        btns.accepted.connect(self.accept)
        btns.rejected.connect(self.reject)

        root = QVBoxLayout(self)
        root.addLayout(form)
        root.addWidget(btns)
        self.setMinimumWidth(420)
        self._on_role_changed()

    def _on_role_changed(self, *_args) -> None:
        self._line.setEnabled(self._role.currentData() == "USER")

    def values(self) -> User:
        role = self._role.currentData()
        return dataclasses.replace(
            self._user,
            name=self._name.text().strip(),
            email=self._email.text().strip(),
            password=self._password.text(),
            role=role,
            assigned_line_id=self._line.currentData() if role == "USER" else None,
        )
