# iustime/ui/user_management_view.py
# Rev 0.2.0
from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QPushButton, QTableWidget, QTableWidgetItem,
    QHeaderView, QMessageBox, QDialog, QLabel
)

from iustime.models.entities import User
from iustime.ui.dialogs.user_editor_dialog import UserEditorDialog
from iustime.viewmodels.users_viewmodel import UsersViewModel

_HEADERS = ["Nombre", "Email", "Rol", "Línea asignada"]


class UserManagementView(QWidget):
    """Admin-only user administration."""

    def __init__(self, vm: UsersViewModel, parent=None):
        super().__init__(parent)
        self._vm = vm

        self._btn_new = QPushButton("Nuevo usuario")
        self._btn_edit = QPushButton("Editar")
        self._btn_delete = QPushButton("Eliminar")

        self._table = QTableWidget(0, len(_HEADERS))
        self._table.setHorizontalHeaderLabels(_HEADERS)
        self._table.setEditTriggers(QTableWidget.NoEditTriggers)
        self._table.setSelectionBehavior(QTableWidget.SelectRows)
        self._table.setSelectionMode(QTableWidget.SingleSelection)
        self._table.verticalHeader().setVisible(False)
        self._table.horizontalHeader().setSectionResizeMode(QHeaderView.Stretch)

        top_bar = QHBoxLayout()
        top_bar.addWidget(QLabel("<b>Usuarios</b>"))
        top_bar.addStretch(1)
        top_bar.addWidget(self._btn_new)
        top_bar.addWidget(self._btn_edit)
        top_bar.addWidget(self._btn_delete)

        root = QVBoxLayout(self)
        root.addLayout(top_bar)
        root.addWidget(self._table, 1)

        self._btn_new.clicked.connect(self._on_new)
        self._btn_edit.clicked.connect(self._on_edit)
        self._btn_delete.clicked.connect(self._on_delete)
        self._table.itemDoubleClicked.connect(lambda _i: self._on_edit())

        self._vm.usersReloaded.connect(self._on_reloaded)
        self._vm.errorRaised.connect(lambda msg: QMessageBox.warning(self, "Usuario", msg))

    def refresh(self) -> None:
        self._vm.reload()

    def _on_reloaded(self, rows: list) -> None:
        self._table.setRowCount(0)
        for row in rows:
            r = self._table.rowCount()
            self._table.insertRow(r)
            role = "Administrador" if row["role"] == "ADMIN" else "Usuario"
            for c, text in enumerate([row["name"], row["email"], role, row["line_name"]]):
                item = QTableWidgetItem(text)
                if c == 0:
                    item.setData(Qt.UserRole, row["id"])
                self._table.setItem(r, c, item)

    def _selected_id(self) -> str | None:
        row = self._table.currentRow()
        item = self._table.item(row, 0) if row >= 0 else None
        return item.data(Qt.UserRole) if item else None

    def _on_new(self) -> None:
        blank = User(id="", name="", email="", password="", role="USER")
        dlg = UserEditorDialog(blank, lines=self._vm.lines(), parent=self)
        if dlg.exec() == QDialog.Accepted:
            self._vm.create_user(dlg.values())

    def _on_edit(self) -> None:
        user = self._vm.get_user(self._selected_id() or "")
        if user is None:
            return
        dlg = UserEditorDialog(user, lines=self._vm.lines(), parent=self)
        if dlg.exec() == QDialog.Accepted:
            self._vm.update_user(dlg.values())

    def _on_delete(self) -> None:
        user_id = self._selected_id()
        if user_id and QMessageBox.question(self, "Eliminar usuario", "¿Eliminar el usuario?") == QMessageBox.Yes:
            self._vm.delete_user(user_id)
