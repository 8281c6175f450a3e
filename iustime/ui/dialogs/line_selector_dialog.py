# iustime/ui/dialogs/line_selector_dialog.py
# Rev 0.2.0
from __future__ import annotations
from typing import Optional

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QDialog, QVBoxLayout, QHBoxLayout, QListWidget, QListWidgetItem, QPushButton,
    QLineEdit, QLabel, QDialogButtonBox, QMessageBox, QWidget
)

from iustime.viewmodels.lines_viewmodel import LinesViewModel


class LineSelectorDialog(QDialog):
    """
    Admin entry point: pick a work line, create one, or delete one.
    Deleting a line leaves its projects, tasks and risks in storage.
    """

    def __init__(self, vm: LinesViewModel, parent: QWidget | None = None):
        super().__init__(parent)
        self.setWindowTitle("Seleccionar línea de trabajo")
        self._vm = vm
        self._selected: Optional[str] = None

        self._list = QListWidget()
        self._list.itemDoubleClicked.connect(lambda _i: self._choose())

        self._name = QLineEdit()
        self._name.setPlaceholderText("Nombre de la nueva línea")
        self._desc = QLineEdit()
        self._desc.setPlaceholderText("Descripción (opcional)")
        btn_add = QPushButton("Crear línea")
        btn_add.clicked.connect(self._create)
        btn_del = QPushButton("Eliminar")
        btn_del.clicked.connect(self._delete)

        add_row = QHBoxLayout()
        add_row.addWidget(self._name, 2)
        add_row.addWidget(self._desc, 3)
        add_row.addWidget(btn_add)

        btns = QDialogButtonBox(QDialogButtonBox.Open | QDialogButtonBox.Cancel)
        btns.accepted.connect(self._choose)
        btns.rejected.connect(self.reject)
        btns.addButton(btn_del, QDialogButtonBox.ResetRole)

        root = QVBoxLayout(self)
        root.addWidget(QLabel("Líneas de trabajo:"))
        root.addWidget(self._list, 1)
        root.addLayout(add_row)
        root.addWidget(btns)
        self.resize(560, 420)

        self._vm.linesReloaded.connect(self._populate)
        self._vm.errorRaised.connect(lambda msg: QMessageBox.warning(self, "Línea", msg))
        self._vm.reload()

    def _populate(self, lines: list) -> None:
        self._list.clear()
        for line in lines:
            label = line.name if not line.description else f"{line.name} - {line.description}"
            item = QListWidgetItem(label)
            item.setData(Qt.UserRole, line.id)
            self._list.addItem(item)
        if self._list.count():
            self._list.setCurrentRow(0)

    def _current_id(self) -> Optional[str]:
        item = self._list.currentItem()
        return item.data(Qt.UserRole) if item else None

    def _create(self) -> None:
        line = self._vm.create_line(self._name.text(), self._desc.text().strip())
        if line is not None:
            self._name.clear()
            self._desc.clear()

    def _delete(self) -> None:
        line_id = self._current_id()
        if not line_id:
            return
        if QMessageBox.question(self, "Eliminar línea", "¿Eliminar la línea seleccionada?") != QMessageBox.Yes:
            return
        self._vm.delete_line(line_id)

    def _choose(self) -> None:
        line_id = self._current_id()
        if not line_id:
            QMessageBox.information(self, "Línea", "Cree o seleccione una línea de trabajo.")
            return
        self._selected = line_id
        self.accept()

    def selected_line_id(self) -> Optional[str]:
        return self._selected
