# iustime/ui/risks_view.py
# Rev 0.2.0
from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtGui import QColor
from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QPushButton, QTableWidget, QTableWidgetItem,
    QHeaderView, QMessageBox, QDialog
)

from iustime.services.references import DELETED_TASK
from iustime.ui.dialogs.risk_editor_dialog import RiskEditorDialog
from iustime.viewmodels.risks_viewmodel import RisksViewModel

_HEADERS = ["Descripción", "Tarea", "Responsable", "Acción requerida", "Estado", "Prioridad", "Impacto"]


class RisksView(QWidget):
    def __init__(self, vm: RisksViewModel, parent=None):
        super().__init__(parent)
        self._vm = vm

        self._btn_new = QPushButton("Nuevo riesgo")
        self._btn_edit = QPushButton("Editar")
        self._btn_delete = QPushButton("Eliminar")

        self._table = QTableWidget(0, len(_HEADERS))
        self._table.setHorizontalHeaderLabels(_HEADERS)
        self._table.setEditTriggers(QTableWidget.NoEditTriggers)
        self._table.setSelectionBehavior(QTableWidget.SelectRows)
        self._table.setSelectionMode(QTableWidget.SingleSelection)
        self._table.setAlternatingRowColors(True)
        self._table.verticalHeader().setVisible(False)
        hdr = self._table.horizontalHeader()
        hdr.setSectionResizeMode(QHeaderView.ResizeToContents)
        hdr.setSectionResizeMode(0, QHeaderView.Stretch)
        hdr.setSectionResizeMode(3, QHeaderView.Stretch)

        top_bar = QHBoxLayout()
        top_bar.addWidget(self._btn_new)
        top_bar.addWidget(self._btn_edit)
        top_bar.addWidget(self._btn_delete)
        top_bar.addStretch(1)

        root = QVBoxLayout(self)
        root.addLayout(top_bar)
        root.addWidget(self._table, 1)

        self._btn_new.clicked.connect(self._on_new)
        self._btn_edit.clicked.connect(self._on_edit)
        self._btn_delete.clicked.connect(self._on_delete)
        self._table.itemDoubleClicked.connect(lambda _i: self._on_edit())

        self._vm.risksReloaded.connect(self._on_reloaded)
        self._vm.errorRaised.connect(lambda msg: QMessageBox.warning(self, "Riesgo", msg))

    def refresh(self) -> None:
        self._vm.reload()

    def _on_reloaded(self, rows: list) -> None:
        self._table.setRowCount(0)
        for row in rows:
            r = self._table.rowCount()
            self._table.insertRow(r)
            cells = [row["description"], row["task_label"], row["responsible"], row["required_action"],
                     row["status_label"], row["priority_label"], row["impact_label"]]
            for c, text in enumerate(cells):
                item = QTableWidgetItem(text)
                if c == 0:
                    item.setData(Qt.UserRole, row["id"])
                if c == 1 and text == DELETED_TASK:
                    item.setForeground(QColor("#c62828"))
                self._table.setItem(r, c, item)

    def _selected_id(self) -> str | None:
        row = self._table.currentRow()
        item = self._table.item(row, 0) if row >= 0 else None
        return item.data(Qt.UserRole) if item else None

    def _on_new(self) -> None:
        dlg = RiskEditorDialog(self._vm.new_risk(), tasks=self._vm.task_choices(), parent=self)
        if dlg.exec() == QDialog.Accepted:
            self._vm.create_risk(dlg.values())

    def _on_edit(self) -> None:
        risk = self._vm.get_risk(self._selected_id() or "")
        if risk is None:
            return
        dlg = RiskEditorDialog(risk, tasks=self._vm.task_choices(), parent=self)
        if dlg.exec() == QDialog.Accepted:
            self._vm.update_risk(dlg.values())

    def _on_delete(self) -> None:
        risk_id = self._selected_id()
        if risk_id and QMessageBox.question(self, "Eliminar riesgo", "¿Eliminar el riesgo?") == QMessageBox.Yes:
            self._vm.delete_risk(risk_id)
