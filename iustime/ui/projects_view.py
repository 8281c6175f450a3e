# iustime/ui/projects_view.py
# Rev 0.2.0
from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QPushButton, QTableWidget, QTableWidgetItem,
    QHeaderView, QMessageBox, QDialog
)

from iustime.models.types import LEVEL_LABELS, PROJECT_STATUS_LABELS
from iustime.ui.dialogs.project_editor_dialog import ProjectEditorDialog
from iustime.viewmodels.projects_viewmodel import ProjectsViewModel

# Nombre | Responsable | Estado | Prioridad | Progreso | Inicio | Fin | Tareas
_HEADERS = ["Nombre", "Responsable", "Estado", "Prioridad", "Progreso", "Inicio", "Fin", "Tareas"]


class ProjectsView(QWidget):
    def __init__(self, vm: ProjectsViewModel, parent=None):
        super().__init__(parent)
        self._vm = vm

        self._btn_new = QPushButton("Nuevo proyecto")
        self._btn_edit = QPushButton("Editar")
        self._btn_delete = QPushButton("Eliminar")
        self._btn_edit.setEnabled(False)
        self._btn_delete.setEnabled(False)

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
        self._table.itemSelectionChanged.connect(self._on_selection_changed)
        self._table.itemDoubleClicked.connect(lambda _i: self._on_edit())

        self._vm.projectsReloaded.connect(self._on_reloaded)
        self._vm.errorRaised.connect(lambda msg: QMessageBox.warning(self, "Proyecto", msg))

    def refresh(self) -> None:
        self._vm.reload()

    def _on_reloaded(self, projects: list) -> None:
        self._table.setRowCount(0)
        for p in projects:
            r = self._table.rowCount()
            self._table.insertRow(r)
            cells = [
                p.name,
                p.assignee,
                PROJECT_STATUS_LABELS.get(p.status, p.status),
                LEVEL_LABELS.get(p.priority, p.priority),
                f"{p.progress}%",
                p.start_date,
                p.end_date,
                str(self._vm.task_count(p.id)),
            ]
            for c, text in enumerate(cells):
                item = QTableWidgetItem(text)
                if c == 0:
                    item.setData(Qt.UserRole, p.id)
                self._table.setItem(r, c, item)
        self._on_selection_changed()

    def _selected_id(self) -> str | None:
        row = self._table.currentRow()
        if row < 0 or not self._table.selectionModel().hasSelection():
            return None
        item = self._table.item(row, 0)
        return item.data(Qt.UserRole) if item else None

    def _on_selection_changed(self) -> None:
        has = self._selected_id() is not None
        self._btn_edit.setEnabled(has)
        self._btn_delete.setEnabled(has)

    def _on_new(self) -> None:
        dlg = ProjectEditorDialog(self._vm.new_project(), parent=self)
        if dlg.exec() == QDialog.Accepted:
            self._vm.create_project(dlg.values())

    def _on_edit(self) -> None:
        project = self._vm.get_project(self._selected_id() or "")
        if project is None:
            return
        dlg = ProjectEditorDialog(project, parent=self)
        if dlg.exec() == QDialog.Accepted:
            self._vm.update_project(dlg.values())

    def _on_delete(self) -> None:
        project_id = self._selected_id()
        if not project_id:
            return
        if QMessageBox.question(
            self, "Eliminar proyecto",
            "¿Eliminar el proyecto? Sus tareas se conservarán como «Sin Proyecto».",
        ) != QMessageBox.Yes:
            return
        self._vm.delete_project(project_id)
