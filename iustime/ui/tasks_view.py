# iustime/ui/tasks_view.py
# Rev 0.2.0: parent/subtask grouping, sortable headers
from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtGui import QColor, QFont
from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QTableWidget, QTableWidgetItem, QHeaderView,
    QHBoxLayout, QPushButton, QMessageBox, QDialog, QComboBox, QLabel
)

from iustime.ui.dialogs.task_editor_dialog import TaskEditorDialog
from iustime.viewmodels.tasks_viewmodel import TasksViewModel

# Tarea | Proyecto | Responsable | Fin | Estado | Progreso | Checklist
_HEADERS = ["Tarea", "Proyecto", "Responsable", "Fin", "Estado", "Progreso", "Checklist"]
_SORTABLE = {1: "projectName", 3: "endDate", 5: "progress"}

_STATUS_COLORS = {
    "Ready to Start": "#64748b",
    "In Progress": "#2563eb",
    "Delayed": "#dc2626",
    "Completed": "#16a34a",
}


class TasksView(QWidget):
    def __init__(self, vm: TasksViewModel, parent=None):
        super().__init__(parent)
        self._vm = vm

        # ---------- Controls ----------
        self._cmb_project = QComboBox()
        self._btn_new = QPushButton("Nueva tarea")
        self._btn_sub = QPushButton("Nueva subtarea")
        self._btn_edit = QPushButton("Editar")
        self._btn_delete = QPushButton("Eliminar")
        self._btn_status = QPushButton("Cambiar estado")
        self._count = QLabel("")
        for b in (self._btn_sub, self._btn_edit, self._btn_delete, self._btn_status):
            b.setEnabled(False)

        # ---------- Table ----------
        self._table = QTableWidget(0, len(_HEADERS))
        self._table.setHorizontalHeaderLabels(_HEADERS)
        self._table.setEditTriggers(QTableWidget.NoEditTriggers)
        self._table.setSelectionBehavior(QTableWidget.SelectRows)
        self._table.setSelectionMode(QTableWidget.SingleSelection)
        self._table.setAlternatingRowColors(True)
        self._table.setWordWrap(False)
        vh = self._table.verticalHeader()
        vh.setVisible(False)
        vh.setDefaultSectionSize(22)
        hdr = self._table.horizontalHeader()
        hdr.setSectionResizeMode(QHeaderView.ResizeToContents)
        hdr.setSectionResizeMode(0, QHeaderView.Stretch)
        hdr.setSectionsClickable(True)
        hdr.sectionClicked.connect(self._on_header_clicked)

        # ---------- Layout ----------
        top_bar = QHBoxLayout()
        top_bar.addWidget(QLabel("Proyecto:"))
        top_bar.addWidget(self._cmb_project)
        top_bar.addSpacing(12)
        top_bar.addWidget(self._btn_new)
        top_bar.addWidget(self._btn_sub)
        top_bar.addWidget(self._btn_edit)
        top_bar.addWidget(self._btn_delete)
        top_bar.addWidget(self._btn_status)
        top_bar.addStretch(1)
        top_bar.addWidget(self._count)

        root = QVBoxLayout(self)
        root.addLayout(top_bar)
        root.addWidget(self._table, 1)

        # ---------- Wiring ----------
        self._cmb_project.currentIndexChanged.connect(self._on_project_filter)
        self._btn_new.clicked.connect(self._on_new)
        self._btn_sub.clicked.connect(self._on_new_subtask)
        self._btn_edit.clicked.connect(self._on_edit)
        self._btn_delete.clicked.connect(self._on_delete)
        self._btn_status.clicked.connect(self._on_cycle_status)
        self._table.itemSelectionChanged.connect(self._on_selection_changed)
        self._table.itemDoubleClicked.connect(lambda _i: self._on_edit())

        self._vm.tasksReloaded.connect(self._on_tasks_reloaded)
        self._vm.errorRaised.connect(lambda msg: QMessageBox.warning(self, "Tarea", msg))

    # ---------- Public API ----------
    def refresh(self) -> None:
        self._fill_projects()
        self._vm.reload()

    def _fill_projects(self) -> None:
        current = self._cmb_project.currentData()
        self._cmb_project.blockSignals(True)
        self._cmb_project.clear()
        self._cmb_project.addItem("Todos los proyectos", None)
        for p in self._vm.projects():
            self._cmb_project.addItem(p.name, p.id)
        ix = self._cmb_project.findData(current)
        self._cmb_project.setCurrentIndex(ix if ix >= 0 else 0)
        self._cmb_project.blockSignals(False)
        self._vm.set_filters(project_id=self._cmb_project.currentData())

    # ---------- VM -> UI ----------
    def _on_tasks_reloaded(self, total: int, rows: list) -> None:
        self._table.setRowCount(0)
        for row in rows:
            r = self._table.rowCount()
            self._table.insertRow(r)
            title = ("    ↳ " + row["title"]) if row["is_subtask"] else row["title"]
            checklist = f"{row['checklist_done']}/{row['checklist_total']}" if row["checklist_total"] else ""
            progress = f"{row['progress']}%" + (" (auto)" if row["has_children"] else "")
            cells = [title, row["project_name"], row["assignee"], row["end_date"],
                     row["status_label"], progress, checklist]
            for c, text in enumerate(cells):
                item = QTableWidgetItem(text)
                if c == 0:
                    item.setData(Qt.UserRole, row["id"])
                    if not row["is_subtask"]:
                        f = QFont(item.font())
                        f.setBold(True)
                        item.setFont(f)
                if c == 4:
                    item.setForeground(QColor(_STATUS_COLORS.get(row["status"], "#222222")))
                self._table.setItem(r, c, item)
        self._count.setText(f"{total} tareas")
        self._update_sort_indicator()
        self._on_selection_changed()

    def _update_sort_indicator(self) -> None:
        field, direction = self._vm.sort_state()
        col = next((c for c, f in _SORTABLE.items() if f == field), -1)
        hdr = self._table.horizontalHeader()
        hdr.setSortIndicatorShown(col >= 0)
        if col >= 0:
            hdr.setSortIndicator(col, Qt.AscendingOrder if direction == "asc" else Qt.DescendingOrder)

    # ---------- Helpers ----------
    def _selected_task(self):
        row = self._table.currentRow()
        if row < 0 or not self._table.selectionModel().hasSelection():
            return None
        item = self._table.item(row, 0)
        return self._vm.get_task(item.data(Qt.UserRole)) if item else None

    def _on_selection_changed(self) -> None:
        task = self._selected_task()
        has = task is not None
        self._btn_edit.setEnabled(has)
        self._btn_delete.setEnabled(has)
        self._btn_status.setEnabled(has)
        self._btn_sub.setEnabled(has and not task.is_subtask)

    def _on_header_clicked(self, section: int) -> None:
        field = _SORTABLE.get(section)
        if field:
            self._vm.toggle_sort(field)

    def _on_project_filter(self, _ix: int) -> None:
        self._vm.set_filters(project_id=self._cmb_project.currentData())
        self._vm.reload()

    def _open_editor(self, task) -> QDialog:
        return TaskEditorDialog(
            task,
            projects=self._vm.projects(),
            parent_candidates=self._vm.parent_candidates(exclude_id=task.id or None),
            has_subtasks=self._vm.has_subtasks(task.id),
            effective_progress=self._vm.effective_progress(task) if task.id else None,
            parent=self,
        )

    # ---------- Actions ----------
    def _on_new(self) -> None:
        if not self._vm.projects():
            QMessageBox.information(self, "Tarea", "Cree primero un proyecto en esta línea.")
            return
        dlg = self._open_editor(self._vm.new_task())
        if dlg.exec() == QDialog.Accepted:
            self._vm.create_task(dlg.values())

    def _on_new_subtask(self) -> None:
        parent_task = self._selected_task()
        if parent_task is None or parent_task.is_subtask:
            return
        dlg = self._open_editor(self._vm.new_task(parent=parent_task))
        if dlg.exec() == QDialog.Accepted:
            self._vm.create_task(dlg.values())

    def _on_edit(self) -> None:
        task = self._selected_task()
        if task is None:
            return
        dlg = self._open_editor(task)
        if dlg.exec() == QDialog.Accepted:
            self._vm.update_task(dlg.values())

    def _on_delete(self) -> None:
        task = self._selected_task()
        if task is None:
            return
        msg = "¿Eliminar la tarea?"
        if self._vm.has_subtasks(task.id):
            msg += "\nSus subtareas no se eliminarán y dejarán de mostrarse."
        if QMessageBox.question(self, "Eliminar tarea", msg) != QMessageBox.Yes:
            return
        self._vm.delete_task(task.id)

    def _on_cycle_status(self) -> None:
        task = self._selected_task()
        if task is not None:
            self._vm.cycle_status(task.id)
