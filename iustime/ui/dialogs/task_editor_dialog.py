# iustime/ui/dialogs/task_editor_dialog.py
# Rev 0.2.0: checklist + attachments; progress locked for parents
from __future__ import annotations
import dataclasses
from pathlib import Path
from typing import List, Optional, Sequence

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QDialog, QVBoxLayout, QHBoxLayout, QFormLayout, QLineEdit, QTextEdit, QSpinBox,
    QDialogButtonBox, QComboBox, QLabel, QListWidget, QListWidgetItem, QPushButton,
    QFileDialog, QMessageBox, QTabWidget, QWidget
)

from iustime.models.entities import Attachment, ChecklistItem, Project, Task
from iustime.models.types import LEVELS, LEVEL_LABELS, TASK_STATUSES, TASK_STATUS_LABELS
from iustime.repositories.entity_store import new_id
from iustime.services.attachments import attachment_from_file, decode_data_url, human_size
from iustime.ui.form_helpers import date_edit, date_text, enum_combo, select_data
from iustime.ui.window_mode import lock_dialog_fixed
from iustime.utils.logging_setup import get_logger


class TaskEditorDialog(QDialog):
    """
    Create/edit a task or subtask; values() returns the edited Task.

    - A subtask takes its project from the parent (project combo disabled).
    - A task that already has subtasks cannot become a subtask and its
      progress is read-only (shown as the mean of its subtasks).
    """

    def __init__(
        self,
        task: Task,
        *,
        projects: Sequence[Project],
        parent_candidates: Sequence[Task],
        has_subtasks: bool = False,
        effective_progress: Optional[int] = None,
        parent: QWidget | None = None,
    ):
        super().__init__(parent)
        self._log = get_logger("TaskEditorDialog")
        self._task = task
        self._has_subtasks = has_subtasks
        self._parents = {t.id: t for t in parent_candidates}
        self._checklist: List[ChecklistItem] = [dataclasses.replace(c) for c in task.checklist]
        self._attachments: List[Attachment] = list(task.attachments)

        if task.id:
            title = "Editar subtarea" if task.is_subtask else "Editar tarea"
        else:
            title = "Nueva subtarea" if task.is_subtask else "Nueva tarea"
        self.setWindowTitle(title)

        # --- general fields
        self._title = QLineEdit(task.title)
        self._project = QComboBox()
        for p in projects:
            self._project.addItem(p.name, p.id)
        select_data(self._project, task.project_id)

        self._parent = QComboBox()
        self._parent.addItem("(Ninguna: tarea principal)", None)
        for t in parent_candidates:
            self._parent.addItem(t.title, t.id)
        select_data(self._parent, task.parent_id)
        self._parent.setEnabled(not has_subtasks)
        self._parent.currentIndexChanged.connect(self._on_parent_changed)

        self._assignee = QLineEdit(task.assignee)
        self._start = date_edit(task.start_date)
        self._end = date_edit(task.end_date)
        self._priority = enum_combo(LEVELS, LEVEL_LABELS, task.priority)
        self._difficulty = enum_combo(LEVELS, LEVEL_LABELS, task.difficulty)
        self._status = enum_combo(TASK_STATUSES, TASK_STATUS_LABELS, task.status)

        self._progress = QSpinBox()
        self._progress.setRange(0, 100)
        self._progress.setSuffix(" %")
        if has_subtasks:
            self._progress.setValue(effective_progress if effective_progress is not None else task.progress)
            self._progress.setEnabled(False)
            self._progress.setToolTip("Calculado automáticamente a partir de las subtareas")
        else:
            self._progress.setValue(task.progress)

        self._dependencies = QLineEdit(task.dependencies)
        self._comments = QTextEdit()
        self._comments.setAcceptRichText(False)
        self._comments.setPlainText(task.comments)

        form = QFormLayout()
        form.addRow("Título:", self._title)
        form.addRow("Proyecto:", self._project)
        form.addRow("Tarea padre:", self._parent)
        form.addRow("Responsable:", self._assignee)
        form.addRow("Inicio:", self._start)
        form.addRow("Fin:", self._end)
        form.addRow(QLabel("<hr/>"))
        form.addRow("Prioridad:", self._priority)
        form.addRow("Dificultad:", self._difficulty)
        form.addRow("Estado:", self._status)
        form.addRow("Progreso:", self._progress)
        form.addRow("Dependencias:", self._dependencies)
        form.addRow("Comentarios:", self._comments)
        general = QWidget()
        general.setLayout(form)

        tabs = QTabWidget()
        tabs.addTab(general, "General")
        tabs.addTab(self._build_checklist_tab(), "Checklist")
        tabs.addTab(self._build_attachments_tab(), "Adjuntos")

        btns = QDialogButtonBox(QDialogButtonBox.Save | QDialogButtonBox.Cancel)
        btns.accepted.connect(self.accept)
        btns.rejected.connect(self.reject)

        root = QVBoxLayout(self)
        root.addWidget(tabs, 1)
        root.addWidget(btns)

        self._on_parent_changed()
        lock_dialog_fixed(self, width_ratio=0.5, height_ratio=0.8)
        self._title.setFocus(Qt.OtherFocusReason)

    # ---------- checklist ----------
    def _build_checklist_tab(self) -> QWidget:
        w = QWidget()
        self._check_list = QListWidget()
        self._check_list.itemChanged.connect(self._on_check_toggled)
        self._check_input = QLineEdit()
        self._check_input.setPlaceholderText("Nuevo ítem")
        self._check_input.returnPressed.connect(self._add_check_item)
        btn_add = QPushButton("Agregar")
        btn_add.clicked.connect(self._add_check_item)
        btn_del = QPushButton("Quitar")
        btn_del.clicked.connect(self._remove_check_item)

        row = QHBoxLayout()
        row.addWidget(self._check_input, 1)
        row.addWidget(btn_add)
        row.addWidget(btn_del)

        lay = QVBoxLayout(w)
        lay.addWidget(self._check_list, 1)
        lay.addLayout(row)
        self._render_checklist()
        return w

    def _render_checklist(self) -> None:
        self._check_list.blockSignals(True)
        self._check_list.clear()
        for c in self._checklist:
            item = QListWidgetItem(c.text)
            item.setFlags(item.flags() | Qt.ItemIsUserCheckable)
            item.setCheckState(Qt.Checked if c.completed else Qt.Unchecked)
            item.setData(Qt.UserRole, c.id)
            self._check_list.addItem(item)
        self._check_list.blockSignals(False)

    def _add_check_item(self) -> None:
        text = self._check_input.text().strip()
        if not text:
            return
        self._checklist.append(ChecklistItem(id=new_id(), text=text))
        self._check_input.clear()
        self._render_checklist()

    def _remove_check_item(self) -> None:
        item = self._check_list.currentItem()
        if item is None:
            return
        item_id = item.data(Qt.UserRole)
        self._checklist = [c for c in self._checklist if c.id != item_id]
        self._render_checklist()

    def _on_check_toggled(self, item: QListWidgetItem) -> None:
        item_id = item.data(Qt.UserRole)
        done = item.checkState() == Qt.Checked
        self._checklist = [
            dataclasses.replace(c, completed=done) if c.id == item_id else c for c in self._checklist
        ]

    # ---------- attachments ----------
    def _build_attachments_tab(self) -> QWidget:
        w = QWidget()
        self._att_list = QListWidget()
        btn_add = QPushButton("Adjuntar archivo…")
        btn_add.clicked.connect(self._add_attachment)
        btn_save = QPushButton("Guardar copia…")
        btn_save.clicked.connect(self._export_attachment)
        btn_del = QPushButton("Quitar")
        btn_del.clicked.connect(self._remove_attachment)

        row = QHBoxLayout()
        row.addWidget(btn_add)
        row.addWidget(btn_save)
        row.addWidget(btn_del)
        row.addStretch(1)

        lay = QVBoxLayout(w)
        lay.addWidget(self._att_list, 1)
        lay.addLayout(row)
        self._render_attachments()
        return w

    def _render_attachments(self) -> None:
        self._att_list.clear()
        for a in self._attachments:
            item = QListWidgetItem(f"{a.name}  ({human_size(a.size)})")
            item.setData(Qt.UserRole, a.id)
            self._att_list.addItem(item)

    def _selected_attachment(self) -> Optional[Attachment]:
        item = self._att_list.currentItem()
        if item is None:
            return None
        att_id = item.data(Qt.UserRole)
        return next((a for a in self._attachments if a.id == att_id), None)

    def _add_attachment(self) -> None:
        path, _ = QFileDialog.getOpenFileName(self, "Adjuntar archivo")
        if not path:
            return
        try:
            att = attachment_from_file(path)
        except OSError as e:
            self._log.warning("Could not read attachment %s: %s", path, e)
            QMessageBox.warning(self, "Adjuntos", f"No se pudo leer el archivo:\n{e}")
            return
        self._attachments.append(att)
        self._render_attachments()

    def _export_attachment(self) -> None:
        att = self._selected_attachment()
        if att is None:
            return
        path, _ = QFileDialog.getSaveFileName(self, "Guardar adjunto", att.name)
        if not path:
            return
        try:
            _mime, payload = decode_data_url(att.data)
            Path(path).write_bytes(payload)
        except (ValueError, OSError) as e:
            self._log.warning("Could not export attachment %s: %s", att.name, e)
            QMessageBox.warning(self, "Adjuntos", f"No se pudo guardar el adjunto:\n{e}")

    def _remove_attachment(self) -> None:
        att = self._selected_attachment()
        if att is None:
            return
        self._attachments = [a for a in self._attachments if a.id != att.id]
        self._render_attachments()

    # ---------- behaviour ----------
    def _on_parent_changed(self, *_args) -> None:
        parent_id = self._parent.currentData()
        parent = self._parents.get(parent_id) if parent_id else None
        if parent is not None:
            select_data(self._project, parent.project_id)
        self._project.setEnabled(parent is None)

    def values(self) -> Task:
        return dataclasses.replace(
            self._task,
            title=self._title.text().strip(),
            project_id=self._project.currentData() or "",
            parent_id=self._parent.currentData() or None,
            assignee=self._assignee.text().strip(),
            start_date=date_text(self._start),
            end_date=date_text(self._end),
            priority=self._priority.currentData(),
            difficulty=self._difficulty.currentData(),
            status=self._status.currentData(),
            progress=int(self._progress.value()) if not self._has_subtasks else self._task.progress,
            dependencies=self._dependencies.text().strip(),
            comments=self._comments.toPlainText().strip(),
            checklist=list(self._checklist),
            attachments=list(self._attachments),
        )
