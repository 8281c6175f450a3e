# iustime/ui/dialogs/project_editor_dialog.py
# Rev 0.2.0
from __future__ import annotations
import dataclasses

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QDialog, QVBoxLayout, QFormLayout, QLineEdit, QTextEdit, QDoubleSpinBox,
    QDialogButtonBox, QLabel, QWidget
)

from iustime.models.entities import Project
from iustime.models.types import LEVELS, LEVEL_LABELS, PROJECT_STATUSES, PROJECT_STATUS_LABELS
from iustime.ui.form_helpers import date_edit, date_text, enum_combo
from iustime.ui.window_mode import lock_dialog_fixed


class ProjectEditorDialog(QDialog):
    """
    Create/edit a project. Progress is shown read-only; the store derives it
    from the project's tasks. Next steps are entered one per line.
    """

    def __init__(self, project: Project, parent: QWidget | None = None):
        super().__init__(parent)
        self._project = project
        self.setWindowTitle("Editar proyecto" if project.id else "Nuevo proyecto")

        self._name = QLineEdit(project.name)
        self._objective = QTextEdit()
        self._objective.setAcceptRichText(False)
        self._objective.setPlainText(project.objective)
        self._assignee = QLineEdit(project.assignee)
        self._status = enum_combo(PROJECT_STATUSES, PROJECT_STATUS_LABELS, project.status)
        self._priority = enum_combo(LEVELS, LEVEL_LABELS, project.priority)
        self._difficulty = enum_combo(LEVELS, LEVEL_LABELS, project.difficulty)
        self._budget = QDoubleSpinBox()
        self._budget.setRange(0, 1_000_000_000)
        self._budget.setDecimals(2)
        self._budget.setValue(project.budget)
        self._start = date_edit(project.start_date)
        self._end = date_edit(project.end_date)
        self._next_steps = QTextEdit()
        self._next_steps.setAcceptRichText(False)
        self._next_steps.setPlaceholderText("Un paso por línea")
        self._next_steps.setPlainText("\n".join(project.next_steps))
        self._notes = QTextEdit()
        self._notes.setAcceptRichText(False)
        self._notes.setPlainText(project.notes)

        form = QFormLayout()
        form.addRow("Nombre:", self._name)
        form.addRow("Objetivo:", self._objective)
        form.addRow("Responsable:", self._assignee)
        form.addRow(QLabel("<hr/>"))
        form.addRow("Estado:", self._status)
        form.addRow("Prioridad:", self._priority)
        form.addRow("Dificultad:", self._difficulty)
        form.addRow("Presupuesto:", self._budget)
        form.addRow("Inicio:", self._start)
        form.addRow("Fin:", self._end)
        form.addRow("Progreso:", QLabel(f"{project.progress}% (calculado de las tareas)"))
        form.addRow(QLabel("<hr/>"))
        form.addRow("Próximos pasos:", self._next_steps)
        form.addRow("Notas:", self._notes)

        btns = QDialogButtonBox(QDialogButtonBox.Save | QDialogButtonBox.Cancel)
        btns.accepted.connect(self.accept)
        btns.rejected.connect(self.reject)

        root = QVBoxLayout(self)
        root.addLayout(form)
        root.addWidget(btns)

        lock_dialog_fixed(self, width_ratio=0.45, height_ratio=0.8)
        self._name.setFocus(Qt.OtherFocusReason)

    def values(self) -> Project:
        steps = [s.strip() for s in self._next_steps.toPlainText().splitlines() if s.strip()]
        return dataclasses.replace(
            self._project,
            name=self._name.text().strip(),
            objective=self._objective.toPlainText().strip(),
            assignee=self._assignee.text().strip(),
            status=self._status.currentData(),
            priority=self._priority.currentData(),
            difficulty=self._difficulty.currentData(),
            budget=float(self._budget.value()),
            start_date=date_text(self._start),
            end_date=date_text(self._end),
            next_steps=steps,
            notes=self._notes.toPlainText().strip(),
        )
