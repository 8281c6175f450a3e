# iustime/ui/dialogs/risk_editor_dialog.py
# Rev 0.2.0
from __future__ import annotations
import dataclasses
from typing import Sequence

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QDialog, QVBoxLayout, QFormLayout, QLineEdit, QTextEdit, QComboBox,
    QDialogButtonBox, QLabel, QWidget
)

from iustime.models.entities import Risk, Task
from iustime.models.types import LEVELS, LEVEL_LABELS, RISK_STATUSES, RISK_STATUS_LABELS
from iustime.services.references import UNLINKED_RISK
from iustime.ui.form_helpers import enum_combo, select_data
from iustime.ui.window_mode import lock_dialog_fixed


class RiskEditorDialog(QDialog):
    """Create/edit a risk; the task link is optional."""

    def __init__(self, risk: Risk, *, tasks: Sequence[Task], parent: QWidget | None = None):
        super().__init__(parent)
        self._risk = risk
        self.setWindowTitle("Editar riesgo" if risk.id else "Nuevo riesgo")

        self._description = QTextEdit()
        self._description.setAcceptRichText(False)
        self._description.setPlainText(risk.description)
        self._task = QComboBox()
        self._task.addItem(UNLINKED_RISK, None)
        for t in tasks:
            self._task.addItem(("  ↳ " if t.is_subtask else "") + t.title, t.id)
        select_data(self._task, risk.task_id)
        self._responsible = QLineEdit(risk.responsible)
        self._action = QTextEdit()
        self._action.setAcceptRichText(False)
        self._action.setPlainText(risk.required_action)
        self._status = enum_combo(RISK_STATUSES, RISK_STATUS_LABELS, risk.status)
        self._priority = enum_combo(LEVELS, LEVEL_LABELS, risk.priority)
        self._impact = enum_combo(LEVELS, LEVEL_LABELS, risk.impact)

        form = QFormLayout()
        form.addRow("Descripción:", self._description)
        form.addRow("Tarea vinculada:", self._task)
        form.addRow("Responsable:", self._responsible)
        form.addRow("Acción requerida:", self._action)
        form.addRow(QLabel("<hr/>"))
        form.addRow("Estado:", self._status)
        form.addRow("Prioridad:", self._priority)
        form.addRow("Impacto:", self._impact)

        btns = QDialogButtonBox(QDialogButtonBox.Save | QDialogButtonBox.Cancel)
        btns.accepted.connect(self.accept)
        btns.rejected.connect(self.reject)

        root = QVBoxLayout(self)
        root.addLayout(form)
        root.addWidget(btns)
        lock_dialog_fixed(self, width_ratio=0.4, height_ratio=0.6)
        self._description.setFocus(Qt.OtherFocusReason)

    def values(self) -> Risk:
        return dataclasses.replace(
            self._risk,
            description=self._description.toPlainText().strip(),
            task_id=self._task.currentData() or None,
            responsible=self._responsible.text().strip(),
            required_action=self._action.toPlainText().strip(),
            status=self._status.currentData(),
            priority=self._priority.currentData(),
            impact=self._impact.currentData(),
        )
