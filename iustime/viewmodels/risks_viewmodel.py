# Rev 0.2.0
from __future__ import annotations

import dataclasses
from typing import Any, Dict, List, Optional

from PySide6.QtCore import Signal

from iustime.models.entities import Risk, Task
from iustime.models.types import LEVEL_LABELS, RISK_STATUS_LABELS
from iustime.services.references import risk_task_label
from iustime.viewmodels.base import LineScopedViewModel


class RisksViewModel(LineScopedViewModel):
    """
    Emits:
      - risksReloaded(rows: list[dict])
    """

    risksReloaded = Signal(list)

    def reload(self) -> None:
        tasks = self._store.tasks.list()
        rows: List[Dict[str, Any]] = []
        for r in self._store.risks_for_line(self._line_id):
            rows.append({
                "id": r.id,
                "risk": r,
                "description": r.description,
                "task_label": risk_task_label(r.task_id, tasks),
                "responsible": r.responsible,
                "required_action": r.required_action,
                "status": r.status,
                "status_label": RISK_STATUS_LABELS.get(r.status, r.status),
                "priority_label": LEVEL_LABELS.get(r.priority, r.priority),
                "impact_label": LEVEL_LABELS.get(r.impact, r.impact),
            })
        self.risksReloaded.emit(rows)

    def task_choices(self) -> List[Task]:
        return self._store.tasks_for_line(self._line_id)

    def get_risk(self, risk_id: str) -> Optional[Risk]:
        return self._store.risks.get(risk_id)

    def new_risk(self) -> Risk:
        return Risk(id="", line_id=self._line_id or "", description="")

    def create_risk(self, risk: Risk) -> Optional[Risk]:
        risk = dataclasses.replace(risk, line_id=risk.line_id or self._line_id or "")
        return self._mutate(lambda: self._store.add_risk(risk), None)

    def update_risk(self, risk: Risk) -> bool:
        return self._mutate(lambda: self._store.update_risk(risk), False)

    def delete_risk(self, risk_id: str) -> bool:
        return self._mutate(lambda: self._store.delete_risk(risk_id), False)
