# Rev 0.2.0
from __future__ import annotations

from typing import Any, Dict, List, Optional

from PySide6.QtCore import Signal

from iustime.models.types import TASK_STATUS_LABELS
from iustime.services.progress import recompute_task_progress
from iustime.services.references import project_name, project_names
from iustime.services.timeline import build_month_columns, layout_bar, timeline_rows
from iustime.viewmodels.base import LineScopedViewModel


class TimelineViewModel(LineScopedViewModel):
    """
    Emits:
      - timelineReloaded(columns: list[MonthColumn], rows: list[dict])
    Each row carries `bar` (BarLayout) or None when the bar is hidden.
    """

    timelineReloaded = Signal(list, list)

    def __init__(self, store):
        super().__init__(store)
        self._project_id: Optional[str] = None

    def set_project(self, project_id: Optional[str]) -> None:
        self._project_id = project_id or None

    def projects(self):
        return self._store.projects_for_line(self._line_id)

    def reload(self) -> None:
        all_tasks = self._store.tasks_for_line(self._line_id)
        tasks = [t for t in all_tasks if self._project_id is None or t.project_id == self._project_id]
        columns = build_month_columns(tasks)
        names = project_names(self.projects())
        rows: List[Dict[str, Any]] = []
        if columns:
            for t in timeline_rows(tasks):
                rows.append({
                    "id": t.id,
                    "title": t.title,
                    "is_subtask": t.is_subtask,
                    "project_name": project_name(t.project_id, names),
                    "status": t.status,
                    "status_label": TASK_STATUS_LABELS.get(t.status, t.status),
                    "progress": recompute_task_progress(t, all_tasks),
                    "bar": layout_bar(t, columns),
                })
        self.timelineReloaded.emit(columns, rows)
