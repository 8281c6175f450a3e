# Rev 0.2.0: hierarchy ordering + derived progress
from __future__ import annotations

import dataclasses
from datetime import date
from typing import Any, Dict, List, Optional

from PySide6.QtCore import Signal

from iustime.models.entities import Task
from iustime.models.types import TASK_STATUSES, TASK_STATUS_LABELS
from iustime.services.hierarchy import order_tasks
from iustime.services.progress import has_children, recompute_task_progress
from iustime.services.references import project_name, project_names
from iustime.viewmodels.base import LineScopedViewModel

_UNSET = object()


class TasksViewModel(LineScopedViewModel):
    """
    Emits:
      - tasksReloaded(total: int, rows: list[dict])
    Rows come parent-first, each followed by its subtasks.
    """

    tasksReloaded = Signal(int, list)

    def __init__(self, store):
        super().__init__(store)
        self._project_id: Optional[str] = None
        self._sort_field = "endDate"
        self._sort_direction = "asc"

    # ---- filters / sort
    def set_filters(self, project_id: Any = _UNSET, sort_field: Optional[str] = None,
                    sort_direction: Optional[str] = None) -> None:
        # project_id=None means "all projects"; omit it to keep the current filter
        if project_id is not _UNSET:
            self._project_id = project_id or None
        if sort_field is not None:
            self._sort_field = sort_field
        if sort_direction is not None:
            self._sort_direction = sort_direction

    def toggle_sort(self, sort_field: str) -> None:
        # header click: pick the field and flip the direction
        self._sort_field = sort_field
        self._sort_direction = "desc" if self._sort_direction == "asc" else "asc"
        self.reload()

    def sort_state(self) -> tuple[str, str]:
        return self._sort_field, self._sort_direction

    # ---- queries
    def _line_tasks(self) -> List[Task]:
        return self._store.tasks_for_line(self._line_id)

    def projects(self):
        return self._store.projects_for_line(self._line_id)

    def reload(self) -> None:
        tasks = self._line_tasks()
        names = project_names(self.projects())
        ordered = order_tasks(tasks, self._project_id, self._sort_field, self._sort_direction, names)
        self.tasksReloaded.emit(len(ordered), [self._row(t, tasks, names) for t in ordered])

    @staticmethod
    def _row(task: Task, all_tasks: List[Task], names: Dict[str, str]) -> Dict[str, Any]:
        done = sum(1 for c in task.checklist if c.completed)
        return {
            "id": task.id,
            "task": task,
            "title": task.title,
            "is_subtask": task.is_subtask,
            "project_name": project_name(task.project_id, names),
            "assignee": task.assignee,
            "end_date": task.end_date,
            "status": task.status,
            "status_label": TASK_STATUS_LABELS.get(task.status, task.status),
            "progress": recompute_task_progress(task, all_tasks),
            "has_children": has_children(task.id, all_tasks),
            "checklist_done": done,
            "checklist_total": len(task.checklist),
            "attachments": len(task.attachments),
        }

    def get_task(self, task_id: str) -> Optional[Task]:
        return self._store.tasks.get(task_id)

    def has_subtasks(self, task_id: Optional[str]) -> bool:
        return bool(task_id) and has_children(task_id, self._store.tasks.list())

    def effective_progress(self, task: Task) -> int:
        return recompute_task_progress(task, self._store.tasks.list())

    def parent_candidates(self, project_id: Optional[str] = None, exclude_id: Optional[str] = None) -> List[Task]:
        return [
            t for t in self._line_tasks()
            if t.parent_id is None and t.id != exclude_id and (not project_id or t.project_id == project_id)
        ]

    def new_task(self, parent: Optional[Task] = None) -> Task:
        today = date.today().isoformat()
        if parent is not None:
            return Task(id="", line_id=self._line_id or "", project_id=parent.project_id, title="",
                        parent_id=parent.id, start_date=parent.start_date, end_date=parent.end_date)
        return Task(id="", line_id=self._line_id or "", project_id=self._project_id or "", title="",
                    start_date=today, end_date=today)

    # ---- commands
    def create_task(self, task: Task) -> Optional[Task]:
        task = dataclasses.replace(task, line_id=task.line_id or self._line_id or "")
        return self._mutate(lambda: self._store.add_task(task), None)

    def update_task(self, task: Task) -> bool:
        return self._mutate(lambda: self._store.update_task(task), False)

    def delete_task(self, task_id: str) -> bool:
        return self._mutate(lambda: self._store.delete_task(task_id), False)

    def cycle_status(self, task_id: str) -> Optional[str]:
        task = self._store.tasks.get(task_id)
        if task is None:
            return None
        idx = TASK_STATUSES.index(task.status) if task.status in TASK_STATUSES else -1
        nxt = TASK_STATUSES[(idx + 1) % len(TASK_STATUSES)]
        ok = self.update_task(dataclasses.replace(task, status=nxt))
        return nxt if ok else None
