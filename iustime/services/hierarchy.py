# Rev 0.2.0
"""Table ordering for the two-level task hierarchy.

Top-level tasks are sorted by the requested field; each is followed directly
by its own subtasks. Subtasks whose parent is not among the top-level tasks
(orphans) are left out.
"""
from __future__ import annotations
from typing import Callable, Dict, List, Mapping, Optional, Sequence

from iustime.models.entities import Task
from iustime.services.progress import recompute_task_progress
from iustime.services.references import project_name

SORT_FIELDS = ("endDate", "progress", "projectName")


def group_children(tasks: Sequence[Task]) -> tuple[List[Task], Dict[str, List[Task]]]:
    """Split into top-level tasks and a parent id → children map (collection order kept)."""
    parents = [t for t in tasks if t.parent_id is None]
    children: Dict[str, List[Task]] = {}
    for t in tasks:
        if t.parent_id is not None:
            children.setdefault(t.parent_id, []).append(t)
    return parents, children


def flatten(parents: Sequence[Task], children: Mapping[str, List[Task]],
            child_key: Callable[[Task], object]) -> List[Task]:
    out: List[Task] = []
    for parent in parents:
        out.append(parent)
        out.extend(sorted(children.get(parent.id, []), key=child_key))
    return out


def _sort_key(sort_field: str, all_tasks: Sequence[Task],
              names: Mapping[str, str]) -> Optional[Callable[[Task], object]]:
    if sort_field == "endDate":
        return lambda t: t.end_date or ""
    if sort_field == "progress":
        return lambda t: recompute_task_progress(t, all_tasks)
    if sort_field == "projectName":
        return lambda t: project_name(t.project_id, names).casefold()
    return None


def order_tasks(
    tasks: Sequence[Task],
    project_id: Optional[str] = None,
    sort_field: str = "endDate",
    sort_direction: str = "asc",
    project_names: Optional[Mapping[str, str]] = None,
) -> List[Task]:
    filtered = [t for t in tasks if t.project_id == project_id] if project_id else list(tasks)
    parents, children = group_children(filtered)

    key = _sort_key(sort_field, tasks, project_names or {})
    if key is not None:
        # sorted() is stable for reverse=True too: ties keep collection order
        parents = sorted(parents, key=key, reverse=(sort_direction == "desc"))

    return flatten(parents, children, child_key=lambda t: t.end_date or "")
