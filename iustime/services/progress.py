# Rev 0.2.0

"""Progress rollup (Rev 0.2.0)

A top-level task with subtasks takes the rounded mean of its direct children;
its own stored value is ignored. A project takes the rounded mean of its
top-level tasks' effective progress. Pure functions, no I/O.
"""
from __future__ import annotations
import dataclasses
import math
from typing import Iterable, Sequence

from iustime.models.entities import Project, Task


def _clamp(value: int) -> int:
    return max(0, min(100, int(value)))


def rollup_mean(values: Iterable[int]) -> int:
    """Mean rounded half-up; an empty input is 0, never NaN."""
    vals = list(values)
    if not vals:
        return 0
    return _clamp(math.floor(sum(vals) / len(vals) + 0.5))


def children_of(task_id: str, all_tasks: Sequence[Task]) -> list[Task]:
    return [t for t in all_tasks if t.parent_id == task_id]


def has_children(task_id: str, all_tasks: Sequence[Task]) -> bool:
    return any(t.parent_id == task_id for t in all_tasks)


def recompute_task_progress(task: Task, all_tasks: Sequence[Task]) -> int:
    children = children_of(task.id, all_tasks)
    if not children:
        return _clamp(task.progress)
    return rollup_mean(_clamp(c.progress) for c in children)


def recompute_project_progress(project: Project, all_tasks: Sequence[Task]) -> int:
    top_level = [t for t in all_tasks if t.project_id == project.id and t.parent_id is None]
    return rollup_mean(recompute_task_progress(t, all_tasks) for t in top_level)


def apply_project_progress(project: Project, all_tasks: Sequence[Task]) -> Project:
    return dataclasses.replace(project, progress=recompute_project_progress(project, all_tasks))
