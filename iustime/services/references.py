# Rev 0.2.0
# Placeholder labels for weak references that no longer resolve.
from __future__ import annotations
from typing import Mapping, Optional, Sequence

from iustime.models.entities import Project, Task, WorkLine

NO_PROJECT = "Sin Proyecto"
UNLINKED_RISK = "General (Sin vincular)"
DELETED_TASK = "Tarea eliminada"
DELETED_LINE = "Línea eliminada"
NO_LINE = "N/A"


def project_names(projects: Sequence[Project]) -> dict[str, str]:
    return {p.id: p.name for p in projects}


def project_name(project_id: Optional[str], names: Mapping[str, str]) -> str:
    if not project_id:
        return NO_PROJECT
    return names.get(project_id) or NO_PROJECT


def risk_task_label(task_id: Optional[str], tasks: Sequence[Task]) -> str:
    if not task_id:
        return UNLINKED_RISK
    for t in tasks:
        if t.id == task_id:
            return t.title
    return DELETED_TASK


def line_name(line_id: Optional[str], lines: Sequence[WorkLine]) -> str:
    if not line_id:
        return NO_LINE
    for line in lines:
        if line.id == line_id:
            return line.name
    return DELETED_LINE
