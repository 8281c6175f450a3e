# iustime type definitions
# Rev 0.2.0

from __future__ import annotations
from enum import Enum
from typing import Literal

# Hierarchy: work line → project → task → subtask
EntityType = Literal["line", "project", "task", "subtask", "risk", "user", "review"]

Level = Literal["Low", "Medium", "High"]
ProjectStatus = Literal["Ready to Start", "In Progress", "Completed"]
TaskStatus = Literal["Ready to Start", "In Progress", "Delayed", "Completed"]
RiskStatus = Literal["Open", "In Progress", "Mitigated", "Closed"]
UserRole = Literal["ADMIN", "USER"]
SortDirection = Literal["asc", "desc"]

LEVELS: tuple[str, ...] = ("Low", "Medium", "High")
PROJECT_STATUSES: tuple[str, ...] = ("Ready to Start", "In Progress", "Completed")
TASK_STATUSES: tuple[str, ...] = ("Ready to Start", "In Progress", "Delayed", "Completed")
RISK_STATUSES: tuple[str, ...] = ("Open", "In Progress", "Mitigated", "Closed")
ACTIVE_RISK_STATUSES: frozenset[str] = frozenset({"Open", "In Progress"})
USER_ROLES: tuple[str, ...] = ("ADMIN", "USER")

# Display labels (es-ES)
LEVEL_LABELS = {"Low": "Baja", "Medium": "Media", "High": "Alta"}
PROJECT_STATUS_LABELS = {
    "Ready to Start": "Listo para iniciar",
    "In Progress": "En Progreso",
    "Completed": "Completado",
}
TASK_STATUS_LABELS = {
    "Ready to Start": "Por Iniciar",
    "In Progress": "En Progreso",
    "Delayed": "Retrasada",
    "Completed": "Completada",
}
RISK_STATUS_LABELS = {
    "Open": "Abierto",
    "In Progress": "En Proceso",
    "Mitigated": "Mitigado",
    "Closed": "Cerrado",
}


class ViewState(str, Enum):
    DASHBOARD = "DASHBOARD"
    PROJECTS = "PROJECTS"
    TASKS = "TASKS"
    TIMELINE = "TIMELINE"
    RISKS = "RISKS"
    MONTHLY_REVIEW = "MONTHLY_REVIEW"
    GLOBAL_DASHBOARD = "GLOBAL_DASHBOARD"
    GLOBAL_REVIEW = "GLOBAL_REVIEW"
    CONFIGURATION = "CONFIGURATION"


GLOBAL_VIEWS = frozenset({ViewState.GLOBAL_DASHBOARD, ViewState.GLOBAL_REVIEW, ViewState.CONFIGURATION})

VIEW_LABELS = {
    ViewState.DASHBOARD: "Dashboard",
    ViewState.PROJECTS: "Proyectos",
    ViewState.TASKS: "Tareas",
    ViewState.TIMELINE: "Cronograma",
    ViewState.RISKS: "Riesgos",
    ViewState.MONTHLY_REVIEW: "Revisión mensual",
    ViewState.GLOBAL_DASHBOARD: "Dashboard global",
    ViewState.GLOBAL_REVIEW: "Revisión global",
    ViewState.CONFIGURATION: "Configuración",
}
