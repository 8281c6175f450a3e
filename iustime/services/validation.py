# Rev 0.2.0

"""Mutation-boundary checks (Rev 0.2.0)
Raise ValidationError with a user-facing message; callers write nothing on failure.
"""
from __future__ import annotations
from typing import Optional, Sequence

from iustime.models.entities import Project, Risk, Task, User, WorkLine
from iustime.services.timeline import parse_date


class ValidationError(ValueError):
    """Rejected input; str(err) is the message shown to the user."""


def validate_task(task: Task, all_tasks: Sequence[Task]) -> Optional[Task]:
    """
    Check `task` against the current collection (which may already contain an
    older version of it). Returns the parent task for subtasks, else None.
    """
    if not task.title.strip():
        raise ValidationError("La tarea necesita un título.")
    if not 0 <= int(task.progress) <= 100:
        raise ValidationError("El progreso debe estar entre 0 y 100.")

    parent: Optional[Task] = None
    if task.parent_id is None:
        if not task.project_id:
            raise ValidationError("Por favor selecciona un Proyecto para la tarea principal.")
    else:
        if task.parent_id == task.id:
            raise ValidationError("Una tarea no puede ser su propia tarea principal.")
        parent = next((t for t in all_tasks if t.id == task.parent_id), None)
        if parent is None:
            raise ValidationError("Por favor selecciona una Tarea Principal para la subtarea.")
        if parent.parent_id is not None:
            raise ValidationError("Solo se admite un nivel de subtareas.")
        if any(t.parent_id == task.id for t in all_tasks):
            raise ValidationError("Una tarea con subtareas no puede convertirse en subtarea.")

    start, end = parse_date(task.start_date), parse_date(task.end_date)
    if start and end and end < start:
        raise ValidationError("La fecha de fin no puede ser anterior a la de inicio.")
    return parent


def validate_project(project: Project) -> None:
    if not project.name.strip():
        raise ValidationError("El proyecto necesita un nombre.")
    if not project.line_id:
        raise ValidationError("El proyecto debe pertenecer a una línea de trabajo.")


def validate_risk(risk: Risk) -> None:
    if not risk.description.strip():
        raise ValidationError("El riesgo necesita una descripción.")


def validate_line(line: WorkLine) -> None:
    if not line.name.strip():
        raise ValidationError("La línea necesita un nombre.")


def validate_user(user: User, users: Sequence[User]) -> None:
    if not (user.name.strip() and user.email.strip() and user.password):
        raise ValidationError("Nombre, email y contraseña son obligatorios.")
    if user.role not in ("ADMIN", "USER"):
        raise ValidationError(f"Rol desconocido: {user.role}")
    if user.role == "USER" and not user.assigned_line_id:
        raise ValidationError("Un usuario estándar debe tener una línea de trabajo asignada.")
    email = user.email.strip().lower()
    if any(u.id != user.id and u.email.strip().lower() == email for u in users):
        raise ValidationError("Ya existe un usuario con ese email.")
