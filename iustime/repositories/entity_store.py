# Rev 0.2.0
from __future__ import annotations

import dataclasses
import uuid
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Generic, List, Optional, Protocol, TypeVar

from iustime.models.entities import MonthlyReview, Project, Risk, Task, User, WorkLine
from iustime.repositories.sqlite_collection_repository import SQLiteCollectionRepository
from iustime.services.progress import apply_project_progress
from iustime.services.validation import (
    ValidationError,
    validate_line,
    validate_project,
    validate_risk,
    validate_task,
    validate_user,
)
from iustime.utils.logging_setup import get_logger


class _Record(Protocol):
    id: str

    def to_dict(self) -> Dict[str, Any]: ...


T = TypeVar("T", bound=_Record)


def new_id() -> str:
    return str(uuid.uuid4())


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


class Collection(Generic[T]):
    """
    In-memory list of records mirrored to one JSON document.
    Every mutation writes the whole collection before the in-memory list is
    swapped, so a failed write leaves both sides unchanged.
    """

    def __init__(self, name: str, repo: SQLiteCollectionRepository, factory: Callable[[Dict[str, Any]], T]):
        self.name = name
        self._repo = repo
        self._factory = factory
        self._items: List[T] = []
        self._log = get_logger(f"Collection.{name}")

    def load(self) -> None:
        items: List[T] = []
        for row in self._repo.load_collection(self.name):
            try:
                items.append(self._factory(row))
            except (KeyError, TypeError, ValueError, AttributeError) as e:
                self._log.warning("Skipping malformed %s record %r: %s", self.name, row.get("id"), e)
        self._items = items
        self._log.info("Loaded %d %s", len(items), self.name)

    def list(self) -> List[T]:
        return list(self._items)

    def get(self, item_id: Optional[str]) -> Optional[T]:
        if not item_id:
            return None
        return next((i for i in self._items if i.id == item_id), None)

    def insert(self, item: T) -> T:
        if not item.id:
            item = dataclasses.replace(item, id=new_id())
        if self.get(item.id) is not None:
            raise ValidationError(f"Identificador duplicado: {item.id}")
        self._commit(self._items + [item])
        return item

    def replace(self, item: T) -> bool:
        if self.get(item.id) is None:
            return False
        self._commit([item if i.id == item.id else i for i in self._items])
        return True

    def delete(self, item_id: str) -> bool:
        if self.get(item_id) is None:
            return False
        self._commit([i for i in self._items if i.id != item_id])
        return True

    def replace_all(self, items: List[T]) -> None:
        self._commit(list(items))

    def _commit(self, items: List[T]) -> None:
        self._repo.save_collection(self.name, [i.to_dict() for i in items])
        self._items = items


class EntityStore:
    """
    CRUD over lines, projects, tasks, risks, users and saved reviews.
    Task mutations also rewrite the owning project's cached progress.
    Deletes never cascade; dangling ids are resolved at display time.
    """

    def __init__(self, repo: SQLiteCollectionRepository):
        self._log = get_logger("EntityStore")
        self.lines: Collection[WorkLine] = Collection("lines", repo, WorkLine.from_dict)
        self.projects: Collection[Project] = Collection("projects", repo, Project.from_dict)
        self.tasks: Collection[Task] = Collection("tasks", repo, Task.from_dict)
        self.risks: Collection[Risk] = Collection("risks", repo, Risk.from_dict)
        self.users: Collection[User] = Collection("users", repo, User.from_dict)
        self.reviews: Collection[MonthlyReview] = Collection("reviews", repo, MonthlyReview.from_dict)

    def load(self) -> "EntityStore":
        for c in (self.lines, self.projects, self.tasks, self.risks, self.users, self.reviews):
            c.load()
        return self

    # -------------------------
    # Line-scoped reads
    # -------------------------
    def projects_for_line(self, line_id: Optional[str]) -> List[Project]:
        return [p for p in self.projects.list() if p.line_id == line_id]

    def tasks_for_line(self, line_id: Optional[str]) -> List[Task]:
        return [t for t in self.tasks.list() if t.line_id == line_id]

    def risks_for_line(self, line_id: Optional[str]) -> List[Risk]:
        return [r for r in self.risks.list() if r.line_id == line_id]

    # -------------------------
    # Work lines
    # -------------------------
    def add_line(self, line: WorkLine) -> WorkLine:
        validate_line(line)
        if not line.created_at:
            line = dataclasses.replace(line, created_at=utc_now_iso())
        saved = self.lines.insert(line)
        self._log.info("Line created %s (%s)", saved.id, saved.name)
        return saved

    def delete_line(self, line_id: str) -> bool:
        # projects/tasks/risks of the line stay in storage
        return self.lines.delete(line_id)

    # -------------------------
    # Projects
    # -------------------------
    def add_project(self, project: Project) -> Project:
        validate_project(project)
        return self.projects.insert(apply_project_progress(project, self.tasks.list()))

    def update_project(self, project: Project) -> bool:
        validate_project(project)
        # progress is derived; whatever the caller sent is replaced
        return self.projects.replace(apply_project_progress(project, self.tasks.list()))

    def delete_project(self, project_id: str) -> bool:
        return self.projects.delete(project_id)

    # -------------------------
    # Tasks
    # -------------------------
    def add_task(self, task: Task) -> Task:
        task = self._checked_task(task)
        saved = self.tasks.insert(task)
        self.refresh_project_progress(saved.project_id)
        self._log.info("Task created %s in project %s", saved.id, saved.project_id)
        return saved

    def update_task(self, task: Task) -> bool:
        previous = self.tasks.get(task.id)
        if previous is None:
            return False
        task = self._checked_task(task)
        moved = previous.project_id != task.project_id
        items = []
        for t in self.tasks.list():
            if t.id == task.id:
                t = task
            elif moved and task.parent_id is None and t.parent_id == task.id:
                # children follow their parent into the new project
                t = dataclasses.replace(t, project_id=task.project_id)
            items.append(t)
        self.tasks.replace_all(items)
        if moved or previous.parent_id != task.parent_id:
            self.refresh_project_progress(previous.project_id)
        self.refresh_project_progress(task.project_id)
        return True

    def delete_task(self, task_id: str) -> bool:
        task = self.tasks.get(task_id)
        if task is None:
            return False
        # subtasks of a deleted parent become orphans
        self.tasks.delete(task_id)
        self.refresh_project_progress(task.project_id)
        self._log.info("Task deleted %s", task_id)
        return True

    def _checked_task(self, task: Task) -> Task:
        try:
            parent = validate_task(task, self.tasks.list())
        except ValidationError as e:
            self._log.warning("Rejected task %r: %s", task.title, e)
            raise
        if parent is not None and task.project_id != parent.project_id:
            task = dataclasses.replace(task, project_id=parent.project_id)
        return task

    def refresh_project_progress(self, project_id: Optional[str]) -> Optional[int]:
        project = self.projects.get(project_id)
        if project is None:
            return None
        updated = apply_project_progress(project, self.tasks.list())
        if updated.progress != project.progress:
            self.projects.replace(updated)
            self._log.debug("Project %s progress %d -> %d", project.id, project.progress, updated.progress)
        return updated.progress

    # -------------------------
    # Risks
    # -------------------------
    def add_risk(self, risk: Risk) -> Risk:
        validate_risk(risk)
        return self.risks.insert(risk)

    def update_risk(self, risk: Risk) -> bool:
        validate_risk(risk)
        return self.risks.replace(risk)

    def delete_risk(self, risk_id: str) -> bool:
        return self.risks.delete(risk_id)

    # -------------------------
    # Users
    # -------------------------
    def add_user(self, user: User) -> User:
        validate_user(user, self.users.list())
        return self.users.insert(self._normalized_user(user))

    def update_user(self, user: User) -> bool:
        validate_user(user, self.users.list())
        return self.users.replace(self._normalized_user(user))

    def delete_user(self, user_id: str) -> bool:
        return self.users.delete(user_id)

    @staticmethod
    def _normalized_user(user: User) -> User:
        # only standard users carry a line assignment
        return dataclasses.replace(
            user,
            email=user.email.strip(),
            assigned_line_id=user.assigned_line_id if user.role == "USER" else None,
        )

    # -------------------------
    # Monthly reviews
    # -------------------------
    def review_for(self, line_id: str, month: str) -> Optional[MonthlyReview]:
        return next((r for r in self.reviews.list() if r.line_id == line_id and r.month == month), None)

    def save_review(self, review: MonthlyReview) -> MonthlyReview:
        existing = self.review_for(review.line_id, review.month)
        review = dataclasses.replace(review, saved_at=utc_now_iso())
        if existing is not None:
            review = dataclasses.replace(review, id=existing.id)
            self.reviews.replace(review)
            return review
        return self.reviews.insert(review)
