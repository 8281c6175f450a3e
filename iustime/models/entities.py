# Rev 0.2.0
"""Entities persisted as camelCase JSON documents (one document per collection).

Relationships are plain ids (Task→Project, Task→parent Task, Risk→Task); nothing
owns anything by pointer, so a dangling id is a normal state.
"""
from __future__ import annotations
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional


def _int(value: Any, default: int = 0) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _float(value: Any, default: float = 0.0) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def _opt_id(value: Any) -> Optional[str]:
    # '' and None both mean "no reference"
    return str(value) if value not in (None, "") else None


@dataclass
class WorkLine:
    id: str
    name: str
    description: str = ""
    created_at: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "description": self.description, "createdAt": self.created_at}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WorkLine":
        return cls(
            id=str(data["id"]),
            name=data.get("name") or "",
            description=data.get("description") or "",
            created_at=data.get("createdAt") or "",
        )


@dataclass
class Project:
    id: str
    line_id: str
    name: str
    objective: str = ""
    assignee: str = ""
    status: str = "Ready to Start"
    priority: str = "Medium"
    difficulty: str = "Medium"
    budget: float = 0.0
    progress: int = 0          # derived; written by the store on task mutations
    start_date: str = ""
    end_date: str = ""
    next_steps: List[str] = field(default_factory=list)
    notes: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "lineId": self.line_id,
            "name": self.name,
            "objective": self.objective,
            "assignee": self.assignee,
            "status": self.status,
            "priority": self.priority,
            "difficulty": self.difficulty,
            "budget": self.budget,
            "progress": self.progress,
            "startDate": self.start_date,
            "endDate": self.end_date,
            "nextSteps": list(self.next_steps),
            "notes": self.notes,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Project":
        return cls(
            id=str(data["id"]),
            line_id=str(data.get("lineId") or ""),
            name=data.get("name") or "",
            objective=data.get("objective") or "",
            assignee=data.get("assignee") or "",
            status=data.get("status") or "Ready to Start",
            priority=data.get("priority") or "Medium",
            difficulty=data.get("difficulty") or "Medium",
            budget=_float(data.get("budget")),
            progress=_int(data.get("progress")),
            start_date=data.get("startDate") or "",
            end_date=data.get("endDate") or "",
            next_steps=[str(s) for s in (data.get("nextSteps") or [])],
            notes=data.get("notes") or "",
        )


@dataclass
class ChecklistItem:
    id: str
    text: str
    completed: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ChecklistItem":
        return cls(id=str(data["id"]), text=data.get("text") or "", completed=bool(data.get("completed")))


@dataclass
class Attachment:
    id: str
    name: str
    mime_type: str = ""
    size: int = 0
    data: str = ""             # data URL (base64)
    created_at: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "type": self.mime_type,
            "size": self.size,
            "data": self.data,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Attachment":
        return cls(
            id=str(data["id"]),
            name=data.get("name") or "",
            mime_type=data.get("type") or "",
            size=_int(data.get("size")),
            data=data.get("data") or "",
            created_at=data.get("createdAt") or "",
        )


@dataclass
class Task:
    id: str
    line_id: str
    project_id: str
    title: str
    parent_id: Optional[str] = None     # None ⇒ top-level task; set ⇒ subtask
    assignee: str = ""
    start_date: str = ""
    end_date: str = ""
    priority: str = "Medium"
    difficulty: str = "Medium"
    progress: int = 0
    status: str = "Ready to Start"
    dependencies: str = ""
    comments: str = ""
    checklist: List[ChecklistItem] = field(default_factory=list)
    attachments: List[Attachment] = field(default_factory=list)

    @property
    def is_subtask(self) -> bool:
        return self.parent_id is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "lineId": self.line_id,
            "projectId": self.project_id,
            "parentId": self.parent_id,
            "title": self.title,
            "assignee": self.assignee,
            "startDate": self.start_date,
            "endDate": self.end_date,
            "priority": self.priority,
            "difficulty": self.difficulty,
            "progress": self.progress,
            "status": self.status,
            "dependencies": self.dependencies,
            "comments": self.comments,
            "checklist": [c.to_dict() for c in self.checklist],
            "attachments": [a.to_dict() for a in self.attachments],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Task":
        return cls(
            id=str(data["id"]),
            line_id=str(data.get("lineId") or ""),
            project_id=str(data.get("projectId") or ""),
            parent_id=_opt_id(data.get("parentId")),
            title=data.get("title") or "",
            assignee=data.get("assignee") or "",
            start_date=data.get("startDate") or "",
            end_date=data.get("endDate") or "",
            priority=data.get("priority") or "Medium",
            difficulty=data.get("difficulty") or "Medium",
            progress=_int(data.get("progress")),
            status=data.get("status") or "Ready to Start",
            dependencies=data.get("dependencies") or "",
            comments=data.get("comments") or "",
            checklist=[ChecklistItem.from_dict(c) for c in (data.get("checklist") or [])],
            attachments=[Attachment.from_dict(a) for a in (data.get("attachments") or [])],
        )


@dataclass
class Risk:
    id: str
    line_id: str
    description: str
    task_id: Optional[str] = None       # weak reference; may dangle
    responsible: str = ""
    required_action: str = ""
    status: str = "Open"
    priority: str = "Medium"
    impact: str = "Low"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "lineId": self.line_id,
            "taskId": self.task_id,
            "description": self.description,
            "responsible": self.responsible,
            "requiredAction": self.required_action,
            "status": self.status,
            "priority": self.priority,
            "impact": self.impact,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Risk":
        return cls(
            id=str(data["id"]),
            line_id=str(data.get("lineId") or ""),
            task_id=_opt_id(data.get("taskId")),
            description=data.get("description") or "",
            responsible=data.get("responsible") or "",
            required_action=data.get("requiredAction") or "",
            status=data.get("status") or "Open",
            priority=data.get("priority") or "Medium",
            impact=data.get("impact") or "Low",
        )


@dataclass
class User:
    id: str
    name: str
    email: str
    password: str
    role: str = "USER"
    assigned_line_id: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role == "ADMIN"

    def to_dict(self) -> Dict[str, Any]:
        out = {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "password": self.password,
            "role": self.role,
        }
        if self.assigned_line_id is not None:
            out["assignedLineId"] = self.assigned_line_id
        return out

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "User":
        return cls(
            id=str(data["id"]),
            name=data.get("name") or "",
            email=data.get("email") or "",
            password=data.get("password") or "",
            role=data.get("role") or "USER",
            assigned_line_id=_opt_id(data.get("assignedLineId")),
        )


@dataclass
class MonthlyReview:
    id: str
    line_id: str
    month: str                  # YYYY-MM
    summary: str = ""
    achievements: str = ""
    issues: str = ""
    next_steps: str = ""
    saved_at: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "lineId": self.line_id,
            "month": self.month,
            "summary": self.summary,
            "achievements": self.achievements,
            "issues": self.issues,
            "nextSteps": self.next_steps,
            "savedAt": self.saved_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MonthlyReview":
        return cls(
            id=str(data["id"]),
            line_id=str(data.get("lineId") or ""),
            month=data.get("month") or "",
            summary=data.get("summary") or "",
            achievements=data.get("achievements") or "",
            issues=data.get("issues") or "",
            next_steps=data.get("nextSteps") or "",
            saved_at=data.get("savedAt") or "",
        )
