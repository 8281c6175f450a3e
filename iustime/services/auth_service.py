# Rev 0.2.0
"""Login and per-session view gating. Passwords are compared in plaintext."""
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Sequence

from iustime.models.entities import User
from iustime.models.types import GLOBAL_VIEWS, ViewState

MASTER_EMAIL = "admin@iustime.com"
MASTER_PASSWORD = "admin"

USER_VIEWS = (
    ViewState.DASHBOARD,
    ViewState.PROJECTS,
    ViewState.TASKS,
    ViewState.TIMELINE,
    ViewState.RISKS,
    ViewState.MONTHLY_REVIEW,
)
ADMIN_VIEWS = USER_VIEWS + (ViewState.GLOBAL_REVIEW, ViewState.GLOBAL_DASHBOARD, ViewState.CONFIGURATION)


def authenticate(users: Sequence[User], email: str, password: str) -> Optional[User]:
    wanted = (email or "").strip().lower()
    if not wanted:
        return None
    user = next((u for u in users if u.email.strip().lower() == wanted), None)
    if user is not None and user.password == password:
        return user
    if wanted == MASTER_EMAIL and password == MASTER_PASSWORD:
        return User(id="admin-master", name="Administrador", email=MASTER_EMAIL,
                    password=MASTER_PASSWORD, role="ADMIN")
    return None


@dataclass
class Session:
    """
    Who is logged in and what they are looking at.
    USER sessions are pinned to the assigned line; ADMIN sessions pick a line
    or open a global view (which shows `admin_view_line_id`).
    """
    user: User
    selected_line_id: Optional[str] = None
    admin_view_line_id: Optional[str] = None
    current_view: ViewState = ViewState.PROJECTS

    @classmethod
    def start(cls, user: User, line_ids: Sequence[str] = ()) -> "Session":
        if not user.is_admin and user.assigned_line_id:
            return cls(user=user, selected_line_id=user.assigned_line_id, current_view=ViewState.DASHBOARD)
        return cls(user=user, admin_view_line_id=(line_ids[0] if line_ids else None))

    @property
    def is_global_view(self) -> bool:
        return self.current_view in GLOBAL_VIEWS

    @property
    def needs_line_selection(self) -> bool:
        return self.user.is_admin and self.selected_line_id is None and not self.is_global_view

    @property
    def active_line_id(self) -> Optional[str]:
        return self.admin_view_line_id if self.is_global_view else self.selected_line_id

    def allowed_views(self) -> tuple[ViewState, ...]:
        return ADMIN_VIEWS if self.user.is_admin else USER_VIEWS

    def change_view(self, view: ViewState) -> bool:
        if view not in self.allowed_views():
            return False
        self.current_view = view
        return True

    def select_line(self, line_id: str) -> None:
        if not self.user.is_admin:
            return
        self.selected_line_id = line_id
        self.current_view = ViewState.PROJECTS

    def exit_line(self) -> None:
        # USER sessions cannot leave their assigned line
        if self.user.is_admin:
            self.selected_line_id = None
            self.current_view = ViewState.PROJECTS
