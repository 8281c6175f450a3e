# Rev 0.2.0
from __future__ import annotations

from typing import Any, Dict, List, Optional

from PySide6.QtCore import QObject, Signal

from iustime.models.entities import User
from iustime.services.references import line_name
from iustime.services.validation import ValidationError


class UsersViewModel(QObject):
    """
    Emits:
      - usersReloaded(rows: list[dict])
      - errorRaised(message: str)
    """

    usersReloaded = Signal(list)
    errorRaised = Signal(str)

    def __init__(self, store):
        super().__init__()
        self._store = store

    def reload(self) -> None:
        lines = self._store.lines.list()
        rows: List[Dict[str, Any]] = [
            {
                "id": u.id,
                "user": u,
                "name": u.name,
                "email": u.email,
                "role": u.role,
                "line_name": line_name(u.assigned_line_id, lines),
            }
            for u in self._store.users.list()
        ]
        self.usersReloaded.emit(rows)

    def lines(self):
        return self._store.lines.list()

    def get_user(self, user_id: str) -> Optional[User]:
        return self._store.users.get(user_id)

    def create_user(self, user: User) -> Optional[User]:
        try:
            saved = self._store.add_user(user)
        except ValidationError as e:
            self.errorRaised.emit(str(e))
            return None
        self.reload()
        return saved

    def update_user(self, user: User) -> bool:
        try:
            ok = self._store.update_user(user)
        except ValidationError as e:
            self.errorRaised.emit(str(e))
            return False
        self.reload()
        return ok

    def delete_user(self, user_id: str) -> bool:
        ok = self._store.delete_user(user_id)
        self.reload()
        return ok
