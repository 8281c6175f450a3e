# Rev 0.2.0
from __future__ import annotations

from typing import List, Optional

from PySide6.QtCore import QObject, Signal

from iustime.models.entities import WorkLine
from iustime.services.validation import ValidationError


class LinesViewModel(QObject):
    """
    Emits:
      - linesReloaded(lines: list[WorkLine])
      - errorRaised(message: str)
    """

    linesReloaded = Signal(list)
    errorRaised = Signal(str)

    def __init__(self, store):
        super().__init__()
        self._store = store

    def list_lines(self) -> List[WorkLine]:
        return self._store.lines.list()

    def get_line(self, line_id: Optional[str]) -> Optional[WorkLine]:
        return self._store.lines.get(line_id)

    def reload(self) -> None:
        self.linesReloaded.emit(self.list_lines())

    def create_line(self, name: str, description: str = "") -> Optional[WorkLine]:
        try:
            line = self._store.add_line(WorkLine(id="", name=(name or "").strip(), description=description or ""))
        except ValidationError as e:
            self.errorRaised.emit(str(e))
            return None
        self.reload()
        return line

    def delete_line(self, line_id: str) -> bool:
        ok = self._store.delete_line(line_id)
        self.reload()
        return ok
