# Rev 0.2.0
from __future__ import annotations

from typing import Callable, Optional, TypeVar

from PySide6.QtCore import QObject, Signal

from iustime.services.validation import ValidationError

R = TypeVar("R")


class LineScopedViewModel(QObject):
    """
    Common plumbing for VMs that show one work line of the EntityStore.
    Emits:
      - errorRaised(message: str) when a mutation is rejected
    """

    errorRaised = Signal(str)

    def __init__(self, store):
        super().__init__()
        self._store = store
        self._line_id: Optional[str] = None

    def set_line(self, line_id: Optional[str]) -> None:
        self._line_id = line_id

    def line_id(self) -> Optional[str]:
        return self._line_id

    def reload(self) -> None:  # pragma: no cover - overridden
        raise NotImplementedError

    def _mutate(self, fn: Callable[[], R], default: R) -> R:
        """Run a store mutation; validation failures become errorRaised, then reload."""
        try:
            result = fn()
        except ValidationError as e:
            self.errorRaised.emit(str(e))
            return default
        self.reload()
        return result
