# Rev 0.2.0
from __future__ import annotations

from datetime import date
from typing import Optional

from PySide6.QtCore import Signal

from iustime.services.dashboard_service import DashboardSummary, summarize
from iustime.viewmodels.base import LineScopedViewModel


class DashboardViewModel(LineScopedViewModel):
    """
    Emits:
      - summaryReady(summary: DashboardSummary)
    """

    summaryReady = Signal(object)

    def __init__(self, store, today: Optional[date] = None):
        super().__init__(store)
        self._today = today

    def summary(self) -> DashboardSummary:
        return summarize(
            self._store.projects_for_line(self._line_id),
            self._store.tasks_for_line(self._line_id),
            today=self._today,
        )

    def reload(self) -> None:
        self.summaryReady.emit(self.summary())
