# Rev 0.2.0
from __future__ import annotations

from datetime import date
from typing import Optional

from PySide6.QtCore import Signal

from iustime.models.entities import MonthlyReview
from iustime.services.review_service import MonthStats, ReviewDraft, month_stats
from iustime.viewmodels.base import LineScopedViewModel


class MonthlyReviewViewModel(LineScopedViewModel):
    """
    Emits:
      - statsChanged(stats: MonthStats)
      - draftReady(draft: ReviewDraft)     after load or generate
      - reviewSaved(month: str)
    """

    statsChanged = Signal(object)
    draftReady = Signal(object)
    reviewSaved = Signal(str)

    def __init__(self, store, generator):
        super().__init__(store)
        self._generator = generator
        self._month = date.today().strftime("%Y-%m")

    def month(self) -> str:
        return self._month

    def set_month(self, month: str) -> None:
        self._month = month
        self.reload()

    def stats(self) -> MonthStats:
        return month_stats(
            self._month,
            self._store.tasks_for_line(self._line_id),
            self._store.risks_for_line(self._line_id),
        )

    def saved_draft(self) -> Optional[ReviewDraft]:
        if self._line_id is None:
            return None
        saved = self._store.review_for(self._line_id, self._month)
        if saved is None:
            return None
        return ReviewDraft(saved.summary, saved.achievements, saved.issues, saved.next_steps)

    def reload(self) -> None:
        self.statsChanged.emit(self.stats())
        self.draftReady.emit(self.saved_draft() or ReviewDraft())

    def generate(self) -> ReviewDraft:
        draft = self._generator.generate(
            self._month,
            self._store.projects_for_line(self._line_id),
            self._store.tasks_for_line(self._line_id),
            self._store.risks_for_line(self._line_id),
        )
        self.draftReady.emit(draft)
        return draft

    def save(self, draft: ReviewDraft) -> bool:
        if self._line_id is None:
            self.errorRaised.emit("Seleccione una línea de trabajo.")
            return False
        review = MonthlyReview(
            id="",
            line_id=self._line_id,
            month=self._month,
            summary=draft.summary,
            achievements=draft.achievements,
            issues=draft.issues,
            next_steps=draft.next_steps,
        )
        ok = self._mutate(lambda: self._store.save_review(review), None) is not None
        if ok:
            self.reviewSaved.emit(self._month)
        return ok
