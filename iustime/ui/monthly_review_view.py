# iustime/ui/monthly_review_view.py
# Rev 0.2.0
from __future__ import annotations

from PySide6.QtCore import Qt, QDate
from PySide6.QtGui import QGuiApplication
from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QFormLayout, QLabel, QDateEdit, QPushButton,
    QTextEdit, QMessageBox
)

from iustime.services.review_service import MonthStats, ReviewDraft
from iustime.viewmodels.review_viewmodel import MonthlyReviewViewModel


class MonthlyReviewView(QWidget):
    """
    Month statistics plus the four narrative sections. "Generar" asks the
    LLM for a draft (blocking, with a busy cursor); "Guardar" stores it for
    the selected line and month.
    """

    def __init__(self, vm: MonthlyReviewViewModel, parent=None):
        super().__init__(parent)
        self._vm = vm

        self._month = QDateEdit()
        self._month.setDisplayFormat("yyyy-MM")
        self._month.setCalendarPopup(True)
        self._month.setDate(QDate.fromString(vm.month() + "-01", "yyyy-MM-dd"))
        self._month.dateChanged.connect(self._on_month_changed)

        self._btn_generate = QPushButton("Generar con IA")
        self._btn_save = QPushButton("Guardar revisión")
        self._btn_generate.clicked.connect(self._on_generate)
        self._btn_save.clicked.connect(self._on_save)

        self._lbl_active = QLabel("0")
        self._lbl_completed = QLabel("0")
        self._lbl_risks = QLabel("0")

        top_bar = QHBoxLayout()
        top_bar.addWidget(QLabel("Mes:"))
        top_bar.addWidget(self._month)
        top_bar.addSpacing(16)
        top_bar.addWidget(QLabel("Tareas activas:"))
        top_bar.addWidget(self._lbl_active)
        top_bar.addWidget(QLabel("Completadas:"))
        top_bar.addWidget(self._lbl_completed)
        top_bar.addWidget(QLabel("Riesgos abiertos:"))
        top_bar.addWidget(self._lbl_risks)
        top_bar.addStretch(1)
        top_bar.addWidget(self._btn_generate)
        top_bar.addWidget(self._btn_save)

        self._summary = self._editor()
        self._achievements = self._editor()
        self._issues = self._editor()
        self._next_steps = self._editor()

        form = QFormLayout()
        form.addRow("Resumen ejecutivo:", self._summary)
        form.addRow("Logros:", self._achievements)
        form.addRow("Problemas / bloqueos:", self._issues)
        form.addRow("Próximos pasos:", self._next_steps)

        root = QVBoxLayout(self)
        root.addLayout(top_bar)
        root.addLayout(form, 1)

        self._vm.statsChanged.connect(self._on_stats)
        self._vm.draftReady.connect(self._on_draft)
        self._vm.reviewSaved.connect(
            lambda month: QMessageBox.information(self, "Revisión mensual", f"Revisión de {month} guardada.")
        )
        self._vm.errorRaised.connect(lambda msg: QMessageBox.warning(self, "Revisión mensual", msg))

    @staticmethod
    def _editor() -> QTextEdit:
        e = QTextEdit()
        e.setAcceptRichText(False)
        return e

    def refresh(self) -> None:
        self._vm.reload()

    def _on_month_changed(self, d: QDate) -> None:
        self._vm.set_month(d.toString("yyyy-MM"))

    def _on_stats(self, stats: MonthStats) -> None:
        self._lbl_active.setText(str(stats.total_active))
        self._lbl_completed.setText(f"{stats.completed} ({stats.completion_ratio:.0%})")
        self._lbl_risks.setText(str(stats.open_risks))

    def _on_draft(self, draft: ReviewDraft) -> None:
        self._summary.setPlainText(draft.summary)
        self._achievements.setPlainText(draft.achievements)
        self._issues.setPlainText(draft.issues)
        self._next_steps.setPlainText(draft.next_steps)

    def _on_generate(self) -> None:
        self._btn_generate.setEnabled(False)
        QGuiApplication.setOverrideCursor(Qt.WaitCursor)
        try:
            self._vm.generate()
        finally:
            QGuiApplication.restoreOverrideCursor()
            self._btn_generate.setEnabled(True)

    def _on_save(self) -> None:
        self._vm.save(ReviewDraft(
            summary=self._summary.toPlainText().strip(),
            achievements=self._achievements.toPlainText().strip(),
            issues=self._issues.toPlainText().strip(),
            next_steps=self._next_steps.toPlainText().strip(),
        ))
