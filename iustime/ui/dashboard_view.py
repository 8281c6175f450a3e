# iustime/ui/dashboard_view.py
# Rev 0.2.0
from __future__ import annotations
from typing import List, Tuple

from PySide6.QtCore import Qt, QRectF
from PySide6.QtGui import QColor, QPainter
from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QGridLayout, QLabel, QFrame, QTableWidget,
    QTableWidgetItem, QHeaderView, QProgressBar, QSizePolicy
)

from iustime.models.types import LEVEL_LABELS, PROJECT_STATUS_LABELS
from iustime.services.dashboard_service import DashboardSummary
from iustime.viewmodels.dashboard_viewmodel import DashboardViewModel

_CARD = "#fafafa"
_BORDER = "#e5e5e5"
_ACCENT = "#3b82f6"


def _card(title: str, value_label: QLabel) -> QFrame:
    box = QFrame()
    box.setFrameShape(QFrame.StyledPanel)
    box.setStyleSheet(f"QFrame {{ background-color: {_CARD}; border: 1px solid {_BORDER}; border-radius: 8px; }}")
    lay = QVBoxLayout(box)
    t = QLabel(title)
    t.setStyleSheet("color: #64748b; border: none;")
    value_label.setStyleSheet("font-size: 22px; font-weight: 600; border: none;")
    lay.addWidget(t)
    lay.addWidget(value_label)
    return box


class BarChart(QWidget):
    """Vertical bars; each bar is (label, value, colour)."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self._bars: List[Tuple[str, int, str]] = []
        self.setMinimumHeight(180)
        self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)

    def set_bars(self, bars: List[Tuple[str, int, str]]) -> None:
        self._bars = bars
        self.update()

    def paintEvent(self, _ev):
        p = QPainter(self)
        p.setRenderHint(QPainter.Antialiasing, True)
        if not self._bars:
            p.setPen(QColor("#94a3b8"))
            p.drawText(self.rect(), Qt.AlignCenter, "Sin datos")
            p.end()
            return
        peak = max(v for _l, v, _c in self._bars) or 1
        label_h, value_h = 18, 16
        slot = self.width() / len(self._bars)
        usable = self.height() - label_h - value_h - 4
        for i, (label, value, color) in enumerate(self._bars):
            h = usable * value / peak
            x = i * slot + slot * 0.2
            w = slot * 0.6
            y = value_h + usable - h
            p.setPen(Qt.NoPen)
            p.setBrush(QColor(color))
            p.drawRoundedRect(QRectF(x, y, w, h), 3, 3)
            p.setPen(QColor("#222222"))
            p.drawText(QRectF(i * slot, y - value_h, slot, value_h), Qt.AlignCenter, str(value))
            p.drawText(QRectF(i * slot, self.height() - label_h, slot, label_h), Qt.AlignCenter, label)
        p.end()


class DashboardView(QWidget):
    def __init__(self, vm: DashboardViewModel, parent=None):
        super().__init__(parent)
        self._vm = vm

        self._lbl_projects = QLabel("0")
        self._lbl_progress = QLabel("0%")
        self._lbl_priority = QLabel("")

        cards = QHBoxLayout()
        cards.addWidget(_card("Proyectos", self._lbl_projects))
        cards.addWidget(_card("Progreso promedio", self._lbl_progress))
        cards.addWidget(_card("Tareas por prioridad", self._lbl_priority))

        self._evolution = BarChart()
        self._status = BarChart()

        self._projects = QTableWidget(0, 4)
        self._projects.setHorizontalHeaderLabels(["Proyecto", "Estado", "Tareas", "Cumplimiento"])
        self._responsibles = QTableWidget(0, 4)
        self._responsibles.setHorizontalHeaderLabels(["Responsable", "Proyectos", "Tareas", "Cumplimiento"])
        for tbl in (self._projects, self._responsibles):
            tbl.setEditTriggers(QTableWidget.NoEditTriggers)
            tbl.verticalHeader().setVisible(False)
            tbl.horizontalHeader().setSectionResizeMode(QHeaderView.ResizeToContents)
            tbl.horizontalHeader().setSectionResizeMode(0, QHeaderView.Stretch)

        grid = QGridLayout()
        grid.addWidget(QLabel("<b>Evolución mensual (tareas completadas)</b>"), 0, 0)
        grid.addWidget(QLabel("<b>Distribución por estado</b>"), 0, 1)
        grid.addWidget(self._evolution, 1, 0)
        grid.addWidget(self._status, 1, 1)
        grid.addWidget(QLabel("<b>Avance por proyecto</b>"), 2, 0)
        grid.addWidget(QLabel("<b>Desempeño por responsable</b>"), 2, 1)
        grid.addWidget(self._projects, 3, 0)
        grid.addWidget(self._responsibles, 3, 1)

        root = QVBoxLayout(self)
        root.addLayout(cards)
        root.addLayout(grid, 1)

        self._vm.summaryReady.connect(self._on_summary)

    def refresh(self) -> None:
        self._vm.reload()

    def _on_summary(self, s: DashboardSummary) -> None:
        self._lbl_projects.setText(str(s.total_projects))
        self._lbl_progress.setText(f"{s.avg_project_progress}%")
        self._lbl_priority.setText("  ".join(
            f"{LEVEL_LABELS.get(k, k)}: {v}" for k, v in s.priority_counts.items()
        ))
        self._evolution.set_bars([(label, count, _ACCENT) for label, count in s.monthly_evolution])
        self._status.set_bars(list(s.status_distribution))

        self._projects.setRowCount(0)
        for st in s.project_stats:
            r = self._projects.rowCount()
            self._projects.insertRow(r)
            self._projects.setItem(r, 0, QTableWidgetItem(st.name))
            self._projects.setItem(r, 1, QTableWidgetItem(PROJECT_STATUS_LABELS.get(st.status, st.status)))
            self._projects.setItem(r, 2, QTableWidgetItem(f"{st.completed}/{st.total}"))
            self._projects.setCellWidget(r, 3, self._bar(st.completion))

        self._responsibles.setRowCount(0)
        for st in s.responsible_stats:
            r = self._responsibles.rowCount()
            self._responsibles.insertRow(r)
            self._responsibles.setItem(r, 0, QTableWidgetItem(st.name))
            self._responsibles.setItem(r, 1, QTableWidgetItem(str(st.projects_count)))
            self._responsibles.setItem(r, 2, QTableWidgetItem(f"{st.completed}/{st.total}"))
            self._responsibles.setCellWidget(r, 3, self._bar(st.completion))

    @staticmethod
    def _bar(value: int) -> QProgressBar:
        bar = QProgressBar()
        bar.setRange(0, 100)
        bar.setValue(value)
        bar.setFormat("%p%")
        return bar
