# iustime/ui/panels/timeline_panel.py
# Rev 0.2.0: painted Gantt over month columns
from __future__ import annotations
from typing import List

from PySide6.QtCore import Qt, QRectF, QSize
from PySide6.QtGui import QColor, QPainter, QPen, QFont
from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QComboBox, QScrollArea, QSizePolicy
)

from iustime.viewmodels.timeline_viewmodel import TimelineViewModel

_LABEL_W = 280
_HEADER_H = 28
_ROW_H = 26
_MIN_COL_W = 90

_TEXT = "#222222"
_MUTED = "#64748b"
_GRID = "#e5e5e5"
_HEAD_BG = "#f4f4f5"

_BAR_COLORS = {
    "Ready to Start": ("#cbd5e1", "#64748b"),
    "In Progress": ("#bfdbfe", "#2563eb"),
    "Delayed": ("#fecaca", "#dc2626"),
    "Completed": ("#bbf7d0", "#16a34a"),
}


class GanttCanvas(QWidget):
    """Paints month headers, one row per task and its clamped bar."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self._columns: list = []
        self._rows: List[dict] = []
        self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Fixed)

    def set_data(self, columns: list, rows: List[dict]) -> None:
        self._columns = columns
        self._rows = rows
        self.setMinimumHeight(_HEADER_H + _ROW_H * max(1, len(rows)) + 4)
        self.updateGeometry()
        self.update()

    def sizeHint(self) -> QSize:
        return QSize(_LABEL_W + _MIN_COL_W * max(1, len(self._columns)), _HEADER_H + _ROW_H * max(1, len(self._rows)))

    def minimumSizeHint(self) -> QSize:
        return QSize(_LABEL_W + _MIN_COL_W * len(self._columns), self.minimumHeight())

    def paintEvent(self, _ev):
        p = QPainter(self)
        p.setRenderHint(QPainter.Antialiasing, True)
        p.fillRect(self.rect(), QColor("#ffffff"))

        if not self._columns:
            p.setPen(QColor(_MUTED))
            p.drawText(self.rect(), Qt.AlignCenter, "No hay tareas con fechas válidas.")
            p.end()
            return

        grid_w = max(1, self.width() - _LABEL_W)
        col_w = grid_w / len(self._columns)

        # header
        p.fillRect(QRectF(0, 0, self.width(), _HEADER_H), QColor(_HEAD_BG))
        head_font = QFont(p.font())
        head_font.setBold(True)
        p.setFont(head_font)
        p.setPen(QColor(_TEXT))
        p.drawText(QRectF(8, 0, _LABEL_W - 8, _HEADER_H), Qt.AlignVCenter | Qt.AlignLeft, "Tarea")
        for i, col in enumerate(self._columns):
            x = _LABEL_W + i * col_w
            p.drawText(QRectF(x, 0, col_w, _HEADER_H), Qt.AlignCenter, f"{col.label} {col.year % 100:02d}")

        # vertical grid
        p.setPen(QPen(QColor(_GRID), 1))
        for i in range(len(self._columns) + 1):
            x = _LABEL_W + i * col_w
            p.drawLine(int(x), 0, int(x), self.height())

        body_font = QFont(p.font())
        body_font.setBold(False)
        for r, row in enumerate(self._rows):
            y = _HEADER_H + r * _ROW_H
            p.setPen(QPen(QColor(_GRID), 1))
            p.drawLine(0, y + _ROW_H, self.width(), y + _ROW_H)

            body_font.setBold(not row["is_subtask"])
            p.setFont(body_font)
            p.setPen(QColor(_MUTED if row["is_subtask"] else _TEXT))
            indent = 28 if row["is_subtask"] else 8
            text = ("↳ " if row["is_subtask"] else "") + row["title"]
            p.drawText(QRectF(indent, y, _LABEL_W - indent - 4, _ROW_H), Qt.AlignVCenter | Qt.AlignLeft, text)

            bar = row["bar"]
            if bar is None:
                continue
            fill, stroke = _BAR_COLORS.get(row["status"], ("#e5e7eb", "#6b7280"))
            bx = _LABEL_W + grid_w * bar.left_percent / 100.0
            bw = max(2.0, grid_w * bar.width_percent / 100.0)
            bh = _ROW_H - (12 if row["is_subtask"] else 8)
            by = y + (_ROW_H - bh) / 2
            rect = QRectF(bx, by, bw, bh)
            p.setPen(QPen(QColor(stroke), 1))
            p.setBrush(QColor(fill))
            p.drawRoundedRect(rect, 4, 4)
            if row["progress"] > 0:
                p.setPen(Qt.NoPen)
                p.setBrush(QColor(stroke))
                p.drawRoundedRect(QRectF(bx, by, bw * row["progress"] / 100.0, bh), 4, 4)
        p.end()


class TimelinePanel(QWidget):
    def __init__(self, vm: TimelineViewModel, parent=None):
        super().__init__(parent)
        self._vm = vm

        self._cmb_project = QComboBox()
        self._cmb_project.currentIndexChanged.connect(self._on_project_filter)
        self._info = QLabel("")
        self._info.setStyleSheet(f"color: {_MUTED};")

        top_bar = QHBoxLayout()
        top_bar.addWidget(QLabel("Proyecto:"))
        top_bar.addWidget(self._cmb_project)
        top_bar.addStretch(1)
        top_bar.addWidget(self._info)

        self._canvas = GanttCanvas()
        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setWidget(self._canvas)

        root = QVBoxLayout(self)
        root.addLayout(top_bar)
        root.addWidget(scroll, 1)

        self._vm.timelineReloaded.connect(self._on_reloaded)

    def refresh(self) -> None:
        current = self._cmb_project.currentData()
        self._cmb_project.blockSignals(True)
        self._cmb_project.clear()
        self._cmb_project.addItem("Todos los proyectos", None)
        for p in self._vm.projects():
            self._cmb_project.addItem(p.name, p.id)
        ix = self._cmb_project.findData(current)
        self._cmb_project.setCurrentIndex(ix if ix >= 0 else 0)
        self._cmb_project.blockSignals(False)
        self._vm.set_project(self._cmb_project.currentData())
        self._vm.reload()

    def _on_project_filter(self, _ix: int) -> None:
        self._vm.set_project(self._cmb_project.currentData())
        self._vm.reload()

    def _on_reloaded(self, columns: list, rows: list) -> None:
        hidden = sum(1 for r in rows if r["bar"] is None)
        self._info.setText(f"{len(rows)} tareas" + (f", {hidden} fuera de rango" if hidden else ""))
        self._canvas.set_data(columns, rows)
