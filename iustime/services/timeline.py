# Rev 0.2.0

"""Gantt layout on a calendar-month grid (Rev 0.2.0)
- Columns: one per month from the earliest valid start to the latest valid end,
  padded with trailing months to MIN_COLUMNS
- Bars: task [start, end] clamped to the grid, as left/width percentages
- Rows: top-level tasks by start date, each followed by its subtasks
"""
from __future__ import annotations
from dataclasses import dataclass
from datetime import date, datetime
from typing import List, Optional, Sequence, Tuple

from iustime.models.entities import Task
from iustime.services.hierarchy import flatten, group_children

MIN_COLUMNS = 6

# es-ES short month names
_MONTH_LABELS = ("ene", "feb", "mar", "abr", "may", "jun", "jul", "ago", "sept", "oct", "nov", "dic")


@dataclass(frozen=True)
class MonthColumn:
    key: str        # YYYY-MM
    label: str
    year: int
    month: int      # 1..12
    start: date     # first day of the month


@dataclass(frozen=True)
class BarLayout:
    left_percent: float
    width_percent: float


def parse_date(value: Optional[str]) -> Optional[date]:
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except (TypeError, ValueError):
        pass
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
    except (TypeError, ValueError):
        return None


def _first_of_month(d: date) -> date:
    return d.replace(day=1)


def add_months(d: date, n: int = 1) -> date:
    """First day of the month n months after d's month."""
    idx = d.year * 12 + (d.month - 1) + n
    return date(idx // 12, idx % 12 + 1, 1)


def _column(d: date) -> MonthColumn:
    return MonthColumn(
        key=f"{d.year:04d}-{d.month:02d}",
        label=_MONTH_LABELS[d.month - 1],
        year=d.year,
        month=d.month,
        start=d,
    )


def _task_range(task: Task) -> Optional[Tuple[date, date]]:
    start, end = parse_date(task.start_date), parse_date(task.end_date)
    if start is None or end is None:
        return None
    return start, end


def build_month_columns(tasks: Sequence[Task]) -> List[MonthColumn]:
    ranges = [r for r in (_task_range(t) for t in tasks) if r is not None]
    if not ranges:
        return []

    range_start = _first_of_month(min(r[0] for r in ranges))
    range_end_exclusive = add_months(max(r[1] for r in ranges), 1)

    cols: List[MonthColumn] = []
    current = range_start
    while current < range_end_exclusive:
        cols.append(_column(current))
        current = add_months(current, 1)

    while len(cols) < MIN_COLUMNS:
        cols.append(_column(current))
        current = add_months(current, 1)
    return cols


def timeline_bounds(columns: Sequence[MonthColumn]) -> Optional[Tuple[date, date]]:
    if not columns:
        return None
    return columns[0].start, add_months(columns[-1].start, 1)


def layout_bar(task: Task, columns: Sequence[MonthColumn]) -> Optional[BarLayout]:
    """None means the bar is hidden (unparseable dates or nothing inside the grid)."""
    bounds = timeline_bounds(columns)
    rng = _task_range(task)
    if bounds is None or rng is None:
        return None
    timeline_start, timeline_end = bounds
    start = max(rng[0], timeline_start)
    end = min(rng[1], timeline_end)
    if end < start:
        return None

    total = (timeline_end - timeline_start).days
    left = (start - timeline_start).days / total * 100.0
    width = (end - start).days / total * 100.0
    return BarLayout(left_percent=left, width_percent=width)


def timeline_rows(tasks: Sequence[Task]) -> List[Task]:
    parents, children = group_children(tasks)

    def by_start(t: Task):
        d = parse_date(t.start_date)
        # unparseable dates sink to the bottom
        return (d is None, d or date.min)

    return flatten(sorted(parents, key=by_start), children, child_key=by_start)
