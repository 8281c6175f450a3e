# tests/test_timeline.py
from __future__ import annotations

from datetime import date

import pytest

from iustime.services.timeline import (
    MIN_COLUMNS,
    add_months,
    build_month_columns,
    layout_bar,
    parse_date,
    timeline_bounds,
    timeline_rows,
)


@pytest.fixture()
def jan_feb(make_task):
    return [make_task(start_date="2024-01-10", end_date="2024-02-20")]


def test_short_range_is_padded_to_six_months(jan_feb):
    cols = build_month_columns(jan_feb)
    assert [c.key for c in cols] == ["2024-01", "2024-02", "2024-03", "2024-04", "2024-05", "2024-06"]
    assert [c.label for c in cols] == ["ene", "feb", "mar", "abr", "may", "jun"]


def test_long_range_is_not_padded(make_task):
    ts = [make_task(start_date="2023-11-15", end_date="2024-08-01")]
    cols = build_month_columns(ts)
    assert len(cols) == 10
    assert cols[0].key == "2023-11" and cols[-1].key == "2024-08"


@pytest.mark.parametrize("start,end", [("2024-05-05", "2024-05-06"), ("2024-12-31", "2024-12-31")])
def test_always_at_least_min_columns(make_task, start, end):
    assert len(build_month_columns([make_task(start_date=start, end_date=end)])) >= MIN_COLUMNS


def test_no_valid_dates_gives_no_columns(make_task):
    ts = [make_task(start_date="", end_date="2024-01-01"), make_task(start_date="bad", end_date="worse")]
    assert build_month_columns(ts) == []


def test_bar_inside_grid(jan_feb):
    cols = build_month_columns(jan_feb)
    start, end = timeline_bounds(cols)
    assert (start, end) == (date(2024, 1, 1), date(2024, 7, 1))
    bar = layout_bar(jan_feb[0], cols)
    total = (end - start).days
    assert bar.left_percent == pytest.approx(9 / total * 100)
    assert bar.width_percent == pytest.approx(41 / total * 100)


def test_bar_outside_grid_is_hidden(jan_feb, make_task):
    cols = build_month_columns(jan_feb)
    before = make_task(start_date="2023-01-01", end_date="2023-02-01")
    after = make_task(start_date="2025-01-01", end_date="2025-03-01")
    assert layout_bar(before, cols) is None
    assert layout_bar(after, cols) is None


def test_partial_overlap_is_clamped(jan_feb, make_task):
    cols = build_month_columns(jan_feb)
    straddling = make_task(start_date="2023-12-01", end_date="2024-09-30")
    bar = layout_bar(straddling, cols)
    assert bar.left_percent == 0
    assert bar.left_percent + bar.width_percent <= 100
    assert bar.width_percent == pytest.approx(100)


def test_single_day_bar_has_zero_width(jan_feb, make_task):
    cols = build_month_columns(jan_feb)
    bar = layout_bar(make_task(start_date="2024-03-01", end_date="2024-03-01"), cols)
    assert bar is not None
    assert bar.width_percent == 0


def test_invalid_dates_hide_the_bar(jan_feb, make_task):
    cols = build_month_columns(jan_feb)
    assert layout_bar(make_task(start_date="2024-13-01", end_date="2024-02-01"), cols) is None


def test_rows_order_parents_by_start_then_children(make_task):
    late = make_task(id="late", start_date="2024-03-01", end_date="2024-03-10")
    early = make_task(id="early", start_date="2024-01-01", end_date="2024-01-10")
    undated = make_task(id="undated", start_date="", end_date="")
    c2 = make_task(id="c2", parent_id="early", start_date="2024-01-05", end_date="2024-01-06")
    c1 = make_task(id="c1", parent_id="early", start_date="2024-01-02", end_date="2024-01-09")
    rows = timeline_rows([late, undated, c2, early, c1])
    assert [t.id for t in rows] == ["early", "c1", "c2", "late", "undated"]


def test_date_helpers():
    assert parse_date("2024-02-29") == date(2024, 2, 29)
    assert parse_date("2023-02-29") is None
    assert parse_date(None) is None
    assert add_months(date(2024, 11, 1), 3) == date(2025, 2, 1)
    assert add_months(date(2024, 1, 1), -1) == date(2023, 12, 1)
