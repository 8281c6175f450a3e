# tests/test_progress.py
from __future__ import annotations

import pytest

from iustime.models.entities import Project
from iustime.services.progress import (
    apply_project_progress,
    recompute_project_progress,
    recompute_task_progress,
    rollup_mean,
)


@pytest.mark.parametrize(
    "values,expected",
    [
        ([], 0),
        ([40], 40),
        ([100, 50], 75),
        ([40, 75], 58),       # 57.5 rounds up
        ([0, 1], 1),          # 0.5 rounds up
        ([33, 33, 34], 33),
        ([150, -20], 50),     # result clamped into 0..100
    ],
)
def test_rollup_mean(values, expected):
    assert rollup_mean(values) == expected


def test_leaf_task_keeps_its_own_progress(make_task):
    a = make_task(progress=40)
    assert recompute_task_progress(a, [a]) == 40


def test_parent_ignores_stored_value(make_task):
    b = make_task(progress=5)
    b1 = make_task(parent_id=b.id, progress=100)
    b2 = make_task(parent_id=b.id, progress=50)
    assert recompute_task_progress(b, [b, b1, b2]) == 75


def test_alpha_scenario(make_task):
    alpha = Project(id="P1", line_id="L1", name="Alpha")
    a = make_task(progress=40)
    b = make_task(progress=0)
    b1 = make_task(parent_id=b.id, progress=100)
    b2 = make_task(parent_id=b.id, progress=50)
    tasks = [a, b, b1, b2]

    assert recompute_task_progress(b, tasks) == 75
    assert recompute_project_progress(alpha, tasks) == 58
    assert apply_project_progress(alpha, tasks).progress == 58


def test_project_without_tasks_is_zero(make_task):
    p = Project(id="P9", line_id="L1", name="Empty", progress=70)
    other = make_task(project_id="P1", progress=100)
    assert recompute_project_progress(p, [other]) == 0


def test_project_counts_only_top_level_tasks(make_task):
    p = Project(id="P1", line_id="L1", name="Alpha")
    parent = make_task(progress=0)
    child = make_task(parent_id=parent.id, progress=80)
    # the child contributes only through its parent
    assert recompute_project_progress(p, [parent, child]) == 80
