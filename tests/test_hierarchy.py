# tests/test_hierarchy.py
from __future__ import annotations

import pytest

from iustime.services.hierarchy import group_children, order_tasks


@pytest.fixture()
def tasks(make_task):
    p1 = make_task(id="p1", project_id="P1", end_date="2024-03-01", progress=10)
    p2 = make_task(id="p2", project_id="P2", end_date="2024-01-15", progress=90)
    p3 = make_task(id="p3", project_id="P1", end_date="2024-02-01", progress=50)
    c1 = make_task(id="c1", project_id="P1", parent_id="p1", end_date="2024-02-28")
    c2 = make_task(id="c2", project_id="P1", parent_id="p1", end_date="2024-01-31")
    c3 = make_task(id="c3", project_id="P2", parent_id="p2", end_date="2024-01-10")
    return [p1, c1, p2, c2, p3, c3]


def _ids(tasks):
    return [t.id for t in tasks]


def test_group_children_keeps_collection_order(tasks):
    parents, children = group_children(tasks)
    assert _ids(parents) == ["p1", "p2", "p3"]
    assert _ids(children["p1"]) == ["c1", "c2"]


def test_default_order_is_end_date_ascending(tasks):
    assert _ids(order_tasks(tasks)) == ["p2", "c3", "p3", "p1", "c2", "c1"]


def test_children_stay_ascending_when_parents_descend(tasks):
    out = _ids(order_tasks(tasks, sort_field="endDate", sort_direction="desc"))
    assert out == ["p1", "c2", "c1", "p3", "p2", "c3"]


def test_progress_sort_uses_effective_progress(tasks):
    # p1's children are both 0 -> effective 0 even though stored 10
    out = _ids(order_tasks(tasks, sort_field="progress", sort_direction="desc"))
    assert out[0] == "p3"
    assert out.index("p1") > out.index("p3")


def test_project_name_sort_groups_and_falls_back(make_task):
    names = {"P1": "beta", "P2": "Alpha"}
    ts = [
        make_task(id="x", project_id="P1"),
        make_task(id="y", project_id="gone"),
        make_task(id="z", project_id="P2"),
        make_task(id="w", project_id="P1"),
    ]
    out = _ids(order_tasks(ts, sort_field="projectName", project_names=names))
    # Alpha < beta < Sin Proyecto (casefolded); ties keep collection order
    assert out == ["z", "x", "w", "y"]


def test_sort_is_deterministic(tasks):
    first = _ids(order_tasks(tasks, sort_field="progress"))
    assert _ids(order_tasks(tasks, sort_field="progress")) == first


def test_unknown_sort_field_keeps_collection_order(tasks):
    out = _ids(order_tasks(tasks, sort_field="title"))
    assert out == ["p1", "c2", "c1", "p2", "c3", "p3"]


def test_orphan_subtask_is_excluded(make_task):
    parent = make_task(id="p")
    orphan = make_task(id="o", parent_id="does-not-exist")
    assert _ids(order_tasks([parent, orphan])) == ["p"]


def test_project_filter(tasks):
    out = _ids(order_tasks(tasks, project_id="P2"))
    assert out == ["p2", "c3"]
