# tests/test_validation.py
from __future__ import annotations

import pytest

from iustime.models.entities import Risk, User, WorkLine
from iustime.services.validation import (
    ValidationError,
    validate_line,
    validate_risk,
    validate_task,
    validate_user,
)


@pytest.fixture()
def family(make_task):
    parent = make_task(id="p")
    child = make_task(id="c", parent_id="p")
    return parent, child


def test_top_level_needs_project(make_task):
    with pytest.raises(ValidationError, match="Proyecto"):
        validate_task(make_task(project_id=""), [])


def test_subtask_needs_existing_parent(make_task):
    with pytest.raises(ValidationError, match="Tarea Principal"):
        validate_task(make_task(parent_id="missing"), [])


def test_returns_parent_for_subtask(family, make_task):
    parent, child = family
    new = make_task(parent_id="p")
    assert validate_task(new, [parent, child]) is parent
    assert validate_task(parent, [parent, child]) is None


@pytest.mark.parametrize(
    "kw",
    [
        {"title": "  "},
        {"progress": 101},
        {"progress": -1},
        {"start_date": "2024-02-01", "end_date": "2024-01-31"},
    ],
)
def test_rejected_fields(make_task, kw):
    with pytest.raises(ValidationError):
        validate_task(make_task(**kw), [])


def test_unparseable_dates_are_not_rejected(make_task):
    assert validate_task(make_task(start_date="", end_date="mañana"), []) is None


def test_no_grandchildren(family, make_task):
    parent, child = family
    with pytest.raises(ValidationError, match="un nivel"):
        validate_task(make_task(parent_id=child.id), [parent, child])


def test_not_own_parent(make_task):
    t = make_task(id="self")
    with pytest.raises(ValidationError):
        validate_task(make_task(id="self", parent_id="self"), [t])


def test_parent_cannot_become_subtask(family, make_task):
    parent, child = family
    other = make_task(id="o")
    moved = make_task(id="p", parent_id="o")
    with pytest.raises(ValidationError, match="subtareas"):
        validate_task(moved, [parent, child, other])


def test_line_and_risk_need_text():
    with pytest.raises(ValidationError):
        validate_line(WorkLine(id="", name=" "))
    with pytest.raises(ValidationError):
        validate_risk(Risk(id="", line_id="L1", description=""))


def test_user_rules():
    ok = User(id="", name="Ana", email="a@x.com", password="pw", role="USER", assigned_line_id="L1")
    validate_user(ok, [])
    with pytest.raises(ValidationError):
        validate_user(User(id="", name="Ana", email="a@x.com", password="pw", role="ROOT"), [])
    with pytest.raises(ValidationError):
        validate_user(User(id="", name="", email="a@x.com", password="pw"), [])
    # editing yourself keeps your email
    existing = User(id="u1", name="Ana", email="a@x.com", password="pw", role="ADMIN")
    validate_user(existing, [existing])
