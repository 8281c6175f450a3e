# tests/test_references.py
from __future__ import annotations

from iustime.models.entities import Project, WorkLine
from iustime.services.references import (
    DELETED_LINE,
    DELETED_TASK,
    NO_LINE,
    NO_PROJECT,
    UNLINKED_RISK,
    line_name,
    project_name,
    project_names,
    risk_task_label,
)


def test_project_name_placeholder():
    names = project_names([Project(id="P1", line_id="L1", name="Alpha")])
    assert project_name("P1", names) == "Alpha"
    assert project_name("gone", names) == NO_PROJECT
    assert project_name(None, names) == NO_PROJECT


def test_risk_task_label(make_task):
    t = make_task(id="t1", title="Migrar datos")
    assert risk_task_label("t1", [t]) == "Migrar datos"
    assert risk_task_label(None, [t]) == UNLINKED_RISK
    assert risk_task_label("t9", [t]) == DELETED_TASK


def test_line_name():
    lines = [WorkLine(id="L1", name="Consultoría")]
    assert line_name("L1", lines) == "Consultoría"
    assert line_name("L2", lines) == DELETED_LINE
    assert line_name(None, lines) == NO_LINE
