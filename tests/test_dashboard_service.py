# tests/test_dashboard_service.py
from __future__ import annotations

from datetime import date

from iustime.models.entities import Project
from iustime.services.dashboard_service import (
    monthly_evolution,
    priority_counts,
    project_stats,
    responsible_stats,
    status_distribution,
    summarize,
)


def test_project_stats_sorted_by_completion(make_task):
    projects = [Project(id="P1", line_id="L1", name="A"), Project(id="P2", line_id="L1", name="B")]
    tasks = [
        make_task(project_id="P1", status="Completed"),
        make_task(project_id="P1"),
        make_task(project_id="P2", status="Completed"),
    ]
    stats = project_stats(projects, tasks)
    assert [(s.name, s.completed, s.total, s.completion) for s in stats] == [("B", 1, 1, 100), ("A", 1, 2, 50)]


def test_project_without_tasks_has_zero_completion():
    assert project_stats([Project(id="P1", line_id="L1", name="A")], [])[0].completion == 0


def test_responsible_stats(make_task):
    tasks = [
        make_task(assignee="Ana", project_id="P1", status="Completed"),
        make_task(assignee="Ana", project_id="P2"),
        make_task(assignee="Luis", project_id="P1", status="Completed"),
        make_task(assignee="Luis", project_id="P1", status="Completed"),
        make_task(assignee=""),
    ]
    stats = responsible_stats(tasks)
    assert [s.name for s in stats] == ["Luis", "Ana"]
    ana = stats[1]
    assert (ana.projects_count, ana.total, ana.completed, ana.completion) == (2, 2, 1, 50)


def test_monthly_evolution_last_six_months(make_task):
    tasks = [
        make_task(status="Completed", end_date="2024-06-03"),
        make_task(status="Completed", end_date="2024-06-20"),
        make_task(status="Completed", end_date="2024-01-15"),
        make_task(status="Completed", end_date="2023-12-31"),   # outside the window
        make_task(status="In Progress", end_date="2024-05-01"),
    ]
    evo = monthly_evolution(tasks, today=date(2024, 6, 15))
    assert evo == [("ENE", 1), ("FEB", 0), ("MAR", 0), ("ABR", 0), ("MAY", 0), ("JUN", 2)]


def test_status_distribution_skips_empty(make_task):
    dist = status_distribution([make_task(status="Delayed"), make_task(status="Delayed")])
    assert [(label, count) for label, count, _color in dist] == [("Retrasado", 2)]


def test_priority_counts(make_task):
    counts = priority_counts([make_task(priority="High"), make_task(priority="High"), make_task(priority="Low")])
    assert counts == {"High": 2, "Medium": 0, "Low": 1}


def test_summary_averages_cached_progress():
    projects = [
        Project(id="P1", line_id="L1", name="A", progress=50),
        Project(id="P2", line_id="L1", name="B", progress=25),
    ]
    s = summarize(projects, [], today=date(2024, 1, 1))
    assert s.total_projects == 2
    assert s.avg_project_progress == 38
    assert summarize([], []).avg_project_progress == 0
