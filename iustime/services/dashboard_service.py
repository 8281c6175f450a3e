# Rev 0.2.0
"""Dashboard aggregates for one line (or any task/project subset)."""
from __future__ import annotations
from collections import Counter
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional, Sequence

from iustime.models.entities import Project, Task
from iustime.services.progress import rollup_mean
from iustime.services.timeline import add_months, parse_date

# chart colours for the status distribution
_STATUS_SLICES = (
    ("Completed", "Completado", "#10b981"),
    ("In Progress", "En Progreso", "#3b82f6"),
    ("Delayed", "Retrasado", "#f43f5e"),
    ("Ready to Start", "Por Iniciar", "#94a3b8"),
)
_MONTH_LABELS = ("ENE", "FEB", "MAR", "ABR", "MAY", "JUN", "JUL", "AGO", "SEPT", "OCT", "NOV", "DIC")


@dataclass
class ProjectStat:
    id: str
    name: str
    status: str
    total: int
    completed: int
    completion: int


@dataclass
class ResponsibleStat:
    name: str
    projects_count: int
    total: int
    completed: int
    completion: int


@dataclass
class DashboardSummary:
    total_projects: int
    avg_project_progress: int
    project_stats: List[ProjectStat] = field(default_factory=list)
    responsible_stats: List[ResponsibleStat] = field(default_factory=list)
    monthly_evolution: List[tuple[str, int]] = field(default_factory=list)
    status_distribution: List[tuple[str, int, str]] = field(default_factory=list)
    priority_counts: Dict[str, int] = field(default_factory=dict)


def _ratio(completed: int, total: int) -> int:
    return rollup_mean([completed * 100 / total]) if total else 0


def project_stats(projects: Sequence[Project], tasks: Sequence[Task]) -> List[ProjectStat]:
    out = []
    for p in projects:
        mine = [t for t in tasks if t.project_id == p.id]
        done = sum(1 for t in mine if t.status == "Completed")
        out.append(ProjectStat(p.id, p.name, p.status, len(mine), done, _ratio(done, len(mine))))
    return sorted(out, key=lambda s: s.completion, reverse=True)


def responsible_stats(tasks: Sequence[Task]) -> List[ResponsibleStat]:
    assignees = list(dict.fromkeys(t.assignee for t in tasks if t.assignee))
    out = []
    for name in assignees:
        mine = [t for t in tasks if t.assignee == name]
        done = sum(1 for t in mine if t.status == "Completed")
        out.append(ResponsibleStat(
            name=name,
            projects_count=len({t.project_id for t in mine}),
            total=len(mine),
            completed=done,
            completion=_ratio(done, len(mine)),
        ))
    return sorted(out, key=lambda s: s.completed, reverse=True)


def monthly_evolution(tasks: Sequence[Task], today: Optional[date] = None, months: int = 6) -> List[tuple[str, int]]:
    """Completed tasks per month (by end date) over the last `months` months, oldest first."""
    today = today or date.today()
    current = today.replace(day=1)
    keys = [add_months(current, -i) for i in range(months - 1, -1, -1)]
    counts = Counter()
    for t in tasks:
        if t.status != "Completed":
            continue
        d = parse_date(t.end_date)
        if d is not None:
            counts[d.replace(day=1)] += 1
    return [(_MONTH_LABELS[k.month - 1], counts.get(k, 0)) for k in keys]


def status_distribution(tasks: Sequence[Task]) -> List[tuple[str, int, str]]:
    counts = Counter(t.status for t in tasks)
    return [(label, counts[status], color) for status, label, color in _STATUS_SLICES if counts[status] > 0]


def priority_counts(tasks: Sequence[Task]) -> Dict[str, int]:
    counts = Counter(t.priority for t in tasks)
    return {p: counts.get(p, 0) for p in ("High", "Medium", "Low")}


def summarize(projects: Sequence[Project], tasks: Sequence[Task], today: Optional[date] = None) -> DashboardSummary:
    return DashboardSummary(
        total_projects=len(projects),
        avg_project_progress=rollup_mean(p.progress for p in projects),
        project_stats=project_stats(projects, tasks),
        responsible_stats=responsible_stats(tasks),
        monthly_evolution=monthly_evolution(tasks, today=today),
        status_distribution=status_distribution(tasks),
        priority_counts=priority_counts(tasks),
    )
