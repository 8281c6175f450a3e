# tests/test_entity_store.py
from __future__ import annotations

import dataclasses

import pytest

from iustime.models.entities import Project, Risk, Task, User, WorkLine, MonthlyReview
from iustime.repositories.entity_store import EntityStore
from iustime.repositories.sqlite_collection_repository import SEED_USERS
from iustime.services.validation import ValidationError


def _task(line, project, **kw) -> Task:
    kw.setdefault("title", "Tarea")
    return Task(id="", line_id=line.id, project_id=project.id, **kw)


def test_fresh_store_is_empty_except_seed_users(store: EntityStore):
    assert store.lines.list() == []
    assert store.tasks.list() == []
    assert [u.email for u in store.users.list()] == [u["email"] for u in SEED_USERS]
    assert all(u.role == "ADMIN" for u in store.users.list())


def test_data_survives_reload(store, repo, line, project):
    store.add_task(_task(line, project, title="Persistida", progress=30))
    reloaded = EntityStore(repo).load()
    assert [t.title for t in reloaded.tasks.list()] == ["Persistida"]
    assert reloaded.projects.get(project.id).progress == 30
    assert reloaded.lines.get(line.id).created_at


def test_malformed_document_loads_empty(db, repo):
    db.conn.execute(
        "INSERT INTO collections(name, payload, updated_at_utc) VALUES('tasks', '{not json', '2024-01-01')"
    )
    assert repo.load_collection("tasks") == []
    db.conn.execute("UPDATE collections SET payload = '{\"a\": 1}' WHERE name = 'tasks'")
    assert repo.load_collection("tasks") == []


def test_unknown_collection_is_rejected(repo):
    with pytest.raises(KeyError):
        repo.load_collection("phases")


def test_malformed_record_is_skipped(repo):
    repo.save_collection("lines", [{"id": "ok", "name": "Buena"}, {"name": "sin id"}, "basura"])
    store = EntityStore(repo).load()
    assert [l.id for l in store.lines.list()] == ["ok"]


def test_task_mutations_refresh_project_progress(store, line, project):
    a = store.add_task(_task(line, project, title="A", progress=40))
    b = store.add_task(_task(line, project, title="B", progress=0))
    assert store.projects.get(project.id).progress == 20

    store.add_task(_task(line, project, title="B1", parent_id=b.id, progress=100))
    b2 = store.add_task(_task(line, project, title="B2", parent_id=b.id, progress=50))
    assert store.projects.get(project.id).progress == 58

    store.update_task(dataclasses.replace(a, progress=100))
    assert store.projects.get(project.id).progress == 88

    store.delete_task(b2.id)
    assert store.projects.get(project.id).progress == 100


def test_update_project_keeps_derived_progress(store, line, project):
    store.add_task(_task(line, project, progress=60))
    p = store.projects.get(project.id)
    store.update_project(dataclasses.replace(p, name="Alpha 2", progress=5))
    saved = store.projects.get(project.id)
    assert saved.name == "Alpha 2"
    assert saved.progress == 60


def test_grandchild_is_rejected(store, line, project):
    parent = store.add_task(_task(line, project, title="P"))
    child = store.add_task(_task(line, project, title="C", parent_id=parent.id))
    before = store.tasks.list()
    with pytest.raises(ValidationError):
        store.add_task(_task(line, project, title="G", parent_id=child.id))
    assert store.tasks.list() == before


def test_parent_with_children_cannot_become_subtask(store, line, project):
    p1 = store.add_task(_task(line, project, title="P1"))
    p2 = store.add_task(_task(line, project, title="P2"))
    store.add_task(_task(line, project, title="C", parent_id=p1.id))
    with pytest.raises(ValidationError):
        store.update_task(dataclasses.replace(p1, parent_id=p2.id))


def test_subtask_inherits_parent_project(store, line, project):
    other = store.add_project(Project(id="", line_id=line.id, name="Beta"))
    parent = store.add_task(_task(line, project, title="P"))
    child = store.add_task(Task(id="", line_id=line.id, project_id=other.id, title="C", parent_id=parent.id))
    assert child.project_id == project.id


def test_moving_parent_moves_children_and_recomputes_both(store, line, project):
    beta = store.add_project(Project(id="", line_id=line.id, name="Beta"))
    parent = store.add_task(_task(line, project, title="P"))
    store.add_task(_task(line, project, title="C", parent_id=parent.id, progress=80))
    assert store.projects.get(project.id).progress == 80

    store.update_task(dataclasses.replace(store.tasks.get(parent.id), project_id=beta.id))
    assert {t.project_id for t in store.tasks.list()} == {beta.id}
    assert store.projects.get(project.id).progress == 0
    assert store.projects.get(beta.id).progress == 80


def test_top_level_task_becoming_subtask_elsewhere_recomputes_old_project(store, line, project):
    beta = store.add_project(Project(id="", line_id=line.id, name="Beta"))
    a = store.add_task(_task(line, project, title="A", progress=90))
    pb = store.add_task(_task(line, beta, title="PB", progress=20))
    assert store.projects.get(project.id).progress == 90

    store.update_task(dataclasses.replace(a, parent_id=pb.id))
    assert store.tasks.get(a.id).project_id == beta.id
    assert store.projects.get(project.id).progress == 0
    assert store.projects.get(beta.id).progress == 90


def test_reparenting_subtask_across_projects_recomputes_both(store, line, project):
    beta = store.add_project(Project(id="", line_id=line.id, name="Beta"))
    pa = store.add_task(_task(line, project, title="PA"))
    c = store.add_task(_task(line, project, title="C", parent_id=pa.id, progress=80))
    pb = store.add_task(_task(line, beta, title="PB", progress=20))
    assert store.projects.get(project.id).progress == 80

    store.update_task(dataclasses.replace(c, parent_id=pb.id))
    assert store.projects.get(project.id).progress == 0
    assert store.projects.get(beta.id).progress == 80


def test_moving_parent_writes_tasks_once(store, repo, line, project, monkeypatch):
    beta = store.add_project(Project(id="", line_id=line.id, name="Beta"))
    parent = store.add_task(_task(line, project, title="P"))
    store.add_task(_task(line, project, title="C", parent_id=parent.id))
    writes = []
    save = repo.save_collection

    def _counting_save(name, rows):
        writes.append((name, [r["projectId"] for r in rows]))
        save(name, rows)

    monkeypatch.setattr(repo, "save_collection", _counting_save)
    store.update_task(dataclasses.replace(parent, project_id=beta.id))
    task_writes = [w for w in writes if w[0] == "tasks"]
    assert task_writes == [("tasks", [beta.id, beta.id])]


def test_deleting_parent_leaves_orphans(store, line, project):
    parent = store.add_task(_task(line, project, title="P"))
    child = store.add_task(_task(line, project, title="C", parent_id=parent.id))
    store.delete_task(parent.id)
    assert store.tasks.get(child.id) is not None


def test_deletes_do_not_cascade(store, line, project):
    t = store.add_task(_task(line, project))
    store.add_risk(Risk(id="", line_id=line.id, description="Retraso", task_id=t.id))
    store.delete_project(project.id)
    store.delete_line(line.id)
    assert len(store.tasks.list()) == 1
    assert len(store.risks.list()) == 1


def test_project_requires_line(store):
    with pytest.raises(ValidationError):
        store.add_project(Project(id="", line_id="", name="Huérfano"))


def test_user_normalization_and_unique_email(store, line):
    u = store.add_user(User(id="", name="Ana", email=" ana@x.com ", password="pw", role="ADMIN",
                            assigned_line_id=line.id))
    assert u.email == "ana@x.com"
    assert u.assigned_line_id is None
    with pytest.raises(ValidationError):
        store.add_user(User(id="", name="Otra", email="ANA@x.com", password="pw", role="ADMIN"))
    with pytest.raises(ValidationError):
        store.add_user(User(id="", name="Sin línea", email="s@x.com", password="pw", role="USER"))


def test_review_is_unique_per_line_and_month(store, line):
    store.save_review(MonthlyReview(id="", line_id=line.id, month="2024-03", summary="v1"))
    store.save_review(MonthlyReview(id="", line_id=line.id, month="2024-03", summary="v2"))
    assert len(store.reviews.list()) == 1
    assert store.review_for(line.id, "2024-03").summary == "v2"
    assert store.review_for(line.id, "2024-04") is None


def test_line_scoped_reads(store, line, project):
    other = store.add_line(WorkLine(id="", name="Otra"))
    store.add_task(_task(line, project))
    assert len(store.tasks_for_line(line.id)) == 1
    assert store.tasks_for_line(other.id) == []
    assert store.projects_for_line(other.id) == []
