# Rev 0.2.0

"""Pytest fixtures for iustime (Rev 0.2.0)"""
from __future__ import annotations
import itertools
from pathlib import Path

import pytest

from iustime.models.entities import Project, Task, WorkLine
from iustime.repositories.db import Database
from iustime.repositories.entity_store import EntityStore
from iustime.repositories.sqlite_collection_repository import SQLiteCollectionRepository


@pytest.fixture()
def db(tmp_path: Path):
    database = Database(path=tmp_path / "test.db")
    try:
        database.run_migrations()
        yield database
    finally:
        database.close()


@pytest.fixture()
def repo(db: Database) -> SQLiteCollectionRepository:
    return SQLiteCollectionRepository(db)


@pytest.fixture()
def store(repo: SQLiteCollectionRepository) -> EntityStore:
    return EntityStore(repo).load()


@pytest.fixture()
def line(store: EntityStore) -> WorkLine:
    return store.add_line(WorkLine(id="", name="Consultoría"))


@pytest.fixture()
def project(store: EntityStore, line: WorkLine) -> Project:
    return store.add_project(Project(id="", line_id=line.id, name="Alpha"))


@pytest.fixture()
def make_task():
    """In-memory Task factory for pure service tests."""
    counter = itertools.count(1)

    def _make(**kw) -> Task:
        n = next(counter)
        kw.setdefault("id", f"t{n}")
        kw.setdefault("line_id", "L1")
        kw.setdefault("project_id", "P1")
        kw.setdefault("title", f"Task {n}")
        return Task(**kw)

    return _make
