# tests/test_db.py
from __future__ import annotations

import sqlite3

import pytest

from iustime.repositories.db import Database, _split_sql


def test_migrations_recorded_once(db):
    assert db.schema_version() == "0002_collection_names.sql"
    assert db.pending() == []
    assert db.run_migrations() == []


def test_trigger_body_kept_whole():
    stmts = _split_sql(
        "-- header\nCREATE TABLE t (x);\n"
        "CREATE TRIGGER tr BEFORE INSERT ON t BEGIN\n  SELECT RAISE(ABORT, 'no');\nEND;\n"
    )
    assert len(stmts) == 2
    assert stmts[1].startswith("CREATE TRIGGER") and stmts[1].endswith("END;")


def test_failed_migration_rolls_back(tmp_path):
    mig = tmp_path / "migrations"
    mig.mkdir()
    (mig / "0001_ok.sql").write_text("CREATE TABLE a (x);\n", encoding="utf-8")
    (mig / "0002_bad.sql").write_text("CREATE TABLE b (x);\nINSERT INTO missing VALUES (1);\n", encoding="utf-8")
    database = Database(path=tmp_path / "m.db")
    try:
        with pytest.raises(sqlite3.OperationalError):
            database.run_migrations(mig)
        assert database.applied() == {"0001_ok.sql"}
        tables = {r[0] for r in database.conn.execute("SELECT name FROM sqlite_master WHERE type='table'")}
        assert "a" in tables and "b" not in tables
    finally:
        database.close()


def test_unknown_collection_rejected(db):
    with pytest.raises(sqlite3.IntegrityError):
        db.conn.execute("INSERT INTO collections(name) VALUES ('phases')")
