# Rev 0.2.0
from __future__ import annotations

import json
import sqlite3
from typing import Any, Dict, List, Optional, Union

from iustime.utils.logging_setup import get_logger

COLLECTIONS = ("lines", "projects", "tasks", "risks", "users", "reviews")

# Loaded when the users document is missing or unreadable
SEED_USERS: List[Dict[str, Any]] = [
    {"id": "admin", "name": "Admin", "email": "admin@iustime.com", "password": "admin", "role": "ADMIN"},
    {"id": "pmo", "name": "PMO", "email": "pmo@iustime.com", "password": "pmo", "role": "ADMIN"},
]


class SQLiteCollectionRepository:
    """
    Whole-collection JSON documents keyed by name.
    Each save replaces the entire array in a single statement, so readers
    never observe a partially written collection.
    """

    def __init__(self, db_or_conn: Union[sqlite3.Connection, Any]):
        self._db_or_conn = db_or_conn
        self._log = get_logger("CollectionRepository")

    # -------------------------
    # Connection handling
    # -------------------------
    def _conn(self) -> sqlite3.Connection:
        c = None
        if isinstance(self._db_or_conn, sqlite3.Connection):
            c = self._db_or_conn
        elif hasattr(self._db_or_conn, "conn") and isinstance(self._db_or_conn.conn, sqlite3.Connection):
            c = self._db_or_conn.conn
        if c is None:
            raise RuntimeError(
                "SQLiteCollectionRepository: could not obtain sqlite3.Connection "
                "(expected .conn on wrapper, or a raw Connection)."
            )
        return c

    @staticmethod
    def _check_name(name: str) -> None:
        if name not in COLLECTIONS:
            raise KeyError(f"unknown collection: {name}")

    # -------------------------
    # Read / write
    # -------------------------
    def load_collection(self, name: str) -> List[Dict[str, Any]]:
        """
        Return the stored array for `name`.
        Missing or malformed documents load as [] (users: the seed list).
        """
        self._check_name(name)
        fallback = [dict(u) for u in SEED_USERS] if name == "users" else []
        row = self._conn().execute("SELECT payload FROM collections WHERE name = ?", (name,)).fetchone()
        if row is None:
            return fallback
        try:
            data = json.loads(row[0])
        except (TypeError, ValueError) as e:
            self._log.warning("Malformed %s document, loading default: %s", name, e)
            return fallback
        if not isinstance(data, list):
            self._log.warning("%s document is not an array, loading default", name)
            return fallback
        return [r for r in data if isinstance(r, dict)]

    def save_collection(self, name: str, rows: List[Dict[str, Any]]) -> None:
        self._check_name(name)
        payload = json.dumps(rows, ensure_ascii=False)
        con = self._conn()
        con.execute(
            """
            INSERT INTO collections(name, payload, updated_at_utc)
            VALUES (?, ?, datetime('now'))
            ON CONFLICT(name) DO UPDATE SET
                payload = excluded.payload,
                updated_at_utc = excluded.updated_at_utc
            """,
            (name, payload),
        )
        if con.in_transaction:
            con.commit()
        self._log.debug("Saved %s (%d rows)", name, len(rows))

    def updated_at(self, name: str) -> Optional[str]:
        self._check_name(name)
        row = self._conn().execute("SELECT updated_at_utc FROM collections WHERE name = ?", (name,)).fetchone()
        return row[0] if row else None
