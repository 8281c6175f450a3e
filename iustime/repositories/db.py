# Rev 0.2.0

"""SQLite connection & migration runner (Rev 0.2.0)
- WAL mode, autocommit connection (statements commit individually)
- SQL files in iustime/data/migrations are applied in lexical order, each one
  together with its schema_migrations row inside a single transaction
"""
from __future__ import annotations
import sqlite3
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator, List, Optional

from iustime.utils.logging_setup import get_logger
from iustime.utils.paths import DB_PATH, MIGRATIONS_DIR

_MIGRATIONS_TABLE = (
    "CREATE TABLE IF NOT EXISTS schema_migrations ("
    " filename TEXT PRIMARY KEY,"
    " applied_at TEXT NOT NULL)"
)


class Database:
    """Owns the sqlite3 connection; repositories reach it through `.conn`."""

    def __init__(self, path: Path | str = DB_PATH) -> None:
        self._log = get_logger("Database")
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.conn = sqlite3.connect(self.path, isolation_level=None, check_same_thread=False)
        self.conn.row_factory = sqlite3.Row
        self.conn.execute("PRAGMA journal_mode=WAL;")
        self.conn.execute(_MIGRATIONS_TABLE)
        self._log.info("SQLite open %s", self.path)

    def close(self) -> None:
        self.conn.close()

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Connection]:
        self.conn.execute("BEGIN")
        try:
            yield self.conn
        except BaseException:
            self.conn.execute("ROLLBACK")
            raise
        self.conn.execute("COMMIT")

    def applied(self) -> set[str]:
        return {r["filename"] for r in self.conn.execute("SELECT filename FROM schema_migrations")}

    def pending(self, migrations_dir: Path = MIGRATIONS_DIR) -> List[Path]:
        done = self.applied()
        return [p for p in sorted(Path(migrations_dir).glob("*.sql")) if p.name not in done]

    def run_migrations(self, migrations_dir: Path = MIGRATIONS_DIR) -> List[str]:
        names = []
        for p in self.pending(migrations_dir):
            with self.transaction() as con:
                # executescript would COMMIT first; run statement by statement instead
                for stmt in _split_sql(p.read_text(encoding="utf-8")):
                    con.execute(stmt)
                con.execute(
                    "INSERT INTO schema_migrations(filename, applied_at) VALUES(?, ?)",
                    (p.name, datetime.now(timezone.utc).isoformat(timespec="seconds")),
                )
            self._log.info("Applied migration %s", p.name)
            names.append(p.name)
        return names

    def schema_version(self) -> Optional[str]:
        """Latest applied migration filename, or None on a fresh database."""
        row = self.conn.execute("SELECT MAX(filename) FROM schema_migrations").fetchone()
        return row[0] if row else None


def _split_sql(script: str) -> List[str]:
    """Split a migration into complete statements (trigger bodies stay whole)."""
    out: List[str] = []
    buf = ""
    for line in script.splitlines(keepends=True):
        if not buf and line.strip().startswith("--"):
            continue
        buf += line
        if sqlite3.complete_statement(buf):
            if buf.strip():
                out.append(buf.strip())
            buf = ""
    if buf.strip():
        out.append(buf.strip())
    return out
