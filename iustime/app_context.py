# iustime application context
# Rev 0.2.0

from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from .utils.logging_setup import get_logger
from .utils.config import load_settings
from .repositories.db import Database
from .repositories.sqlite_collection_repository import SQLiteCollectionRepository
from .repositories.entity_store import EntityStore
from .services.review_service import MonthlyReviewGenerator


@dataclass
class AppContext:
    """Central container for shared app resources."""
    db_path: Path
    db: Database
    store: EntityStore
    reviewer: MonthlyReviewGenerator
    settings: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def create(cls, db_path: Path, settings: Optional[Dict[str, Any]] = None) -> "AppContext":
        """Open + migrate the DB, load every collection, wire services."""
        log = get_logger("AppContext")
        settings = settings if settings is not None else load_settings()
        db = Database(db_path)
        db.run_migrations()
        store = EntityStore(SQLiteCollectionRepository(db)).load()
        reviewer = MonthlyReviewGenerator(model=settings["review"]["model"])
        log.info("AppContext initialized with DB=%s (schema %s)", db_path, db.schema_version())
        return cls(db_path=Path(db_path), db=db, store=store, reviewer=reviewer, settings=settings)

    def close(self) -> None:
        self.db.close()
