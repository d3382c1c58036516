"""History store factory functions."""

import os
from pathlib import Path
from typing import Optional

from assetsync.database.sqlalchemy_db import SQLAlchemyHistoryStore


def create_sqlite_history(database_path: Optional[str] = None) -> SQLAlchemyHistoryStore:
    """Create a SQLite history store.

    Args:
        database_path: Path to SQLite database file. If None, checks
            ASSETSYNC_HISTORY_PATH environment variable, then defaults to
            ~/.assetsync/history.db

    Returns:
        SQLAlchemyHistoryStore instance configured for SQLite
    """
    if database_path is None:
        database_path = os.environ.get("ASSETSYNC_HISTORY_PATH")

    if database_path is None:
        db_dir = Path.home() / ".assetsync"
        db_dir.mkdir(exist_ok=True)
        database_path = str(db_dir / "history.db")

    return SQLAlchemyHistoryStore(f"sqlite:///{database_path}")
