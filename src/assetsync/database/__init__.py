"""Sync history storage for assetsync."""

from assetsync.database.base import HistoryStore
from assetsync.database.factories import create_sqlite_history

__all__ = ["HistoryStore", "create_sqlite_history"]
