"""Abstract sync history interface."""

from abc import ABC, abstractmethod
from typing import Optional

from assetsync.domain.entities import SyncOperationRecord, SyncReport, SyncRun


class HistoryStore(ABC):
    """Abstract store of past sync runs."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the store."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the store."""
        pass

    @abstractmethod
    def record_report(self, serial: str, report: SyncReport) -> int:
        """Record the outcome of a sync run. Returns run ID."""
        pass

    @abstractmethod
    def get_run(self, run_id: int) -> Optional[SyncRun]:
        """Get run by ID."""
        pass

    @abstractmethod
    def list_runs(self, serial: Optional[str] = None, limit: Optional[int] = None) -> list[SyncRun]:
        """List runs, most recent first, optionally filtered by asset serial."""
        pass

    @abstractmethod
    def list_operations(self, run_id: int) -> list[SyncOperationRecord]:
        """List the remote writes of a run in the order they were performed."""
        pass
