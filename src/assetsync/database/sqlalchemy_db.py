"""SQLAlchemy implementation of the sync history store."""

from typing import Optional
from sqlalchemy.orm import Session

from assetsync.database.base import HistoryStore
from assetsync.database.models import SyncRun, SyncOperation, create_session_factory
from assetsync.database.mappers import (
    operation_to_orm,
    sync_operation_to_domain,
    sync_run_to_domain,
)
from assetsync.domain.entities import (
    SyncOperationRecord as DomainSyncOperationRecord,
    SyncReport,
    SyncRun as DomainSyncRun,
)


class SQLAlchemyHistoryStore(HistoryStore):
    """SQLAlchemy-based implementation of HistoryStore interface."""

    def __init__(self, database_url: str):
        """Initialize SQLAlchemy history store.

        Args:
            database_url: SQLAlchemy database URL (e.g., 'sqlite:///path/to.db')
        """
        self.database_url = database_url
        self.session_factory = create_session_factory(database_url)
        self._session: Optional[Session] = None

    def _get_session(self) -> Session:
        """Get current session, creating one if needed."""
        if self._session is None:
            self._session = self.session_factory()
        return self._session

    def connect(self) -> None:
        """Connect to the store."""
        # Connection is lazy, so this is a no-op
        pass

    def disconnect(self) -> None:
        """Disconnect from the store."""
        if self._session is not None:
            self._session.close()
            self._session = None

    def record_report(self, serial: str, report: SyncReport) -> int:
        """Record the outcome of a sync run. Returns run ID."""
        session = self._get_session()
        error = report.error
        kind = getattr(error, "kind", None)
        run = SyncRun(
            serial=serial,
            succeeded=report.ok,
            error_kind=kind.value if kind is not None else None,
            error_message=str(error) if error is not None else None,
            asset_id=report.asset.id if report.asset is not None else None,
        )
        run.operations = [
            operation_to_orm(position, operation)
            for position, operation in enumerate(report.operations, start=1)
        ]
        session.add(run)
        session.commit()
        return run.id

    def get_run(self, run_id: int) -> Optional[DomainSyncRun]:
        """Get run by ID."""
        session = self._get_session()
        run = session.query(SyncRun).filter(SyncRun.id == run_id).first()
        if run is None:
            return None
        return sync_run_to_domain(run)

    def list_runs(
        self, serial: Optional[str] = None, limit: Optional[int] = None
    ) -> list[DomainSyncRun]:
        """List runs, most recent first, optionally filtered by asset serial."""
        session = self._get_session()
        query = session.query(SyncRun)
        if serial is not None:
            query = query.filter(SyncRun.serial == serial)
        query = query.order_by(SyncRun.id.desc())
        if limit is not None:
            query = query.limit(limit)
        return [sync_run_to_domain(run) for run in query.all()]

    def list_operations(self, run_id: int) -> list[DomainSyncOperationRecord]:
        """List the remote writes of a run in the order they were performed."""
        session = self._get_session()
        operations = (
            session.query(SyncOperation)
            .filter(SyncOperation.run_id == run_id)
            .order_by(SyncOperation.position)
            .all()
        )
        return [sync_operation_to_domain(op) for op in operations]
