"""Mapper functions to convert between history records and SQLAlchemy models."""

from typing import Optional

from assetsync.domain import entities as domain
from assetsync.database.models import SyncRun as ORMSyncRun, SyncOperation as ORMSyncOperation


def sync_run_to_domain(orm_run: ORMSyncRun) -> domain.SyncRun:
    """Convert SQLAlchemy SyncRun model to domain SyncRun record."""
    return domain.SyncRun(
        id=orm_run.id,
        serial=orm_run.serial,
        succeeded=orm_run.succeeded,
        error_kind=orm_run.error_kind,
        error_message=orm_run.error_message,
        asset_id=orm_run.asset_id,
        operation_count=len(orm_run.operations),
        recorded_at=orm_run.recorded_at,
    )


def sync_operation_to_domain(orm_operation: ORMSyncOperation) -> domain.SyncOperationRecord:
    """Convert SQLAlchemy SyncOperation model to domain SyncOperationRecord."""
    return domain.SyncOperationRecord(
        id=orm_operation.id,
        run_id=orm_operation.run_id,
        position=orm_operation.position,
        action=orm_operation.action,
        entity_type=orm_operation.entity_type,
        status=orm_operation.status,
        remote_id=orm_operation.remote_id,
        entity_name=orm_operation.entity_name,
    )


def _payload_name(payload) -> Optional[str]:
    if payload is None:
        return None
    if isinstance(payload, domain.Asset):
        return payload.serial
    return getattr(payload, "name", None)


def operation_to_orm(position: int, operation: domain.OperationResult) -> ORMSyncOperation:
    """Convert a remote write outcome to a SyncOperation row."""
    payload = operation.payload
    return ORMSyncOperation(
        position=position,
        action=operation.action,
        entity_type=operation.entity_type,
        status=operation.status,
        remote_id=getattr(payload, "id", None),
        entity_name=_payload_name(payload),
    )
