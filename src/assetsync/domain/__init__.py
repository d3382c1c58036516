"""Domain layer for assetsync."""

from assetsync.domain.entities import (
    Asset,
    Category,
    Company,
    Location,
    Manufacturer,
    Model,
    Observation,
    OperationResult,
    StatusLabel,
    SyncReport,
)
from assetsync.domain.errors import DomainError, ErrorKind, SyncError

__all__ = [
    "Asset",
    "Category",
    "Company",
    "DomainError",
    "ErrorKind",
    "Location",
    "Manufacturer",
    "Model",
    "Observation",
    "OperationResult",
    "StatusLabel",
    "SyncError",
    "SyncReport",
]
