"""Shared domain error messages and error types."""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Every way a connectivity check or a sync run can fail."""

    MALFORMED_BASE_URI = "malformed_base_uri"
    UNAUTHORIZED = "unauthorized"
    ENDPOINT_NOT_FOUND = "endpoint_not_found"
    UNREACHABLE = "unreachable"
    UNEXPECTED_STATUS = "unexpected_status"
    RECONCILIATION_INCONSISTENCY = "reconciliation_inconsistency"
    REMOTE_CREATE_REJECTED = "remote_create_rejected"
    REMOTE_UPDATE_REJECTED = "remote_update_rejected"


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class SyncError(DomainError):
    """A sync run cannot continue."""

    kind: ErrorKind = ErrorKind.UNEXPECTED_STATUS


class ReconciliationInconsistency(SyncError):
    """A create succeeded but the entity cannot be fetched back."""

    kind = ErrorKind.RECONCILIATION_INCONSISTENCY

    def __init__(self, entity_type: str, natural_key: str):
        super().__init__(entity_not_found_after_create(entity_type, natural_key))
        self.entity_type = entity_type
        self.natural_key = natural_key


class RemoteCreateRejected(SyncError):
    """The remote service answered a create with a failure status."""

    kind = ErrorKind.REMOTE_CREATE_REJECTED

    def __init__(self, entity_type: str, natural_key: str, result=None):
        messages = result.messages if result is not None else None
        super().__init__(create_rejected(entity_type, natural_key, messages))
        self.entity_type = entity_type
        self.natural_key = natural_key
        self.result = result


class RemoteUpdateRejected(SyncError):
    """The remote service answered an asset update with a failure status."""

    kind = ErrorKind.REMOTE_UPDATE_REJECTED

    def __init__(self, serial: str, result=None):
        messages = result.messages if result is not None else None
        super().__init__(update_rejected(serial, messages))
        self.serial = serial
        self.result = result


class RemoteRequestError(SyncError):
    """A request to the remote service failed at the transport level."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code
        self.kind = status_to_kind(status_code)


def status_to_kind(status_code: Optional[int]) -> ErrorKind:
    """Classify an HTTP status code (``None`` when there was no response)."""
    if status_code is None:
        return ErrorKind.UNREACHABLE
    if status_code in (401, 403):
        return ErrorKind.UNAUTHORIZED
    if status_code == 404:
        return ErrorKind.ENDPOINT_NOT_FOUND
    return ErrorKind.UNEXPECTED_STATUS


def entity_not_found_after_create(entity_type: str, natural_key: str) -> str:
    """Return message for an entity missing right after its creation."""
    return (
        f"Created {entity_type} '{natural_key}' but it could not be fetched back; "
        "refusing to link anything to it"
    )


def create_rejected(entity_type: str, natural_key: str, messages=None) -> str:
    """Return message for a create refused by the remote service."""
    message = f"Remote service rejected creation of {entity_type} '{natural_key}'"
    if messages:
        message += f": {messages}"
    return message


def update_rejected(serial: str, messages=None) -> str:
    """Return message for an asset update refused by the remote service."""
    message = f"Remote service rejected update of asset '{serial}'"
    if messages:
        message += f": {messages}"
    return message


def missing_observation_field(field_name: str) -> str:
    """Return message for a required observation key that is absent."""
    return f"Observation is missing required field '{field_name}'"
