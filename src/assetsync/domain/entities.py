"""Domain model entities for assetsync.

These are immutable value snapshots exchanged with the remote inventory
service, independent of its JSON wire format. References between entities are
held as full snapshots; only their ``id`` takes part in comparisons.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, ClassVar, Optional


@dataclass(frozen=True)
class SearchFilter:
    """Natural-key search filter."""

    search: str
    limit: Optional[int] = None
    offset: Optional[int] = None


@dataclass(frozen=True)
class NamedEntity:
    """Remote entity identified by its name.

    Subclasses only differ by ``endpoint`` and by create-time attributes the
    remote service requires.
    """

    endpoint: ClassVar[str] = ""

    name: str
    id: Optional[int] = None

    @property
    def natural_key(self) -> str:
        return self.name

    def search_filter(self) -> SearchFilter:
        """Return the filter used to look this entity up by natural key."""
        return SearchFilter(search=self.name)


@dataclass(frozen=True)
class Manufacturer(NamedEntity):
    """Hardware manufacturer."""

    endpoint: ClassVar[str] = "manufacturers"


@dataclass(frozen=True)
class Category(NamedEntity):
    """Model category (e.g. "Laptop")."""

    endpoint: ClassVar[str] = "categories"

    category_type: str = "asset"


@dataclass(frozen=True)
class Company(NamedEntity):
    """Owning company."""

    endpoint: ClassVar[str] = "companies"


@dataclass(frozen=True)
class StatusLabel(NamedEntity):
    """Asset status label (e.g. "Ready to Deploy")."""

    endpoint: ClassVar[str] = "statuslabels"

    status_type: str = "deployable"


@dataclass(frozen=True)
class Location(NamedEntity):
    """Physical location."""

    endpoint: ClassVar[str] = "locations"


@dataclass(frozen=True)
class Model(NamedEntity):
    """Hardware model, linked to a manufacturer and a category."""

    endpoint: ClassVar[str] = "models"

    manufacturer: Optional[Manufacturer] = None
    category: Optional[Category] = None
    model_number: Optional[str] = None


@dataclass(frozen=True)
class Assignee:
    """Whoever an asset is checked out to (user, location or asset)."""

    id: int
    type: str
    name: Optional[str] = None


@dataclass(frozen=True)
class Asset:
    """Hardware asset identified by its serial number.

    ``id``, ``last_checkout`` and ``assigned_to`` are owned by the remote
    service and never supplied by the local observation.
    """

    endpoint: ClassVar[str] = "hardware"

    asset_tag: Optional[str]
    serial: str
    name: Optional[str] = None
    warranty_months: Optional[int] = None
    location: Optional[Location] = None
    company: Optional[Company] = None
    model: Optional[Model] = None
    status_label: Optional[StatusLabel] = None
    id: Optional[int] = None
    last_checkout: Optional[datetime] = None
    assigned_to: Optional[Assignee] = None

    @property
    def natural_key(self) -> str:
        return self.serial


@dataclass(frozen=True)
class OperationResult:
    """Outcome of one remote write (create or update)."""

    action: str
    entity_type: str
    status: str
    payload: Optional[Any] = None
    messages: Any = None

    @property
    def ok(self) -> bool:
        return self.status == "success"


@dataclass(frozen=True)
class AssetCollection:
    """Response of the by-serial asset lookup."""

    total: int
    rows: list[Asset] = field(default_factory=list)


@dataclass(frozen=True)
class Observation:
    """Locally observed asset together with its taxonomy."""

    asset: Asset
    model: Model
    manufacturer: Manufacturer
    category: Category
    company: Company
    status_label: StatusLabel
    location: Location


@dataclass(frozen=True)
class SyncReport:
    """Ordered remote writes performed by one sync run.

    ``error`` is set when the run stopped early or a write was refused; the
    writes performed up to that point are still listed in ``operations``.
    """

    operations: list[OperationResult]
    asset: Optional[Asset] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None and all(op.ok for op in self.operations)


@dataclass(frozen=True)
class SyncRun:
    """Recorded sync run."""

    id: int
    serial: str
    succeeded: bool
    error_kind: Optional[str]
    error_message: Optional[str]
    asset_id: Optional[int]
    operation_count: int
    recorded_at: datetime


@dataclass(frozen=True)
class SyncOperationRecord:
    """Recorded remote write of a sync run."""

    id: int
    run_id: int
    position: int
    action: str
    entity_type: str
    status: str
    remote_id: Optional[int]
    entity_name: Optional[str]
