"""In-memory implementation of the InventoryClient interface.

Mimics the remote service closely enough to run a full sync without one:
substring search, per-type unique names (models excepted), unique asset tags
and exact serial lookup. Every call is logged in ``calls`` for inspection.
"""

from dataclasses import replace
from typing import Optional

from assetsync.client.base import E, InventoryClient
from assetsync.domain.entities import (
    Asset,
    AssetCollection,
    Model,
    NamedEntity,
    OperationResult,
    SearchFilter,
)


class InMemoryInventoryClient(InventoryClient):
    """Inventory held in process memory."""

    def __init__(self):
        """Initialize an empty inventory."""
        self._entities: dict[type, dict[int, object]] = {}
        self._next_id = 1
        self.calls: list[tuple[str, str]] = []

    def _table(self, entity_type: type) -> dict[int, object]:
        return self._entities.setdefault(entity_type, {})

    def _store(self, entity):
        """Store an entity under a fresh ID and return the stored copy."""
        stored = replace(entity, id=self._next_id)
        self._table(type(entity))[self._next_id] = stored
        self._next_id += 1
        return stored

    def add(self, entity):
        """Seed an entity without going through validation. Returns the stored copy."""
        return self._store(entity)

    def all(self, entity_type: type[E]) -> list[E]:
        """List every stored entity of a type, in creation order."""
        return list(self._table(entity_type).values())

    def search(self, entity_type: type[E], search_filter: SearchFilter) -> list[E]:
        """Case-insensitive substring search on names."""
        self.calls.append(("search", entity_type.__name__))
        needle = search_filter.search.casefold()
        rows = [e for e in self.all(entity_type) if needle in (e.name or "").casefold()]
        offset = search_filter.offset or 0
        rows = rows[offset:]
        if search_filter.limit is not None:
            rows = rows[: search_filter.limit]
        return rows

    def get(self, entity_type: type[E], entity_id: int) -> Optional[E]:
        """Get entity by ID."""
        self.calls.append(("get", entity_type.__name__))
        return self._table(entity_type).get(entity_id)

    def _rejection(self, entity) -> Optional[str]:
        if isinstance(entity, Asset):
            if not entity.serial:
                return "The serial field is required."
            if entity.asset_tag and any(
                a.asset_tag == entity.asset_tag for a in self.all(Asset)
            ):
                return "The asset tag must be unique."
            return None
        if not entity.name:
            return "The name field is required."
        # Model names may repeat, other taxonomy names may not
        if not isinstance(entity, Model) and any(
            e.name.casefold() == entity.name.casefold() for e in self.all(type(entity))
        ):
            return "The name has already been taken."
        return None

    def create(self, entity: NamedEntity | Asset) -> OperationResult:
        """Create an entity unless it breaks a uniqueness rule."""
        entity_type = type(entity)
        self.calls.append(("create", entity_type.__name__))
        rejection = self._rejection(entity)
        if rejection is not None:
            return OperationResult(
                action="create",
                entity_type=entity_type.__name__,
                status="error",
                messages=rejection,
            )
        stored = self._store(entity)
        return OperationResult(
            action="create",
            entity_type=entity_type.__name__,
            status="success",
            payload=stored,
            messages=f"{entity_type.__name__} created successfully.",
        )

    def update_asset(self, asset: Asset) -> OperationResult:
        """Replace a stored asset."""
        self.calls.append(("update", Asset.__name__))
        table = self._table(Asset)
        if asset.id not in table:
            return OperationResult(
                action="update",
                entity_type=Asset.__name__,
                status="error",
                messages="Asset does not exist.",
            )
        table[asset.id] = asset
        return OperationResult(
            action="update",
            entity_type=Asset.__name__,
            status="success",
            payload=asset,
            messages="Asset updated successfully.",
        )

    def get_assets_by_serial(self, serial: str) -> AssetCollection:
        """Exact serial lookup."""
        self.calls.append(("byserial", Asset.__name__))
        rows = [a for a in self.all(Asset) if a.serial == serial]
        return AssetCollection(total=len(rows), rows=rows)

    def count(self, action: str) -> int:
        """Number of calls of a kind ("create", "update", "search", ...)."""
        return sum(1 for call, _ in self.calls if call == action)
