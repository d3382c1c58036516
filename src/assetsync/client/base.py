"""Abstract inventory service client."""

from abc import ABC, abstractmethod
from typing import Optional, TypeVar

from assetsync.domain.entities import (
    Asset,
    AssetCollection,
    NamedEntity,
    OperationResult,
    SearchFilter,
)

E = TypeVar("E", bound=NamedEntity)


class InventoryClient(ABC):
    """Abstract interface to the remote inventory service."""

    @abstractmethod
    def search(self, entity_type: type[E], search_filter: SearchFilter) -> list[E]:
        """Search entities of a type. Exactness of the match is up to the service."""
        pass

    @abstractmethod
    def get(self, entity_type: type[E], entity_id: int) -> Optional[E]:
        """Get entity by remote ID."""
        pass

    @abstractmethod
    def create(self, entity: NamedEntity | Asset) -> OperationResult:
        """Create an entity. The payload carries the remote ID on success."""
        pass

    @abstractmethod
    def update_asset(self, asset: Asset) -> OperationResult:
        """Update an existing asset. ``asset.id`` must be set."""
        pass

    @abstractmethod
    def get_assets_by_serial(self, serial: str) -> AssetCollection:
        """Look assets up by exact serial number."""
        pass

    def close(self) -> None:
        """Release client resources."""
        pass
