"""Create-or-fetch reconciliation of remote entities."""

import logging
from typing import Optional, TypeVar

from assetsync.client.base import InventoryClient
from assetsync.domain.entities import Asset, NamedEntity, OperationResult, SearchFilter
from assetsync.domain.errors import ReconciliationInconsistency, RemoteCreateRejected

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=NamedEntity)


def _same_key(left: str, right: str) -> bool:
    return left.strip().casefold() == right.strip().casefold()


def exact_matches(rows: list[E], natural_key: str) -> list[E]:
    """Narrow search rows down to those whose name is the natural key.

    Remote searches match substrings, so "Acme" also finds "Acme Labs".
    Names compare case-insensitively, like the remote uniqueness check.
    """
    return [row for row in rows if row.name is not None and _same_key(row.name, natural_key)]


def find_entity(
    client: InventoryClient, entity_type: type[E], search_filter: SearchFilter
) -> Optional[E]:
    """Find an entity by natural key.

    The first exact match wins when the remote service holds several.
    """
    matches = exact_matches(client.search(entity_type, search_filter), search_filter.search)
    if not matches:
        return None
    if len(matches) > 1:
        logger.warning(
            "%d %s entries named '%s' (ids %s); using id %s",
            len(matches),
            entity_type.__name__,
            search_filter.search,
            ", ".join(str(m.id) for m in matches),
            matches[0].id,
        )
    return matches[0]


def create_entity(
    client: InventoryClient, candidate, operations: list[OperationResult]
) -> OperationResult:
    """Submit a create and record it.

    Raises:
        RemoteCreateRejected: If the remote service reports a failure status
    """
    result = client.create(candidate)
    operations.append(result)
    if not result.ok:
        raise RemoteCreateRejected(type(candidate).__name__, candidate.natural_key, result)
    logger.info("Created %s '%s'", type(candidate).__name__, candidate.natural_key)
    return result


def reconcile_entity(
    client: InventoryClient,
    candidate: E,
    search_filter: SearchFilter,
    operations: list[OperationResult],
) -> E:
    """Return the remote entity matching ``search_filter``, creating it if absent.

    An existing entity is returned as is and never updated, so reconciling
    unchanged input a second time performs no write. After a create the entity
    is searched again and the fetched copy is returned.

    Args:
        client: Inventory service client
        candidate: Entity to create when none matches
        search_filter: Natural-key filter
        operations: Remote writes performed so far; creates are appended

    Returns:
        The remote entity, with its remote ID

    Raises:
        RemoteCreateRejected: If the create is refused
        ReconciliationInconsistency: If the created entity cannot be found again
    """
    entity_type = type(candidate)
    existing = find_entity(client, entity_type, search_filter)
    if existing is not None:
        logger.debug("%s '%s' exists (id %s)", entity_type.__name__, existing.name, existing.id)
        return existing

    create_entity(client, candidate, operations)

    # The create payload is not trusted for the ID; the re-fetch is authoritative
    created = find_entity(client, entity_type, search_filter)
    if created is None:
        raise ReconciliationInconsistency(entity_type.__name__, search_filter.search)
    return created


def find_asset_by_serial(client: InventoryClient, serial: str) -> Optional[Asset]:
    """Find an asset by its exact serial number."""
    collection = client.get_assets_by_serial(serial)
    if collection.total == 0 or not collection.rows:
        return None
    return collection.rows[0]
