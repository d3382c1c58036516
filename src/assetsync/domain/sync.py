"""Sync of one observed asset and its taxonomy to the inventory service.

Every remote entity has a natural key that identifies it in the physical
world, never its database ID:

- Asset: serial number
- Model, Manufacturer, Category, Company, StatusLabel, Location: full name

Only assets are ever updated (their name, location, etc. change over time).
Taxonomy entries are created when missing and otherwise left alone.
"""

import logging
from dataclasses import replace
from typing import Optional

from assetsync.client.base import InventoryClient
from assetsync.domain.diff import asset_differences
from assetsync.domain.entities import (
    Asset,
    Category,
    Manufacturer,
    Model,
    Observation,
    OperationResult,
    SyncReport,
)
from assetsync.domain.errors import (
    ReconciliationInconsistency,
    RemoteUpdateRejected,
    SyncError,
)
from assetsync.domain.reconcile import (
    create_entity,
    exact_matches,
    find_asset_by_serial,
    reconcile_entity,
)

logger = logging.getLogger(__name__)


def _ref_id(reference) -> Optional[int]:
    return None if reference is None else reference.id


def model_is_current(model: Model, manufacturer: Manufacturer, category: Category) -> bool:
    """Check that a remote model links to the resolved manufacturer and category."""
    return _ref_id(model.manufacturer) == manufacturer.id and _ref_id(model.category) == category.id


def reconcile_model(
    client: InventoryClient,
    candidate: Model,
    manufacturer: Manufacturer,
    category: Category,
    operations: list[OperationResult],
) -> Model:
    """Reconcile a model by name, then check its taxonomy.

    A model found by name but linked to another manufacturer or category is a
    different model. It is left untouched and a new model record is created.
    """
    candidate = replace(candidate, manufacturer=manufacturer, category=category)
    model = reconcile_entity(client, candidate, candidate.search_filter(), operations)
    if model_is_current(model, manufacturer, category):
        return model

    # A previous run may already have created the replacement
    same_name = exact_matches(client.search(Model, candidate.search_filter()), candidate.name)
    for row in same_name:
        if model_is_current(row, manufacturer, category):
            return row

    logger.info(
        "Model '%s' (id %s) links to other taxonomy; creating a new model",
        model.name,
        model.id,
    )
    result = create_entity(client, candidate, operations)
    created_id = _ref_id(result.payload)
    created = client.get(Model, created_id) if created_id is not None else None
    if created is None:
        raise ReconciliationInconsistency(Model.__name__, candidate.name)
    return created


def _sync(client: InventoryClient, observation: Observation, operations: list[OperationResult]) -> Asset:
    manufacturer = reconcile_entity(
        client, observation.manufacturer, observation.manufacturer.search_filter(), operations
    )
    category = reconcile_entity(
        client, observation.category, observation.category.search_filter(), operations
    )
    model = reconcile_model(client, observation.model, manufacturer, category, operations)

    company = reconcile_entity(
        client, observation.company, observation.company.search_filter(), operations
    )
    status_label = reconcile_entity(
        client, observation.status_label, observation.status_label.search_filter(), operations
    )
    location = reconcile_entity(
        client, observation.location, observation.location.search_filter(), operations
    )

    asset = replace(
        observation.asset,
        model=model,
        company=company,
        status_label=status_label,
        location=location,
    )

    existing = find_asset_by_serial(client, asset.serial)
    if existing is None:
        logger.info("Asset %s does not exist remotely, creating", asset.serial)
        result = create_entity(client, asset, operations)
        created_id = _ref_id(result.payload)
        return replace(asset, id=created_id) if created_id is not None else asset

    differences = asset_differences(asset, existing)
    if not differences:
        logger.info("Asset %s is up to date", asset.serial)
        return existing

    logger.info("Asset %s changed (%s), updating", asset.serial, ", ".join(differences))
    asset = replace(
        asset,
        id=existing.id,
        last_checkout=existing.last_checkout,
        assigned_to=existing.assigned_to,
    )
    result = client.update_asset(asset)
    operations.append(result)
    if not result.ok:
        raise RemoteUpdateRejected(asset.serial, result)
    return asset


def sync_asset(client: InventoryClient, observation: Observation) -> SyncReport:
    """Bring the remote inventory in line with one observation.

    Taxonomy is reconciled in dependency order (manufacturer and category,
    then model, then company, status label and location) before the asset
    itself is created or updated.

    Args:
        client: Inventory service client
        observation: Locally observed asset and taxonomy

    Returns:
        SyncReport listing the remote writes in the order they were made. When
        a step fails, ``error`` holds the SyncError and the writes made before
        it are still listed.
    """
    operations: list[OperationResult] = []
    try:
        asset = _sync(client, observation, operations)
    except SyncError as e:
        logger.error("Sync of asset %s aborted: %s", observation.asset.serial, e)
        return SyncReport(operations=operations, asset=None, error=e)
    return SyncReport(operations=operations, asset=asset)
