"""Mapper functions to convert between domain entities and Snipe-IT JSON.

Listings return nested references ({"model": {"id": 3, "name": ...}}) while
create/update payloads echo the flat form that was sent ({"model_id": 3}).
Both are accepted when reading.
"""

from typing import Any, Optional

from assetsync.domain import entities as domain
from assetsync.utils.date_parser import format_timestamp, parse_months, parse_timestamp


def _reference(
    data: dict[str, Any], key: str, entity_type: type, id_key: Optional[str] = None
):
    """Read a nested ``{"id", "name"}`` reference, or a flat ``<key>_id``."""
    value = data.get(key)
    if isinstance(value, dict) and value.get("id") is not None:
        return entity_type(id=value["id"], name=value.get("name") or "")
    flat_id = data.get(id_key or f"{key}_id")
    if flat_id is not None:
        return entity_type(id=flat_id, name="")
    return None


def named_entity_from_json(entity_type: type, data: dict[str, Any]):
    """Convert a Manufacturer/Category/Company/StatusLabel/Location row."""
    if entity_type is domain.Model:
        return model_from_json(data)
    extra = {}
    if entity_type is domain.Category and data.get("category_type"):
        extra["category_type"] = str(data["category_type"]).lower()
    if entity_type is domain.StatusLabel and data.get("type"):
        extra["status_type"] = data["type"]
    return entity_type(id=data.get("id"), name=data.get("name") or "", **extra)


def model_from_json(data: dict[str, Any]) -> domain.Model:
    """Convert a model row or payload to a domain Model."""
    return domain.Model(
        id=data.get("id"),
        name=data.get("name") or "",
        manufacturer=_reference(data, "manufacturer", domain.Manufacturer),
        category=_reference(data, "category", domain.Category),
        model_number=data.get("model_number") or None,
    )


def _assignee_from_json(data: dict[str, Any]) -> Optional[domain.Assignee]:
    value = data.get("assigned_to")
    if isinstance(value, dict) and value.get("id") is not None:
        return domain.Assignee(
            id=value["id"],
            type=value.get("type") or "user",
            name=value.get("name") or value.get("username"),
        )
    if value is not None and not isinstance(value, dict):
        return domain.Assignee(id=int(value), type=data.get("assigned_type") or "user")
    return None


def asset_from_json(data: dict[str, Any]) -> domain.Asset:
    """Convert a hardware row or payload to a domain Asset.

    The default location (``rtd_location``) is the one the agent manages; the
    current location of a checked-out asset follows its assignee.
    """
    location = _reference(data, "rtd_location", domain.Location)
    if location is None:
        location = _reference(data, "location", domain.Location)
    return domain.Asset(
        id=data.get("id"),
        asset_tag=data.get("asset_tag") or None,
        serial=data.get("serial") or "",
        name=data.get("name") or None,
        warranty_months=parse_months(data.get("warranty_months")),
        location=location,
        company=_reference(data, "company", domain.Company),
        model=_reference(data, "model", domain.Model),
        status_label=_reference(data, "status_label", domain.StatusLabel, id_key="status_id"),
        last_checkout=parse_timestamp(data.get("last_checkout")),
        assigned_to=_assignee_from_json(data),
    )


def entity_from_json(entity_type: type, data: dict[str, Any]):
    """Convert any supported entity row."""
    if entity_type is domain.Asset:
        return asset_from_json(data)
    return named_entity_from_json(entity_type, data)


def _ref_id(reference) -> Optional[int]:
    return None if reference is None else reference.id


def entity_to_json(entity) -> dict[str, Any]:
    """Convert a domain entity to a create/update request body."""
    if isinstance(entity, domain.Asset):
        return asset_to_json(entity)
    body: dict[str, Any] = {"name": entity.name}
    if isinstance(entity, domain.Category):
        body["category_type"] = entity.category_type
    elif isinstance(entity, domain.StatusLabel):
        body["type"] = entity.status_type
    elif isinstance(entity, domain.Model):
        body["manufacturer_id"] = _ref_id(entity.manufacturer)
        body["category_id"] = _ref_id(entity.category)
        if entity.model_number:
            body["model_number"] = entity.model_number
    return body


def asset_to_json(asset: domain.Asset) -> dict[str, Any]:
    """Convert a domain Asset to a hardware request body."""
    body: dict[str, Any] = {
        "asset_tag": asset.asset_tag,
        "serial": asset.serial,
        "name": asset.name,
        "warranty_months": asset.warranty_months,
        "model_id": _ref_id(asset.model),
        "status_id": _ref_id(asset.status_label),
        "company_id": _ref_id(asset.company),
        "rtd_location_id": _ref_id(asset.location),
    }
    if asset.last_checkout is not None:
        body["last_checkout"] = format_timestamp(asset.last_checkout)
    if asset.assigned_to is not None:
        body["assigned_to"] = asset.assigned_to.id
        body["assigned_type"] = asset.assigned_to.type
    return body


def operation_from_json(action: str, entity_type: type, data: dict[str, Any]) -> domain.OperationResult:
    """Convert a ``{"status", "messages", "payload"}`` write response."""
    payload = data.get("payload")
    if isinstance(payload, dict):
        payload = entity_from_json(entity_type, payload)
    return domain.OperationResult(
        action=action,
        entity_type=entity_type.__name__,
        status=data.get("status") or "error",
        payload=payload,
        messages=data.get("messages"),
    )
