"""Loading of locally observed asset data."""

import json
from pathlib import Path
from typing import Any

from assetsync.domain.entities import (
    Asset,
    Category,
    Company,
    Location,
    Manufacturer,
    Model,
    Observation,
    StatusLabel,
)
from assetsync.domain.errors import ValidationError, missing_observation_field
from assetsync.utils.date_parser import parse_months

TAXONOMY_FIELDS = {
    "manufacturer": Manufacturer,
    "category": Category,
    "company": Company,
    "status_label": StatusLabel,
    "location": Location,
}

# Create-time attributes accepted per taxonomy type
TAXONOMY_EXTRAS = {
    Category: ("category_type",),
    StatusLabel: ("status_type",),
}


def _require(data: dict[str, Any], key: str) -> Any:
    value = data.get(key)
    if value is None or value == "":
        raise ValidationError(missing_observation_field(key))
    return value


def _taxonomy_from_dict(entity_type: type, key: str, value: Any):
    if isinstance(value, str):
        if not value.strip():
            raise ValidationError(missing_observation_field(key))
        return entity_type(name=value.strip())
    if not isinstance(value, dict):
        raise ValidationError(f"Observation field '{key}' must be a name or an object")
    name = _require(value, "name")
    extras = {
        attr: value[attr] for attr in TAXONOMY_EXTRAS.get(entity_type, ()) if value.get(attr)
    }
    return entity_type(name=str(name).strip(), **extras)


def observation_from_dict(data: dict[str, Any]) -> Observation:
    """Build an Observation from its JSON form.

    Args:
        data: Dict with "asset", "model" and the taxonomy names

    Returns:
        Observation with no remote IDs set

    Raises:
        ValidationError: If a required field is missing or malformed
    """
    if not isinstance(data, dict):
        raise ValidationError("Observation must be a JSON object")

    asset_data = _require(data, "asset")
    if not isinstance(asset_data, dict):
        raise ValidationError("Observation field 'asset' must be an object")
    try:
        warranty_months = parse_months(asset_data.get("warranty_months"))
    except ValueError as e:
        raise ValidationError(str(e))

    model_data = _require(data, "model")
    if isinstance(model_data, str):
        model_data = {"name": model_data}

    taxonomy = {
        key: _taxonomy_from_dict(entity_type, key, _require(data, key))
        for key, entity_type in TAXONOMY_FIELDS.items()
    }

    return Observation(
        asset=Asset(
            asset_tag=asset_data.get("asset_tag") or None,
            serial=str(_require(asset_data, "serial")).strip(),
            name=asset_data.get("name") or None,
            warranty_months=warranty_months,
        ),
        model=Model(
            name=str(_require(model_data, "name")).strip(),
            model_number=model_data.get("model_number") or None,
        ),
        **taxonomy,
    )


def load_observation(path: str | Path) -> Observation:
    """Load an Observation from a JSON file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValidationError: If the file is not a valid observation
    """
    observation_path = Path(path)
    if not observation_path.exists():
        raise FileNotFoundError(f"Observation file not found: {path}")

    with open(observation_path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValidationError(f"Observation file is not valid JSON: {e}")
    return observation_from_dict(data)
