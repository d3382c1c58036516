"""Tests for conversion between Snipe-IT JSON and domain entities."""

import json
import pytest
from dataclasses import replace
from datetime import datetime

from assetsync.client.mappers import (
    asset_from_json,
    asset_to_json,
    entity_to_json,
    model_from_json,
    named_entity_from_json,
    operation_from_json,
)
from assetsync.domain import entities
from assetsync.domain.diff import is_equivalent


def _load(fixtures_dir, name):
    return json.loads((fixtures_dir / name).read_text(encoding="utf-8"))


class TestReading:
    """Tests for JSON to domain conversion."""

    def test_asset_row(self, fixtures_dir):
        """Test converting a hardware listing row."""
        row = _load(fixtures_dir, "hardware_byserial.json")["rows"][0]

        asset = asset_from_json(row)

        assert isinstance(asset, entities.Asset)
        assert asset.id == 42
        assert asset.asset_tag == "IT-0001"
        assert asset.serial == "SN-1"
        assert asset.name == "ws-001"
        assert asset.warranty_months == 36
        assert asset.model == entities.Model(id=3, name="Acme X1")
        assert asset.status_label.id == 4
        assert asset.company.id == 5
        assert asset.last_checkout == datetime(2024, 3, 1, 9, 30)
        assert asset.assigned_to == entities.Assignee(id=7, type="user", name="Jane Doe")

    def test_asset_prefers_default_location(self, fixtures_dir):
        """Test that the default location is read, not the checkout location."""
        row = _load(fixtures_dir, "hardware_byserial.json")["rows"][0]
        assert asset_from_json(row).location == entities.Location(id=6, name="HQ")

        del row["rtd_location"]
        assert asset_from_json(row).location.id == 9

    def test_asset_blank_name_matches_unnamed_observation(self, fixtures_dir):
        """Test that blank name and tag read as unset, so an unnamed asset stays in sync."""
        row = _load(fixtures_dir, "hardware_byserial.json")["rows"][0]
        row["name"] = ""
        row["asset_tag"] = ""

        remote = asset_from_json(row)

        assert remote.name is None
        assert remote.asset_tag is None
        observed = replace(remote, id=None, last_checkout=None, assigned_to=None)
        assert is_equivalent(observed, remote)
        assert is_equivalent(
            entities.Asset(asset_tag=None, serial="SN-1", name=None, warranty_months=36),
            asset_from_json({"name": "", "asset_tag": "", "serial": "SN-1", "warranty_months": "36 months"}),
        )

    def test_asset_nulls(self):
        """Test a bare asset row."""
        asset = asset_from_json(
            {"id": 1, "serial": "SN-1", "asset_tag": None, "model": None, "company": None,
             "warranty_months": None, "last_checkout": None, "assigned_to": None}
        )
        assert asset.model is None
        assert asset.company is None
        assert asset.warranty_months is None
        assert asset.last_checkout is None
        assert asset.assigned_to is None

    def test_asset_flat_payload(self):
        """Test reading the flat form echoed by create/update."""
        asset = asset_from_json(
            {"id": 42, "serial": "SN-1", "asset_tag": "IT-1", "model_id": 3, "status_id": 4,
             "company_id": 5, "rtd_location_id": 6, "warranty_months": 24}
        )
        assert asset.model.id == 3
        assert asset.status_label.id == 4
        assert asset.company.id == 5
        assert asset.location.id == 6
        assert asset.warranty_months == 24

    def test_model_row(self, fixtures_dir):
        """Test converting a model row with nested references."""
        row = _load(fixtures_dir, "models_search.json")["rows"][0]

        model = model_from_json(row)

        assert model.id == 3
        assert model.manufacturer.id == 1
        assert model.category.id == 2
        assert model.model_number == "X1-2024"

    def test_taxonomy_rows(self):
        """Test converting taxonomy rows."""
        category = named_entity_from_json(
            entities.Category, {"id": 2, "name": "Laptop", "category_type": "Asset"}
        )
        label = named_entity_from_json(
            entities.StatusLabel, {"id": 4, "name": "Pending", "type": "pending"}
        )
        assert category == entities.Category(id=2, name="Laptop", category_type="asset")
        assert label.status_type == "pending"

    def test_create_response(self, fixtures_dir):
        """Test converting a successful create response."""
        result = operation_from_json("create", entities.Model, _load(fixtures_dir, "model_create.json"))

        assert result.ok
        assert result.entity_type == "Model"
        assert result.payload.id == 11
        assert result.payload.manufacturer.id == 1

    def test_rejected_response(self, fixtures_dir):
        """Test converting an error response."""
        result = operation_from_json(
            "create", entities.Manufacturer, _load(fixtures_dir, "create_rejected.json")
        )

        assert not result.ok
        assert result.payload is None
        assert result.messages == {"name": ["The name has already been taken."]}


class TestWriting:
    """Tests for domain to JSON conversion."""

    @pytest.mark.parametrize(
        "entity, expected",
        [
            (entities.Manufacturer(name="Acme"), {"name": "Acme"}),
            (entities.Company(name="Example Corp"), {"name": "Example Corp"}),
            (entities.Category(name="Laptop"), {"name": "Laptop", "category_type": "asset"}),
            (entities.StatusLabel(name="Ready"), {"name": "Ready", "type": "deployable"}),
        ],
    )
    def test_taxonomy_bodies(self, entity, expected):
        """Test create bodies of taxonomy entities."""
        assert entity_to_json(entity) == expected

    def test_model_body(self):
        """Test that models reference their taxonomy by ID."""
        model = entities.Model(
            name="Acme X1",
            manufacturer=entities.Manufacturer(name="Acme", id=1),
            category=entities.Category(name="Laptop", id=2),
            model_number="X1-2024",
        )
        assert entity_to_json(model) == {
            "name": "Acme X1",
            "manufacturer_id": 1,
            "category_id": 2,
            "model_number": "X1-2024",
        }

    def test_asset_body(self):
        """Test asset bodies, including carried-over server-owned values."""
        asset = entities.Asset(
            id=42,
            asset_tag="IT-1",
            serial="SN-1",
            name="ws-001",
            warranty_months=36,
            location=entities.Location(name="HQ", id=6),
            company=None,
            model=entities.Model(name="Acme X1", id=3),
            status_label=entities.StatusLabel(name="Ready", id=4),
            last_checkout=datetime(2024, 3, 1, 9, 30),
            assigned_to=entities.Assignee(id=7, type="user"),
        )

        body = asset_to_json(asset)

        assert body["model_id"] == 3
        assert body["status_id"] == 4
        assert body["company_id"] is None
        assert body["rtd_location_id"] == 6
        assert body["last_checkout"] == "2024-03-01 09:30:00"
        assert body["assigned_to"] == 7
        assert body["assigned_type"] == "user"

    def test_asset_body_without_checkout(self):
        """Test that unset server-owned values are left out."""
        body = asset_to_json(entities.Asset(asset_tag="IT-1", serial="SN-1"))
        assert "last_checkout" not in body
        assert "assigned_to" not in body
