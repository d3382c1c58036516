"""Tests for the sync of an observed asset."""

import pytest
from dataclasses import replace
from datetime import datetime
from unittest.mock import MagicMock

from assetsync.client.memory import InMemoryInventoryClient
from assetsync.domain.entities import (
    Asset,
    Assignee,
    Category,
    Company,
    Location,
    Manufacturer,
    Model,
    OperationResult,
    StatusLabel,
)
from assetsync.domain.errors import (
    ErrorKind,
    ReconciliationInconsistency,
    RemoteCreateRejected,
    RemoteRequestError,
    RemoteUpdateRejected,
)
from assetsync.domain.reconcile import find_asset_by_serial
from assetsync.domain.sync import model_is_current, reconcile_model, sync_asset


def _writes(report):
    return [(op.action, op.entity_type) for op in report.operations]


class TestSyncAsset:
    """End-to-end sync against the in-memory inventory."""

    def test_creates_everything_missing(self, seeded_client, observation):
        """Test a first sync: taxonomy and asset are created, references line up."""
        report = sync_asset(seeded_client, observation)

        assert report.ok
        assert _writes(report) == [
            ("create", "Manufacturer"),
            ("create", "Category"),
            ("create", "Model"),
            ("create", "Asset"),
        ]

        asset = find_asset_by_serial(seeded_client, "SN-1")
        manufacturer = seeded_client.all(Manufacturer)[0]
        category = seeded_client.all(Category)[0]
        model = seeded_client.all(Model)[0]
        assert asset.model.id == model.id
        assert model.manufacturer.id == manufacturer.id
        assert model.category.id == category.id
        assert asset.company.id == seeded_client.all(Company)[0].id
        assert asset.status_label.id == seeded_client.all(StatusLabel)[0].id
        assert asset.location.id == seeded_client.all(Location)[0].id
        assert report.asset.id == asset.id

    def test_creates_full_taxonomy_on_empty_inventory(self, memory_client, observation):
        """Test that company, status label and location are created too."""
        report = sync_asset(memory_client, observation)

        assert report.ok
        assert [entity for _, entity in _writes(report)] == [
            "Manufacturer",
            "Category",
            "Model",
            "Company",
            "StatusLabel",
            "Location",
            "Asset",
        ]

    def test_identical_asset_needs_no_write(self, synced_client, observation):
        """Test that an up-to-date asset yields zero writes."""
        report = sync_asset(synced_client, observation)

        assert report.ok
        assert report.operations == []
        assert synced_client.count("create") == 0
        assert synced_client.count("update") == 0
        assert report.asset.id == synced_client.all(Asset)[0].id

    def test_second_sync_is_noop(self, seeded_client, observation):
        """Test that syncing the same observation twice writes only once."""
        sync_asset(seeded_client, observation)
        report = sync_asset(seeded_client, observation)

        assert report.ok
        assert report.operations == []

    def test_changed_name_updates_asset(self, synced_client, observation):
        """Test that a renamed asset is updated and keeps its server-owned fields."""
        existing = synced_client.all(Asset)[0]
        renamed = replace(observation, asset=replace(observation.asset, name="ws-renamed"))

        report = sync_asset(synced_client, renamed)

        assert report.ok
        assert _writes(report) == [("update", "Asset")]
        payload = report.operations[0].payload
        assert payload.name == "ws-renamed"
        assert payload.id == existing.id
        assert payload.last_checkout == datetime(2024, 3, 1, 9, 30)
        assert payload.assigned_to == Assignee(id=7, type="user", name="Jane Doe")

    def test_update_payload_carries_remote_values(self, observation):
        """Test the submitted update payload, not just the stored result."""
        client = InMemoryInventoryClient()
        client.update_asset = MagicMock(
            return_value=OperationResult("update", "Asset", "success")
        )
        manufacturer = client.add(Manufacturer(name="Acme"))
        category = client.add(Category(name="Laptop"))
        model = client.add(Model(name="Acme X1", manufacturer=manufacturer, category=category))
        remote = client.add(
            Asset(
                asset_tag="IT-0001",
                serial="SN-1",
                name="old-name",
                warranty_months=36,
                model=model,
                last_checkout=datetime(2023, 5, 2, 8, 0),
                assigned_to=Assignee(id=3, type="location"),
            )
        )

        report = sync_asset(client, observation)

        assert report.ok
        submitted = client.update_asset.call_args.args[0]
        assert submitted.id == remote.id
        assert submitted.last_checkout == remote.last_checkout
        assert submitted.assigned_to == remote.assigned_to
        assert submitted.name == "ws-001"
        assert submitted.location.name == "HQ"

    def test_rejected_update_fails_the_run(self, synced_client, observation):
        """Test that a refused update is recorded and reported as the run's error."""
        synced_client.update_asset = MagicMock(
            return_value=OperationResult("update", "Asset", "error", messages="Invalid")
        )
        renamed = replace(observation, asset=replace(observation.asset, name="ws-renamed"))

        report = sync_asset(synced_client, renamed)

        assert not report.ok
        assert isinstance(report.error, RemoteUpdateRejected)
        assert report.error.kind is ErrorKind.REMOTE_UPDATE_REJECTED
        assert "Invalid" in str(report.error)
        assert report.asset is None
        assert len(report.operations) == 1
        assert not report.operations[0].ok

    def test_rejected_taxonomy_aborts_before_asset(self, seeded_client, observation):
        """Test that a refused model create stops the run, keeping earlier writes."""
        original_create = seeded_client.create

        def create(entity):
            if isinstance(entity, Model):
                return OperationResult("create", "Model", "error", messages="Nope")
            return original_create(entity)

        seeded_client.create = create

        report = sync_asset(seeded_client, observation)

        assert not report.ok
        assert isinstance(report.error, RemoteCreateRejected)
        assert report.error.kind is ErrorKind.REMOTE_CREATE_REJECTED
        assert _writes(report) == [
            ("create", "Manufacturer"),
            ("create", "Category"),
            ("create", "Model"),
        ]
        assert seeded_client.all(Asset) == []

    def test_rejected_asset_create(self, seeded_client, observation):
        """Test that a duplicate asset tag is reported as a rejected create."""
        seeded_client.add(Asset(asset_tag="IT-0001", serial="OTHER"))

        report = sync_asset(seeded_client, observation)

        assert isinstance(report.error, RemoteCreateRejected)
        assert report.operations[-1].entity_type == "Asset"
        assert not report.operations[-1].ok

    def test_transport_error_is_reported(self, observation):
        """Test that a transport failure ends up in the report."""
        client = MagicMock()
        client.search.side_effect = RemoteRequestError("connection reset")

        report = sync_asset(client, observation)

        assert not report.ok
        assert report.error.kind is ErrorKind.UNREACHABLE
        assert report.operations == []


class TestModelOverride:
    """Tests for models whose taxonomy drifted."""

    def test_stale_model_gets_new_record(self, seeded_client, observation):
        """Test that a same-named model under another manufacturer is not reused."""
        other_manufacturer = seeded_client.add(Manufacturer(name="Globex"))
        category = seeded_client.add(Category(name="Laptop"))
        stale = seeded_client.add(
            Model(name="Acme X1", manufacturer=other_manufacturer, category=category)
        )

        report = sync_asset(seeded_client, observation)

        assert report.ok
        assert _writes(report) == [
            ("create", "Manufacturer"),
            ("create", "Model"),
            ("create", "Asset"),
        ]
        models = seeded_client.all(Model)
        assert len(models) == 2
        assert models[0] == stale
        asset = find_asset_by_serial(seeded_client, "SN-1")
        assert asset.model.id == models[1].id
        assert models[1].manufacturer.name == "Acme"
        assert seeded_client.count("update") == 0

    def test_replacement_is_reused(self, seeded_client, observation):
        """Test that a later run finds the replacement instead of creating again."""
        other_manufacturer = seeded_client.add(Manufacturer(name="Globex"))
        category = seeded_client.add(Category(name="Laptop"))
        seeded_client.add(Model(name="Acme X1", manufacturer=other_manufacturer, category=category))

        sync_asset(seeded_client, observation)
        report = sync_asset(seeded_client, observation)

        assert report.operations == []
        assert len(seeded_client.all(Model)) == 2

    def test_replacement_fetched_by_id(self):
        """Test that the new model is fetched back by the created ID."""
        manufacturer = Manufacturer(name="Acme", id=1)
        category = Category(name="Laptop", id=2)
        stale = Model(name="X", id=3, manufacturer=Manufacturer(name="A", id=9), category=category)
        fresh = Model(name="X", id=4, manufacturer=manufacturer, category=category)
        client = MagicMock()
        client.search.return_value = [stale]
        client.create.return_value = OperationResult("create", "Model", "success", payload=fresh)
        client.get.return_value = fresh
        operations = []

        resolved = reconcile_model(client, Model(name="X"), manufacturer, category, operations)

        assert resolved == fresh
        client.get.assert_called_once_with(Model, 4)
        created = client.create.call_args.args[0]
        assert created.manufacturer == manufacturer
        assert created.id is None
        assert len(operations) == 1

    def test_replacement_missing_after_create(self):
        """Test that an unfetchable replacement is fatal."""
        manufacturer = Manufacturer(name="Acme", id=1)
        category = Category(name="Laptop", id=2)
        stale = Model(name="X", id=3, manufacturer=manufacturer, category=Category(name="B", id=8))
        client = MagicMock()
        client.search.return_value = [stale]
        client.create.return_value = OperationResult(
            "create", "Model", "success", payload=Model(name="X", id=4)
        )
        client.get.return_value = None

        with pytest.raises(ReconciliationInconsistency):
            reconcile_model(client, Model(name="X"), manufacturer, category, [])

    def test_model_is_current(self):
        """Test the taxonomy check."""
        manufacturer = Manufacturer(name="Acme", id=1)
        category = Category(name="Laptop", id=2)
        model = Model(name="X", id=3, manufacturer=manufacturer, category=category)
        assert model_is_current(model, manufacturer, category)
        assert not model_is_current(replace(model, category=None), manufacturer, category)
        assert not model_is_current(
            model, manufacturer, Category(name="Laptop", id=5)
        )
