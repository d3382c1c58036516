"""Shared pytest fixtures for assetsync tests."""

import json
import os
import tempfile
from datetime import datetime
from pathlib import Path

import pytest

from assetsync.client.memory import InMemoryInventoryClient
from assetsync.database.factories import create_sqlite_history
from assetsync.domain.entities import (
    Asset,
    Assignee,
    Category,
    Company,
    Location,
    Manufacturer,
    Model,
    Observation,
    StatusLabel,
)


@pytest.fixture
def temp_history():
    """Create a temporary history database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    store = create_sqlite_history(database_path=db_path)
    # Store the path for tests that need it
    store.database_path = db_path
    store.connect()

    yield store

    # Cleanup
    store.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def memory_client():
    """Create an empty in-memory inventory."""
    return InMemoryInventoryClient()


@pytest.fixture
def observation():
    """Observed laptop with its taxonomy, nothing resolved remotely."""
    return Observation(
        asset=Asset(asset_tag="IT-0001", serial="SN-1", name="ws-001", warranty_months=36),
        model=Model(name="Acme X1", model_number="X1-2024"),
        manufacturer=Manufacturer(name="Acme"),
        category=Category(name="Laptop"),
        company=Company(name="Example Corp"),
        status_label=StatusLabel(name="Ready to Deploy"),
        location=Location(name="HQ"),
    )


@pytest.fixture
def seeded_client(memory_client):
    """Inventory that already knows the company, status label and location."""
    memory_client.add(Company(name="Example Corp"))
    memory_client.add(StatusLabel(name="Ready to Deploy"))
    memory_client.add(Location(name="HQ"))
    return memory_client


@pytest.fixture
def synced_client(seeded_client):
    """Inventory holding the observed asset exactly as observed, checked out to a user."""
    manufacturer = seeded_client.add(Manufacturer(name="Acme"))
    category = seeded_client.add(Category(name="Laptop"))
    model = seeded_client.add(
        Model(name="Acme X1", manufacturer=manufacturer, category=category, model_number="X1-2024")
    )
    seeded_client.add(
        Asset(
            asset_tag="IT-0001",
            serial="SN-1",
            name="ws-001",
            warranty_months=36,
            location=seeded_client.all(Location)[0],
            company=seeded_client.all(Company)[0],
            model=model,
            status_label=seeded_client.all(StatusLabel)[0],
            last_checkout=datetime(2024, 3, 1, 9, 30),
            assigned_to=Assignee(id=7, type="user", name="Jane Doe"),
        )
    )
    return seeded_client


@pytest.fixture
def observation_file(tmp_path):
    """Write an observation JSON file and return its path."""
    data = {
        "asset": {"asset_tag": "IT-0001", "serial": "SN-1", "name": "ws-001", "warranty_months": 36},
        "model": {"name": "Acme X1", "model_number": "X1-2024"},
        "manufacturer": "Acme",
        "category": "Laptop",
        "company": "Example Corp",
        "status_label": {"name": "Ready to Deploy", "status_type": "deployable"},
        "location": "HQ",
    }
    path = tmp_path / "observation.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def fixtures_dir():
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"
