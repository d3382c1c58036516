"""Inventory service clients for assetsync."""

from assetsync.client.base import InventoryClient
from assetsync.client.factories import create_snipeit_client
from assetsync.client.memory import InMemoryInventoryClient

__all__ = ["InventoryClient", "InMemoryInventoryClient", "create_snipeit_client"]
