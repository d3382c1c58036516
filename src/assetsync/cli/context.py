"""Lazily created collaborators shared by the CLI commands."""

import click

from assetsync.client.factories import create_snipeit_client
from assetsync.database.factories import create_sqlite_history


def get_settings(ctx: click.Context) -> dict:
    """Return the settings collected by the main group."""
    return ctx.find_root().obj["settings"]


def get_client(ctx: click.Context):
    """Create the Snipe-IT client from the group options, once per invocation.

    Raises:
        ValueError: If base URI or API token are not configured
    """
    obj = ctx.find_root().obj
    if obj.get("client") is None:
        settings = obj["settings"]
        obj["client"] = create_snipeit_client(
            base_uri=settings["base_uri"],
            api_token=settings["api_token"],
            timeout=settings["timeout"],
        )
        ctx.call_on_close(obj["client"].close)
    return obj["client"]


def get_history(ctx: click.Context):
    """Open the history store from the group options, once per invocation."""
    obj = ctx.find_root().obj
    if obj.get("history") is None:
        store = create_sqlite_history(database_path=obj["settings"]["history_path"])
        store.connect()
        obj["history"] = store
        ctx.call_on_close(store.disconnect)
    return obj["history"]
