"""Main CLI entry point."""

import logging

import click

from assetsync.client.factories import resolve_timeout

# Import and register all commands at module level
from assetsync.cli.commands import check, history, sync


@click.group()
@click.option(
    "--base-uri",
    help="Snipe-IT API base URI, e.g. https://snipe.example.com/api/v1",
    envvar="ASSETSYNC_BASE_URI",
)
@click.option(
    "--api-token",
    help="Snipe-IT API token",
    envvar="ASSETSYNC_API_TOKEN",
)
@click.option(
    "--timeout",
    type=float,
    help="Request timeout in seconds (default: 30)",
    envvar="ASSETSYNC_TIMEOUT",
)
@click.option(
    "--history-path",
    type=click.Path(),
    help="Path to sync history database (overrides ASSETSYNC_HISTORY_PATH environment variable)",
    envvar="ASSETSYNC_HISTORY_PATH",
)
@click.option("--verbose", "-v", is_flag=True, help="Log every step and remote call")
@click.pass_context
def cli(ctx, base_uri: str | None, api_token: str | None, timeout: float | None,
        history_path: str | None, verbose: bool):
    """assetsync - Keep a Snipe-IT inventory in line with observed hardware.

    Creates missing manufacturers, categories, models, companies, status
    labels and locations, then creates or updates the asset itself.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.obj["settings"] = {
        "base_uri": base_uri,
        "api_token": api_token,
        "timeout": resolve_timeout(timeout),
        "history_path": history_path,
    }


# Register all commands
check.register_commands(cli)
sync.register_commands(cli)
history.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
