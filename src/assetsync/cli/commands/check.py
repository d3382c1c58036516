"""Connectivity check command."""

import click

from assetsync.cli.context import get_settings
from assetsync.domain.connectivity import check_connection


def run_check(ctx: click.Context) -> bool:
    """Run the connectivity check and print its outcome. Returns True on success."""
    settings = get_settings(ctx)
    if not settings["base_uri"] or not settings["api_token"]:
        click.echo(
            "Error: Base URI and API token are required "
            "(use --base-uri/--api-token or ASSETSYNC_BASE_URI/ASSETSYNC_API_TOKEN)",
            err=True,
        )
        return False

    result = check_connection(
        settings["base_uri"], settings["api_token"], timeout=settings["timeout"]
    )
    if result.ok:
        click.echo(result.message)
    else:
        click.echo(f"Error: {result.message}", err=True)
    return result.ok


@click.command("check")
@click.pass_context
def check(ctx):
    """Check that the Snipe-IT instance is reachable and the token is valid."""
    if not run_check(ctx):
        ctx.exit(1)


def register_commands(cli):
    """Register check command with main CLI."""
    cli.add_command(check)
