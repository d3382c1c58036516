"""Asset sync command."""

import click

from assetsync.cli.commands.check import run_check
from assetsync.cli.context import get_client, get_history
from assetsync.cli.error_handling import handle_domain_error
from assetsync.client.memory import InMemoryInventoryClient
from assetsync.domain.errors import DomainError
from assetsync.domain.observation import load_observation
from assetsync.domain.sync import sync_asset


def describe_operation(operation) -> str:
    """One line describing a remote write."""
    payload = operation.payload
    target = ""
    if payload is not None:
        key = getattr(payload, "natural_key", None)
        target = f" '{key}'" if key else ""
        if getattr(payload, "id", None) is not None:
            target += f" (ID: {payload.id})"
    line = f"{operation.action.capitalize()} {operation.entity_type}{target}: {operation.status}"
    if not operation.ok and operation.messages:
        line += f" - {operation.messages}"
    return line


@click.command("sync")
@click.argument("observation_file", type=click.Path(exists=True))
@click.option("--skip-check", is_flag=True, help="Skip the connectivity check")
@click.option("--dry-run", is_flag=True, help="Sync against an empty in-memory inventory")
@click.option("--no-history", is_flag=True, help="Do not record the run in the history database")
@click.pass_context
def sync(ctx, observation_file: str, skip_check: bool, dry_run: bool, no_history: bool):
    """Sync the asset described in OBSERVATION_FILE (JSON) to Snipe-IT."""
    try:
        observation = load_observation(observation_file)
    except (DomainError, FileNotFoundError) as e:
        handle_domain_error(ctx, e)
        return

    if dry_run:
        client = InMemoryInventoryClient()
    else:
        if not skip_check and not run_check(ctx):
            ctx.exit(1)
        try:
            client = get_client(ctx)
        except ValueError as e:
            handle_domain_error(ctx, e)
            return

    report = sync_asset(client, observation)

    if report.operations:
        click.echo(f"\n{len(report.operations)} remote write(s):")
        for operation in report.operations:
            click.echo(f"  {describe_operation(operation)}")
    else:
        click.echo("No changes required.")

    if not dry_run and not no_history:
        run_id = get_history(ctx).record_report(observation.asset.serial, report)
        click.echo(f"Recorded as run {run_id}")

    if report.error is not None:
        click.echo(f"Error ({report.error.kind.value}): {report.error}", err=True)
        ctx.exit(1)
    if not report.ok:
        click.echo("Error: the remote service refused one or more writes", err=True)
        ctx.exit(1)

    asset_id = report.asset.id if report.asset is not None else None
    click.echo(f"Asset {observation.asset.serial} is in sync (ID: {asset_id})")


def register_commands(cli):
    """Register sync command with main CLI."""
    cli.add_command(sync)
