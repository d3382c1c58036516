"""Sync history commands."""

import click

from assetsync.cli.context import get_history


@click.group()
def history_group():
    """Inspect past sync runs."""
    pass


@history_group.command("list")
@click.option("--serial", help="Only show runs for this asset serial")
@click.option("--limit", type=int, default=20, show_default=True, help="Maximum number of runs")
@click.pass_context
def list_runs(ctx, serial: str | None, limit: int):
    """List recent sync runs."""
    runs = get_history(ctx).list_runs(serial=serial, limit=limit)
    if not runs:
        click.echo("No sync runs recorded.")
        return

    click.echo("-" * 80)
    click.echo(f"{'ID':<6} {'Recorded':<20} {'Serial':<24} {'Writes':<7} {'Result':<20}")
    click.echo("-" * 80)
    for run in runs:
        result = "ok" if run.succeeded else (run.error_kind or "failed")
        recorded = run.recorded_at.strftime("%Y-%m-%d %H:%M:%S")
        click.echo(
            f"{run.id:<6} {recorded:<20} {run.serial:<24} {run.operation_count:<7} {result:<20}"
        )


@history_group.command("show")
@click.argument("run_id", type=int)
@click.pass_context
def show_run(ctx, run_id: int):
    """Show the remote writes of a sync run."""
    store = get_history(ctx)
    run = store.get_run(run_id)
    if run is None:
        click.echo(f"Error: Sync run {run_id} not found", err=True)
        ctx.exit(1)

    click.echo(f"\nRun {run.id} for asset {run.serial}")
    click.echo(f"  Recorded: {run.recorded_at}")
    click.echo(f"  Result: {'ok' if run.succeeded else 'failed'}")
    if run.asset_id is not None:
        click.echo(f"  Asset ID: {run.asset_id}")
    if run.error_kind:
        click.echo(f"  Error ({run.error_kind}): {run.error_message}")

    operations = store.list_operations(run_id)
    if not operations:
        click.echo("  No remote writes.")
        return
    click.echo("  Writes:")
    for op in operations:
        target = f" '{op.entity_name}'" if op.entity_name else ""
        remote = f" (ID: {op.remote_id})" if op.remote_id is not None else ""
        click.echo(f"    {op.position}. {op.action} {op.entity_type}{target}{remote}: {op.status}")


def register_commands(cli):
    """Register history commands with main CLI."""
    cli.add_command(history_group, name="history")
