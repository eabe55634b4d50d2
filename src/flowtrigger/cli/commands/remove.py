"""flowtrigger remove -- delete a stored action."""

from __future__ import annotations

import click

from flowtrigger.cli.formatting import format_error


@click.command()
@click.argument("trigger_id")
@click.argument("action_id")
@click.pass_context
def remove(ctx: click.Context, trigger_id: str, action_id: str) -> None:
    """Delete ACTION_ID from TRIGGER_ID."""
    from flowtrigger.cli import _action_store

    with _action_store(ctx) as (repo, console):
        if not repo.delete(trigger_id, action_id):
            format_error(f"Action not found: {trigger_id}/{action_id}", console)
            raise SystemExit(1)
        console.print(f"Removed [cyan]{action_id}[/cyan] from [yellow]{trigger_id}[/yellow]")
