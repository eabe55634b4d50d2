"""flowtrigger list -- show stored actions."""

from __future__ import annotations

import click

from flowtrigger.cli.formatting import format_action_table


@click.command("list")
@click.option("--trigger-id", default=None, help="Only show actions of this trigger.")
@click.pass_context
def list_actions(ctx: click.Context, trigger_id: str | None) -> None:
    """List stored actions with their type and description."""
    from flowtrigger.cli import _action_store

    with _action_store(ctx) as (repo, console):
        if trigger_id is None:
            entries = repo.list_all()
        else:
            entries = [(trigger_id, a) for a in repo.list_for_trigger(trigger_id)]
        format_action_table(entries, console)
