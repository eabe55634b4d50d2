"""flowtrigger show -- print a stored action document."""

from __future__ import annotations

import click

from flowtrigger.cli.formatting import format_document, format_error


@click.command()
@click.argument("trigger_id")
@click.argument("action_id")
@click.pass_context
def show(ctx: click.Context, trigger_id: str, action_id: str) -> None:
    """Print the persisted JSON document of ACTION_ID in TRIGGER_ID."""
    from flowtrigger.cli import _action_store

    with _action_store(ctx) as (repo, console):
        document = repo.get_document(trigger_id, action_id)
        if document is None:
            format_error(f"Action not found: {trigger_id}/{action_id}", console)
            raise SystemExit(1)
        format_document(document, console)
