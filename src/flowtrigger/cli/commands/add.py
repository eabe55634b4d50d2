"""flowtrigger add -- store an action document for a trigger."""

from __future__ import annotations

import json

import click

from flowtrigger.cli.formatting import format_error, get_console


@click.command()
@click.argument("trigger_id")
@click.argument("document_file", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def add(ctx: click.Context, trigger_id: str, document_file: str) -> None:
    """Validate the JSON action document in DOCUMENT_FILE and store it under TRIGGER_ID.

    An existing action with the same id is replaced.
    """
    from flowtrigger.cli import _action_store

    try:
        with open(document_file, encoding="utf-8") as f:
            document = json.load(f)
    except (OSError, ValueError) as e:
        format_error(f"Cannot read {document_file}: {e}", get_console())
        raise SystemExit(1) from None

    with _action_store(ctx) as (repo, console):
        action = repo.registry.create(document)
        repo.save(trigger_id, action)
        console.print(
            f"Stored [cyan]{action.action_id}[/cyan] ({action.action_type}) "
            f"for trigger [yellow]{trigger_id}[/yellow]"
        )
