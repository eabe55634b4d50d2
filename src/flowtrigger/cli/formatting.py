"""Rich formatting helpers for the flowtrigger CLI.

Rich auto-detects TTY and degrades gracefully when piped (no ANSI codes).
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table

if TYPE_CHECKING:
    from flowtrigger.actions.protocols import TriggerAction
    from flowtrigger.models.project import ExecutableFlow


def get_console() -> Console:
    """Create a Rich Console that auto-detects TTY for graceful pipe degradation."""
    return Console(stderr=False)


def format_action_table(entries: list[tuple[str, TriggerAction]], console: Console) -> None:
    """Display stored actions as a table."""
    if not entries:
        console.print("[dim]No actions.[/dim]")
        return

    table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
    table.add_column("Trigger", style="yellow")
    table.add_column("Action", style="cyan")
    table.add_column("Type")
    table.add_column("Description")

    for trigger_id, action in entries:
        table.add_row(
            escape(trigger_id),
            escape(action.action_id),
            action.action_type,
            escape(action.description),
        )

    console.print(table)


def format_document(document: dict, console: Console) -> None:
    """Pretty-print a persisted action document."""
    text = json.dumps(document, indent=2, sort_keys=True)
    console.print(Syntax(text, "json", background_color="default"))


def format_submission(exflow: ExecutableFlow, console: Console) -> None:
    """Report a successful submission."""
    target = escape(f"{exflow.project_name}.{exflow.flow_id}")
    if exflow.execution_id is not None:
        console.print(
            f"[green]Submitted[/green] {target} as execution "
            f"[bold]{exflow.execution_id}[/bold]"
        )
    else:
        console.print(f"[green]Submitted[/green] {target}")


def format_error(message: str, console: Console) -> None:
    """Display an error message."""
    console.print(f"[red]Error:[/red] {escape(message)}", highlight=False)
