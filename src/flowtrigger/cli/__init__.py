"""flowtrigger CLI -- manage and fire stored trigger actions.

This module is NEVER imported from flowtrigger/__init__.py.
It is only loaded via the ``flowtrigger`` entry point defined in pyproject.toml.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING

try:
    import click
except ImportError:
    raise ImportError(
        "CLI dependencies not installed. Install with: pip install flowtrigger[cli]"
    ) from None

from flowtrigger.cli.formatting import format_error, get_console

if TYPE_CHECKING:
    from collections.abc import Iterator

    from rich.console import Console

    from flowtrigger.actions.registry import ActionRegistry
    from flowtrigger.storage.repositories import SqliteActionRepository


@click.group()
@click.option(
    "--db",
    default=None,
    envvar="FLOWTRIGGER_DB",
    help="Path to the action store database.",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.pass_context
def cli(ctx: click.Context, db: str | None, verbose: bool) -> None:
    """flowtrigger: persistable trigger actions for workflow executions."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)
    ctx.obj["db_path"] = db


def _get_config(ctx: click.Context, **overrides: object):  # noqa: ANN202
    """Build a FlowTriggerConfig from the environment plus CLI overrides."""
    from flowtrigger.config import FlowTriggerConfig

    return FlowTriggerConfig.from_env(db_path=ctx.obj["db_path"], **overrides)


@contextmanager
def _action_store(
    ctx: click.Context, registry: ActionRegistry | None = None, **overrides: object
) -> Iterator[tuple[SqliteActionRepository, Console]]:
    """Open the action store, yield (repository, console), commit on success.

    Exceptions are formatted as CLI errors and turned into exit code 1.
    """
    from flowtrigger.actions.registry import default_registry
    from flowtrigger.storage.engine import (
        create_session_factory,
        engine_from_config,
        init_db,
    )
    from flowtrigger.storage.repositories import SqliteActionRepository

    console = get_console()
    try:
        config = _get_config(ctx, **overrides)
        engine = engine_from_config(config)
        try:
            init_db(engine)
            session = create_session_factory(engine)()
            try:
                yield SqliteActionRepository(session, registry or default_registry()), console
                session.commit()
            except BaseException:
                session.rollback()
                raise
            finally:
                session.close()
        finally:
            engine.dispose()
    except SystemExit:
        raise
    except Exception as e:
        format_error(str(e), console)
        raise SystemExit(1) from None


# Register subcommands after cli group is defined
from flowtrigger.cli.commands.add import add  # noqa: E402
from flowtrigger.cli.commands.fire import fire  # noqa: E402
from flowtrigger.cli.commands.list import list_actions  # noqa: E402
from flowtrigger.cli.commands.remove import remove  # noqa: E402
from flowtrigger.cli.commands.show import show  # noqa: E402

cli.add_command(add)
cli.add_command(list_actions)
cli.add_command(show)
cli.add_command(remove)
cli.add_command(fire)
