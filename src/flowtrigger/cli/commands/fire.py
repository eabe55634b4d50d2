"""flowtrigger fire -- run a stored action once, outside the scheduler."""

from __future__ import annotations

import click

from flowtrigger.cli.formatting import format_error, format_submission


@click.command()
@click.argument("trigger_id")
@click.argument("action_id")
@click.option(
    "--projects",
    "projects_file",
    required=True,
    type=click.Path(exists=True, dir_okay=False),
    help="JSON project catalogue used to resolve projects and flows.",
)
@click.option(
    "--executor-url",
    default=None,
    envvar="FLOWTRIGGER_EXECUTOR_URL",
    help="Base URL of the executor server.",
)
@click.option(
    "--timeout",
    default=None,
    type=float,
    help="Executor request timeout in seconds.",
)
@click.pass_context
def fire(
    ctx: click.Context,
    trigger_id: str,
    action_id: str,
    projects_file: str,
    executor_url: str | None,
    timeout: float | None,
) -> None:
    """Execute ACTION_ID of TRIGGER_ID against the configured executor."""
    from flowtrigger.actions.environment import ActionEnvironment
    from flowtrigger.actions.registry import default_registry
    from flowtrigger.cli import _action_store, _get_config
    from flowtrigger.gateways.http import HttpExecutionGateway
    from flowtrigger.gateways.memory import InMemoryProjectResolver
    from flowtrigger.models.project import ExecutableFlow

    environment = ActionEnvironment()
    registry = default_registry(environment)

    with _action_store(ctx, registry) as (repo, console):
        action = repo.get(trigger_id, action_id)
        if action is None:
            format_error(f"Action not found: {trigger_id}/{action_id}", console)
            raise SystemExit(1)

        config = _get_config(ctx, executor_url=executor_url, executor_timeout=timeout)
        environment.project_resolver = InMemoryProjectResolver.from_file(projects_file)
        with HttpExecutionGateway.from_config(config) as gateway:
            environment.execution_gateway = gateway
            result = action.do_action()

        if isinstance(result, ExecutableFlow):
            format_submission(result, console)
        else:
            console.print(f"[green]Done:[/green] {action.description}")
