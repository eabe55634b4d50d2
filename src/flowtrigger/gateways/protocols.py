"""Protocols for the collaborators a trigger action depends on.

Any object with matching methods works; the built-in
InMemoryProjectResolver and HttpExecutionGateway implement these.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from flowtrigger.models.project import ExecutableFlow, Flow, Project


@runtime_checkable
class ProjectResolver(Protocol):
    """Looks up project and flow metadata.

    Both methods may return None for unknown ids/names, or raise a
    NotFoundError themselves.
    """

    def get_project(self, project_id: int) -> Project | None:
        ...

    def get_flow(self, project: Project, flow_name: str) -> Flow | None:
        ...


@runtime_checkable
class ExecutionGateway(Protocol):
    """Accepts an executable flow and hands it to the execution backend.

    May raise any backend-specific error; callers translate it.
    """

    def submit(self, executable_flow: ExecutableFlow, submit_user: str) -> None:
        ...


class ExecutableFlowFactory(Protocol):
    """Builds a fresh executable snapshot of a flow.

    Can be a function, lambda, or class with __call__.
    """

    def __call__(self, project: Project, flow: Flow) -> ExecutableFlow:
        ...
