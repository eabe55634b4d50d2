"""Operating environment shared by trigger actions.

An ActionEnvironment is created once at startup, handed to the
ActionRegistry, and bound into every action the registry builds. Its
collaborators may be filled in after actions are bound; an action that
runs before they are set fails with ConfigurationError.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from flowtrigger.exceptions import ConfigurationError
from flowtrigger.models.project import create_executable_flow

if TYPE_CHECKING:
    from flowtrigger.gateways.protocols import (
        ExecutableFlowFactory,
        ExecutionGateway,
        ProjectResolver,
    )


@dataclass
class ActionEnvironment:
    """Collaborators an action needs to do its work."""

    project_resolver: ProjectResolver | None = None
    execution_gateway: ExecutionGateway | None = None
    executable_flow_factory: ExecutableFlowFactory = create_executable_flow

    @property
    def missing(self) -> list[str]:
        """Names of required collaborators that are not set."""
        missing = []
        if self.project_resolver is None:
            missing.append("project_resolver")
        if self.execution_gateway is None:
            missing.append("execution_gateway")
        return missing

    @property
    def is_ready(self) -> bool:
        return not self.missing

    def require_ready(self) -> None:
        """Raise ConfigurationError unless every required collaborator is set."""
        missing = self.missing
        if missing:
            raise ConfigurationError(missing)
