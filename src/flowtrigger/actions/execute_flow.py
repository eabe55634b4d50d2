"""ExecuteFlowAction -- submit a flow for execution when a trigger fires.

The action stores which flow to run (by project id and flow name), who the
execution is submitted as, and optional execution and SLA options. On
``do_action()`` it resolves the project and flow, builds an executable
snapshot, fills in notification e-mails the user did not override, and
hands the result to the execution gateway.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

from flowtrigger.actions.protocols import TriggerAction
from flowtrigger.actions.serialization import (
    check_type,
    read_execution_options,
    read_sla_options,
    require_int,
    require_str,
    write_optional,
)
from flowtrigger.exceptions import (
    ConfigurationError,
    FlowNotFoundError,
    ProjectNotFoundError,
    SubmissionError,
)
from flowtrigger.models.execution import ExecutionOptions, SlaOption

if TYPE_CHECKING:
    from flowtrigger.actions.environment import ActionEnvironment
    from flowtrigger.models.project import ExecutableFlow

logger = logging.getLogger(__name__)


class ExecuteFlowAction(TriggerAction):
    """Trigger action that submits one flow of one project.

    ``execution_options`` and ``sla_options`` are None when not configured,
    which is kept distinct from an empty value through serialization.
    ``project_name`` is informational; lookups go through ``project_id``.
    """

    TYPE = "ExecuteFlowAction"

    def __init__(
        self,
        action_id: str,
        project_id: int,
        project_name: str,
        flow_name: str,
        submit_user: str,
        execution_options: ExecutionOptions | None = None,
        sla_options: list[SlaOption] | None = None,
        *,
        environment: ActionEnvironment | None = None,
    ) -> None:
        super().__init__(action_id, environment=environment)
        self._project_id = project_id
        self._project_name = project_name
        self._flow_name = flow_name
        self._submit_user = submit_user
        self._execution_options = execution_options
        self._sla_options = sla_options

    # ------------------------------------------------------------------
    # Fields
    # ------------------------------------------------------------------

    @property
    def project_id(self) -> int:
        return self._project_id

    @project_id.setter
    def project_id(self, value: int) -> None:
        self._project_id = value

    @property
    def project_name(self) -> str:
        return self._project_name

    @property
    def flow_name(self) -> str:
        return self._flow_name

    @flow_name.setter
    def flow_name(self, value: str) -> None:
        self._flow_name = value

    @property
    def submit_user(self) -> str:
        return self._submit_user

    @submit_user.setter
    def submit_user(self, value: str) -> None:
        self._submit_user = value

    @property
    def execution_options(self) -> ExecutionOptions | None:
        return self._execution_options

    @execution_options.setter
    def execution_options(self, value: ExecutionOptions | None) -> None:
        self._execution_options = value

    @property
    def sla_options(self) -> list[SlaOption] | None:
        return self._sla_options

    @sla_options.setter
    def sla_options(self, value: list[SlaOption] | None) -> None:
        self._sla_options = value

    @property
    def description(self) -> str:
        return f"Execute flow {self._flow_name} from project {self._project_name}"

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_json(self) -> dict[str, Any]:
        document: dict[str, Any] = {
            "type": self.TYPE,
            "actionId": self.action_id,
            "projectId": str(self._project_id),
            "projectName": self._project_name,
            "flowName": self._flow_name,
            "submitUser": self._submit_user,
        }
        write_optional(document, self._execution_options, self._sla_options)
        return document

    @classmethod
    def from_json(cls, document: Mapping[str, Any]) -> ExecuteFlowAction:
        check_type(document, cls.TYPE)
        return cls(
            action_id=require_str(document, "actionId"),
            project_id=require_int(document, "projectId"),
            project_name=require_str(document, "projectName"),
            flow_name=require_str(document, "flowName"),
            submit_user=require_str(document, "submitUser"),
            execution_options=read_execution_options(document),
            sla_options=read_sla_options(document),
        )

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def do_action(self) -> ExecutableFlow:
        """Resolve the flow and submit it to the execution gateway.

        Returns:
            The ExecutableFlow that was submitted.

        Raises:
            ConfigurationError: If no environment is bound or it lacks a
                project resolver or execution gateway. Nothing is resolved
                or submitted.
            ProjectNotFoundError: If ``project_id`` is unknown.
            FlowNotFoundError: If ``flow_name`` is not in the project.
            SubmissionError: If the gateway fails; wraps the gateway error.
        """
        env = self._environment
        if env is None:
            raise ConfigurationError(["environment"])
        env.require_ready()

        project = env.project_resolver.get_project(self._project_id)
        if project is None:
            raise ProjectNotFoundError(self._project_id)
        flow = env.project_resolver.get_flow(project, self._flow_name)
        if flow is None:
            raise FlowNotFoundError(project.name, self._flow_name)

        exflow = env.executable_flow_factory(project, flow)
        exflow.submit_user = self._submit_user

        if self._execution_options is None:
            self._execution_options = ExecutionOptions()
        options = self._execution_options
        if not options.failure_emails_override:
            options.failure_emails = list(flow.failure_emails)
        if not options.success_emails_override:
            options.success_emails = list(flow.success_emails)

        exflow.execution_options = options.model_copy(deep=True)
        logger.debug(
            "Execution options for %s: flow parameters %s",
            self.action_id,
            options.flow_parameters,
        )

        if self._sla_options:
            exflow.sla_options = list(self._sla_options)

        exflow.submit_time = datetime.now(timezone.utc)
        logger.info("Invoking flow %s.%s", project.name, self._flow_name)
        try:
            env.execution_gateway.submit(exflow, self._submit_user)
        except Exception as exc:
            raise SubmissionError(
                f"Failed to submit flow {project.name}.{self._flow_name}", exc
            ) from exc
        logger.info("Invoked flow %s.%s", project.name, self._flow_name)
        return exflow

    # ------------------------------------------------------------------
    # Comparison
    # ------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ExecuteFlowAction):
            return NotImplemented
        return (
            self.action_id == other.action_id
            and self._project_id == other._project_id
            and self._project_name == other._project_name
            and self._flow_name == other._flow_name
            and self._submit_user == other._submit_user
            and self._execution_options == other._execution_options
            and self._sla_options == other._sla_options
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"ExecuteFlowAction(action_id={self.action_id!r}, "
            f"project_id={self._project_id!r}, flow_name={self._flow_name!r}, "
            f"submit_user={self._submit_user!r})"
        )
