"""Project and flow models consumed by trigger actions.

Project and Flow mirror the metadata a project resolver hands back.
ExecutableFlow is the runtime snapshot built from a flow definition and
submitted to an execution gateway; once submitted its status belongs to
the execution backend.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from flowtrigger.models.execution import ExecutionOptions, SlaOption


class Flow(BaseModel):
    """A named flow definition within a project."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    failure_emails: list[str] = Field(default_factory=list, alias="failureEmails")
    success_emails: list[str] = Field(default_factory=list, alias="successEmails")


class Project(BaseModel):
    """A project and the flows it defines, keyed by flow id."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    name: str
    version: int = 1
    flows: dict[str, Flow] = Field(default_factory=dict)

    def get_flow(self, flow_name: str) -> Flow | None:
        return self.flows.get(flow_name)


@dataclass
class ExecutableFlow:
    """A runtime instance of a flow, ready for submission.

    Mutable: submit user, options and SLA settings are filled in by the
    action that creates it, ``submit_time`` just before the action hands it
    to a gateway, and ``execution_id`` by a gateway that assigns one.
    """

    project_id: int
    project_name: str
    project_version: int
    flow_id: str
    flow: Flow
    submit_user: Optional[str] = None
    execution_options: ExecutionOptions = field(default_factory=ExecutionOptions)
    sla_options: list[SlaOption] = field(default_factory=list)
    execution_id: Optional[int] = None
    submit_time: Optional[datetime] = None

    def to_object(self) -> dict:
        """Serialize for transport to an executor."""
        obj: dict = {
            "projectId": self.project_id,
            "projectName": self.project_name,
            "version": self.project_version,
            "flowId": self.flow_id,
            "submitUser": self.submit_user,
            "executionOptions": self.execution_options.to_object(),
            "slaOptions": [sla.to_object() for sla in self.sla_options],
        }
        if self.submit_time is not None:
            obj["submitTime"] = self.submit_time.isoformat()
        return obj


def create_executable_flow(project: Project, flow: Flow) -> ExecutableFlow:
    """Default ExecutableFlowFactory.

    Takes a deep copy of the flow so later edits to the stored definition
    do not reach an execution that was already built.
    """
    return ExecutableFlow(
        project_id=project.id,
        project_name=project.name,
        project_version=project.version,
        flow_id=flow.id,
        flow=flow.model_copy(deep=True),
    )
