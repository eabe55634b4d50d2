"""Execution option value types carried inside trigger actions.

ExecutionOptions holds per-submission overrides (flow parameters,
notification lists, failure and concurrency behavior) layered on top of a
flow's defaults. SlaOption is an opaque constraint that is passed through
to the execution backend untouched.

Both are Pydantic models whose field aliases are the camelCase keys of the
persisted document format.
"""

from __future__ import annotations

import enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from flowtrigger.exceptions import MalformedDocumentError


class FailureAction(str, enum.Enum):
    """What the executor does with the rest of a flow after a job fails."""

    FINISH_CURRENTLY_RUNNING = "FINISH_CURRENTLY_RUNNING"
    CANCEL_ALL = "CANCEL_ALL"
    FINISH_ALL_POSSIBLE = "FINISH_ALL_POSSIBLE"


class ConcurrentOption(str, enum.Enum):
    """How a submission behaves when the same flow is already running."""

    IGNORE = "ignore"
    PIPELINE = "pipeline"
    SKIP = "skip"


class ExecutionOptions(BaseModel):
    """Per-submission overrides for a flow execution.

    The two ``*_emails_override`` flags record whether the matching e-mail
    list was set explicitly. When a flag is False the list is replaced by
    the flow definition's configured list at execution time.
    """

    model_config = ConfigDict(populate_by_name=True)

    flow_parameters: dict[str, str] = Field(default_factory=dict, alias="flowParameters")
    notify_on_first_failure: bool = Field(default=True, alias="notifyOnFirstFailure")
    notify_on_last_failure: bool = Field(default=False, alias="notifyOnLastFailure")
    success_emails: list[str] = Field(default_factory=list, alias="successEmails")
    failure_emails: list[str] = Field(default_factory=list, alias="failureEmails")
    success_emails_override: bool = Field(default=False, alias="successEmailsOverride")
    failure_emails_override: bool = Field(default=False, alias="failureEmailsOverride")
    failure_action: FailureAction = Field(
        default=FailureAction.FINISH_CURRENTLY_RUNNING, alias="failureAction"
    )
    concurrent_option: ConcurrentOption = Field(
        default=ConcurrentOption.IGNORE, alias="concurrentOption"
    )
    pipeline_level: Optional[int] = Field(default=None, alias="pipelineLevel")
    pipeline_exec_id: Optional[int] = Field(default=None, alias="pipelineExecId")
    queue_level: int = Field(default=0, alias="queueLevel")
    disabled_jobs: list[Any] = Field(default_factory=list, alias="disabledJobs")
    mail_creator: str = Field(default="default", alias="mailCreator")
    memory_check: bool = Field(default=True, alias="memoryCheck")

    def to_object(self) -> dict:
        """Serialize to a JSON-safe dict keyed by the persisted field names."""
        return self.model_dump(mode="json", by_alias=True)

    @classmethod
    def from_object(cls, obj: object) -> ExecutionOptions:
        """Parse a persisted ``executionOptions`` sub-document.

        Raises:
            MalformedDocumentError: If *obj* is not a mapping or a field
                has the wrong shape.
        """
        if not isinstance(obj, dict):
            raise MalformedDocumentError(
                f"executionOptions must be an object, got {type(obj).__name__}",
                field="executionOptions",
            )
        try:
            return cls.model_validate(obj)
        except ValidationError as e:
            raise MalformedDocumentError(
                f"Invalid executionOptions: {e}", field="executionOptions"
            ) from e


class SlaOption(BaseModel):
    """An SLA rule attached verbatim to an execution.

    ``type`` names the rule (e.g. ``FlowSucceed``), ``info`` carries its
    settings (flow name, duration, ...) and ``actions`` lists what the
    backend does on violation (e.g. ``SlaEmailAction``).
    """

    type: str
    info: dict[str, Any] = Field(default_factory=dict)
    actions: list[str] = Field(default_factory=list)

    def to_object(self) -> dict:
        return self.model_dump(mode="json")

    @classmethod
    def from_object(cls, obj: object) -> SlaOption:
        """Parse one element of a persisted ``slaOptions`` list."""
        if not isinstance(obj, dict):
            raise MalformedDocumentError(
                f"slaOptions entries must be objects, got {type(obj).__name__}",
                field="slaOptions",
            )
        try:
            return cls.model_validate(obj)
        except ValidationError as e:
            raise MalformedDocumentError(
                f"Invalid slaOptions entry: {e}", field="slaOptions"
            ) from e
