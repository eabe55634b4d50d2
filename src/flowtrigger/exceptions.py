"""flowtrigger exception hierarchy.

All flowtrigger-specific exceptions inherit from FlowTriggerError.
"""

from __future__ import annotations


class FlowTriggerError(Exception):
    """Base exception for all flowtrigger errors."""


class ActionDocumentError(FlowTriggerError):
    """Base exception for errors reading a persisted action document."""


class TypeMismatchError(ActionDocumentError):
    """Raised when a document's type tag does not match the variant parsing it."""

    def __init__(self, expected: str, actual: object) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"Cannot create action of {expected} from {actual}")


class MalformedDocumentError(ActionDocumentError):
    """Raised when a required field is missing or cannot be parsed."""

    def __init__(self, message: str, field: str | None = None) -> None:
        self.field = field
        super().__init__(message)


class UnknownActionTypeError(ActionDocumentError):
    """Raised when no action variant is registered for a type tag."""

    def __init__(self, action_type: str) -> None:
        self.action_type = action_type
        super().__init__(f"No action registered for type: {action_type}")


class ConfigurationError(FlowTriggerError):
    """Raised when an action runs before its collaborators are available."""

    def __init__(self, missing: list[str]) -> None:
        self.missing = missing
        super().__init__(
            "Action environment not properly initialized, missing: "
            + ", ".join(missing)
        )


class NotFoundError(FlowTriggerError):
    """Base exception for project or flow lookups that come back empty."""


class ProjectNotFoundError(NotFoundError):
    """Raised when a project id is not known to the project resolver."""

    def __init__(self, project_id: int) -> None:
        self.project_id = project_id
        super().__init__(f"Project not found: {project_id}")


class FlowNotFoundError(NotFoundError):
    """Raised when a flow name is not defined in the resolved project."""

    def __init__(self, project_name: str, flow_name: str) -> None:
        self.project_name = project_name
        self.flow_name = flow_name
        super().__init__(f"Flow not found: {project_name}.{flow_name}")


class SubmissionError(FlowTriggerError):
    """Raised when the execution gateway rejects or fails a submission.

    The underlying gateway exception is kept on ``cause`` and is also
    chained as ``__cause__``.
    """

    def __init__(self, message: str, cause: BaseException) -> None:
        self.cause = cause
        super().__init__(f"{message}: {cause}")


class ExecutorApiError(FlowTriggerError):
    """Raised by the HTTP gateway when the executor answers with an error."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        if status_code is not None:
            message = f"{message} (HTTP {status_code})"
        super().__init__(message)
