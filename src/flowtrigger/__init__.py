"""flowtrigger: persistable trigger actions that submit workflow executions.

When a scheduled trigger fires, its actions turn persisted configuration
into live execution requests against an execution backend.
"""

from flowtrigger._version import __version__

# Action contract, variants and registry
from flowtrigger.actions import (
    ActionEnvironment,
    ActionRegistry,
    ExecuteFlowAction,
    TriggerAction,
    default_registry,
)

# Value types and project models
from flowtrigger.models.execution import (
    ConcurrentOption,
    ExecutionOptions,
    FailureAction,
    SlaOption,
)
from flowtrigger.models.project import (
    ExecutableFlow,
    Flow,
    Project,
    create_executable_flow,
)

# Collaborators
from flowtrigger.gateways import (
    ExecutableFlowFactory,
    ExecutionGateway,
    HttpExecutionGateway,
    InMemoryProjectResolver,
    ProjectResolver,
)

# Configuration
from flowtrigger.config import FlowTriggerConfig

# Exceptions
from flowtrigger.exceptions import (
    ActionDocumentError,
    ConfigurationError,
    ExecutorApiError,
    FlowNotFoundError,
    FlowTriggerError,
    MalformedDocumentError,
    NotFoundError,
    ProjectNotFoundError,
    SubmissionError,
    TypeMismatchError,
    UnknownActionTypeError,
)

__all__ = [
    "__version__",
    # Actions
    "ActionEnvironment",
    "ActionRegistry",
    "ExecuteFlowAction",
    "TriggerAction",
    "default_registry",
    # Models
    "ConcurrentOption",
    "ExecutionOptions",
    "FailureAction",
    "SlaOption",
    "ExecutableFlow",
    "Flow",
    "Project",
    "create_executable_flow",
    # Collaborators
    "ExecutableFlowFactory",
    "ExecutionGateway",
    "HttpExecutionGateway",
    "InMemoryProjectResolver",
    "ProjectResolver",
    # Configuration
    "FlowTriggerConfig",
    # Exceptions
    "ActionDocumentError",
    "ConfigurationError",
    "ExecutorApiError",
    "FlowNotFoundError",
    "FlowTriggerError",
    "MalformedDocumentError",
    "NotFoundError",
    "ProjectNotFoundError",
    "SubmissionError",
    "TypeMismatchError",
    "UnknownActionTypeError",
]
