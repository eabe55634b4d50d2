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

__all__ = [
    "ConcurrentOption",
    "ExecutionOptions",
    "FailureAction",
    "SlaOption",
    "ExecutableFlow",
    "Flow",
    "Project",
    "create_executable_flow",
]
