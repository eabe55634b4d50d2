"""Collaborator protocols and built-in adapters for trigger actions."""

from flowtrigger.gateways.http import HttpExecutionGateway
from flowtrigger.gateways.memory import InMemoryProjectResolver
from flowtrigger.gateways.protocols import (
    ExecutableFlowFactory,
    ExecutionGateway,
    ProjectResolver,
)

__all__ = [
    "ExecutableFlowFactory",
    "ExecutionGateway",
    "HttpExecutionGateway",
    "InMemoryProjectResolver",
    "ProjectResolver",
]
