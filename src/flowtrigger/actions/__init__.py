"""Trigger action package -- the action contract, its variants and registry.

Provides the TriggerAction ABC, the ExecuteFlowAction variant, the
ActionEnvironment that carries shared collaborators, and the
ActionRegistry that turns persisted documents back into actions.
"""

from flowtrigger.actions.environment import ActionEnvironment
from flowtrigger.actions.execute_flow import ExecuteFlowAction
from flowtrigger.actions.protocols import TriggerAction
from flowtrigger.actions.registry import ActionRegistry, default_registry

__all__ = [
    "ActionEnvironment",
    "ActionRegistry",
    "ExecuteFlowAction",
    "TriggerAction",
    "default_registry",
]
