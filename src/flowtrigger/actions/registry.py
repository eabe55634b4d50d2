"""Action registry -- maps type tags to action factories.

Owns the shared ActionEnvironment and binds it into every action it
builds, so all actions created through one registry see the same
collaborators.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from flowtrigger.actions.environment import ActionEnvironment
from flowtrigger.actions.protocols import TriggerAction
from flowtrigger.exceptions import MalformedDocumentError, UnknownActionTypeError

logger = logging.getLogger(__name__)

ActionFactory = Callable[[Mapping[str, Any]], TriggerAction]


class ActionRegistry:
    """Registry of trigger action variants.

    Unknown tags are rejected here, before any variant code sees the
    document.
    """

    def __init__(self, environment: ActionEnvironment | None = None) -> None:
        self._factories: dict[str, ActionFactory] = {}
        self._environment = environment if environment is not None else ActionEnvironment()

    @property
    def environment(self) -> ActionEnvironment:
        return self._environment

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(self, action_type: str, factory: ActionFactory) -> None:
        """Register a factory for a type tag.

        Raises ValueError if the tag is already registered.
        """
        if action_type in self._factories:
            raise ValueError(
                f"Action type '{action_type}' is already registered. "
                f"Unregister it first to re-register."
            )
        self._factories[action_type] = factory

    def register_action(self, cls: type[TriggerAction]) -> type[TriggerAction]:
        """Register a TriggerAction subclass under its ``TYPE`` tag.

        Returns the class, so this also works as a decorator.
        """
        self.register(cls.TYPE, cls.from_json)
        return cls

    def unregister(self, action_type: str) -> None:
        self._factories.pop(action_type, None)

    def is_registered(self, action_type: str) -> bool:
        return action_type in self._factories

    @property
    def action_types(self) -> set[str]:
        """All registered type tags."""
        return set(self._factories.keys())

    # ------------------------------------------------------------------
    # Documents
    # ------------------------------------------------------------------

    def create(self, document: Mapping[str, Any]) -> TriggerAction:
        """Build and bind an action from a persisted document.

        Raises:
            MalformedDocumentError: If the document is not a mapping or has
                no string ``type`` tag, or a variant field is malformed.
            UnknownActionTypeError: If no variant is registered for the tag.
            TypeMismatchError: If the variant rejects the tag.
        """
        if not isinstance(document, Mapping):
            raise MalformedDocumentError(
                f"Action document must be an object, got {type(document).__name__}"
            )
        action_type = document.get("type")
        if not isinstance(action_type, str):
            raise MalformedDocumentError(
                "Action document has no type tag", field="type"
            )
        factory = self._factories.get(action_type)
        if factory is None:
            raise UnknownActionTypeError(action_type)

        action = factory(document)
        action.bind(self._environment)
        logger.debug("Loaded %s action '%s'", action_type, action.action_id)
        return action

    def to_documents(self, actions: Iterable[TriggerAction]) -> list[dict[str, Any]]:
        """Serialize actions for persistence."""
        return [action.to_json() for action in actions]

    def from_documents(self, documents: Iterable[Mapping[str, Any]]) -> list[TriggerAction]:
        """Rebuild a list of actions, failing on the first bad document."""
        return [self.create(document) for document in documents]


def default_registry(environment: ActionEnvironment | None = None) -> ActionRegistry:
    """Create a registry with the built-in action variants registered."""
    from flowtrigger.actions.execute_flow import ExecuteFlowAction

    registry = ActionRegistry(environment)
    registry.register_action(ExecuteFlowAction)
    return registry
