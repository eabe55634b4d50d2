"""TriggerAction ABC -- base class for all trigger actions.

A trigger action is the persistable unit of work a trigger runs when it
fires. Each variant is identified by a type tag, serializes itself to a
JSON-compatible document, and rebuilds itself from one.

Example::

    class LogAction(TriggerAction):
        TYPE = "LogAction"

        def __init__(self, action_id: str, message: str) -> None:
            super().__init__(action_id)
            self.message = message

        @property
        def description(self) -> str:
            return f"Log {self.message!r}"

        def to_json(self) -> dict:
            return {"type": self.TYPE, "actionId": self.action_id,
                    "message": self.message}

        @classmethod
        def from_json(cls, document):
            check_type(document, cls.TYPE)
            return cls(require_str(document, "actionId"),
                       require_str(document, "message"))

        def do_action(self) -> None:
            logger.info(self.message)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, ClassVar

if TYPE_CHECKING:
    from flowtrigger.actions.environment import ActionEnvironment


class TriggerAction(ABC):
    """Abstract base class for all trigger actions.

    ``action_id`` is fixed at construction. Variants set the ``TYPE`` class
    attribute to the tag they are registered under.
    """

    TYPE: ClassVar[str]

    def __init__(
        self, action_id: str, *, environment: ActionEnvironment | None = None
    ) -> None:
        self._action_id = action_id
        self._environment = environment

    @property
    def action_id(self) -> str:
        """Unique id of this action within its trigger."""
        return self._action_id

    @property
    def action_type(self) -> str:
        """Type tag used to pick the deserializer for this action."""
        return self.TYPE

    @property
    def environment(self) -> ActionEnvironment | None:
        return self._environment

    def bind(self, environment: ActionEnvironment) -> None:
        """Attach the shared operating environment before execution."""
        self._environment = environment

    @property
    @abstractmethod
    def description(self) -> str:
        """Human-readable summary. Must not have side effects."""
        ...

    @abstractmethod
    def to_json(self) -> dict[str, Any]:
        """Serialize the full action state. Inverse of from_json()."""
        ...

    @classmethod
    @abstractmethod
    def from_json(cls, document: Mapping[str, Any]) -> TriggerAction:
        """Rebuild an action from a persisted document.

        Raises:
            TypeMismatchError: If the document's type tag is not ``TYPE``.
            MalformedDocumentError: If a required field is missing or
                malformed.
        """
        ...

    @abstractmethod
    def do_action(self) -> object:
        """Perform the action's side effect.

        Runs synchronously on the caller's thread. Repeated calls are not
        deduplicated.
        """
        ...

    def set_context(self, context: Mapping[str, Any]) -> None:
        """Receive ambient key-value context from the scheduler.

        Default is a no-op. Override for variants that use the context.
        """
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}(action_id={self._action_id!r})"
