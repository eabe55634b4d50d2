"""Tests for ActionRegistry dispatch and binding."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import pytest

from flowtrigger.actions.environment import ActionEnvironment
from flowtrigger.actions.execute_flow import ExecuteFlowAction
from flowtrigger.actions.protocols import TriggerAction
from flowtrigger.actions.registry import ActionRegistry, default_registry
from flowtrigger.actions.serialization import check_type, require_str
from flowtrigger.exceptions import (
    MalformedDocumentError,
    TypeMismatchError,
    UnknownActionTypeError,
)


class RecordContextAction(TriggerAction):
    """Variant that keeps the scheduler context it receives."""

    TYPE = "RecordContextAction"

    def __init__(self, action_id: str, label: str, **kwargs: Any) -> None:
        super().__init__(action_id, **kwargs)
        self.label = label
        self.context: dict = {}

    @property
    def description(self) -> str:
        return f"Record context for {self.label}"

    def to_json(self) -> dict:
        return {"type": self.TYPE, "actionId": self.action_id, "label": self.label}

    @classmethod
    def from_json(cls, document: Mapping[str, Any]) -> RecordContextAction:
        check_type(document, cls.TYPE)
        return cls(require_str(document, "actionId"), require_str(document, "label"))

    def do_action(self) -> dict:
        return dict(self.context)

    def set_context(self, context: Mapping[str, Any]) -> None:
        self.context = dict(context)


def _flow_document(**overrides) -> dict:
    doc = {
        "type": "ExecuteFlowAction",
        "actionId": "act-1",
        "projectId": "7",
        "projectName": "etl",
        "flowName": "daily",
        "submitUser": "alice",
    }
    doc.update(overrides)
    return doc


class TestRegistration:
    def test_default_registry_has_execute_flow(self):
        registry = default_registry()
        assert registry.is_registered("ExecuteFlowAction")
        assert registry.action_types == {"ExecuteFlowAction"}

    def test_duplicate_registration_rejected(self):
        registry = default_registry()
        with pytest.raises(ValueError, match="already registered"):
            registry.register_action(ExecuteFlowAction)

    def test_unregister(self):
        registry = default_registry()
        registry.unregister("ExecuteFlowAction")
        assert not registry.is_registered("ExecuteFlowAction")
        registry.unregister("ExecuteFlowAction")  # no error

    def test_register_action_as_decorator(self):
        registry = ActionRegistry()

        @registry.register_action
        class Decorated(RecordContextAction):
            TYPE = "Decorated"

        assert registry.is_registered("Decorated")

    def test_register_plain_factory(self):
        registry = ActionRegistry()
        registry.register(
            "Alias", lambda doc: RecordContextAction(doc["actionId"], "alias")
        )
        action = registry.create({"type": "Alias", "actionId": "x"})
        assert isinstance(action, RecordContextAction)
        assert action.label == "alias"

    def test_registry_creates_environment_when_none_given(self):
        assert isinstance(ActionRegistry().environment, ActionEnvironment)


class TestCreate:
    def test_dispatches_by_tag(self):
        registry = default_registry()
        registry.register_action(RecordContextAction)
        flow = registry.create(_flow_document())
        other = registry.create(
            {"type": "RecordContextAction", "actionId": "r1", "label": "x"}
        )
        assert isinstance(flow, ExecuteFlowAction)
        assert isinstance(other, RecordContextAction)

    def test_unknown_tag_rejected_before_variant_code(self):
        calls = []
        registry = ActionRegistry()
        registry.register("Known", lambda doc: calls.append(doc))
        with pytest.raises(UnknownActionTypeError) as exc_info:
            registry.create({"type": "Unknown", "actionId": "a"})
        assert exc_info.value.action_type == "Unknown"
        assert calls == []

    def test_missing_type_tag(self):
        with pytest.raises(MalformedDocumentError) as exc_info:
            default_registry().create({"actionId": "a"})
        assert exc_info.value.field == "type"

    def test_non_string_type_tag(self):
        with pytest.raises(MalformedDocumentError):
            default_registry().create({"type": 5})

    def test_non_mapping_document(self):
        with pytest.raises(MalformedDocumentError):
            default_registry().create(["ExecuteFlowAction"])  # type: ignore[arg-type]

    def test_misrouted_document_fails_in_variant(self):
        """A factory registered under the wrong tag still enforces its own tag."""
        registry = ActionRegistry()
        registry.register("Misrouted", ExecuteFlowAction.from_json)
        with pytest.raises(TypeMismatchError):
            registry.create(_flow_document(type="Misrouted"))

    def test_variant_parse_errors_propagate(self):
        with pytest.raises(MalformedDocumentError):
            default_registry().create(_flow_document(projectId="abc"))


class TestBinding:
    def test_created_actions_share_registry_environment(self, environment):
        registry = default_registry(environment)
        first = registry.create(_flow_document(actionId="a"))
        second = registry.create(_flow_document(actionId="b"))
        assert first.environment is environment
        assert second.environment is environment

    def test_created_action_executes(self, registry, gateway):
        registry.create(_flow_document()).do_action()
        assert len(gateway.submissions) == 1

    def test_context_reaches_variant_that_uses_it(self):
        registry = ActionRegistry()
        registry.register_action(RecordContextAction)
        action = registry.create(
            {"type": "RecordContextAction", "actionId": "r1", "label": "x"}
        )
        action.set_context({"execid": 12})
        assert action.do_action() == {"execid": 12}


class TestDocuments:
    def test_documents_round_trip(self, registry):
        actions = [
            registry.create(_flow_document(actionId="a")),
            registry.create(_flow_document(actionId="b", slaOptions=[])),
        ]
        docs = registry.to_documents(actions)
        assert registry.from_documents(docs) == actions

    def test_from_documents_fails_on_first_bad_document(self, registry):
        with pytest.raises(UnknownActionTypeError):
            registry.from_documents([_flow_document(), {"type": "Nope"}])
