"""Tests for action storage: schema, engine initialization, and SqliteActionRepository.

Covers:
- trigger_actions and _flowtrigger_meta table creation
- Schema version recorded once
- Save / get / list / delete through the registry
- Replacing an existing document
- Corrupted rows surface the registry's parse errors
"""

from __future__ import annotations

from datetime import datetime

import pytest
from sqlalchemy import inspect, select

from flowtrigger.actions.execute_flow import ExecuteFlowAction
from flowtrigger.exceptions import UnknownActionTypeError
from flowtrigger.models.execution import ExecutionOptions, SlaOption
from flowtrigger.storage.engine import SCHEMA_VERSION, create_store_engine, init_db
from flowtrigger.storage.schema import MetaRow, TriggerActionRow


def _make_action(action_id: str = "act-1", **overrides) -> ExecuteFlowAction:
    kwargs = dict(
        project_id=7,
        project_name="etl",
        flow_name="daily",
        submit_user="alice",
    )
    kwargs.update(overrides)
    return ExecuteFlowAction(action_id, **kwargs)


# ===========================================================================
# Schema Tests
# ===========================================================================


class TestSchema:
    def test_tables_created(self, engine):
        table_names = set(inspect(engine).get_table_names())
        assert "trigger_actions" in table_names
        assert "_flowtrigger_meta" in table_names

    def test_schema_version_recorded(self, session):
        row = session.execute(
            select(MetaRow).where(MetaRow.key == "schema_version")
        ).scalar_one()
        assert row.value == SCHEMA_VERSION

    def test_init_db_is_idempotent(self, engine, session):
        init_db(engine)
        rows = session.execute(select(MetaRow)).scalars().all()
        assert len(rows) == 1

    def test_file_backed_engine(self, tmp_path):
        db_path = tmp_path / "actions.db"
        eng = create_store_engine(str(db_path))
        try:
            init_db(eng)
            assert db_path.exists()
        finally:
            eng.dispose()

    def test_file_backed_engine_uses_wal(self, tmp_path):
        eng = create_store_engine(str(tmp_path / "actions.db"))
        try:
            with eng.connect() as conn:
                mode = conn.exec_driver_sql("PRAGMA journal_mode").scalar()
                timeout = conn.exec_driver_sql("PRAGMA busy_timeout").scalar()
            assert mode == "wal"
            assert timeout == 5000
        finally:
            eng.dispose()


# ===========================================================================
# Repository Tests
# ===========================================================================


class TestSaveAndGet:
    def test_save_then_get(self, action_repo):
        action = _make_action(
            execution_options=ExecutionOptions(flow_parameters={"k": "v"}),
            sla_options=[SlaOption(type="FlowSucceed")],
        )
        action_repo.save("trigger-1", action)
        loaded = action_repo.get("trigger-1", "act-1")
        assert loaded == action

    def test_loaded_action_is_bound(self, action_repo, environment):
        action_repo.save("trigger-1", _make_action())
        loaded = action_repo.get("trigger-1", "act-1")
        assert loaded.environment is environment

    def test_get_missing_returns_none(self, action_repo):
        assert action_repo.get("trigger-1", "nope") is None
        assert action_repo.get_document("trigger-1", "nope") is None

    def test_stored_document_is_to_json(self, action_repo):
        action = _make_action()
        action_repo.save("trigger-1", action)
        assert action_repo.get_document("trigger-1", "act-1") == action.to_json()

    def test_row_columns(self, action_repo, session):
        action_repo.save("trigger-1", _make_action())
        row = session.execute(select(TriggerActionRow)).scalar_one()
        assert row.trigger_id == "trigger-1"
        assert row.action_id == "act-1"
        assert row.action_type == "ExecuteFlowAction"
        assert isinstance(row.created_at, datetime)

    def test_absent_options_survive_storage(self, action_repo):
        action_repo.save("trigger-1", _make_action())
        loaded = action_repo.get("trigger-1", "act-1")
        assert loaded.execution_options is None
        assert loaded.sla_options is None

    def test_save_replaces_existing(self, action_repo, session):
        action_repo.save("trigger-1", _make_action())
        action_repo.save("trigger-1", _make_action(flow_name="weekly"))
        rows = session.execute(select(TriggerActionRow)).scalars().all()
        assert len(rows) == 1
        assert action_repo.get("trigger-1", "act-1").flow_name == "weekly"

    def test_same_action_id_in_two_triggers(self, action_repo):
        action_repo.save("trigger-1", _make_action())
        action_repo.save("trigger-2", _make_action(flow_name="weekly"))
        assert action_repo.get("trigger-1", "act-1").flow_name == "daily"
        assert action_repo.get("trigger-2", "act-1").flow_name == "weekly"


class TestListAndDelete:
    def test_list_for_trigger(self, action_repo):
        action_repo.save("trigger-1", _make_action("a"))
        action_repo.save("trigger-1", _make_action("b"))
        action_repo.save("trigger-2", _make_action("c"))
        ids = [a.action_id for a in action_repo.list_for_trigger("trigger-1")]
        assert sorted(ids) == ["a", "b"]

    def test_list_for_unknown_trigger(self, action_repo):
        assert action_repo.list_for_trigger("nothing") == []

    def test_list_all(self, action_repo):
        action_repo.save("trigger-2", _make_action("c"))
        action_repo.save("trigger-1", _make_action("a"))
        entries = action_repo.list_all()
        assert [(t, a.action_id) for t, a in entries] == [
            ("trigger-1", "a"),
            ("trigger-2", "c"),
        ]

    def test_delete(self, action_repo):
        action_repo.save("trigger-1", _make_action())
        assert action_repo.delete("trigger-1", "act-1") is True
        assert action_repo.get("trigger-1", "act-1") is None
        assert action_repo.delete("trigger-1", "act-1") is False


class TestCorruptedRows:
    def test_unknown_type_surfaces_registry_error(self, action_repo, session):
        now = datetime(2024, 1, 1)
        session.add(
            TriggerActionRow(
                trigger_id="trigger-1",
                action_id="bad",
                action_type="Gone",
                document={"type": "Gone", "actionId": "bad"},
                created_at=now,
                updated_at=now,
            )
        )
        session.flush()
        with pytest.raises(UnknownActionTypeError):
            action_repo.get("trigger-1", "bad")
