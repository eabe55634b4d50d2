"""Action repository -- persists trigger actions as JSON documents.

Rows are rebuilt through an ActionRegistry, so every loaded action is
bound to the registry's environment and a corrupted row surfaces as the
registry's parse error.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from sqlalchemy import and_, select
from sqlalchemy.orm import Session

from flowtrigger.storage.schema import TriggerActionRow

if TYPE_CHECKING:
    from flowtrigger.actions.protocols import TriggerAction
    from flowtrigger.actions.registry import ActionRegistry


def _now() -> datetime:
    """Naive UTC timestamp for SQLite storage."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class ActionRepository(ABC):
    """Abstract interface for trigger action storage."""

    @abstractmethod
    def save(self, trigger_id: str, action: TriggerAction) -> None:
        """Insert an action, or replace the stored document of an existing one."""
        ...

    @abstractmethod
    def get(self, trigger_id: str, action_id: str) -> TriggerAction | None:
        """Load one action. Returns None if not found."""
        ...

    @abstractmethod
    def get_document(self, trigger_id: str, action_id: str) -> dict | None:
        """Return the raw stored document. Returns None if not found."""
        ...

    @abstractmethod
    def list_for_trigger(self, trigger_id: str) -> list[TriggerAction]:
        """Load every action of a trigger, ordered by creation time."""
        ...

    @abstractmethod
    def list_all(self) -> list[tuple[str, TriggerAction]]:
        """Load every stored action as (trigger_id, action) pairs."""
        ...

    @abstractmethod
    def delete(self, trigger_id: str, action_id: str) -> bool:
        """Delete one action. Returns True if a row was removed."""
        ...


class SqliteActionRepository(ActionRepository):
    """SQLAlchemy implementation of action storage.

    Uses SQLAlchemy 2.0-style queries and only flushes; committing is the
    caller's business.
    """

    def __init__(self, session: Session, registry: ActionRegistry) -> None:
        self._session = session
        self._registry = registry

    @property
    def registry(self) -> ActionRegistry:
        return self._registry

    def _get_row(self, trigger_id: str, action_id: str) -> TriggerActionRow | None:
        stmt = select(TriggerActionRow).where(
            and_(
                TriggerActionRow.trigger_id == trigger_id,
                TriggerActionRow.action_id == action_id,
            )
        )
        return self._session.execute(stmt).scalar_one_or_none()

    def save(self, trigger_id: str, action: TriggerAction) -> None:
        document = action.to_json()
        now = _now()
        row = self._get_row(trigger_id, action.action_id)
        if row is None:
            row = TriggerActionRow(
                trigger_id=trigger_id,
                action_id=action.action_id,
                action_type=action.action_type,
                document=document,
                created_at=now,
                updated_at=now,
            )
            self._session.add(row)
        else:
            row.action_type = action.action_type
            row.document = document
            row.updated_at = now
        self._session.flush()

    def get(self, trigger_id: str, action_id: str) -> TriggerAction | None:
        row = self._get_row(trigger_id, action_id)
        if row is None:
            return None
        return self._registry.create(row.document)

    def get_document(self, trigger_id: str, action_id: str) -> dict | None:
        row = self._get_row(trigger_id, action_id)
        return dict(row.document) if row is not None else None

    def list_for_trigger(self, trigger_id: str) -> list[TriggerAction]:
        stmt = (
            select(TriggerActionRow)
            .where(TriggerActionRow.trigger_id == trigger_id)
            .order_by(TriggerActionRow.created_at, TriggerActionRow.action_id)
        )
        rows = self._session.execute(stmt).scalars().all()
        return [self._registry.create(row.document) for row in rows]

    def list_all(self) -> list[tuple[str, TriggerAction]]:
        stmt = select(TriggerActionRow).order_by(
            TriggerActionRow.trigger_id, TriggerActionRow.created_at, TriggerActionRow.action_id
        )
        rows = self._session.execute(stmt).scalars().all()
        return [(row.trigger_id, self._registry.create(row.document)) for row in rows]

    def delete(self, trigger_id: str, action_id: str) -> bool:
        row = self._get_row(trigger_id, action_id)
        if row is None:
            return False
        self._session.delete(row)
        self._session.flush()
        return True
