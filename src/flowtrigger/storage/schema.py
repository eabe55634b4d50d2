"""SQLAlchemy ORM schema for the action store.

Defines the trigger_actions table, which keeps each action's persisted
document as JSON, and _flowtrigger_meta for the schema version.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import JSON, DateTime, Index, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all flowtrigger ORM models."""

    pass


class TriggerActionRow(Base):
    """A persisted trigger action.

    ``document`` holds the exact output of the action's ``to_json()``;
    ``action_type`` duplicates its tag for filtering.
    """

    __tablename__ = "trigger_actions"

    trigger_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    action_id: Mapped[str] = mapped_column(String(128), primary_key=True)
    action_type: Mapped[str] = mapped_column(String(100), nullable=False)
    document: Mapped[dict] = mapped_column(JSON, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)

    __table_args__ = (
        Index("ix_trigger_actions_type", "action_type"),
    )


class MetaRow(Base):
    """Key-value metadata for the store itself (e.g., schema version)."""

    __tablename__ = "_flowtrigger_meta"

    key: Mapped[str] = mapped_column(String(255), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
