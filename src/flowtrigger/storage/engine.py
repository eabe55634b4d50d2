"""Database setup for the trigger action store.

Stored actions live in ``trigger_actions``; ``_flowtrigger_meta`` records
the schema version the store was created with. A local SQLite file is the
default backend, with any SQLAlchemy URL accepted in its place.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import Engine, create_engine, event, select
from sqlalchemy.orm import Session, sessionmaker

from flowtrigger.storage.schema import Base, MetaRow

if TYPE_CHECKING:
    from flowtrigger.config import FlowTriggerConfig

SCHEMA_VERSION = "1"

# Applied to every new SQLite connection.
_SQLITE_PRAGMAS = (
    "PRAGMA journal_mode=WAL",
    "PRAGMA busy_timeout=5000",
    "PRAGMA synchronous=NORMAL",
)


def _store_url(db_path: str) -> str:
    if db_path == ":memory:":
        return "sqlite://"
    return f"sqlite:///{db_path}"


def create_store_engine(
    db_path: str = ":memory:",
    *,
    url: str | None = None,
) -> Engine:
    """Create the engine backing the action store.

    Args:
        db_path: SQLite file holding stored actions, or ``":memory:"``
            for a throwaway store. Ignored when *url* is given.
        url: SQLAlchemy URL of an existing database to keep actions in.

    Returns:
        Engine with store pragmas applied to every SQLite connection.
    """
    engine = create_engine(url if url is not None else _store_url(db_path), echo=False)

    if engine.dialect.name == "sqlite":

        @event.listens_for(engine, "connect")
        def _apply_store_pragmas(dbapi_conn, connection_record):  # type: ignore[no-untyped-def]
            cursor = dbapi_conn.cursor()
            for pragma in _SQLITE_PRAGMAS:
                cursor.execute(pragma)
            cursor.close()

    return engine


def engine_from_config(config: FlowTriggerConfig) -> Engine:
    """Create an engine from a FlowTriggerConfig (``db_url`` wins over ``db_path``)."""
    return create_store_engine(config.db_path, url=config.db_url)


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    """Session factory for repositories; loaded rows stay readable after commit."""
    return sessionmaker(bind=engine, expire_on_commit=False)


def init_db(engine: Engine) -> None:
    """Create all tables and record the schema version on a new database."""
    Base.metadata.create_all(engine)

    SessionLocal = create_session_factory(engine)
    with SessionLocal() as session:
        existing = session.execute(
            select(MetaRow).where(MetaRow.key == "schema_version")
        ).scalar_one_or_none()
        if existing is None:
            session.add(MetaRow(key="schema_version", value=SCHEMA_VERSION))
            session.commit()
