"""SQL-backed store for persisted trigger actions."""

from flowtrigger.storage.engine import (
    create_session_factory,
    create_store_engine,
    engine_from_config,
    init_db,
)
from flowtrigger.storage.repositories import ActionRepository, SqliteActionRepository

__all__ = [
    "ActionRepository",
    "SqliteActionRepository",
    "create_session_factory",
    "create_store_engine",
    "engine_from_config",
    "init_db",
]
