"""Shared test fixtures for flowtrigger.

Provides in-memory SQLite engine and session fixtures, fake collaborators,
and a registry bound to them.
"""

import pytest
from hypothesis import HealthCheck, settings
from sqlalchemy.orm import sessionmaker

from flowtrigger.actions.environment import ActionEnvironment
from flowtrigger.actions.registry import default_registry
from flowtrigger.storage.engine import create_store_engine, init_db
from flowtrigger.storage.repositories import SqliteActionRepository
from tests.fakes import CountingResolver, RecordingGateway, make_project

# Building strategies such as st.emails() is slow on a cold start; don't fail on timing.
settings.register_profile("flowtrigger", suppress_health_check=[HealthCheck.too_slow], deadline=None)
settings.load_profile("flowtrigger")


@pytest.fixture
def engine():
    """In-memory SQLite engine with all tables created."""
    eng = create_store_engine(":memory:")
    init_db(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session(engine):
    """Session with automatic rollback after each test."""
    SessionLocal = sessionmaker(bind=engine, expire_on_commit=False)
    sess = SessionLocal()
    yield sess
    sess.rollback()
    sess.close()


@pytest.fixture
def resolver() -> CountingResolver:
    return CountingResolver([make_project()])


@pytest.fixture
def gateway() -> RecordingGateway:
    return RecordingGateway()


@pytest.fixture
def environment(resolver, gateway) -> ActionEnvironment:
    return ActionEnvironment(project_resolver=resolver, execution_gateway=gateway)


@pytest.fixture
def registry(environment):
    return default_registry(environment)


@pytest.fixture
def action_repo(session, registry) -> SqliteActionRepository:
    return SqliteActionRepository(session, registry)
