"""
Core pytest configuration for the whole suite.

Only the essentials live here: logging, the database engine and session, and
the persistence context. Domain fixtures are defined in tests/test_fixtures/
and imported at the bottom of this module so every test can use them.
"""

from __future__ import annotations

import logging
from typing import AsyncGenerator

# -------------------------------
# Early logging tuning
# -------------------------------
# Quiet noisy third-party loggers before anything imports them.
NOISY_LOGGERS = (
    "faker",
    "faker.factory",
    "sqlalchemy",
    "sqlalchemy.engine",
    "sqlalchemy.engine.Engine",
    "asyncio",
    "aiosqlite",
)
for _name in NOISY_LOGGERS:
    logging.getLogger(_name).setLevel(logging.WARNING)

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from motominder.config import get_settings
from motominder.core.logging.builder import setup_logging
from motominder.database.session import create_engine, create_session_factory, init_models
from motominder.repositories.context import PersistenceContext
from .test_fixtures.repository_fixtures import TEST_TENANT_ID

# Every test gets its own private in-memory database.
TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest.fixture(scope="session", autouse=True)
def configure_logging():
    """
    Install the package's dictConfig logging once for the session, so the
    formatters and filters the code relies on are active in every test.
    pytest re-adds its capture handler for each test phase, so `caplog` keeps working.
    """
    setup_logging(get_settings())
    yield


# ------------------------------------------------------------------------------------------------
# DATABASE FIXTURES
# ------------------------------------------------------------------------------------------------


@pytest.fixture()
async def async_engine() -> AsyncGenerator[AsyncEngine, None]:
    engine = create_engine(TEST_DATABASE_URL, echo=False)
    await init_models(engine)

    yield engine

    await engine.dispose()


@pytest.fixture()
async def db_session(async_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """
    A session on the per-test database. Repositories may commit through it;
    the whole database is discarded with the engine afterwards.
    """
    session_factory = create_session_factory(async_engine)
    async with session_factory() as session:
        yield session


@pytest.fixture()
def persistence_context(db_session: AsyncSession) -> PersistenceContext:
    return PersistenceContext(db_session, tenant_id=TEST_TENANT_ID)


# Domain fixtures
from .test_fixtures.repository_fixtures import (  # noqa: E402
    base_repo,
    motorcycle_repository,
    other_tenant_repository,
    make_random_motorcycle,
    insert_motorcycle,
    inserted_motorcycle,
)
from .test_fixtures.use_case_fixtures import (  # noqa: E402
    admin_auth_service,
    unauthenticated_auth_service,
    unauthorized_auth_service,
    mock_repository,
)

__all__ = [
    "base_repo",
    "motorcycle_repository",
    "other_tenant_repository",
    "make_random_motorcycle",
    "insert_motorcycle",
    "inserted_motorcycle",
    "admin_auth_service",
    "unauthenticated_auth_service",
    "unauthorized_auth_service",
    "mock_repository",
]
