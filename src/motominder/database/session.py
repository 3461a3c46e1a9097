"""
Engine and session construction.

Nothing is created at import time; callers (an application entry point, the
test fixtures) build the engine explicitly:

    engine = create_engine()                 # URL and echo from Settings
    await init_models(engine)                # CREATE TABLE ... for every model
    session_factory = create_session_factory(engine)

    async with session_factory() as session:
        context, error = new_persistence_context(session)   # tenant from Settings.TENANT_ID
"""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    create_async_engine,
    async_sessionmaker,
    AsyncSession,
)
from sqlalchemy.pool import StaticPool

from motominder.config.settings import get_settings
from .base import Base


def create_engine(url: str | None = None, echo: bool | None = None) -> AsyncEngine:
    """
    Create the AsyncEngine for `url` (defaults to Settings.DATABASE_URL).

    An in-memory SQLite URL gets a StaticPool so every session shares the one
    connection that holds the database; otherwise the database would vanish
    between checkouts.
    """
    settings = get_settings()
    url = url or settings.DATABASE_URL
    echo = settings.SQLALCHEMY_ECHO if echo is None else echo

    if url.startswith("sqlite") and (url.endswith("://") or ":memory:" in url):
        return create_async_engine(
            url,
            echo=echo,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )

    return create_async_engine(
        url,
        echo=echo,
        pool_pre_ping=True,  # Enables connection health checks
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # expire_on_commit=False keeps committed entities readable without another round trip.
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def init_models(engine: AsyncEngine) -> None:
    """Create every table registered on Base.metadata (no-op for existing tables)."""
    # Importing the models package registers the mapped classes on Base.metadata.
    import motominder.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

