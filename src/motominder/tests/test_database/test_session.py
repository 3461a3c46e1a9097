import pytest
from sqlalchemy import inspect
from sqlalchemy.pool import StaticPool

from motominder.database.session import create_engine, create_session_factory, init_models


@pytest.mark.parametrize("url", ["sqlite+aiosqlite://", "sqlite+aiosqlite:///:memory:"])
async def test_in_memory_sqlite_shares_one_connection(url):
    engine = create_engine(url, echo=False)
    try:
        assert isinstance(engine.pool, StaticPool)
    finally:
        await engine.dispose()


async def test_file_sqlite_uses_a_regular_pool(tmp_path):
    engine = create_engine(f"sqlite+aiosqlite:///{tmp_path / 'moto.db'}", echo=False)
    try:
        assert not isinstance(engine.pool, StaticPool)
    finally:
        await engine.dispose()


async def test_init_models_creates_the_motorcycles_table(async_engine):
    async with async_engine.connect() as conn:
        tables = await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())
        indexes = await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_indexes("motorcycles"))

    assert "motorcycles" in tables
    assert any(ix["name"] == "uq_motorcycles_tenant_id_vin_live" and ix["unique"] for ix in indexes)


async def test_init_models_is_idempotent(async_engine):
    await init_models(async_engine)


async def test_session_factory_keeps_objects_after_commit(async_engine):
    factory = create_session_factory(async_engine)

    assert factory.kw["expire_on_commit"] is False
