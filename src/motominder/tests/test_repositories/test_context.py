import pytest

from motominder.config.settings import Settings
from motominder.repositories.context import PersistenceContext, new_persistence_context


async def test_new_persistence_context_takes_tenant_from_settings(monkeypatch, db_session):
    monkeypatch.setattr(
        "motominder.repositories.context.get_settings",
        lambda: Settings(_env_file=None, TENANT_ID=7),
    )

    context, error = new_persistence_context(db_session)

    assert error is None
    assert isinstance(context, PersistenceContext)
    assert context.session is db_session
    assert context.tenant_id == 7


async def test_explicit_tenant_overrides_settings(db_session):
    context, error = new_persistence_context(db_session, tenant_id=3)

    assert error is None
    assert context.tenant_id == 3


@pytest.mark.parametrize(
    "session_missing, tenant_id, expected",
    [
        (True, 1, ["The database session cannot be None."]),
        (False, -1, ["The TenantId cannot be a negative value."]),
    ],
)
async def test_invalid_context_is_rejected(db_session, session_missing, tenant_id, expected):
    session = None if session_missing else db_session

    context, error = new_persistence_context(session, tenant_id=tenant_id)

    assert context is None
    assert error.messages == expected
