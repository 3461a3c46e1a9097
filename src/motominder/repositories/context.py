"""
Persistence context: the async session a repository works against, plus the
tenant every query is scoped to.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from motominder.config.settings import get_settings
from motominder.core import constants
from motominder.core.error import Error


class PersistenceContext:
    """
    Pairs an AsyncSession with a tenant id.

    One context is one unit of work: repositories built on it only flush, and
    the owner of the unit of work (an interactor, via `repository.save()`)
    decides when to commit.
    """

    def __init__(self, session: AsyncSession | None, tenant_id: int = constants.INVALID_TENANT_ID):
        self.session = session
        self.tenant_id = tenant_id

    def validate(self) -> Error | None:
        error = Error()
        if self.session is None:
            error.add("The database session cannot be None.")
        if self.tenant_id is None or self.tenant_id < 0:
            error.add("The TenantId cannot be a negative value.")
        return Error.or_none(error)

    async def flush(self) -> None:
        await self.session.flush()

    async def commit(self) -> None:
        await self.session.commit()

    def __repr__(self) -> str:
        return f"<PersistenceContext(tenant_id={self.tenant_id!r})>"


def new_persistence_context(
    session: AsyncSession | None, tenant_id: int | None = None
) -> tuple[PersistenceContext | None, Error | None]:
    """
    Build a validated context for `session`. When `tenant_id` is not given the
    tenant comes from Settings.TENANT_ID.
    """
    if tenant_id is None:
        tenant_id = get_settings().TENANT_ID
    context = PersistenceContext(session, tenant_id=tenant_id)
    error = context.validate()
    if error:
        return None, error
    return context, None
