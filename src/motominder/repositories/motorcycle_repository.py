"""
Motorcycle repository: the generic tenant-scoped CRUD plus VIN lookups.

VIN comparisons are case-insensitive and, like every query in the base class,
see only the tenant's live (not soft-deleted) rows.
"""

import logging

from sqlalchemy import func, select

from motominder.core.error import Error
from motominder.core.result import Result, Success
from motominder.core.status import OperationStatus
from motominder.exceptions.mapper import db_error_handler
from motominder.models.motorcycle import Motorcycle
from .base_repository import BaseRepository
from .context import PersistenceContext

logger = logging.getLogger(__name__)


class MotorcycleRepository(BaseRepository[Motorcycle]):
    """
    Repository for Motorcycle operations.

    Besides the VIN queries it provides the two predicates the interactors hand
    to `insert()` and `update()`:

        await repository.insert(motorcycle, repository.does_motorcycle_exist)
        await repository.update(motorcycle.id, motorcycle, repository.is_motorcycle_unique)
    """

    def __init__(self, context: PersistenceContext):
        super().__init__(Motorcycle, context)

    def _vin_matches(self, vin: str):
        return func.lower(Motorcycle.vin) == vin.lower()

    async def exists_by_vin(self, vin: str | None) -> Result[bool]:
        """
        Returns:
            Success(True, FOUND) or Success(False, NOT_FOUND).
        """
        if not vin:
            return Success(value=False, status=OperationStatus.NOT_FOUND)

        async with db_error_handler(self.db, self.model_name):
            result = await self.db.execute(
                self._scoped(select(Motorcycle.id)).where(self._vin_matches(vin)).limit(1)
            )
            exists = result.scalar_one_or_none() is not None
        return Success(value=exists, status=OperationStatus.FOUND if exists else OperationStatus.NOT_FOUND)

    async def fetch_by_vin(self, vin: str | None) -> Result[Motorcycle | None]:
        if not vin:
            return Success(value=None, status=OperationStatus.NOT_FOUND)

        async with db_error_handler(self.db, self.model_name):
            result = await self.db.execute(self._scoped_select().where(self._vin_matches(vin)))
            motorcycle = result.scalars().first()
        if motorcycle is None:
            return Success(value=None, status=OperationStatus.NOT_FOUND)
        return Success(value=motorcycle, status=OperationStatus.FOUND)

    async def is_vin_unique(self, vin: str | None, exclude_id: int | None = None) -> Result[bool]:
        """
        Whether no live row other than `exclude_id` already holds `vin`.

        Returns:
            Success(True, NOT_FOUND) when the VIN is free, Success(False, FOUND)
            when another motorcycle holds it.
        """
        if not vin:
            return Success(value=True, status=OperationStatus.NOT_FOUND)

        stmt = self._scoped(select(Motorcycle.id)).where(self._vin_matches(vin))
        if exclude_id is not None:
            stmt = stmt.where(Motorcycle.id != exclude_id)

        async with db_error_handler(self.db, self.model_name):
            result = await self.db.execute(stmt.limit(1))
            taken = result.scalar_one_or_none() is not None
        return Success(value=not taken, status=OperationStatus.FOUND if taken else OperationStatus.NOT_FOUND)

    # Predicates handed to insert() / update().

    async def does_motorcycle_exist(self, motorcycle: Motorcycle) -> Result[bool]:
        return await self.exists_by_vin(motorcycle.vin)

    async def is_motorcycle_unique(self, motorcycle: Motorcycle) -> bool:
        unique, _, _ = await self.is_vin_unique(motorcycle.vin, exclude_id=motorcycle.id)
        if not unique:
            logger.info(
                "repo.motorcycle.vin_taken",
                extra={"model": "Motorcycle", "id": motorcycle.id, "tenant_id": self.context.tenant_id},
            )
        return unique


def new_motorcycle_repository(context: PersistenceContext | None) -> tuple[MotorcycleRepository | None, Error | None]:
    """
    Build a MotorcycleRepository bound to `context`.

    Returns (None, error) when the context is absent or invalid.
    """
    if context is None:
        return None, Error("The persistence context cannot be None.")

    error = context.validate()
    if error:
        return None, error

    repository = MotorcycleRepository(context)
    error = repository.validate()
    if error:
        return None, error
    return repository, None
