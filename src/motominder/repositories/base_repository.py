"""
Generic repository over one ORM model and one persistence context.

Every query is scoped by a mandatory filter: rows belong to the context's
tenant and are not soft-deleted. A row outside that scope does not exist as
far as any method here is concerned.

Mutations follow a check, write, verify sequence and report the outcome as a
`Success` or `Failure` result instead of raising:

    created, status, error = await repository.insert(motorcycle, repository.does_motorcycle_exist)

Repository methods only flush. `save()` commits the unit of work and is meant
to be called once by whoever owns the transaction.

Exceptions are reserved for the unexpected: a statement the store rejects is
rolled back and re-raised as a RepositoryError by `db_error_handler`.
"""

import time
import logging
from datetime import timedelta
from typing import Any, Awaitable, Callable, Generic, Type, TypeVar

from sqlalchemy import Select, false, inspect, select

from motominder.core import constants
from motominder.core.error import Error
from motominder.core.result import Failure, Result, Success
from motominder.core.status import OperationStatus
from motominder.database.base import Base
from motominder.exceptions.base import DuplicateError, InvalidFieldError
from motominder.exceptions.mapper import db_error_handler
from motominder.models.types import utc_now
from .context import PersistenceContext

ModelType = TypeVar("ModelType", bound=Base)

# Caller-supplied checks handed to insert() and update().
ExistsPredicate = Callable[[Any], Awaitable[Result[bool]]]
UniquePredicate = Callable[[Any], Awaitable[bool]]

logger = logging.getLogger(__name__)


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)


class BaseRepository(Generic[ModelType]):
    """
    Generic repository providing tenant-scoped CRUD with post-write verification.

    Type Parameters:
        ModelType: the SQLAlchemy model class this repository manages. It must
        map `id`, `tenant_id`, `is_deleted`, `created_utc` and `modified_utc`.
    """

    REQUIRED_COLUMNS = ("id", "tenant_id", "is_deleted", "created_utc", "modified_utc")

    def __init__(self, model: Type[ModelType], context: PersistenceContext):
        columns = set(inspect(model).columns.keys())
        missing = [c for c in self.REQUIRED_COLUMNS if c not in columns]
        if missing:
            raise InvalidFieldError(
                f"{model.__name__} cannot be managed by a repository; missing column(s): {', '.join(missing)}",
                fields=missing,
            )

        self.model = model
        self.context = context
        self.db = context.session if context is not None else None

    @property
    def model_name(self) -> str:
        return self.model.__name__

    def _extra(self, operation: str, **fields: Any) -> dict[str, Any]:
        return {
            "model": self.model_name,
            "operation": operation,
            "tenant_id": self.context.tenant_id,
            **fields,
        }

    # =================================================================================================================
    # Scoping
    # =================================================================================================================

    def _scoped(self, stmt: Select) -> Select:
        """Apply the mandatory tenant and soft-delete filter to `stmt`."""
        return stmt.where(
            self.model.tenant_id == self.context.tenant_id,
            self.model.is_deleted == false(),
        )

    def _scoped_select(self) -> Select:
        return self._scoped(select(self.model))

    # =================================================================================================================
    # Reads
    # =================================================================================================================

    async def fetch_by_id(self, entity_id: int) -> Result[ModelType | None]:
        """
        Returns:
            Success(entity, FOUND) when a live row with this id exists for the
            tenant, otherwise Success(None, NOT_FOUND).
        """
        async with db_error_handler(self.db, self.model_name):
            result = await self.db.execute(self._scoped_select().where(self.model.id == entity_id))
            entity = result.scalar_one_or_none()

        if entity is None:
            logger.debug("repo.fetch_by_id.not_found", extra=self._extra("fetch_by_id", id=entity_id))
            return Success(value=None, status=OperationStatus.NOT_FOUND)

        logger.debug("repo.fetch_by_id.found", extra=self._extra("fetch_by_id", id=entity_id))
        return Success(value=entity, status=OperationStatus.FOUND)

    async def exists_by_id(self, entity_id: int) -> Result[bool]:
        async with db_error_handler(self.db, self.model_name):
            result = await self.db.execute(
                self._scoped(select(self.model.id)).where(self.model.id == entity_id).limit(1)
            )
            exists = result.scalar_one_or_none() is not None

        return Success(value=exists, status=OperationStatus.FOUND if exists else OperationStatus.NOT_FOUND)

    async def list(self) -> Result[tuple[ModelType, ...]]:
        """
        All live rows for the tenant, in store order. An empty tuple is a
        successful result.
        """
        async with db_error_handler(self.db, self.model_name):
            result = await self.db.execute(self._scoped_select())
            entities = tuple(result.scalars().all())

        logger.debug("repo.list.success", extra=self._extra("list", count=len(entities)))
        return Success(value=entities, status=OperationStatus.OK)

    # =================================================================================================================
    # Writes
    # =================================================================================================================

    async def insert(self, entity: ModelType, does_entity_exist: ExistsPredicate | None) -> Result[ModelType]:
        """
        Insert `entity` for the context's tenant.

        `does_entity_exist(entity)` is awaited twice: before the write (an
        existing match aborts with FOUND and nothing is written) and after the
        flush (no match means the write did not take effect).

        Returns:
            Success(entity, OK) with the store-assigned id, or a Failure with
            INTERNAL_ERROR (no predicate), FOUND (already exists) or
            VERIFICATION_FAILED (read-back found nothing). On any failure after
            the flush the unit of work is rolled back and `entity` is returned
            to its unsaved state.
        """
        operation = "insert"
        if does_entity_exist is None:
            logger.error("repo.insert.missing_predicate", extra=self._extra(operation))
            return Failure.of(
                OperationStatus.INTERNAL_ERROR,
                "The does_entity_exist parameter must be provided to determine whether the entity "
                "already exists in the repository.",
            )

        start = time.perf_counter()
        with self.db.no_autoflush:
            exists, status, error = await does_entity_exist(entity)
        if error:
            return Failure(status=status, error=error)
        if exists:
            logger.info("repo.insert.duplicate_precheck", extra=self._extra(operation))
            return Failure.of(OperationStatus.FOUND, "The entity already exists in the repository.")

        entity.created_utc = utc_now()
        entity.tenant_id = self.context.tenant_id
        if not entity.id:
            # The store assigns ids; the unsaved sentinel must not be written.
            entity.id = None

        try:
            async with db_error_handler(self.db, self.model_name):
                self.db.add(entity)
                await self.context.flush()
        except DuplicateError as exc:
            # Lost the race against a concurrent insert of the same entity.
            # db_error_handler has already rolled the session back.
            self._reset_unsaved(entity)
            logger.info(
                "repo.insert.duplicate_constraint",
                extra=self._extra(operation, fields=exc.fields, constraint=exc.constraint),
            )
            return Failure.of(exc.status, "The entity already exists in the repository.")

        exists, _, _ = await does_entity_exist(entity)
        if not exists:
            logger.warning("repo.insert.verification_failed", extra=self._extra(operation, id=entity.id))
            await self._discard_unit_of_work(entity)
            self._reset_unsaved(entity)
            return Failure.of(
                OperationStatus.VERIFICATION_FAILED,
                "The new entity was not successfully inserted into the repository.",
            )

        logger.info(
            "repo.insert.success",
            extra=self._extra(operation, id=entity.id, duration_ms=_elapsed_ms(start)),
        )
        return Success(value=entity, status=OperationStatus.OK)

    async def update(
        self,
        entity_id: int,
        entity: ModelType,
        is_entity_unique: UniquePredicate | None,
    ) -> Result[ModelType]:
        """
        Persist changes made to `entity`, the row with id `entity_id`.

        The usual caller mutates the tracked entity first. An untracked entity
        carrying the same id is also accepted: only its editable columns are
        copied onto the stored row, never its id, tenant, flags or timestamps.

        This method checks, stamps `modified_utc`, flushes, then re-reads the
        row from the store and compares it to the state that was written. The
        checks run with autoflush disabled so pending changes are not written
        before they pass. A rejected update reloads the tracked entity from the
        store; a failed read-back also rolls the unit of work back. Either way
        a later `save()` cannot commit the rejected edits.

        Returns:
            Success(refetched, OK), or a Failure with NOT_FOUND (no such live
            row), INTERNAL_ERROR (no predicate, `entity.id` differs from
            `entity_id`, or a unique field would clash) or VERIFICATION_FAILED
            (read-back disagreed).
        """
        operation = "update"
        start = time.perf_counter()

        with self.db.no_autoflush:
            found, _, _ = await self.exists_by_id(entity_id)
            if not found:
                logger.info("repo.update.not_found", extra=self._extra(operation, id=entity_id))
                await self._revert(entity)
                return Failure.of(
                    OperationStatus.NOT_FOUND,
                    f"The entity with Id '{entity_id}' could not be found, so it was not updated.",
                )

            if entity.id != entity_id:
                logger.error(
                    "repo.update.id_mismatch",
                    extra=self._extra(operation, id=entity_id, entity_id=entity.id),
                )
                await self._revert(entity)
                return Failure.of(
                    OperationStatus.INTERNAL_ERROR,
                    f"The entity Id '{entity.id}' does not match the Id '{entity_id}' being updated.",
                )

            if is_entity_unique is None:
                logger.error("repo.update.missing_predicate", extra=self._extra(operation, id=entity_id))
                await self._revert(entity)
                return Failure.of(
                    OperationStatus.INTERNAL_ERROR,
                    "The is_entity_unique parameter must be provided to determine whether the entity "
                    "exists and is unique in the repository.",
                )

            if not await is_entity_unique(entity):
                logger.info("repo.update.unique_violation", extra=self._extra(operation, id=entity_id))
                await self._revert(entity)
                return Failure.of(
                    OperationStatus.INTERNAL_ERROR,
                    f"The entity in the repository with Id '{entity_id}' was not updated because "
                    "a unique field constraint would be violated.",
                )

            if not inspect(entity).persistent:
                tracked, _, _ = await self.fetch_by_id(entity_id)
                for column in self.editable_columns:
                    setattr(tracked, column, getattr(entity, column))
                entity = tracked

        entity.modified_utc = self._next_modified_utc(entity)
        expected = entity.snapshot()

        async with db_error_handler(self.db, self.model_name):
            await self.context.flush()
            result = await self.db.execute(
                self._scoped_select()
                .where(self.model.id == entity_id)
                .execution_options(populate_existing=True)
            )
            refetched = result.scalar_one_or_none()

        if refetched is None or not refetched.same_state_as(expected):
            logger.warning("repo.update.verification_failed", extra=self._extra(operation, id=entity_id))
            await self._discard_unit_of_work(entity)
            return Failure.of(
                OperationStatus.VERIFICATION_FAILED,
                f"The entity with Id '{entity_id}' failed to be updated in the repository.",
            )

        logger.info(
            "repo.update.success",
            extra=self._extra(operation, id=entity_id, duration_ms=_elapsed_ms(start)),
        )
        return Success(value=refetched, status=OperationStatus.OK)

    async def delete(self, entity_id: int) -> Result[None]:
        """
        Soft delete: flag the row `is_deleted` and stamp `modified_utc`. The row
        stays in the table but drops out of every scoped query. If the row is
        still visible afterwards the unit of work is rolled back.
        """
        operation = "delete"
        start = time.perf_counter()

        entity, _, _ = await self.fetch_by_id(entity_id)
        if entity is None:
            logger.info("repo.delete.not_found", extra=self._extra(operation, id=entity_id))
            return Failure.of(
                OperationStatus.NOT_FOUND,
                f"The entity with Id '{entity_id}' could not be found, so it was not deleted.",
            )

        entity.is_deleted = True
        entity.modified_utc = self._next_modified_utc(entity)
        async with db_error_handler(self.db, self.model_name):
            await self.context.flush()

        still_there, _, _ = await self.exists_by_id(entity_id)
        if still_there:
            logger.warning("repo.delete.verification_failed", extra=self._extra(operation, id=entity_id))
            await self._discard_unit_of_work(entity)
            return Failure.of(
                OperationStatus.VERIFICATION_FAILED,
                f"The entity with Id '{entity_id}' was not successfully deleted from the repository.",
            )

        logger.info(
            "repo.delete.success",
            extra=self._extra(operation, id=entity_id, duration_ms=_elapsed_ms(start)),
        )
        return Success(value=None, status=OperationStatus.OK)

    async def save(self) -> Result[None]:
        """Commit the unit of work. Store errors surface as RepositoryError."""
        async with db_error_handler(self.db, self.model_name):
            await self.context.commit()

        logger.debug("repo.save.success", extra=self._extra("save"))
        return Success(value=None, status=OperationStatus.OK)

    def validate(self) -> Error | None:
        error = Error()
        if self.context is None:
            error.add("The persistence context cannot be None.")
        else:
            error += self.context.validate()
        if self.model is None:
            error.add("The model cannot be None.")
        return Error.or_none(error)

    # =================================================================================================================
    # Helpers
    # =================================================================================================================

    @property
    def editable_columns(self) -> tuple[str, ...]:
        """Mapped columns a caller may change through update()."""
        return tuple(c for c in inspect(self.model).columns.keys() if c not in self.REQUIRED_COLUMNS)

    async def _revert(self, entity: ModelType) -> None:
        """Reload a tracked entity from the store, dropping edits that were not written."""
        if inspect(entity).persistent:
            await self.db.refresh(entity)

    async def _discard_unit_of_work(self, entity: ModelType) -> None:
        """Roll back everything flushed since the last commit, then reload `entity` if it survived."""
        async with db_error_handler(self.db, self.model_name):
            await self.db.rollback()
            await self._revert(entity)
        logger.info("repo.unit_of_work.discarded", extra=self._extra("rollback"))

    @staticmethod
    def _reset_unsaved(entity: Any) -> None:
        entity.id = constants.INVALID_ENTITY_ID
        entity.tenant_id = constants.INVALID_TENANT_ID
        entity.created_utc = None

    @staticmethod
    def _next_modified_utc(entity: Any):
        """Now, bumped past the previous modification (or creation) time if the clock has not moved."""
        now = utc_now()
        floor = entity.modified_utc or entity.created_utc
        if floor is not None and now <= floor:
            now = floor + timedelta(microseconds=1)
        return now
