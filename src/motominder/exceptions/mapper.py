"""
Map database exceptions raised during flush/commit to app-level exceptions.

Repositories wrap every statement that writes with `db_error_handler`:

    async with db_error_handler(self.db, self.model.__name__):
        await self.db.flush()

On any SQLAlchemy error the session is rolled back (the whole unit of work is
discarded) and a sanitized RepositoryError subclass is raised in its place.
"""

import re
import logging
from contextlib import asynccontextmanager

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from .integrity_classifier import (
    classify_integrity_error,
    UniqueConstraintError,
    NotNullConstraintError,
    ForeignKeyConstraintError,
    CheckConstraintError,
)
from .base import DuplicateError, RepositoryError

logger = logging.getLogger(__name__)


def _columns_from_sqlite(msg: str) -> list[str] | None:
    # 'UNIQUE constraint failed: motorcycles.tenant_id, motorcycles.vin'
    m = re.search(r'(?:UNIQUE|NOT NULL) constraint failed: (?P<cols>.+)$', msg, flags=re.IGNORECASE | re.MULTILINE)
    if m:
        return [c.split('.')[-1].strip() for c in re.split(r',\s*', m.group("cols"))]
    return None


def _columns_from_postgres(msg: str) -> list[str] | None:
    # 'null value in column "vin" violates not-null constraint'
    m = re.search(r'null value in column "(?P<col>[^"]+)"', msg, flags=re.IGNORECASE)
    if m:
        return [m.group("col")]
    # 'DETAIL:  Key (tenant_id, vin)=(1, 1HD1...) already exists.'
    m = re.search(r'key \((?P<cols>[^)]+)\)=', msg, flags=re.IGNORECASE)
    if m:
        return [c.strip().strip('"') for c in m.group("cols").split(",")]
    return None


def extract_columns_from_integrity(exc: IntegrityError) -> list[str] | None:
    """Best-effort extraction of the offending column names from the driver message."""
    msg = str(exc.orig) if exc.orig is not None else str(exc)
    return _columns_from_postgres(msg) or _columns_from_sqlite(msg)


def raise_mapped_integrity_error(exc: IntegrityError, model_name: str | None = None) -> None:
    """
    Raise the app-level exception for an IntegrityError, populating `.fields`
    and `.constraint` where the driver exposes them. Raw DB text is only ever
    logged at DEBUG.
    """
    exc_cls, constraint_name = classify_integrity_error(exc)
    columns = extract_columns_from_integrity(exc)
    model_part = model_name or "Record"
    context = {"model": model_part, "fields": columns, "constraint": constraint_name}

    if exc_cls is UniqueConstraintError:
        # Expected under concurrent inserts of the same VIN.
        logger.info("mapper.duplicate_detected", extra=context)
        if columns:
            message = f"{model_part} already exists for field(s): {', '.join(columns)}"
        else:
            message = f"{model_part} already exists (unique constraint)"
        raise DuplicateError(message, fields=columns, constraint=constraint_name) from exc

    if exc_cls is NotNullConstraintError:
        logger.info("mapper.not_null_violation", extra=context)
        raise RepositoryError(
            f"Missing required field(s) for {model_part}", fields=columns, constraint=constraint_name
        ) from exc

    if exc_cls is ForeignKeyConstraintError:
        logger.info("mapper.foreign_key_violation", extra=context)
        raise RepositoryError(
            f"{model_part} foreign key constraint violated", fields=columns, constraint=constraint_name
        ) from exc

    raw = str(exc.orig) if exc.orig is not None else str(exc)
    if exc_cls is CheckConstraintError:
        logger.debug("mapper.check_constraint_failure", extra={**context, "raw": raw})
        raise RepositoryError(
            f"{model_part} business rule violated (check constraint).", constraint=constraint_name
        ) from exc

    logger.warning("mapper.unknown_integrity_error", extra=context)
    logger.debug("mapper.unknown_integrity_raw", extra={"model": model_part, "raw": raw})
    raise RepositoryError(f"{model_part} database integrity error.") from exc


async def _rollback(db: AsyncSession, model_name: str | None) -> None:
    try:
        await db.rollback()
    except SQLAlchemyError:
        logger.exception("mapper.rollback_failed", extra={"model": model_name})


@asynccontextmanager
async def db_error_handler(db: AsyncSession, model_name: str | None = None):
    """
    Roll back and raise a mapped RepositoryError for any SQLAlchemy error
    raised inside the block. Other exceptions propagate untouched.
    """
    try:
        yield
    except IntegrityError as exc:
        await _rollback(db, model_name)
        raise_mapped_integrity_error(exc, model_name)
    except SQLAlchemyError as exc:
        await _rollback(db, model_name)
        logger.exception("mapper.unexpected_db_error", extra={"model": model_name})
        raise RepositoryError(f"Failed to operate on {model_name or 'database'}") from exc
