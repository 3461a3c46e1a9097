"""
The Motorcycle entity.

A Motorcycle is both the domain entity and its ORM mapping. Lifecycle:

    motorcycle, error = Motorcycle.new_motorcycle("Honda", "Shadow", 2006, vin)
    # id == 0, tenant_id == 0, created_utc is None: not yet persisted
    await repository.insert(motorcycle, repository.does_motorcycle_exist)
    # id > 0, tenant_id stamped from the persistence context, created_utc set

Rows are never physically removed; `is_deleted` marks a soft-deleted row and
every repository query filters it out.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import Boolean, Index, Integer, String, text
from sqlalchemy.orm import Mapped, mapped_column

from motominder.core import constants
from motominder.core.error import Error
from motominder.database.base import Base
from motominder.validators.entity_validators import validate_motorcycle_fields, validate_non_id_fields
from .types import UTCDateTime

# Fields that make up a Motorcycle's observable state, in declaration order.
STATE_FIELDS = (
    "id",
    "tenant_id",
    "is_deleted",
    "make",
    "model",
    "year",
    "vin",
    "created_utc",
    "modified_utc",
)

# Fields a caller may change on an existing row.
EDITABLE_FIELDS = ("make", "model", "year", "vin")


class Motorcycle(Base):
    """
    SQLAlchemy model for a Motorcycle, partitioned by tenant.
    """
    __tablename__ = "motorcycles"
    __table_args__ = (
        # One live row per VIN within a tenant; soft-deleted rows do not count.
        Index(
            "uq_motorcycles_tenant_id_vin_live",
            "tenant_id",
            "vin",
            unique=True,
            sqlite_where=text("is_deleted = 0"),
            postgresql_where=text("NOT is_deleted"),
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    tenant_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)

    is_deleted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    make: Mapped[str] = mapped_column(String(constants.MAX_MAKE_LENGTH), nullable=False)
    model: Mapped[str] = mapped_column(String(constants.MAX_MODEL_LENGTH), nullable=False)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    vin: Mapped[str] = mapped_column(String(constants.VIN_LENGTH), nullable=False)

    # Set once by the repository on insert.
    created_utc: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False)

    # Set by the repository on every update and on soft delete.
    modified_utc: Mapped[datetime | None] = mapped_column(UTCDateTime(), nullable=True)

    @classmethod
    def new_motorcycle(
        cls,
        make: str | None,
        model: str | None,
        year: int | None,
        vin: str | None,
    ) -> tuple[Motorcycle | None, Error | None]:
        """
        Build an unsaved Motorcycle after validating its fields.

        Returns (motorcycle, None) on success, or (None, error) listing every
        violated field rule. The id and tenant are left at the "unassigned"
        sentinels; the repository fills them on insert.
        """
        error = validate_non_id_fields(make, model, year, vin)
        if error:
            return None, error

        motorcycle = cls(
            id=constants.INVALID_ENTITY_ID,
            tenant_id=constants.INVALID_TENANT_ID,
            is_deleted=False,
            make=make,
            model=model,
            year=year,
            vin=vin,
            created_utc=None,
            modified_utc=None,
        )
        return motorcycle, None

    def validate(self) -> Error | None:
        return validate_motorcycle_fields(
            self.id, self.tenant_id, self.make, self.model, self.year, self.vin
        )

    def update_fields(self, source: Motorcycle) -> None:
        """Copy the editable fields (make, model, year, vin) from `source`."""
        for name in EDITABLE_FIELDS:
            setattr(self, name, getattr(source, name))

    def snapshot(self) -> dict[str, Any]:
        return {name: getattr(self, name) for name in STATE_FIELDS}

    def same_state_as(self, other: Motorcycle | dict[str, Any] | None) -> bool:
        """
        Structural equality over STATE_FIELDS.

        `other` may be another Motorcycle or a `snapshot()` dict. Python
        equality (`==`) stays identity-based so the session's identity map is
        unaffected.
        """
        if other is None:
            return False
        theirs = other if isinstance(other, dict) else other.snapshot()
        return self.snapshot() == theirs

    def to_dict(self) -> dict[str, Any]:
        """JSON-friendly rendering; datetimes as ISO-8601 strings."""
        data = self.snapshot()
        for name in ("created_utc", "modified_utc"):
            if data[name] is not None:
                data[name] = data[name].isoformat()
        return data

    def __repr__(self) -> str:
        return (
            f"<Motorcycle(id={self.id!r}, tenant_id={self.tenant_id!r}, make={self.make!r}, "
            f"model={self.model!r}, year={self.year!r}, vin={self.vin!r}, is_deleted={self.is_deleted!r})>"
        )
