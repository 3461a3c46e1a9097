import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from motominder.core.status import OperationStatus
from motominder.exceptions import DuplicateError, RepositoryError, db_error_handler
from motominder.exceptions.integrity_classifier import (
    NotNullConstraintError,
    UniqueConstraintError,
    UnknownIntegrityError,
    classify_integrity_error,
)
from motominder.exceptions.mapper import extract_columns_from_integrity


class FakeSession:
    def __init__(self):
        self.rolled_back = False

    async def rollback(self):
        self.rolled_back = True


class FakePgError(Exception):
    sqlstate = "23505"

    class diag:
        constraint_name = "uq_motorcycles_tenant_id_vin_live"


def integrity_error(orig) -> IntegrityError:
    return IntegrityError("INSERT INTO motorcycles ...", {}, orig)


class TestClassifier:

    def test_sqlite_unique_message(self):
        exc = integrity_error(Exception("UNIQUE constraint failed: motorcycles.tenant_id, motorcycles.vin"))

        assert classify_integrity_error(exc) == (UniqueConstraintError, None)
        assert extract_columns_from_integrity(exc) == ["tenant_id", "vin"]

    def test_sqlite_not_null_message(self):
        exc = integrity_error(Exception("NOT NULL constraint failed: motorcycles.vin"))

        assert classify_integrity_error(exc)[0] is NotNullConstraintError
        assert extract_columns_from_integrity(exc) == ["vin"]

    def test_postgres_sqlstate(self):
        exc = integrity_error(FakePgError("duplicate key value violates unique constraint"))

        assert classify_integrity_error(exc) == (UniqueConstraintError, "uq_motorcycles_tenant_id_vin_live")

    def test_postgres_key_detail(self):
        exc = integrity_error(Exception("DETAIL:  Key (tenant_id, vin)=(1, ABC) already exists."))

        assert extract_columns_from_integrity(exc) == ["tenant_id", "vin"]

    def test_unrecognized_message(self):
        exc = integrity_error(Exception("something odd happened"))

        assert classify_integrity_error(exc)[0] is UnknownIntegrityError


@pytest.mark.asyncio
class TestDbErrorHandler:

    async def test_unique_violation_becomes_duplicate_error(self):
        session = FakeSession()
        exc = integrity_error(Exception("UNIQUE constraint failed: motorcycles.tenant_id, motorcycles.vin"))

        with pytest.raises(DuplicateError) as exc_info:
            async with db_error_handler(session, "Motorcycle"):
                raise exc

        assert session.rolled_back
        assert exc_info.value.message == "Motorcycle already exists for field(s): tenant_id, vin"
        assert exc_info.value.status == OperationStatus.FOUND
        assert exc_info.value.__cause__ is exc

    async def test_other_database_errors_become_repository_error(self):
        session = FakeSession()

        with pytest.raises(RepositoryError) as exc_info:
            async with db_error_handler(session, "Motorcycle"):
                raise OperationalError("SELECT 1", {}, Exception("database is locked"))

        assert session.rolled_back
        assert str(exc_info.value) == "Failed to operate on Motorcycle"
        assert exc_info.value.status == OperationStatus.INTERNAL_ERROR

    async def test_non_database_errors_propagate_untouched(self):
        session = FakeSession()

        with pytest.raises(KeyError):
            async with db_error_handler(session, "Motorcycle"):
                raise KeyError("vin")

        assert not session.rolled_back


class TestRepositoryError:

    def test_str_lists_fields_constraint_and_code(self):
        error = DuplicateError("Motorcycle already exists", fields=["vin"], constraint="uq_x")

        assert str(error) == "Motorcycle already exists (fields: vin; constraint: uq_x; code: duplicate)"
        assert error.status == OperationStatus.FOUND

    def test_unknown_code_maps_to_internal_error(self):
        assert RepositoryError("boom").status == OperationStatus.INTERNAL_ERROR
