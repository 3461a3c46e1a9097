"""
Repository-level exceptions.

Expected outcomes (entity missing, entity already present, verification
mismatch) are returned as `Failure` results, never raised. These exceptions
cover the unexpected: the store rejected a statement, the session could not
commit, or a repository was wired to a model it cannot serve.
"""

from typing import Iterable

from motominder.core.status import OperationStatus


class RepositoryError(Exception):
    """
    Base exception for repository errors.

    - message: human-friendly message (safe to show to callers)
    - fields: optional list of field names related to the error (e.g. ['vin'])
    - constraint: optional DB constraint name (for logs only)
    - error_code: canonical short code (e.g. 'duplicate', 'invalid_field')
    """

    ERROR_CODE_TO_STATUS = {
        "duplicate": OperationStatus.FOUND,
        "invalid_field": OperationStatus.BAD_REQUEST,
    }

    def __init__(self, message: str, *, fields: Iterable[str] | None = None,
                 constraint: str | None = None, error_code: str | None = None):
        super().__init__(message)
        self.message = message
        self.fields = list(fields) if fields else None
        self.constraint = constraint
        self.error_code = error_code

    def __str__(self) -> str:
        parts = []
        if self.fields:
            parts.append(f"fields: {', '.join(self.fields)}")
        if self.constraint:
            parts.append(f"constraint: {self.constraint}")
        if self.error_code:
            parts.append(f"code: {self.error_code}")
        if parts:
            return f"{self.message} ({'; '.join(parts)})"
        return self.message

    @property
    def status(self) -> OperationStatus:
        """The operation status a caller reports when it turns this error into a Failure."""
        return self.ERROR_CODE_TO_STATUS.get(self.error_code, OperationStatus.INTERNAL_ERROR)


class DuplicateError(RepositoryError):
    def __init__(self, message: str, *, fields: Iterable[str] | None = None, constraint: str | None = None):
        super().__init__(message, fields=fields, constraint=constraint, error_code="duplicate")


class InvalidFieldError(RepositoryError):
    """Raised when a repository is bound to a model missing a column it relies on."""

    def __init__(self, message: str, *, fields: Iterable[str] | None = None):
        super().__init__(message, fields=fields, error_code="invalid_field")


__all__ = [
    "RepositoryError",
    "DuplicateError",
    "InvalidFieldError",
]
