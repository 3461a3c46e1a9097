"""Tagged result types returned by every repository operation.

A repository call either succeeds or fails; the two cases are distinct types so
"status set but no matching error" and "error set but status OK" cannot be
constructed:

    Success(value=..., status=...)   error is always None
    Failure(status=..., error=...)   value is always None, error is non-empty

`Success` also covers negative lookups that are not errors by themselves, e.g.
`exists_by_id` on a missing id returns `Success(value=False, status=NOT_FOUND)`.

Both types unpack as the `(payload, status, error)` triple:

    entity, status, error = await repository.fetch_by_id(42)

and can be pattern matched:

    match await repository.insert(motorcycle, predicate):
        case Success(value=created):
            ...
        case Failure(status=status, error=error):
            ...
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Iterator, TypeVar

from .error import Error
from .status import OperationStatus

T = TypeVar("T")


@dataclass(frozen=True, slots=True, kw_only=True)
class Success(Generic[T]):
    """Represents a completed operation.

    Attributes:
        value: The payload (entity, list, bool, or None).
        status: Classification of the outcome (OK, FOUND, NOT_FOUND, ...).
    """

    value: T
    status: OperationStatus = OperationStatus.OK

    @property
    def error(self) -> None:
        return None

    @property
    def ok(self) -> bool:
        return True

    def __iter__(self) -> Iterator[Any]:
        return iter((self.value, self.status, None))


@dataclass(frozen=True, slots=True, kw_only=True)
class Failure:
    """Represents an operation that did not take effect.

    Attributes:
        status: Why it failed (NOT_FOUND, FOUND, INTERNAL_ERROR, VERIFICATION_FAILED, ...).
        error: Non-empty aggregate of human-readable messages.
    """

    status: OperationStatus
    error: Error

    def __post_init__(self) -> None:
        if self.status == OperationStatus.OK:
            raise ValueError("A Failure cannot carry the OK status.")
        if self.error is None or len(self.error) == 0:
            raise ValueError("A Failure must carry at least one error message.")

    @classmethod
    def of(cls, status: OperationStatus, message: str) -> Failure:
        """Shorthand for a single-message failure."""
        return cls(status=status, error=Error(message))

    @property
    def value(self) -> None:
        return None

    @property
    def ok(self) -> bool:
        return False

    def __iter__(self) -> Iterator[Any]:
        return iter((None, self.status, self.error))


Result = Success[T] | Failure
