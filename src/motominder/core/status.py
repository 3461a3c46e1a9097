"""
Closed set of outcome classifications returned alongside every repository and
interactor result.

The numeric values mirror common HTTP status codes so a presentation layer can
map them one-to-one (OK -> 200, NOT_AUTHENTICATED -> 401, ...). That mapping is
a naming convention only; nothing in this package performs it.

Note that FOUND doubles as a *failure* status for "insert target already
exists" (a uniqueness violation), and as a plain success status for lookups.
"""

from __future__ import annotations

from enum import IntEnum


class OperationStatus(IntEnum):
    OK = 200
    CREATED = 201
    NO_CONTENT = 204
    FOUND = 302
    BAD_REQUEST = 400
    NOT_AUTHENTICATED = 401
    NOT_AUTHORIZED = 403
    NOT_FOUND = 404
    INTERNAL_ERROR = 500
    # The store accepted a write but reading it back disagreed with it.
    VERIFICATION_FAILED = 502

    @property
    def description(self) -> str:
        """CamelCase display name, e.g. `NOT_AUTHENTICATED` -> "NotAuthenticated"."""
        return "".join(part.capitalize() for part in self.name.split("_"))

    @classmethod
    def is_defined(cls, value: object) -> bool:
        """True when `value` is (or equals the value of) a member of this enum."""
        if isinstance(value, cls):
            return True
        if isinstance(value, bool) or not isinstance(value, int):
            return False
        return value in cls._value2member_map_
