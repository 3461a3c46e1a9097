"""
Error aggregate used as the non-exception failure representation.

An `Error` is an ordered list of human-readable messages. Validation rules,
repositories, interactors and DTO factories all hand one of these back instead
of raising when a failure is *expected* (bad input, missing row, denied access).

Conventions every caller follows:
    - Messages are appended in the order rules are evaluated; `None` is ignored.
    - Two aggregates combine with `+` (or `Error.merge`); either side may be None.
    - An aggregate with zero messages means "no error". Before returning, callers
      pass it through `Error.or_none()` so an empty-but-present object never
      reaches a caller as a failure signal.

Example:
    error = Error()
    error += invalid_make("Ford")
    error += invalid_year(1998)
    return Error.or_none(error)   # None when every rule passed
"""

from __future__ import annotations

from typing import Iterable, Iterator


class Error:
    """
    Ordered, mergeable collection of failure messages.
    """

    __slots__ = ("_messages",)

    def __init__(self, message: str | None = None, *, messages: Iterable[str | None] | None = None):
        self._messages: list[str] = []
        self.add(message)
        self.add_range(messages)

    # -----------------------------------------------------------------------------------------------------------------
    # Mutation
    # -----------------------------------------------------------------------------------------------------------------

    def add(self, message: str | None) -> None:
        """Append a single message. `None` is silently skipped."""
        if message is None:
            return
        self._messages.append(message)

    def add_range(self, messages: Iterable[str | None] | None) -> None:
        """Append every non-None message from `messages` (a None iterable is a no-op)."""
        if messages is None:
            return
        for message in messages:
            self.add(message)

    # -----------------------------------------------------------------------------------------------------------------
    # Merge
    # -----------------------------------------------------------------------------------------------------------------

    @staticmethod
    def merge(left: Error | None, right: Error | None) -> Error:
        """
        Combine two aggregates into a new one: left's messages, then right's.

        Null-safe on both sides. When both operands are None the result is an
        empty (but non-None) aggregate.
        """
        merged = Error()
        if left is not None:
            merged.add_range(left.messages)
        if right is not None:
            merged.add_range(right.messages)
        return merged

    def __add__(self, other: Error | None) -> Error:
        if other is not None and not isinstance(other, Error):
            return NotImplemented
        return Error.merge(self, other)

    def __radd__(self, other: Error | None) -> Error:
        # Reached for `None + error`.
        if other is not None and not isinstance(other, Error):
            return NotImplemented
        return Error.merge(other, self)

    # -----------------------------------------------------------------------------------------------------------------
    # Read access
    # -----------------------------------------------------------------------------------------------------------------

    @property
    def messages(self) -> list[str]:
        """A copy of the messages, in insertion order."""
        return list(self._messages)

    @staticmethod
    def or_none(error: Error | None) -> Error | None:
        """Return `error` if it carries at least one message, otherwise None."""
        if error is None or len(error) == 0:
            return None
        return error

    def __len__(self) -> int:
        return len(self._messages)

    def __bool__(self) -> bool:
        return bool(self._messages)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._messages))

    def __contains__(self, message: object) -> bool:
        return message in self._messages

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Error):
            return NotImplemented
        return self._messages == other._messages

    __hash__ = None  # mutable

    def __str__(self) -> str:
        return "; ".join(self._messages)

    def __repr__(self) -> str:
        return f"<Error(messages={self._messages!r})>"
