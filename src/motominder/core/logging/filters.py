"""
Logging filters.

RequestIdFilter attaches a per-request identifier (request_id) to every
`logging.LogRecord`. Interactors bind a fresh id for the duration of
`handle()`, so every repository log line emitted while serving one use-case
call can be correlated. The id lives in a `contextvars.ContextVar`, which
survives `await` boundaries and stays isolated between concurrent tasks.

RedactFilter scrubs attributes with sensitive names that were passed through
`extra={...}` before any handler formats them.

Usage:
    token = set_request_id("3f1c...")
    try:
        logger.info("interactor.post.start")
    finally:
        reset_request_id(token)
"""

import logging
from logging import LogRecord
import contextvars

_request_id_ctx: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "request_id", default=None
)


def set_request_id(request_id: str | None) -> contextvars.Token:
    """
    Set the request id in the current context and return the token to allow reset.
    """
    return _request_id_ctx.set(request_id)


def reset_request_id(token: contextvars.Token) -> None:
    """
    Restore the request id that was current before the matching set_request_id() call.
    """
    _request_id_ctx.reset(token)


def get_request_id() -> str | None:
    return _request_id_ctx.get()


class RequestIdFilter(logging.Filter):
    """
    Guarantees every LogRecord has a `request_id` attribute.

    Precedence: an explicit `extra={"request_id": ...}` on the record, then the
    contextvar, then the sentinel "-" (so `%(request_id)s` never raises KeyError).
    Always returns True; it annotates, it never drops records.
    """

    def filter(self, record: LogRecord) -> bool:
        record.request_id = (
            getattr(record, "request_id", None) or get_request_id() or "-"
        )
        return True


class RedactFilter(logging.Filter):
    SENSITIVE = {"password", "secret", "token", "access_token", "refresh_token", "authorization", "db_url"}

    def filter(self, record: LogRecord) -> bool:
        for key in list(record.__dict__.keys()):
            if key.lower() in self.SENSITIVE:
                record.__dict__[key] = "***REDACTED***"
        return True
