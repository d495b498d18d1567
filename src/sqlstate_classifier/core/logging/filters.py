"""
Logging filters.

CorrelationIdFilter stamps every record with the correlation id of the unit of work
(request, job, transaction) that produced it, so classified database errors can be tied
back to what was running. The id lives in a ContextVar, which follows asyncio tasks
across awaits.

RedactFilter masks secrets passed through `extra={...}` and, optionally, SQL statement
text, which frequently embeds literal values. With statement redaction on, whole
messages from sqlalchemy.engine are masked too.
"""

import contextvars
import logging
from logging import LogRecord

_correlation_id_ctx: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "correlation_id", default=None
)


def set_correlation_id(correlation_id: str | None):
    """
    Set the correlation id for the current context.

    Returns:
        token: pass it to reset_correlation_id() to restore the previous value
    """
    return _correlation_id_ctx.set(correlation_id)


def reset_correlation_id(token) -> None:
    _correlation_id_ctx.reset(token)


def get_correlation_id() -> str | None:
    return _correlation_id_ctx.get()


class CorrelationIdFilter(logging.Filter):
    """
    Guarantee every record has `correlation_id`: an explicit `extra` value wins, then the
    context value, then the "-" sentinel. Never drops a record.
    """

    def filter(self, record: LogRecord) -> bool:
        record.correlation_id = (
            getattr(record, "correlation_id", None) or get_correlation_id() or "-"
        )
        return True


REDACTED = "***REDACTED***"


class RedactFilter(logging.Filter):
    SENSITIVE = {"password", "secret", "token", "access_token", "refresh_token", "authorization", "dsn"}
    STATEMENT_KEYS = {"statement", "sql", "params", "parameters"}
    # these loggers put statements and bound parameters in the message itself
    STATEMENT_LOGGERS = ("sqlalchemy.engine",)

    def __init__(self, name: str = "", redact_statements: bool = True):
        super().__init__(name)
        self.redact_statements = redact_statements

    def filter(self, record: LogRecord) -> bool:
        keys = self.SENSITIVE | self.STATEMENT_KEYS if self.redact_statements else self.SENSITIVE
        for key in list(record.__dict__.keys()):
            if key.lower() in keys:
                record.__dict__[key] = REDACTED
        if self.redact_statements and record.name.startswith(self.STATEMENT_LOGGERS):
            record.msg = REDACTED
            record.args = ()
        return True


__all__ = [
    "set_correlation_id",
    "reset_correlation_id",
    "get_correlation_id",
    "CorrelationIdFilter",
    "RedactFilter",
    "REDACTED",
]
