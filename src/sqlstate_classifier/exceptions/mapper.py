import logging
from contextlib import asynccontextmanager, contextmanager

from sqlalchemy.exc import DBAPIError

from .base import Category
from .converter import SQLStateConverter

logger = logging.getLogger(__name__)

_CALLER_CATEGORIES = frozenset({
    Category.SQL_GRAMMAR,
    Category.DATA_ERROR,
    Category.INTEGRITY_VIOLATION,
})


def raise_classified_error(converter: SQLStateConverter, exc: DBAPIError, statement: str | None = None) -> None:
    """
    Classify a SQLAlchemy DBAPIError and raise the result, chained from `exc`.
    QueryTimeoutError raised by the converter itself propagates unchanged.
    """
    classified = converter.convert(exc, statement=statement)

    # Caller-side mistakes at INFO; connection, lock and unknown failures at WARNING.
    level = logging.INFO if classified.category in _CALLER_CATEGORIES else logging.WARNING
    logger.log(
        level,
        "mapper.classified_error",
        extra={
            "category": classified.category.value,
            "sqlstate": classified.state_code,
            "constraint": classified.constraint_name,
        },
    )
    raise classified from exc


# -----------------------
# Context managers to DRY error handling around sessions
# -----------------------
@contextmanager
def translate_errors(converter: SQLStateConverter, session=None, statement: str | None = None):
    """
    Usage:
        with translate_errors(converter, session):
            session.execute(...)
    Rolls the session back on a DBAPIError and raises the classified error instead.
    """
    try:
        yield
    except DBAPIError as exc:
        if session is not None:
            try:
                session.rollback()
            except Exception:
                logger.exception("Failed to rollback session after database error")
        raise_classified_error(converter, exc, statement)


@asynccontextmanager
async def db_error_handler(session, converter: SQLStateConverter, statement: str | None = None):
    """
    Async counterpart of `translate_errors` for AsyncSession:
        async with db_error_handler(self.db, converter):
            ... DB ops that may raise DBAPIError ...
    """
    try:
        yield
    except DBAPIError as exc:
        if session is not None:
            try:
                await session.rollback()
            except Exception:
                logger.exception("Failed to rollback session after database error")
        raise_classified_error(converter, exc, statement)
