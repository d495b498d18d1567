"""
Pull the raw failure signal (SQLSTATE, vendor error code) out of driver exceptions.

Drivers disagree on where they keep it:
  - SQLAlchemy wraps DBAPI exceptions in DBAPIError and keeps the original in `.orig`
  - psycopg2 exposes `pgcode`, psycopg 3 and asyncpg expose `sqlstate`
  - mysql-connector exposes `sqlstate` and `errno`; PyMySQL / MySQLdb put the errno in args[0]
  - pyodbc puts the SQLSTATE string in args[0]
  - cx_Oracle / oracledb keep an error object with a numeric `code` in args[0]
  - sqlite3 (3.11+) exposes `sqlite_errorcode` and no SQLSTATE at all
"""

import logging
import re
from typing import Any, Iterator

from sqlalchemy.exc import DBAPIError

logger = logging.getLogger(__name__)

_SQLSTATE_RE = re.compile(r"^[0-9A-Z]{5}$")

# guard against pathological / cyclic __cause__ chains
_MAX_CHAIN_DEPTH = 10


def unwrap(exc: Any) -> Any:
    """Return the DBAPI exception behind a SQLAlchemy DBAPIError, else `exc` itself."""
    if isinstance(exc, DBAPIError) and exc.orig is not None:
        return exc.orig
    return exc


def _iter_chain(exc: Any) -> Iterator[Any]:
    seen: set[int] = set()
    current = exc
    while current is not None and id(current) not in seen and len(seen) < _MAX_CHAIN_DEPTH:
        seen.add(id(current))
        yield unwrap(current)
        current = getattr(current, "__cause__", None)


def _sql_state_of(exc: Any) -> str | None:
    for attr in ("sqlstate", "pgcode"):
        value = getattr(exc, attr, None)
        if isinstance(value, str) and value:
            return value

    # pyodbc: ('42S02', '[42S02] [Microsoft]...')
    args = getattr(exc, "args", None) or ()
    if args and isinstance(args[0], str) and _SQLSTATE_RE.match(args[0]):
        return args[0]
    return None


def _vendor_code_of(exc: Any) -> int | None:
    for attr in ("errno", "code", "sqlite_errorcode"):
        value = getattr(exc, attr, None)
        if isinstance(value, int) and not isinstance(value, bool):
            return value

    args = getattr(exc, "args", None) or ()
    if not args:
        return None
    first = args[0]
    if isinstance(first, int) and not isinstance(first, bool):
        return first
    # cx_Oracle / oracledb: args[0] is an _Error object carrying `.code`
    code = getattr(first, "code", None)
    if isinstance(code, int) and not isinstance(code, bool):
        return code
    return None


def extract_sql_state(exc: Any) -> str | None:
    """
    Return the SQLSTATE reported for `exc`, following wrapped and chained exceptions
    until one carries a state.
    """
    for candidate in _iter_chain(exc):
        state = _sql_state_of(candidate)
        if state is not None:
            return state

    logger.debug("No SQLSTATE found on exception", extra={"exc_type": type(exc).__name__})
    return None


def extract_vendor_code(exc: Any) -> int | None:
    """Return the vendor specific numeric error code for `exc`, if any."""
    for candidate in _iter_chain(exc):
        code = _vendor_code_of(candidate)
        if code is not None:
            return code
    return None


def extract_statement(exc: Any) -> str | None:
    """Return the SQL text SQLAlchemy attached to a StatementError."""
    statement = getattr(exc, "statement", None)
    return statement if isinstance(statement, str) else None


__all__ = [
    "unwrap",
    "extract_sql_state",
    "extract_vendor_code",
    "extract_statement",
]
