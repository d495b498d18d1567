"""
Classified database errors.

Every classification produces exactly one of the exceptions below. They are ordinary
`Exception` subclasses so callers can raise them, but the converter *returns* them
(except for QueryTimeoutError, see converter.py).
"""

from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping

# canonical failure taxonomy


class Category(str, Enum):
    SQL_GRAMMAR = "sql_grammar"
    DATA_ERROR = "data_error"
    INTEGRITY_VIOLATION = "integrity_violation"
    CONNECTION_FAILURE = "connection_failure"
    LOCK_ACQUISITION_FAILURE = "lock_acquisition_failure"
    PESSIMISTIC_LOCK_FAILURE = "pessimistic_lock_failure"
    QUERY_TIMEOUT = "query_timeout"
    GENERIC = "generic"


class ClassifiedError(Exception):
    """
    Base class for classified database errors.

    - message: optional caller-supplied message
    - cause: the original failure, kept verbatim for downstream inspection
    - statement: optional SQL text that was executing when the failure happened
    - state_code / vendor_code: the raw signal the classification was made from
    - constraint_name: violated constraint (only set for integrity violations)

    All attributes are read-only once constructed.
    """

    category: Category = Category.GENERIC

    def __init__(self, message: str | None, cause: Any, statement: str | None = None, *,
                 state_code: str | None = None, vendor_code: int | None = None,
                 constraint_name: str | None = None):
        super().__init__(message if message is not None else self.category.value)
        self._message = message
        self._cause = cause
        self._statement = statement
        self._state_code = state_code
        self._vendor_code = vendor_code
        self._constraint_name = constraint_name

    def __setattr__(self, name: str, value: Any) -> None:
        # public names, including the class-level category, cannot be rebound on an instance
        if not name.startswith("_"):
            raise AttributeError(f"{type(self).__name__}.{name} is read-only")
        super().__setattr__(name, value)

    @property
    def message(self) -> str | None:
        return self._message

    @property
    def cause(self) -> Any:
        return self._cause

    @property
    def statement(self) -> str | None:
        return self._statement

    @property
    def state_code(self) -> str | None:
        return self._state_code

    @property
    def vendor_code(self) -> int | None:
        return self._vendor_code

    @property
    def constraint_name(self) -> str | None:
        return self._constraint_name

    def __str__(self) -> str:
        base = self._message or str(self._cause) or self.category.value
        parts = []
        if self._state_code:
            parts.append(f"sqlstate: {self._state_code}")
        if self._vendor_code is not None:
            parts.append(f"code: {self._vendor_code}")
        if self._constraint_name:
            parts.append(f"constraint: {self._constraint_name}")
        if self._statement:
            parts.append(f"sql: {self._statement}")
        if parts:
            return f"{base} ({'; '.join(parts)})"
        return base

    def to_payload(self) -> dict:
        """
        Return a JSON-serializable dict describing the classification.

        The raw cause is left out; use `.cause` when the driver exception is needed.
        """
        payload: dict[str, Any] = {"category": self.category.value}
        if self._message is not None:
            payload["detail"] = self._message
        if self._state_code is not None:
            payload["sqlstate"] = self._state_code
        if self._vendor_code is not None:
            payload["vendor_code"] = self._vendor_code
        if self._statement is not None:
            payload["statement"] = self._statement
        if self._constraint_name is not None:
            payload["constraint"] = self._constraint_name
        return payload


class SQLGrammarError(ClassifiedError):
    """Invalid SQL: syntax errors, unknown tables/columns, access rule violations."""
    category = Category.SQL_GRAMMAR


class DataError(ClassifiedError):
    """Bad data: truncation, out-of-range values, cardinality violations."""
    category = Category.DATA_ERROR


class ConstraintViolationError(ClassifiedError):
    """Integrity constraint violated. `constraint_name` is best-effort."""
    category = Category.INTEGRITY_VIOLATION


class ConnectionFailureError(ClassifiedError):
    """Connection could not be established or was lost."""
    category = Category.CONNECTION_FAILURE


class LockAcquisitionError(ClassifiedError):
    """Serialization failure or deadlock."""
    category = Category.LOCK_ACQUISITION_FAILURE


class PessimisticLockError(ClassifiedError):
    """A lock could not be obtained within the requested time."""
    category = Category.PESSIMISTIC_LOCK_FAILURE


class QueryTimeoutError(ClassifiedError):
    """Query interrupted or cancelled. Raised by the converter, never returned."""
    category = Category.QUERY_TIMEOUT


class GenericDatabaseError(ClassifiedError):
    """Fallback for failures no rule recognises."""
    category = Category.GENERIC


ERROR_CLASS_BY_CATEGORY: Mapping[Category, type[ClassifiedError]] = MappingProxyType({
    cls.category: cls
    for cls in (
        SQLGrammarError,
        DataError,
        ConstraintViolationError,
        ConnectionFailureError,
        LockAcquisitionError,
        PessimisticLockError,
        QueryTimeoutError,
        GenericDatabaseError,
    )
})


def error_class_for(category: Category) -> type[ClassifiedError]:
    return ERROR_CLASS_BY_CATEGORY[category]


__all__ = [
    "Category",
    "ClassifiedError",
    "SQLGrammarError",
    "DataError",
    "ConstraintViolationError",
    "ConnectionFailureError",
    "LockAcquisitionError",
    "PessimisticLockError",
    "QueryTimeoutError",
    "GenericDatabaseError",
    "error_class_for",
]
