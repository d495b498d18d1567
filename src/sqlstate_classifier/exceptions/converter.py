"""
SQLSTATE based conversion of database failures into ClassifiedError.

Interpreting a failure from its SQLSTATE is less precise than using the vendor error
code, but it works across drivers. A handful of exact codes that the class code scheme
gets wrong for particular vendors are checked before the class code tables.

Query cancellation is deliberately asymmetric: codes mapping to QUERY_TIMEOUT make
`classify` *raise* QueryTimeoutError instead of returning it. A cancelled query must
interrupt the caller rather than flow through the normal "inspect the returned error and
maybe retry" path.
"""

import logging
from typing import Any

from .base import (
    Category,
    ClassifiedError,
    GenericDatabaseError,
    QueryTimeoutError,
    error_class_for,
)
from .extracters import ConstraintNameExtracter
from .signals import extract_sql_state, extract_statement, extract_vendor_code
from .sqlstate import category_for_class_code, category_for_exact_code, determine_class_code

logger = logging.getLogger(__name__)


class SQLStateConverter:
    """
    Classify database failures from their SQLSTATE.

    The converter holds no state besides the injected extracter, so one instance can be
    shared by any number of threads or tasks.
    """

    def __init__(self, extracter: ConstraintNameExtracter):
        self._extracter = extracter

    @property
    def extracter(self) -> ConstraintNameExtracter:
        return self._extracter

    def classify(
        self,
        state_code: str | None,
        vendor_code: int | None,
        message: str | None,
        statement: str | None,
        cause: Any,
    ) -> ClassifiedError:
        """
        Classify a failure signal.

        Rules, in order:
          1. exact SQLSTATE overrides (serialization failure, vendor deadlock/lock timeouts,
             query cancellation)
          2. class code tables: grammar, integrity, connection, data (first match wins)
          3. `classify_unmatched` for anything else, including an absent or short state

        Returns:
            The ClassifiedError for the failure; never None.

        Raises:
            QueryTimeoutError: when the state code says the query was interrupted or
                cancelled. It is raised instead of returned, chained from `cause` when
                `cause` is an exception.
        """
        category = self._resolve_category(state_code)

        if category is Category.QUERY_TIMEOUT:
            timeout = QueryTimeoutError(message, cause, statement,
                                        state_code=state_code, vendor_code=vendor_code)
            logger.debug("Query cancelled", extra={"sqlstate": state_code, "vendor_code": vendor_code})
            if isinstance(cause, BaseException):
                raise timeout from cause
            raise timeout

        if category is None:
            logger.debug("Unmatched SQLSTATE, using fallback",
                         extra={"sqlstate": state_code, "vendor_code": vendor_code})
            return self.classify_unmatched(cause, message, statement,
                                           state_code=state_code, vendor_code=vendor_code)

        constraint_name = None
        if category is Category.INTEGRITY_VIOLATION:
            constraint_name = self._extracter.extract_constraint_name(cause)
            if constraint_name is None:
                logger.debug("Constraint name not recoverable", extra={"sqlstate": state_code})

        logger.debug("Classified database error",
                     extra={"sqlstate": state_code, "category": category.value, "constraint": constraint_name})

        return error_class_for(category)(
            message,
            cause,
            statement,
            state_code=state_code,
            vendor_code=vendor_code,
            constraint_name=constraint_name,
        )

    def classify_unmatched(self, cause: Any, message: str | None, statement: str | None, *,
                           state_code: str | None = None, vendor_code: int | None = None) -> ClassifiedError:
        """
        Handle a failure no rule recognised. Override to pick another default.

        The raw state and vendor codes are passed by keyword so overrides can keep them on
        whatever error they build.
        """
        return GenericDatabaseError(message, cause, statement, state_code=state_code, vendor_code=vendor_code)

    def convert(self, exc: BaseException, message: str | None = None, statement: str | None = None) -> ClassifiedError:
        """
        Classify a driver or SQLAlchemy exception.

        SQLSTATE and vendor code are read from the exception; the statement defaults to
        the one SQLAlchemy recorded on it.
        """
        if statement is None:
            statement = extract_statement(exc)
        return self.classify(
            extract_sql_state(exc),
            extract_vendor_code(exc),
            message,
            statement,
            exc,
        )

    @staticmethod
    def _resolve_category(state_code: str | None) -> Category | None:
        if state_code is None:
            return None
        category = category_for_exact_code(state_code)
        if category is not None:
            return category
        return category_for_class_code(determine_class_code(state_code))


__all__ = ["SQLStateConverter"]
