"""
SQLSTATE category tables.

A SQLSTATE is a five character code; its first two characters (the "class code")
group related failures. Classification looks at a handful of exact codes first and
falls back to the class code tables below.

All tables are built once at import time and are read-only afterwards.
"""

from enum import Enum
from types import MappingProxyType
from typing import Mapping

from .base import Category

# =================================================================================================================
# Class code tables
# =================================================================================================================

SQL_GRAMMAR_CLASS_CODES = frozenset({
    "07",  # dynamic SQL error
    "20",  # case not found for case statement
    "37",  # syntax error (pre SQL-92 drivers)
    "42",  # syntax error or access rule violation
    "65",  # Oracle
    "S0",  # ODBC 2.x base table / column errors
})

DATA_CLASS_CODES = frozenset({
    "02",  # no data
    "21",  # cardinality violation
    "22",  # data exception
})

INTEGRITY_VIOLATION_CLASS_CODES = frozenset({
    "23",  # integrity constraint violation
    "27",  # triggered data change violation
    "44",  # with check option violation
})

CONNECTION_CLASS_CODES = frozenset({
    "08",  # connection exception
})

# Lookup order is fixed: the first table containing the class code wins.
CLASS_CODE_TABLES: tuple[tuple[Category, frozenset[str]], ...] = (
    (Category.SQL_GRAMMAR, SQL_GRAMMAR_CLASS_CODES),
    (Category.INTEGRITY_VIOLATION, INTEGRITY_VIOLATION_CLASS_CODES),
    (Category.CONNECTION_FAILURE, CONNECTION_CLASS_CODES),
    (Category.DATA_ERROR, DATA_CLASS_CODES),
)


# =================================================================================================================
# Exact code overrides
# =================================================================================================================

class SqlStateCodes(str, Enum):
    SERIALIZATION_FAILURE = "40001"
    ORACLE_DEADLOCK = "61000"
    DERBY_LOCK_TIMEOUT = "40XL1"
    DERBY_LOCK_TIMEOUT_DEADLOCK = "40XL2"
    MYSQL_QUERY_INTERRUPTED = "70100"
    ORACLE_USER_CANCEL = "72000"


EXACT_CODE_CATEGORIES: Mapping[str, Category] = MappingProxyType({
    SqlStateCodes.SERIALIZATION_FAILURE.value: Category.LOCK_ACQUISITION_FAILURE,
    SqlStateCodes.ORACLE_DEADLOCK.value: Category.LOCK_ACQUISITION_FAILURE,
    SqlStateCodes.DERBY_LOCK_TIMEOUT.value: Category.PESSIMISTIC_LOCK_FAILURE,
    SqlStateCodes.DERBY_LOCK_TIMEOUT_DEADLOCK.value: Category.PESSIMISTIC_LOCK_FAILURE,
    SqlStateCodes.MYSQL_QUERY_INTERRUPTED.value: Category.QUERY_TIMEOUT,
    SqlStateCodes.ORACLE_USER_CANCEL.value: Category.QUERY_TIMEOUT,
})


# =================================================================================================================
# Lookups
# =================================================================================================================

def determine_class_code(state_code: str | None) -> str | None:
    """
    Return the two character class code of a SQLSTATE, or None when there is none.
    """
    if state_code is None or len(state_code) < 2:
        return None
    return state_code[:2]


def category_for_exact_code(state_code: str | None) -> Category | None:
    if state_code is None:
        return None
    return EXACT_CODE_CATEGORIES.get(state_code)


def category_for_class_code(class_code: str | None) -> Category | None:
    if class_code is None:
        return None
    for category, class_codes in CLASS_CODE_TABLES:
        if class_code in class_codes:
            return category
    return None


__all__ = [
    "SQL_GRAMMAR_CLASS_CODES",
    "DATA_CLASS_CODES",
    "INTEGRITY_VIOLATION_CLASS_CODES",
    "CONNECTION_CLASS_CODES",
    "CLASS_CODE_TABLES",
    "SqlStateCodes",
    "EXACT_CODE_CATEGORIES",
    "determine_class_code",
    "category_for_exact_code",
    "category_for_class_code",
]
