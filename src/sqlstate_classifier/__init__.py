"""
SQLSTATE based classification of database failures into a small, vendor neutral taxonomy.

    from sqlstate_classifier import SQLStateConverter, PostgresConstraintNameExtracter

    converter = SQLStateConverter(PostgresConstraintNameExtracter())
    error = converter.convert(exc, statement=sql)
    if error.category is Category.INTEGRITY_VIOLATION:
        ...
"""

from .exceptions import (
    Category,
    ChainedConstraintNameExtracter,
    ClassifiedError,
    ConnectionFailureError,
    ConstraintNameExtracter,
    ConstraintViolationError,
    DataError,
    GenericDatabaseError,
    LockAcquisitionError,
    MySQLConstraintNameExtracter,
    NullConstraintNameExtracter,
    OracleConstraintNameExtracter,
    PessimisticLockError,
    PostgresConstraintNameExtracter,
    QueryTimeoutError,
    SQLGrammarError,
    SQLStateConverter,
    TemplatedConstraintNameExtracter,
    db_error_handler,
    translate_errors,
)

__all__ = [
    "Category",
    "ChainedConstraintNameExtracter",
    "ClassifiedError",
    "ConnectionFailureError",
    "ConstraintNameExtracter",
    "ConstraintViolationError",
    "DataError",
    "GenericDatabaseError",
    "LockAcquisitionError",
    "MySQLConstraintNameExtracter",
    "NullConstraintNameExtracter",
    "OracleConstraintNameExtracter",
    "PessimisticLockError",
    "PostgresConstraintNameExtracter",
    "QueryTimeoutError",
    "SQLGrammarError",
    "SQLStateConverter",
    "TemplatedConstraintNameExtracter",
    "db_error_handler",
    "translate_errors",
]
