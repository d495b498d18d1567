# sqlstate_classifier/
# │
# ├── exceptions/
# │   ├── __init__.py
# │   ├── base.py          # Category enum and the ClassifiedError hierarchy
# │   ├── sqlstate.py      # Class code tables and exact code overrides
# │   ├── signals.py       # SQLSTATE / vendor code extraction from driver exceptions
# │   ├── extracters.py    # Vendor specific constraint-name extracters
# │   ├── converter.py     # SQLStateConverter: the classifier
# │   └── mapper.py        # Session helpers raising classified errors
from .base import (
    Category,
    ClassifiedError,
    ConnectionFailureError,
    ConstraintViolationError,
    DataError,
    GenericDatabaseError,
    LockAcquisitionError,
    PessimisticLockError,
    QueryTimeoutError,
    SQLGrammarError,
    error_class_for,
)
from .converter import SQLStateConverter
from .extracters import (
    ChainedConstraintNameExtracter,
    ConstraintNameExtracter,
    MySQLConstraintNameExtracter,
    NullConstraintNameExtracter,
    OracleConstraintNameExtracter,
    PostgresConstraintNameExtracter,
    TemplatedConstraintNameExtracter,
)
from .mapper import db_error_handler, translate_errors
from .signals import extract_sql_state, extract_vendor_code
from .sqlstate import determine_class_code

__all__ = [
    "Category",
    "ClassifiedError",
    "ConnectionFailureError",
    "ConstraintViolationError",
    "DataError",
    "GenericDatabaseError",
    "LockAcquisitionError",
    "PessimisticLockError",
    "QueryTimeoutError",
    "SQLGrammarError",
    "error_class_for",
    "SQLStateConverter",
    "ChainedConstraintNameExtracter",
    "ConstraintNameExtracter",
    "MySQLConstraintNameExtracter",
    "NullConstraintNameExtracter",
    "OracleConstraintNameExtracter",
    "PostgresConstraintNameExtracter",
    "TemplatedConstraintNameExtracter",
    "db_error_handler",
    "translate_errors",
    "extract_sql_state",
    "extract_vendor_code",
    "determine_class_code",
]
