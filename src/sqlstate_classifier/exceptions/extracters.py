"""
Vendor specific recovery of the violated constraint's name.

The converter only calls an extracter for integrity violations, and only with the raw
failure. Extracters are best-effort: returning None is always acceptable.
"""

import logging
import re
from abc import ABC, abstractmethod
from typing import Any, Iterable, Protocol, runtime_checkable

from .signals import unwrap

logger = logging.getLogger(__name__)


@runtime_checkable
class ConstraintNameExtracter(Protocol):
    def extract_constraint_name(self, cause: Any) -> str | None:
        ...


def _message_of(cause: Any) -> str:
    orig = unwrap(cause)
    return str(orig) if orig is not None else ""


class NullConstraintNameExtracter:
    """Extracter for databases whose messages never name the constraint."""

    def extract_constraint_name(self, cause: Any) -> str | None:
        return None


class TemplatedConstraintNameExtracter(ABC):
    """
    Base for extracters that cut the name out of the error message between a start
    and an end marker. Subclasses implement `extract_constraint_name`.
    """

    @staticmethod
    def extract_using_template(message: str | None, template_start: str, template_end: str) -> str | None:
        """
        Return the text between `template_start` and the next `template_end`.

        A missing end marker takes the rest of the message.
        """
        if not message:
            return None
        start = message.find(template_start)
        if start < 0:
            return None
        start += len(template_start)
        end = message.find(template_end, start)
        if end < 0:
            end = len(message)
        return message[start:end] or None

    @abstractmethod
    def extract_constraint_name(self, cause: Any) -> str | None:
        ...


class PostgresConstraintNameExtracter:
    """
    Postgres: prefer the structured diagnostics psycopg exposes, then the message.
      'duplicate key value violates unique constraint "uq_users_email"'
      'insert or update on table "orders" violates foreign key constraint "fk_orders_customer"'
    """

    _VIOLATES_RE = re.compile(r'violates (?:[\w-]+ )*?constraint "(?P<name>[^"]+)"', flags=re.IGNORECASE)

    def extract_constraint_name(self, cause: Any) -> str | None:
        orig = unwrap(cause)
        diag = getattr(orig, "diag", None)
        constraint_name = getattr(diag, "constraint_name", None) if diag else None
        if constraint_name:
            return constraint_name

        # asyncpg keeps it directly on the exception
        constraint_name = getattr(orig, "constraint_name", None)
        if isinstance(constraint_name, str) and constraint_name:
            return constraint_name

        m = self._VIOLATES_RE.search(_message_of(cause))
        if m:
            return m.group("name")
        return None


class MySQLConstraintNameExtracter(TemplatedConstraintNameExtracter):
    """
    MySQL / MariaDB:
      "Duplicate entry 'a@b.com' for key 'uq_users_email'"
      "... a foreign key constraint fails (`db`.`orders`, CONSTRAINT `fk_orders_customer` FOREIGN KEY ...)"
    """

    def extract_constraint_name(self, cause: Any) -> str | None:
        msg = _message_of(cause)
        name = self.extract_using_template(msg, "CONSTRAINT `", "`")
        if name:
            return name
        return self.extract_using_template(msg, "for key '", "'")


class OracleConstraintNameExtracter(TemplatedConstraintNameExtracter):
    """
    Oracle:
      'ORA-00001: unique constraint (APP.UQ_USERS_EMAIL) violated'
      'ORA-02291: integrity constraint (APP.FK_ORDERS_CUSTOMER) violated - parent key not found'
    """

    def extract_constraint_name(self, cause: Any) -> str | None:
        return self.extract_using_template(_message_of(cause), "constraint (", ")")


class ChainedConstraintNameExtracter:
    """Ask several extracters in turn and keep the first name found."""

    def __init__(self, extracters: Iterable[ConstraintNameExtracter]):
        self._extracters = tuple(extracters)

    def extract_constraint_name(self, cause: Any) -> str | None:
        for extracter in self._extracters:
            name = extracter.extract_constraint_name(cause)
            if name:
                return name
        logger.debug("No extracter recognised the constraint name",
                     extra={"extracters": [type(e).__name__ for e in self._extracters]})
        return None


__all__ = [
    "ConstraintNameExtracter",
    "NullConstraintNameExtracter",
    "TemplatedConstraintNameExtracter",
    "PostgresConstraintNameExtracter",
    "MySQLConstraintNameExtracter",
    "OracleConstraintNameExtracter",
    "ChainedConstraintNameExtracter",
]
