"""
Core pytest configuration.

Installs the package logging configuration for the session and provides the shared
converter / driver-error fixtures. The stand-in classes themselves live in
tests/test_fixtures/driver_fixtures.py.
"""

from __future__ import annotations

import logging

# Quiet noisy third-party loggers before anything imports them.
for _name in ("sqlalchemy", "sqlalchemy.engine", "asyncio"):
    logging.getLogger(_name).setLevel(logging.WARNING)

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from sqlstate_classifier.config import get_settings
from sqlstate_classifier.core.logging.builder import setup_logging
from sqlstate_classifier.exceptions import SQLStateConverter
from sqlstate_classifier.tests.test_fixtures.driver_fixtures import FakeDriverError, RecordingExtracter


@pytest.fixture(scope="session", autouse=True)
def configure_logging():
    """
    Install the package logging configuration once for the whole session.
    caplog keeps working: pytest re-attaches its capture handler for every test phase.
    """
    setup_logging(get_settings())
    yield


@pytest.fixture()
def recording_extracter() -> RecordingExtracter:
    return RecordingExtracter("FK_ORDER_CUSTOMER")


@pytest.fixture()
def converter(recording_extracter: RecordingExtracter) -> SQLStateConverter:
    return SQLStateConverter(recording_extracter)


@pytest.fixture()
def integrity_error() -> IntegrityError:
    """SQLAlchemy IntegrityError wrapping a psycopg2-like foreign key violation."""
    orig = FakeDriverError(
        'insert or update on table "orders" violates foreign key constraint "fk_orders_customer"',
        pgcode="23503",
        constraint_name="fk_orders_customer",
    )
    return IntegrityError("INSERT INTO orders (customer_id) VALUES (%(customer_id)s)", {"customer_id": 7}, orig)


@pytest.fixture()
def cancelled_error() -> OperationalError:
    """SQLAlchemy OperationalError wrapping MySQL's 'query execution was interrupted'."""
    orig = FakeDriverError("Query execution was interrupted", sqlstate="70100", errno=1317)
    return OperationalError("SELECT SLEEP(100)", None, orig)
