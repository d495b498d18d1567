import logging

from sqlstate_classifier.core.logging.filters import (
    REDACTED,
    CorrelationIdFilter,
    RedactFilter,
    reset_correlation_id,
    set_correlation_id,
)


def make_record(**extra):
    # name, level, pathname, lineno, msg, args, exc_info
    record = logging.LogRecord("test", logging.INFO, __file__, 1, "classified %s", ("error",), None)
    record.__dict__.update(extra)
    return record


def test_correlation_id_defaults_to_dash():
    token = set_correlation_id(None)
    try:
        rec = make_record()
        assert CorrelationIdFilter().filter(rec) is True
        assert rec.correlation_id == "-"
    finally:
        reset_correlation_id(token)


def test_correlation_id_uses_contextvar():
    token = set_correlation_id("job-42")
    try:
        rec = make_record()
        CorrelationIdFilter().filter(rec)
        assert rec.correlation_id == "job-42"
    finally:
        reset_correlation_id(token)


def test_correlation_id_respects_record_extra():
    token = set_correlation_id("context-id")
    try:
        rec = make_record(correlation_id="explicit")
        CorrelationIdFilter().filter(rec)
        assert rec.correlation_id == "explicit"
    finally:
        reset_correlation_id(token)


def test_redact_masks_secrets_and_statements():
    rec = make_record(password="hunter2", statement="INSERT INTO users VALUES ('a@b.com')", sqlstate="23505")

    assert RedactFilter().filter(rec) is True

    assert rec.password == REDACTED
    assert rec.statement == REDACTED
    assert rec.sqlstate == "23505"


def test_redact_can_keep_statements():
    rec = make_record(password="hunter2", sql="SELECT 1")
    RedactFilter(redact_statements=False).filter(rec)
    assert rec.password == REDACTED
    assert rec.sql == "SELECT 1"


def test_redact_masks_sqlalchemy_engine_messages():
    rec = logging.LogRecord(
        "sqlalchemy.engine.Engine", logging.INFO, __file__, 1,
        "[%s] %r", ("generated in 0.001s", ("a@b.com",)), None,
    )

    RedactFilter().filter(rec)

    assert rec.getMessage() == REDACTED


def test_redact_keeps_sqlalchemy_engine_messages_when_statements_allowed():
    rec = logging.LogRecord(
        "sqlalchemy.engine.Engine", logging.INFO, __file__, 1, "SELECT %s", ("users.email",), None,
    )

    RedactFilter(redact_statements=False).filter(rec)

    assert rec.getMessage() == "SELECT users.email"
