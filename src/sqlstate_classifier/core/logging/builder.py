"""
Logging builder: turn Settings into a dictConfig mapping and apply it.

Configuration knobs (on the Settings object):
 - LOG_LEVEL, LOG_FORMAT ("json" | "text"), ENV
 - LOG_TO_STDOUT: console only; otherwise rotating files under LOG_DIR
 - LOG_DIR, LOG_MAX_BYTES, LOG_BACKUP_COUNT: file handler settings
 - ENABLE_SQL_LOGGING: let sqlalchemy.engine log statements at DEBUG
 - LOG_REDACT_STATEMENTS: mask statement text carried in `extra` and sqlalchemy.engine messages
"""

from __future__ import annotations

import logging
import logging.config
from pathlib import Path

from sqlstate_classifier.config.settings import Settings
from sqlstate_classifier.utils.logging import get_project_name

from .filters import CorrelationIdFilter, RedactFilter
from .formatters import ColorFormatter, JsonFormatter
from .handlers import (
    get_console_handler,
    get_error_console_handler,
    get_error_file_handler,
    get_file_handler,
)


def _writes_files(settings: Settings) -> bool:
    return (not settings.LOG_TO_STDOUT) and bool(settings.LOG_DIR)


def make_dict_config(settings: Settings) -> dict:
    """
    Build the dictConfig mapping.

    The mapping includes:
      - formatters: "standard" (colour in text mode) and "json"
      - filters: "correlation_id", "redact"
      - handlers: console plus file/error_file, or console plus error_console
      - loggers: root, sqlstate_classifier, sqlalchemy.engine
    """
    formatters = {
        "standard": {
            "()": ColorFormatter if settings.LOG_FORMAT == "text" else logging.Formatter,
            "format": "%(asctime)s | %(levelname)s | %(name)s | %(correlation_id)s | %(message)s",
        },
        "json": {
            "()": JsonFormatter,
            "env": settings.ENV,
            "service": get_project_name(),
        },
    }

    filters = {
        "correlation_id": {"()": CorrelationIdFilter},
        "redact": {
            "()": RedactFilter,
            "redact_statements": getattr(settings, "LOG_REDACT_STATEMENTS", True),
        },
    }

    handlers: dict[str, dict] = {"console": get_console_handler(settings)}
    if _writes_files(settings):
        handlers["file"] = get_file_handler(settings)
        handlers["error_file"] = get_error_file_handler(settings)
    else:
        handlers["error_console"] = get_error_console_handler(settings)

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": formatters,
        "filters": filters,
        "handlers": handlers,
        "loggers": {
            "": {
                "handlers": list(handlers.keys()),
                "level": settings.LOG_LEVEL,
                "propagate": True,
            },
            "sqlstate_classifier": {
                "level": settings.LOG_LEVEL,
                "propagate": True,
            },
            # statement logging may leak data; off unless asked for
            "sqlalchemy.engine": {
                "level": "DEBUG" if settings.ENABLE_SQL_LOGGING else "WARNING",
                "handlers": ["console"],
                "propagate": False,
            },
        },
    }


def setup_logging(settings: Settings) -> None:
    """
    Create LOG_DIR when logging to files, then apply the dictConfig.
    """
    if _writes_files(settings):
        Path(settings.LOG_DIR).mkdir(parents=True, exist_ok=True)

    logging.config.dictConfig(make_dict_config(settings))
