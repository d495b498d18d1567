"""
Formatters for the logging stack.

  - JsonFormatter: one JSON object per line for log collectors; carries service, env,
    version and correlation_id, plus any `extra` fields (classification logs put
    `sqlstate`, `category` and `constraint` there).
  - ColorFormatter: compact ANSI-coloured lines for local terminals.
"""

import json
import logging
from logging import LogRecord
from typing import Any

from sqlstate_classifier.utils.logging import get_project_version

PROJECT_VERSION = get_project_version()

# LogRecord attributes that are never treated as `extra` fields.
_RESERVED = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", (), None)).keys()
) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """
    Structured JSON formatter.

    Never raises: extras that are not JSON-serializable are converted with str().
    """

    def __init__(self, *, env: str | None = None, service: str = "sqlstate-classifier", datefmt: str | None = None):
        super().__init__(datefmt=datefmt)
        self.env = env
        self.service = service

    def format(self, record: LogRecord) -> str:
        log_record: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "pathname": record.pathname,
            "lineno": record.lineno,
            "correlation_id": getattr(record, "correlation_id", "-"),
            "service": self.service,
            "env": self.env,
            "version": PROJECT_VERSION,
        }

        if record.exc_info:
            log_record["exc_info"] = self.formatException(record.exc_info)
        if record.stack_info:
            log_record["stack_info"] = self.formatStack(record.stack_info)

        for k, v in record.__dict__.items():
            if k in log_record or k in _RESERVED or k.startswith("_"):
                continue
            try:
                json.dumps(v)
                log_record[k] = v
            except (TypeError, ValueError):
                log_record[k] = str(v)

        return json.dumps(log_record, ensure_ascii=False, default=str)


class ColorFormatter(logging.Formatter):
    """
    TIMESTAMP | LEVEL | LOGGER | CORRELATION_ID | MESSAGE, with the level coloured.
    """

    COLOR_CODES = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[1;41m",
        "RESET": "\033[0m",
    }

    def format(self, record: LogRecord) -> str:
        color = self.COLOR_CODES.get(record.levelname, "")
        reset = self.COLOR_CODES["RESET"]
        timestamp = self.formatTime(record, self.datefmt)

        line = (
            f"{timestamp} | {color}{record.levelname:<8}{reset} | "
            f"{record.name:<40} | "
            f"{getattr(record, 'correlation_id', '-'):<10} | "
            f"{record.getMessage()}"
        )

        sqlstate = getattr(record, "sqlstate", None)
        if sqlstate:
            line += f" [sqlstate={sqlstate}]"

        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)

        return line


__all__ = ["JsonFormatter", "ColorFormatter"]
