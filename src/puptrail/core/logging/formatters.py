"""
Custom logging formatters.

  - JsonFormatter: one JSON object per line, for the rotating files and for tools
    that ingest the logs. Non-serializable extras are converted to strings.
  - ColorFormatter: compact ANSI-coloured lines for an interactive terminal.

The builder (builder.py) picks between them from `Settings.LOG_FORMAT`.
"""

import json
import logging
from typing import Any
from logging import LogRecord
from puptrail.utils.version import get_project_version

PROJECT_VERSION = get_project_version()

# LogRecord attributes that are not "extras"
_RESERVED = set(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """
    Structured JSON formatter.

    Emits timestamp, level, logger, message, pathname, lineno, operation_id,
    service, env and version, plus exception text and any `extra={...}` keys.
    Never raises: values json cannot encode fall back to `str()`.
    """

    def __init__(self, *, env: str | None = None, service: str = "puptrail", datefmt: str | None = None):
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
            "operation_id": getattr(record, "operation_id", "-"),
            "service": self.service,
            "env": self.env,
            "version": PROJECT_VERSION,
        }

        if record.exc_info:
            log_record["exc_info"] = self.formatException(record.exc_info)
        if record.stack_info:
            log_record["stack_info"] = self.formatStack(record.stack_info)

        extras = {
            k: v
            for k, v in record.__dict__.items()
            if k not in log_record and k not in _RESERVED and not k.startswith("_")
        }
        for k, v in extras.items():
            try:
                json.dumps(v)
                log_record[k] = v
            except (TypeError, ValueError):
                log_record[k] = str(v)

        return json.dumps(log_record, ensure_ascii=False, default=str)


class ColorFormatter(logging.Formatter):
    """
    Development-friendly coloured formatter:
    TIMESTAMP | LEVEL | LOGGER | OPERATION_ID | MESSAGE
    """

    COLOR_CODES = {
        "DEBUG": "\033[36m",      # cyan
        "INFO": "\033[32m",       # green
        "WARNING": "\033[33m",    # yellow
        "ERROR": "\033[31m",      # red
        "CRITICAL": "\033[1;41m", # bold on red
        "RESET": "\033[0m",
    }

    def __init__(self, fmt: str | None = None, datefmt: str | None = None) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)

    def format(self, record: LogRecord) -> str:
        color = self.COLOR_CODES.get(record.levelname, "")
        reset = self.COLOR_CODES["RESET"]
        timestamp = self.formatTime(record, self.datefmt)

        line = (
            f"{timestamp} | {color}{record.levelname:<8}{reset} | "
            f"{record.name:<32} | "
            f"{getattr(record, 'operation_id', '-'):<12} | "
            f"{record.getMessage()}"
        )

        if record.exc_info:
            line = line + "\n" + self.formatException(record.exc_info)

        return line
