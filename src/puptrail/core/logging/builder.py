"""
Logging builder: create and apply a dictConfig logging configuration.

    setup_logging(settings)

is called once at startup (the application entry point, the maintenance utility).
Library code only ever does `logging.getLogger(__name__)`.

This module:
 - builds a dictConfig-compatible mapping from Settings (`make_dict_config`)
 - creates the logs directory when file logging is enabled
 - applies the mapping and adds an OperationIdFilter on the root logger as a
   safety net, so `%(operation_id)s` never fails in a formatter.

Relevant settings: LOG_TO_STDOUT, LOGS_DIR, LOG_FORMAT, LOG_LEVEL, ENABLE_SQL_LOGGING, ENV.
"""

import logging
import logging.config

from puptrail.config.settings import Settings
from puptrail.utils.version import get_project_name

from .formatters import JsonFormatter, ColorFormatter
from .filters import OperationIdFilter, RedactFilter
from .handlers import (
    get_console_handler,
    get_file_handler,
    get_error_file_handler,
    get_error_console_handler,
)


def make_dict_config(settings: Settings) -> dict:
    """
    Build the dictConfig mapping using the provided settings.

    The returned mapping includes:
      - formatters: "standard" (colour in text mode) and "json"
      - filters: "operation_id", "redact"
      - handlers: console, plus file/error_file OR error_console depending on LOG_TO_STDOUT
      - loggers: root, puptrail, sqlalchemy.engine
    """
    formatters = {
        "standard": {
            "()": ColorFormatter if settings.LOG_FORMAT == "text" else logging.Formatter,
            "format": "%(asctime)s | %(levelname)s | %(name)s | %(operation_id)s | %(message)s",
        },
        "json": {
            "()": JsonFormatter,
            "env": settings.ENV,
            "service": get_project_name(),
        },
    }

    filters = {
        "operation_id": {"()": OperationIdFilter},
        "redact": {"()": RedactFilter},
    }

    handlers: dict[str, dict] = {"console": get_console_handler(settings)}

    if not settings.LOG_TO_STDOUT:
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
            # Be cautious with SQL logging (parameters may contain license data)
            "sqlalchemy.engine": {
                "level": "DEBUG" if settings.ENABLE_SQL_LOGGING else "WARNING",
                "handlers": ["console"],
                "propagate": False,
            },
        },
    }


def setup_logging(settings: Settings) -> None:
    """
    Initialize logging from settings.

    Steps:
      1. Ensure LOGS_DIR exists when writing files.
      2. Apply dictConfig(make_dict_config(settings)).
      3. Register an OperationIdFilter on the root logger.
    """
    if not settings.LOG_TO_STDOUT:
        settings.LOGS_DIR.mkdir(parents=True, exist_ok=True)

    logging.config.dictConfig(make_dict_config(settings))

    logging.getLogger().addFilter(OperationIdFilter())
