"""
Handler factories for logging.dictConfig.

Each function returns a handler configuration dict; nothing here opens files or
streams. The builder (builder.py) registers them under fixed names:

| name            | when                          | where                         |
| --------------- | ----------------------------- | ----------------------------- |
| `console`       | always                        | stderr, LOG_FORMAT formatter  |
| `file`          | LOG_TO_STDOUT is False        | `<LOGS_DIR>/app.log`          |
| `error_file`    | LOG_TO_STDOUT is False        | `<LOGS_DIR>/errors.log`, JSON |
| `error_console` | LOG_TO_STDOUT is True         | stderr, ERROR only, JSON      |

Every handler carries the `operation_id` and `redact` filters, which must be
declared in the dictConfig "filters" section.
"""

from puptrail.config.settings import Settings

HANDLER_FILTERS = ["operation_id", "redact"]


def get_console_handler(settings: Settings) -> dict:
    return {
        "class": "logging.StreamHandler",
        # "json" and "standard" are both declared by the builder
        "formatter": "json" if settings.LOG_FORMAT == "json" else "standard",
        "level": settings.LOG_LEVEL,
        "filters": list(HANDLER_FILTERS),
    }


def get_file_handler(settings: Settings) -> dict:
    return {
        "class": "logging.handlers.RotatingFileHandler",
        "formatter": "json" if settings.LOG_FORMAT == "json" else "standard",
        "level": settings.LOG_LEVEL,
        "filename": str(settings.LOGS_DIR / "app.log"),
        "maxBytes": settings.LOG_MAX_BYTES,
        "backupCount": settings.LOG_BACKUP_COUNT,
        "encoding": "utf-8",
        "filters": list(HANDLER_FILTERS),
    }


def get_error_file_handler(settings: Settings) -> dict:
    """Errors only, always JSON, in a separate file that is easy to attach to a bug report."""
    return {
        "class": "logging.handlers.RotatingFileHandler",
        "formatter": "json",
        "level": "ERROR",
        "filename": str(settings.LOGS_DIR / "errors.log"),
        "maxBytes": settings.LOG_MAX_BYTES,
        "backupCount": settings.LOG_BACKUP_COUNT,
        "encoding": "utf-8",
        "filters": list(HANDLER_FILTERS),
    }


def get_error_console_handler(settings: Settings) -> dict:
    return {
        "class": "logging.StreamHandler",
        "formatter": "json",
        "level": "ERROR",
        "filters": list(HANDLER_FILTERS),
    }
