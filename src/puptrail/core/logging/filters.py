"""
Logging filters

Operation ID filter and helpers for logging.

A unit of work against the store (see `database.session.session_scope`) stamps a
short operation id into a context variable. `OperationIdFilter` copies it onto every
`LogRecord`, so all lines logged while creating an adoption, seeding the store, etc.
can be grepped together.

- The filter guarantees that any formatter referencing `%(operation_id)s` will not
  KeyError: each record gets either the real id or the sentinel "-".
- `RedactFilter` masks values of sensitive keys passed through `extra={...}`
  (license keys, signatures, machine ids) before any handler formats them.
"""

import logging
from logging import LogRecord
import contextvars

_operation_id_ctx: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "operation_id", default=None
)


def set_operation_id(operation_id: str | None):
    """
    Set the operation id in the current context and return the token to allow reset.
    """
    return _operation_id_ctx.set(operation_id)


def reset_operation_id(token):
    """
    Reset the contextvar to the previously saved token returned by set_operation_id().
    """
    _operation_id_ctx.reset(token)


def get_operation_id() -> str | None:
    return _operation_id_ctx.get()


class OperationIdFilter(logging.Filter):
    """
    Logging filter that guarantees every LogRecord has an `operation_id` attribute.

    Precedence: an explicit `extra={"operation_id": ...}`, then the context variable,
    then "-". Always returns True; it only annotates.
    """

    def filter(self, record: LogRecord) -> bool:
        record.operation_id = (
            getattr(record, "operation_id", None) or get_operation_id() or "-"
        )
        return True


class RedactFilter(logging.Filter):
    SENSITIVE = {"license_key", "signature", "machine_id", "password", "secret", "token"}
    MASK = "***REDACTED***"

    def filter(self, record: LogRecord) -> bool:
        for key in list(record.__dict__.keys()):
            if key.lower() in self.SENSITIVE:
                record.__dict__[key] = self.MASK
        return True
