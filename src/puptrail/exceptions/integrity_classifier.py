r"""
Two levels of exception handling
================================

1. Constraint-specific errors (low-level, technical classification)

    ConstraintViolationError
    ├── UniqueConstraintError
    ├── NotNullConstraintError
    ├── ForeignKeyConstraintError
    ├── CheckConstraintError
    └── UnknownIntegrityError

   These only label *what failed in the store*. They are produced by
   `classify_integrity_error()` and consumed by `mapper.py`; they are never raised
   to callers of the repositories.

2. App-level errors (`base.py`: DuplicateError, IntegrityViolationError, ...)

   These are what repositories raise and what the UI / maintenance code catches.

| Constraint-level (internal) | -> | App-level (external)          |
| --------------------------- | -- | ----------------------------- |
| `UniqueConstraintError`     | -> | `DuplicateError`              |
| `NotNullConstraintError`    | -> | `ValidationError`             |
| `ForeignKeyConstraintError` | -> | `IntegrityViolationError`     |
| `CheckConstraintError`      | -> | `IntegrityViolationError`     |
"""
import logging
from enum import Enum
from typing import Type
from sqlalchemy.exc import IntegrityError
from .base import RepositoryError

logger = logging.getLogger(__name__)

# =================================================================================================================
# Constraint-specific exceptions
# =================================================================================================================


class ConstraintViolationError(RepositoryError):
    """Base for integrity/constraint violations (subclass of RepositoryError)."""
    pass


class UniqueConstraintError(ConstraintViolationError):
    """Unique constraint / duplicate value."""
    pass


class NotNullConstraintError(ConstraintViolationError):
    """NOT NULL violation (missing required field)."""
    pass


class ForeignKeyConstraintError(ConstraintViolationError):
    """Foreign key constraint violated (dangling reference or restricted delete)."""
    pass


class CheckConstraintError(ConstraintViolationError):
    """CHECK constraint violated."""
    pass


class UnknownIntegrityError(ConstraintViolationError):
    """Unrecognized integrity error."""
    pass


# =================================================================================================================
# SQLite extended result code mapping
# =================================================================================================================

# https://www.sqlite.org/rescode.html#extrc
# Exposed by the stdlib driver as `sqlite3.IntegrityError.sqlite_errorname` (Python 3.11+).
class SQLiteErrorNames(str, Enum):
    UNIQUE = "SQLITE_CONSTRAINT_UNIQUE"
    PRIMARY_KEY = "SQLITE_CONSTRAINT_PRIMARYKEY"
    NOT_NULL = "SQLITE_CONSTRAINT_NOTNULL"
    FOREIGN_KEY = "SQLITE_CONSTRAINT_FOREIGNKEY"
    CHECK = "SQLITE_CONSTRAINT_CHECK"


ERRORNAME_EXCEPTION_MAP = {
    SQLiteErrorNames.UNIQUE.value: UniqueConstraintError,
    SQLiteErrorNames.PRIMARY_KEY.value: UniqueConstraintError,
    SQLiteErrorNames.NOT_NULL.value: NotNullConstraintError,
    SQLiteErrorNames.FOREIGN_KEY.value: ForeignKeyConstraintError,
    SQLiteErrorNames.CHECK.value: CheckConstraintError,
}


# =================================================================================================================
# Integrity Error Classifiers
# =================================================================================================================

def _match_any(msg: str, keywords: list[str]) -> bool:
    return any(keyword in msg for keyword in keywords)


def _classify_from_sqlite_errorname(orig) -> Type[ConstraintViolationError] | None:
    """
    Classify using the extended result code reported by the sqlite3 driver.
    """
    errorname = getattr(orig, "sqlite_errorname", None)
    if not errorname:
        return None

    exception_class = ERRORNAME_EXCEPTION_MAP.get(errorname)
    if exception_class:
        logger.debug("SQLite integrity diagnostic", extra={"sqlite_errorname": errorname})
        return exception_class

    logger.warning("Unknown SQLite integrity error code encountered", extra={"sqlite_errorname": errorname})
    logger.debug("SQLite orig diagnostic (raw)", extra={"orig_repr": repr(orig)})
    return None


def _classify_from_generic_message(msg: str) -> Type[ConstraintViolationError]:
    """
    Classify integrity error based on message content (fallback for older drivers).
    """
    normalized = msg.lower()

    if _match_any(normalized, ["unique constraint", "unique failed", "duplicate"]):
        return UniqueConstraintError

    if _match_any(normalized, ["not null constraint", "not null"]):
        return NotNullConstraintError

    if _match_any(normalized, ["foreign key constraint", "foreign key"]):
        return ForeignKeyConstraintError

    if _match_any(normalized, ["check constraint", "check failed"]):
        return CheckConstraintError

    logger.warning("Unknown integrity error message encountered", extra={"message_snippet": (msg or "")[:200]})
    logger.debug("Unknown integrity raw message", extra={"raw": msg})
    return UnknownIntegrityError


def _extract_constraint_name(msg: str) -> str | None:
    # SQLite names CHECK constraints in the message: 'CHECK constraint failed: ck_expenses_amount_positive'
    marker = "check constraint failed:"
    lowered = msg.lower()
    if marker in lowered:
        return msg[lowered.index(marker) + len(marker):].strip() or None
    return None


def classify_integrity_error(exc: IntegrityError) -> tuple[Type[ConstraintViolationError], str | None]:
    """
    Classify a SQLAlchemy IntegrityError raised by SQLite into a ConstraintViolationError subclass.

    Returns:
        A tuple of (ExceptionClass, constraint_name if available)
    """
    orig = exc.orig
    msg = str(orig) if orig is not None else str(exc)
    constraint_name = _extract_constraint_name(msg)

    exception_class = _classify_from_sqlite_errorname(orig)
    if exception_class is not None:
        return exception_class, constraint_name

    return _classify_from_generic_message(msg), constraint_name
