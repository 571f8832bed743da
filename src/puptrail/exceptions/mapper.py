import re
import logging
from contextlib import contextmanager
from typing import Iterator, Literal

from sqlalchemy.exc import DatabaseError, DBAPIError, IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from .integrity_classifier import (
    classify_integrity_error,
    UniqueConstraintError,
    NotNullConstraintError,
    ForeignKeyConstraintError,
    CheckConstraintError,
)
from .base import (
    DuplicateError,
    FieldError,
    IntegrityViolationError,
    RepositoryError,
    StoreAccessError,
    ValidationError,
)

logger = logging.getLogger(__name__)

Operation = Literal["create", "update", "delete", "read"]

# -----------------------
# Column extraction helpers
# -----------------------

_SQLITE_COLUMNS_RE = re.compile(
    r"(?:UNIQUE|NOT NULL) constraint failed: (?P<cols>.+)$", flags=re.IGNORECASE
)


def extract_columns_from_integrity(exc: IntegrityError) -> list[str] | None:
    """
    Best-effort extraction of column names from the SQLite message, e.g.
      - 'UNIQUE constraint failed: puppy_groups.group_name'
      - 'NOT NULL constraint failed: animals.name'
    SQLite does not name the column for FOREIGN KEY failures.
    """
    orig = exc.orig
    msg = str(orig) if orig is not None else str(exc)

    m = _SQLITE_COLUMNS_RE.search(msg)
    if m:
        return [c.split(".")[-1].strip() for c in re.split(r",\s*", m.group("cols"))]
    return None


# -----------------------
# Mapper
# -----------------------

def raise_mapped_integrity_error(exc: IntegrityError, model_name: str | None = None,
                                 operation: Operation = "create") -> None:
    """
    Map a SQLAlchemy IntegrityError to an app-level exception and raise it.
    Populates `.fields` and `.constraint` where possible.
    """
    exc_cls, constraint_name = classify_integrity_error(exc)
    columns = extract_columns_from_integrity(exc)

    model_part = f"{model_name}" if model_name else "Record"

    # UNIQUE / Duplicate
    if exc_cls is UniqueConstraintError:
        logger.info(
            "mapper.duplicate_detected",
            extra={"model": model_part, "fields": columns, "constraint": constraint_name},
        )
        if columns:
            raise DuplicateError(f"{model_part} already exists for field(s): {', '.join(columns)}",
                                 fields=columns, constraint=constraint_name) from exc
        raise DuplicateError(f"{model_part} already exists (unique constraint)", constraint=constraint_name) from exc

    # NOT NULL / Missing required field
    if exc_cls is NotNullConstraintError:
        logger.info(
            "mapper.not_null_violation",
            extra={"model": model_part, "fields": columns, "constraint": constraint_name},
        )
        missing = columns or ["<unknown>"]
        raise ValidationError([FieldError(c, "is required") for c in missing], model_name=model_part) from exc

    # FOREIGN KEY: either a restricted delete or a dangling reference on write
    if exc_cls is ForeignKeyConstraintError:
        logger.info(
            "mapper.foreign_key_violation",
            extra={"model": model_part, "operation": operation, "constraint": constraint_name},
        )
        if operation == "delete":
            raise IntegrityViolationError(
                f"{model_part} cannot be deleted while other records still reference it",
                constraint=constraint_name,
            ) from exc
        raise IntegrityViolationError(
            f"{model_part} references a record that does not exist", constraint=constraint_name
        ) from exc

    # CHECK
    if exc_cls is CheckConstraintError:
        raw = str(exc.orig) if exc.orig is not None else str(exc)
        logger.debug(
            "mapper.check_constraint_failure",
            extra={"model": model_part, "raw": raw, "constraint": constraint_name},
        )
        raise IntegrityViolationError(
            f"{model_part} business rule violated (check constraint)", constraint=constraint_name
        ) from exc

    # Unknown/unclassified integrity error
    raw = str(exc.orig) if exc.orig is not None else str(exc)
    logger.warning("mapper.unknown_integrity_error", extra={"model": model_part, "constraint": constraint_name})
    logger.debug("mapper.unknown_integrity_raw", extra={"model": model_part, "raw": raw})
    raise RepositoryError(f"{model_part} database integrity error.") from exc


def raise_store_access_error(exc: DBAPIError, model_name: str | None = None) -> None:
    """
    Surface a locked / unreadable / corrupt store to the caller with the driver's cause.
    """
    cause = str(exc.orig) if exc.orig is not None else str(exc)
    logger.error("mapper.store_access_error", extra={"model": model_name, "cause": cause})
    raise StoreAccessError(f"Store is not accessible: {cause}") from exc


# -----------------------
# Context managers to DRY error handling in repositories
# -----------------------
@contextmanager
def db_error_handler(db: Session, model_name: str | None = None,
                     operation: Operation = "create") -> Iterator[None]:
    """
    Usage:
        with db_error_handler(self.db, self.model.__name__, "delete"):
            ... DB ops that may raise IntegrityError ...

    The wrapped statements run inside a SAVEPOINT. A failing statement rolls back
    only the savepoint, so work the caller already flushed in the same unit of
    work survives, and the failed operation leaves no partial state behind.
    """
    try:
        with db.begin_nested():
            yield
    except RepositoryError:
        # already mapped (e.g. NotFoundError raised inside the block)
        raise
    except IntegrityError as exc:
        raise_mapped_integrity_error(exc, model_name, operation)
    except DatabaseError as exc:
        # locked, read-only, "file is not a database"...
        raise_store_access_error(exc, model_name)
    except Exception as exc:
        logger.exception("Unexpected DB error for %s", model_name, extra={"model": model_name})
        raise RepositoryError(f"Failed to operate on {model_name or 'database'}") from exc


@contextmanager
def read_error_handler(model_name: str | None = None) -> Iterator[None]:
    """
    Same mapping for read paths, without the SAVEPOINT (reads change nothing).
    """
    try:
        yield
    except DatabaseError as exc:
        raise_store_access_error(exc, model_name)
    except SQLAlchemyError as exc:
        logger.exception("Unexpected DB error reading %s", model_name, extra={"model": model_name})
        raise RepositoryError(f"Failed to read {model_name or 'database'}") from exc
