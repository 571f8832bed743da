
# puptrail/
# │
# ├── exceptions/
# │   ├── __init__.py
# │   ├── base.py                    # App-level errors (RepositoryError, ValidationError, IntegrityViolationError, ...)
# │   ├── integrity_classifier.py    # SQLite constraint classification
# │   └── mapper.py                  # Map SQLite errors to app-level errors; db_error_handler

from .base import (
    RepositoryError,
    NotFoundError,
    DuplicateError,
    InvalidFieldError,
    FieldError,
    ValidationError,
    IntegrityViolationError,
    StoreAccessError,
)

__all__ = [
    "RepositoryError",
    "NotFoundError",
    "DuplicateError",
    "InvalidFieldError",
    "FieldError",
    "ValidationError",
    "IntegrityViolationError",
    "StoreAccessError",
]
