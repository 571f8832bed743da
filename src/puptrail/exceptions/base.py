"""
Custom exceptions for store and repository operations.
"""

from dataclasses import dataclass
from typing import Iterable


# canonical repository-level exception

class RepositoryError(Exception):
    """
    Base exception for repository/store errors.

    - message: human-friendly message (safe to show in the UI)
    - fields: optional list of field names related to the error (e.g., ['email'])
    - constraint: optional DB constraint name or identifier (for logs only)
    - error_code: canonical short code (e.g., 'duplicate', 'invalid_input') used by callers
    """

    def __init__(self, message: str, *, fields: Iterable[str] | None = None,
                 constraint: str | None = None, error_code: str | None = None):
        super().__init__(message)
        self.message = message
        self.fields = list(fields) if fields else None
        self.constraint = constraint
        self.error_code = error_code

    def __str__(self) -> str:
        base = self.message
        parts = []
        if self.fields:
            parts.append(f"fields: {', '.join(self.fields)}")
        if self.constraint:
            parts.append(f"constraint: {self.constraint}")
        if self.error_code:
            parts.append(f"code: {self.error_code}")
        if parts:
            return f"{base} ({'; '.join(parts)})"
        return base

    def to_payload(self) -> dict:
        """
        Return a JSON-serializable dict suitable for presenting the error.
        Standard shape:
            {
                "detail": "A human-friendly message",
                "code": "duplicate",           # optional canonical code
                "fields": ["name"],            # optional list for form highlighting
            }
        The constraint name is intentionally left out; it is for logs only.
        """
        payload = {"detail": self.message}
        if self.error_code:
            payload["code"] = self.error_code
        if self.fields:
            payload["fields"] = list(self.fields)
        return payload


class NotFoundError(RepositoryError):
    def __init__(self, message: str = "Not found", *, fields: Iterable[str] | None = None):
        super().__init__(message, fields=fields, error_code="not_found")


class DuplicateError(RepositoryError):
    def __init__(self, message: str, *, fields: Iterable[str] | None = None, constraint: str | None = None):
        super().__init__(message, fields=fields, constraint=constraint, error_code="duplicate")


class InvalidFieldError(RepositoryError):
    """Raised when the caller passes unexpected/unknown fields to repository methods."""

    def __init__(self, message: str, *, fields: Iterable[str] | None = None):
        super().__init__(message, fields=fields, error_code="invalid_field")


@dataclass(frozen=True)
class FieldError:
    """One (field, message) pair of a failed validation."""
    field: str
    message: str


class ValidationError(RepositoryError):
    """
    Raised before any write when a payload violates field-level rules.

    Carries every violation found, not only the first, so a form can highlight all
    offending inputs at once.
    """

    def __init__(self, errors: Iterable[FieldError], *, model_name: str | None = None):
        self.errors = list(errors)
        fields = []
        for err in self.errors:
            if err.field not in fields:
                fields.append(err.field)
        subject = model_name or "Record"
        summary = "; ".join(f"{e.field}: {e.message}" for e in self.errors)
        super().__init__(f"Invalid {subject}: {summary}", fields=fields, error_code="invalid_input")

    def messages_for(self, field: str) -> list[str]:
        return [e.message for e in self.errors if e.field == field]

    def to_payload(self) -> dict:
        payload = super().to_payload()
        payload["errors"] = [{"field": e.field, "message": e.message} for e in self.errors]
        return payload


class IntegrityViolationError(RepositoryError):
    """
    A write or hard delete the store refused for referential reasons, e.g. deleting a
    person who is still the adopter on an adoption. Nothing was changed.
    """

    def __init__(self, message: str, *, fields: Iterable[str] | None = None, constraint: str | None = None):
        super().__init__(message, fields=fields, constraint=constraint, error_code="integrity_violation")


class StoreAccessError(RepositoryError):
    """The store file is missing, locked or unreadable. The cause is chained."""

    def __init__(self, message: str, *, path: str | None = None):
        super().__init__(message, error_code="store_access")
        self.path = path


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
