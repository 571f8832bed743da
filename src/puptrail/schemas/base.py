"""
Field-level validation of create/update payloads.

Every entity has a `<Entity>Create` pydantic schema. Repositories run a payload
through `validate_create()` / `validate_update()` before touching the session, so
bad input never reaches the store and the caller gets every problem at once:

    try:
        repo.create(name="", sex="X")
    except ValidationError as exc:
        exc.errors
        # [FieldError(field='name', message='is required'),
        #  FieldError(field='sex', message='must be M, F, or Unknown')]

Schemas only describe what the caller may send. Columns with store-side defaults
(dates that default to "now", flags, currencies) are optional here and filled in
by the model.
"""

import re
from typing import Any, ClassVar, Type, TypeVar

from pydantic import BaseModel, ConfigDict, condecimal
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import inspect as sa_inspect

from puptrail.exceptions import FieldError, ValidationError

SchemaType = TypeVar("SchemaType", bound="EntitySchema")

PHONE_RE = re.compile(r"^\+?[\d\s\-.()]{7,20}$")

# Matches the Numeric(12, 2) columns. A third decimal would be rounded away by
# the store on the next read, so it is rejected here instead.
Money = condecimal(max_digits=12, decimal_places=2)
# weights, distances and litres live in the same Numeric(12, 2) columns
Measure = Money


class EntitySchema(BaseModel):
    """
    Base for all create schemas.

    `error_messages` replaces the generic message of a failed constraint for the
    given field (not the "is required" message).
    """

    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    entity_name: ClassVar[str] = "Record"
    error_messages: ClassVar[dict[str, str]] = {}


def blank_to_none(value: Any) -> Any:
    """Optional text fields treat an empty or all-blank string as "not given"."""
    if isinstance(value, str) and not value.strip():
        return None
    return value


def check_phone(value: str | None) -> str | None:
    if value is None or value == "":
        return None
    digits = sum(ch.isdigit() for ch in value)
    if not PHONE_RE.match(value) or digits < 7:
        raise ValueError("Invalid phone number format")
    return value


# -----------------------
# pydantic -> FieldError translation
# -----------------------

def _message_for(schema: Type[EntitySchema], field: str, error: dict) -> str:
    err_type = error.get("type", "")
    ctx = error.get("ctx") or {}

    if err_type == "missing" or (err_type == "string_too_short" and ctx.get("min_length") == 1):
        return "is required"
    # explicit None for a non-nullable field
    if err_type.endswith("_type") and error.get("input") is None:
        return "is required"

    # shape errors are reported as such, whatever the field's own message says
    if err_type == "decimal_parsing":
        return "must be a number"
    if err_type == "decimal_max_places":
        return f"cannot have more than {ctx.get('decimal_places')} decimal places"
    if err_type in ("decimal_max_digits", "decimal_whole_digits"):
        return "is too large"
    if err_type == "string_too_long":
        return f"cannot exceed {ctx.get('max_length')} characters"

    if field in schema.error_messages:
        return schema.error_messages[field]

    if err_type == "greater_than":
        return f"must be greater than {ctx.get('gt')}"
    if err_type == "greater_than_equal":
        if str(ctx.get("ge")) == "0":
            return "cannot be negative"
        return f"must be at least {ctx.get('ge')}"
    if err_type == "value_error":
        # "Value error, <our message>"
        return str(error.get("msg", "")).removeprefix("Value error, ")

    return str(error.get("msg", "is invalid"))


def to_field_errors(schema: Type[EntitySchema], exc: PydanticValidationError) -> list[FieldError]:
    errors = []
    for error in exc.errors():
        loc = error.get("loc") or ("__root__",)
        field = str(loc[0])
        errors.append(FieldError(field, _message_for(schema, field, error)))
    return errors


# -----------------------
# Helpers used by the repositories
# -----------------------

def validate_create(schema: Type[SchemaType], data: dict[str, Any]) -> dict[str, Any]:
    """
    Validate a create payload and return the cleaned values.

    Only keys the caller supplied are returned, so model defaults still apply for
    the rest. Keys the schema does not describe (e.g. `is_deleted`) pass through
    unchanged.

    Raises:
        ValidationError: with one FieldError per violation.
    """
    try:
        validated = schema.model_validate(data)
    except PydanticValidationError as exc:
        raise ValidationError(to_field_errors(schema, exc), model_name=schema.entity_name) from exc

    cleaned = {k: v for k, v in data.items() if k not in schema.model_fields}
    cleaned.update(validated.model_dump(exclude_unset=True))
    return cleaned


def validate_update(schema: Type[SchemaType], entity: Any, changes: dict[str, Any]) -> dict[str, Any]:
    """
    Validate `changes` against the state the entity would have after applying them.

    The whole merged record is validated (so e.g. clearing a required name fails),
    but only the changed keys are returned.
    """
    current = {
        attr.key: getattr(entity, attr.key)
        for attr in sa_inspect(type(entity)).column_attrs
        if attr.key in schema.model_fields
    }
    merged = {**current, **changes}

    try:
        validated = schema.model_validate(merged)
    except PydanticValidationError as exc:
        raise ValidationError(to_field_errors(schema, exc), model_name=schema.entity_name) from exc

    cleaned = {k: v for k, v in changes.items() if k not in schema.model_fields}
    dumped = validated.model_dump()
    cleaned.update({k: dumped[k] for k in changes if k in schema.model_fields})
    return cleaned
