from pydantic import EmailStr, Field, field_validator
from pydantic_core import PydanticCustomError

from .base import EntitySchema, blank_to_none, check_phone

EMAIL_MAX_LENGTH = 200


class PersonCreate(EntitySchema):
    entity_name = "Person"
    error_messages = {"email": "Invalid email format"}

    name: str = Field(min_length=1, max_length=150)
    email: EmailStr | None = None
    phone: str | None = Field(default=None, max_length=20)
    address: str | None = Field(default=None, max_length=500)
    type: str | None = Field(default=None, max_length=20)
    notes: str | None = None

    @field_validator("email", mode="before")
    @classmethod
    def email_blank_or_bounded(cls, value):
        value = blank_to_none(value)
        if isinstance(value, str):
            value = value.strip()
            if len(value) > EMAIL_MAX_LENGTH:
                raise PydanticCustomError(
                    "string_too_long",
                    "String should have at most {max_length} characters",
                    {"max_length": EMAIL_MAX_LENGTH},
                )
        return value

    @field_validator("phone")
    @classmethod
    def phone_format(cls, value: str | None) -> str | None:
        return check_phone(value)
