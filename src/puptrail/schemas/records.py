"""Schemas for the standalone records: intakes, puppy groups, attachments, licenses."""

from datetime import datetime

from pydantic import Field

from .base import EntitySchema, Money


class IntakeCreate(EntitySchema):
    entity_name = "Intake"
    error_messages = {"puppy_count": "Puppy count must be at least 1"}

    date: datetime | None = None
    puppy_count: int = Field(ge=1)
    location: str | None = Field(default=None, max_length=200)
    cost_per_litter: Money | None = Field(default=None, ge=0)
    # caller-asserted; total_cost is not checked against puppy_count * cost_per_puppy
    cost_per_puppy: Money | None = Field(default=None, ge=0)
    total_cost: Money | None = Field(default=None, ge=0)
    notes: str | None = None


class PuppyGroupCreate(EntitySchema):
    entity_name = "PuppyGroup"

    group_name: str = Field(min_length=1, max_length=150)
    date_created: datetime | None = None
    image_path: str | None = None
    notes: str | None = None


class FileAttachmentCreate(EntitySchema):
    entity_name = "FileAttachment"

    owner_type: str | None = Field(default=None, max_length=50)
    owner_id: int | None = None
    path: str = Field(min_length=1)
    file_type: str | None = Field(default=None, max_length=50)
    uploaded_at: datetime | None = None
    animal_id: int | None = Field(default=None, gt=0)


class LicenseCreate(EntitySchema):
    entity_name = "License"

    licensee_name: str = Field(min_length=1, max_length=255)
    license_key: str = Field(min_length=1)
    signature: str = Field(min_length=1)
    machine_id: str = Field(min_length=1, max_length=32)
    activation_date: datetime | None = None
    is_active: bool | None = None
    notes: str | None = None
