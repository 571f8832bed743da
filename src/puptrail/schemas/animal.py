from datetime import datetime

from pydantic import Field, field_validator

from puptrail.models.enums import Sex
from .base import EntitySchema, Measure

SEX_VALUES = tuple(s.value for s in Sex)


class AnimalCreate(EntitySchema):
    entity_name = "Animal"

    name: str = Field(min_length=1, max_length=100)
    temp_name: str | None = None
    breed: str | None = Field(default=None, max_length=100)
    sex: str | None = None
    colour: str | None = Field(default=None, max_length=50)
    collar_colour: str | None = Field(default=None, max_length=50)
    weight: Measure | None = Field(default=None, ge=0)
    date_of_birth: datetime | None = None
    intake_date: datetime | None = None
    # free-form; AnimalStatus lists the values the UI knows
    status: str | None = Field(default=None, max_length=50)
    origin_location: str | None = None
    origin_country: str | None = Field(default=None, max_length=50)
    origin_notes: str | None = None
    microchip: str | None = Field(default=None, max_length=50)
    group_name: str | None = Field(default=None, max_length=150)
    notes: str | None = None
    photo_path: str | None = None

    @field_validator("sex")
    @classmethod
    def sex_in_vocabulary(cls, value: str | None) -> str | None:
        if value is None:
            return None
        if value not in SEX_VALUES:
            raise ValueError("must be M, F, or Unknown")
        return value
