from datetime import datetime

from pydantic import Field

from .base import EntitySchema, Measure, Money


class TripCreate(EntitySchema):
    entity_name = "Trip"

    date: datetime | None = None
    purpose: str | None = None
    start_location: str | None = None
    end_location: str | None = None
    distance_km: Measure | None = Field(default=None, ge=0)
    fuel_litres: Measure | None = Field(default=None, ge=0)
    fuel_cost: Money | None = Field(default=None, ge=0)
    notes: str | None = None
    country: str | None = Field(default=None, max_length=50)
