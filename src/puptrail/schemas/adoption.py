from datetime import datetime

from pydantic import Field

from .base import EntitySchema, Money


class AdoptionCreate(EntitySchema):
    entity_name = "Adoption"
    error_messages = {
        "animal_id": "Please select an animal",
        "person_id": "Please select an adopter",
        "agreed_fee": "Fee must be a positive number",
        "paid_fee": "Fee must be a positive number",
    }

    # positive ids are checked here, before the store is consulted
    animal_id: int = Field(gt=0)
    person_id: int = Field(gt=0)
    date: datetime | None = None
    agreed_fee: Money | None = Field(default=None, ge=0)
    paid_fee: Money | None = Field(default=None, ge=0)
    paid: bool | None = None
    contract_path: str | None = None
    notes: str | None = None
