from datetime import datetime
from decimal import Decimal

from pydantic import Field

from .base import EntitySchema, Money


class VetVisitCreate(EntitySchema):
    entity_name = "VetVisit"
    error_messages = {"animal_id": "Please select an animal"}

    animal_id: int = Field(gt=0)
    person_id: int | None = Field(default=None, gt=0)
    date: datetime | None = None
    total_cost: Money | None = Field(default=None, ge=0)
    notes: str | None = None
    invoice_path: str | None = None
    ready_for_adoption: bool | None = None

    worming_date: datetime | None = None
    worming_cost: Money | None = Field(default=None, ge=0)
    defleaing_date: datetime | None = None
    defleaing_cost: Money | None = Field(default=None, ge=0)
    dental_date: datetime | None = None
    dental_cost: Money | None = Field(default=None, ge=0)
    spay_neuter_date: datetime | None = None
    spay_neuter_cost: Money | None = Field(default=None, ge=0)

    vaccinations_given: str | None = None
    rabies_date: datetime | None = None
    rabies_cost: Money | None = Field(default=None, ge=0)
    distemper_date: datetime | None = None
    distemper_cost: Money | None = Field(default=None, ge=0)
    dapp_date: datetime | None = None
    dapp_cost: Money | None = Field(default=None, ge=0)


class VetServiceCreate(EntitySchema):
    entity_name = "VetService"

    visit_id: int = Field(gt=0)
    service_name: str = Field(min_length=1)
    cost: Money = Field(default=Decimal("0"), ge=0)
