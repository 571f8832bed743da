from datetime import datetime

from pydantic import Field

from .base import EntitySchema, Money


class ExpenseCreate(EntitySchema):
    entity_name = "Expense"
    error_messages = {"amount": "Amount must be greater than 0"}

    date: datetime | None = None
    category: str = Field(min_length=1, max_length=100)
    amount: Money = Field(gt=0)
    currency: str | None = Field(default=None, max_length=3)
    trip_id: int | None = Field(default=None, gt=0)
    animal_id: int | None = Field(default=None, gt=0)
    notes: str | None = None
    receipt_path: str | None = None


class IncomeCreate(EntitySchema):
    entity_name = "Income"
    error_messages = {"amount": "Amount must be greater than 0"}

    date: datetime | None = None
    type: str = Field(min_length=1, max_length=100)
    amount: Money = Field(gt=0)
    currency: str | None = Field(default=None, max_length=3)
    person_id: int | None = Field(default=None, gt=0)
    animal_id: int | None = Field(default=None, gt=0)
    group_name: str | None = Field(default=None, max_length=150)
    notes: str | None = None


class MoneyOwedCreate(EntitySchema):
    entity_name = "MoneyOwed"
    error_messages = {
        "amount_owed": "Amount owed must be greater than 0",
        "amount_paid": "Amount paid cannot be negative",
    }

    date: datetime | None = None
    amount_owed: Money = Field(gt=0)
    amount_paid: Money | None = Field(default=None, ge=0)
    date_paid: datetime | None = None
    debtor: str | None = Field(default=None, max_length=150)
    reason: str | None = None
    notes: str | None = None


class PaymentCreate(EntitySchema):
    """A single payment recorded against an existing debt."""
    entity_name = "MoneyOwed"

    amount: Money = Field(gt=0)
