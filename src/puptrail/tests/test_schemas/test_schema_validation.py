from datetime import datetime
from decimal import Decimal

import pytest

from puptrail.exceptions import ValidationError
from puptrail.models import Animal
from puptrail.schemas import (
    AdoptionCreate,
    AnimalCreate,
    ExpenseCreate,
    MoneyOwedCreate,
    PersonCreate,
    validate_create,
    validate_update,
)
from puptrail.schemas.base import check_phone


class TestValidateCreate:

    def test_returns_only_supplied_keys(self):
        cleaned = validate_create(AnimalCreate, {"name": "  Hazel  ", "sex": "F"})

        assert cleaned == {"name": "Hazel", "sex": "F"}

    def test_coerces_values(self):
        cleaned = validate_create(ExpenseCreate, {"category": "Fuel", "amount": "12.50", "date": "2024-05-01T08:00:00"})

        assert cleaned["amount"] == Decimal("12.50")
        assert cleaned["date"] == datetime(2024, 5, 1, 8, 0)

    def test_unknown_keys_pass_through(self):
        cleaned = validate_create(AnimalCreate, {"name": "Hazel", "is_deleted": True})

        assert cleaned["is_deleted"] is True

    def test_explicit_none_on_required_field(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_create(ExpenseCreate, {"category": None, "amount": Decimal("3")})

        assert exc_info.value.messages_for("category") == ["is required"]

    def test_error_payload_shape(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_create(ExpenseCreate, {"category": "Fuel", "amount": 0})

        payload = exc_info.value.to_payload()
        assert payload["code"] == "invalid_input"
        assert payload["fields"] == ["amount"]
        assert payload["errors"] == [{"field": "amount", "message": "Amount must be greater than 0"}]
        assert payload["detail"].startswith("Invalid Expense")

    def test_generic_greater_than_message(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_create(MoneyOwedCreate, {"amount_owed": 0})

        assert exc_info.value.messages_for("amount_owed") == ["Amount owed must be greater than 0"]


class TestValidateUpdate:

    def test_only_changed_keys_are_returned(self):
        """
        Behavior:
            - The merged record is validated but only the changed keys come back.
        """
        animal = Animal(name="Hazel", sex="F")
        cleaned = validate_update(AnimalCreate, animal, {"breed": "  Collie "})

        assert cleaned == {"breed": "Collie"}

    def test_merged_state_is_checked(self):
        animal = Animal(name="Hazel", sex="F")

        with pytest.raises(ValidationError) as exc_info:
            validate_update(AnimalCreate, animal, {"name": None})

        assert exc_info.value.messages_for("name") == ["is required"]


class TestMoneyFields:

    @pytest.mark.parametrize(
        "schema, payload, field",
        [
            (ExpenseCreate, {"category": "Fuel", "amount": "12.345"}, "amount"),
            (MoneyOwedCreate, {"amount_owed": "5", "amount_paid": "0.001"}, "amount_paid"),
            (AnimalCreate, {"name": "Hazel", "weight": "12.125"}, "weight"),
            (AdoptionCreate, {"animal_id": 1, "person_id": 1, "agreed_fee": "150.005"}, "agreed_fee"),
        ],
    )
    def test_more_than_two_decimals(self, schema, payload, field):
        with pytest.raises(ValidationError) as exc_info:
            validate_create(schema, payload)

        assert exc_info.value.messages_for(field) == ["cannot have more than 2 decimal places"]

    def test_two_decimals_and_trailing_zeros_accepted(self):
        cleaned = validate_create(ExpenseCreate, {"category": "Fuel", "amount": "0.10"})

        assert cleaned["amount"] == Decimal("0.1")


class TestContactChecks:

    @pytest.mark.parametrize("value", ["a@b.co", "first.last+tag@rescue.ca"])
    def test_valid_email(self, value):
        assert validate_create(PersonCreate, {"name": "Al", "email": value})["email"] == value

    @pytest.mark.parametrize("value", ["plain", "two@@signs.com", "no@tld", "sp ace@x.com"])
    def test_invalid_email(self, value):
        with pytest.raises(ValidationError) as exc_info:
            validate_create(PersonCreate, {"name": "Al", "email": value})

        assert exc_info.value.messages_for("email") == ["Invalid email format"]

    @pytest.mark.parametrize("value", ["", "   ", None])
    def test_blank_email_means_none(self, value):
        assert validate_create(PersonCreate, {"name": "Al", "email": value})["email"] is None

    @pytest.mark.parametrize("value", ["807-555-0199", "+1 (807) 555 0199", "807.555.0199"])
    def test_valid_phone(self, value):
        assert check_phone(value) == value

    @pytest.mark.parametrize("value", ["555-01", "phone: 5550199", "(((((((("])
    def test_invalid_phone(self, value):
        with pytest.raises(ValueError):
            check_phone(value)

    def test_person_schema_max_lengths(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_create(PersonCreate, {"name": "Al", "address": "x" * 501})

        assert exc_info.value.messages_for("address") == ["cannot exceed 500 characters"]
