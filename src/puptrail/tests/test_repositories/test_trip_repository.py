from datetime import datetime
from decimal import Decimal

import pytest

from puptrail.exceptions import IntegrityViolationError, ValidationError


class TestTripRepository:

    def test_create_defaults(self, trip_repo):
        trip = trip_repo.create(start_location="Thunder Bay", end_location="Winnipeg",
                                distance_km=Decimal("702.5"))

        assert trip.purpose == ""
        assert trip.country == "Canada"
        assert trip.distance_km == Decimal("702.5")

    def test_negative_distance_is_rejected(self, trip_repo):
        with pytest.raises(ValidationError) as exc_info:
            trip_repo.create(distance_km=-5)

        assert exc_info.value.messages_for("distance_km") == ["cannot be negative"]

    def test_list_between_most_recent_first(self, trip_repo):
        trip_repo.create(purpose="old", date=datetime(2023, 12, 31))
        trip_repo.create(purpose="first", date=datetime(2024, 1, 1))
        trip_repo.create(purpose="second", date=datetime(2024, 1, 20))

        found = trip_repo.list_between(datetime(2024, 1, 1), datetime(2024, 1, 31))

        assert [t.purpose for t in found] == ["second", "first"]


class TestTripAnimals:

    def test_add_animal_is_idempotent(self, trip_repo, create_animal):
        """
        Behavior:
            - Adding the same (trip, animal) pair twice returns the existing link.

        Importance:
            - The pair is the identity of the link; a second row cannot exist.
        """
        trip = trip_repo.create(purpose="Run")
        animal = create_animal()

        first = trip_repo.add_animal(trip.id, animal.id)
        second = trip_repo.add_animal(trip.id, animal.id)

        assert first is second
        assert [a.id for a in trip_repo.animals_on_trip(trip.id)] == [animal.id]

    def test_add_missing_animal(self, trip_repo):
        trip = trip_repo.create(purpose="Run")

        with pytest.raises(IntegrityViolationError):
            trip_repo.add_animal(trip.id, 404)

    def test_remove_animal(self, trip_repo, create_animal):
        trip = trip_repo.create(purpose="Run")
        animal = create_animal()
        trip_repo.add_animal(trip.id, animal.id)

        assert trip_repo.remove_animal(trip.id, animal.id) is True
        assert trip_repo.remove_animal(trip.id, animal.id) is False
        assert trip_repo.animals_on_trip(trip.id) == []

    def test_animals_on_trip_skips_soft_deleted(self, trip_repo, animal_repo, create_animal):
        trip = trip_repo.create(purpose="Run")
        kept = create_animal(name="Aspen")
        hidden = create_animal(name="Basil")
        trip_repo.add_animal(trip.id, kept.id)
        trip_repo.add_animal(trip.id, hidden.id)
        animal_repo.soft_delete(hidden.id)

        assert [a.name for a in trip_repo.animals_on_trip(trip.id)] == ["Aspen"]
        assert [a.name for a in trip_repo.animals_on_trip(trip.id, include_deleted=True)] == ["Aspen", "Basil"]
