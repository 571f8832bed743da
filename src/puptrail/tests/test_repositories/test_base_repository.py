from datetime import datetime

import pytest

from puptrail.exceptions import (
    DuplicateError,
    IntegrityViolationError,
    InvalidFieldError,
    NotFoundError,
    RepositoryError,
    ValidationError,
)
from puptrail.models import Animal, Expense, PuppyGroup, VetVisit
from puptrail.repositories import BaseRepository


class TestBaseRepositoryCreate:

    def test_create_success(self, animal_repo, sample_animal_data):
        """
        Behavior:
            - Call create(...) with valid data.
            - The returned entity carries the given values, a generated id and the
              model defaults for everything not supplied.

        Importance:
            - Confirms the happy path: validation, add(), flush() and return of a
              populated model without a commit.

        Fixtures:
            - animal_repo: repository bound to the per-test session.
            - sample_animal_data: dict with a complete animal payload.
        """
        # Act
        animal = animal_repo.create(**sample_animal_data)

        # Assert: generated id and supplied fields
        assert isinstance(animal.id, int)
        assert animal.name == "Biscuit"
        assert animal.sex == "M"
        assert animal.date_of_birth == datetime(2024, 3, 1)

        # Assert: defaults applied by the model
        assert animal.status == "In Care"
        assert animal.origin_country == "Canada"
        assert animal.is_deleted is False
        assert animal.created_at is not None
        assert animal.updated_at is not None

    def test_create_explicit_none_keeps_defaults(self, animal_repo):
        """
        Behavior:
            - Passing None for columns that have a default (status, intake_date)
              still yields the default instead of a NULL.

        Importance:
            - Forms send every field; blank optional inputs must not clear defaults.
        """
        animal = animal_repo.create(name="Pepper", status=None, intake_date=None)

        assert animal.status == "In Care"
        assert isinstance(animal.intake_date, datetime)

    def test_create_unknown_field_raises_invalid_field(self, animal_repo):
        """
        Behavior:
            - Keyword arguments that are not mapped columns are rejected before
              validation.

        Importance:
            - Catches typos in callers instead of silently dropping the value.
        """
        with pytest.raises(InvalidFieldError) as exc_info:
            animal_repo.create(name="Pepper", eye_colour="blue")

        assert exc_info.value.fields == ["eye_colour"]
        assert exc_info.value.error_code == "invalid_field"
        assert animal_repo.count() == 0

    def test_create_reports_every_violation(self, animal_repo):
        """
        Behavior:
            - A payload with two bad fields produces one ValidationError listing both.

        Importance:
            - A form can highlight all offending inputs after a single attempt.
        """
        with pytest.raises(ValidationError) as exc_info:
            animal_repo.create(name="", sex="X")

        err = exc_info.value
        assert err.messages_for("name") == ["is required"]
        assert err.messages_for("sex") == ["must be M, F, or Unknown"]
        assert set(err.fields) == {"name", "sex"}
        assert animal_repo.count() == 0

    def test_create_too_long_value(self, animal_repo):
        with pytest.raises(ValidationError) as exc_info:
            animal_repo.create(name="x" * 101)

        assert exc_info.value.messages_for("name") == ["cannot exceed 100 characters"]

    def test_required_column_without_schema(self, db_session):
        """
        Behavior:
            - A repository without a schema still refuses to insert a row that
              lacks a NOT NULL column without default.
        """
        repo = BaseRepository(Animal, db_session)

        with pytest.raises(ValidationError) as exc_info:
            repo.create(breed="Beagle")

        assert exc_info.value.messages_for("name") == ["is required"]

    def test_unique_precheck_raises_duplicate(self, puppy_group_repo):
        puppy_group_repo.create(group_name="Spring Litter")

        with pytest.raises(DuplicateError) as exc_info:
            puppy_group_repo.create(group_name="Spring Litter")

        assert exc_info.value.fields == ["group_name"]
        assert puppy_group_repo.count() == 1

    def test_store_check_constraint_is_mapped(self, db_session):
        """
        Behavior:
            - With no schema in the way, the store's CHECK constraint rejects a
              zero expense and the error surfaces as IntegrityViolationError
              naming the constraint.

        Importance:
            - The store enforces the rule even for writers that skip validation.
        """
        repo = BaseRepository(Expense, db_session)

        with pytest.raises(IntegrityViolationError) as exc_info:
            repo.create(category="Fuel", amount=0)

        assert exc_info.value.constraint == "ck_expenses_amount_positive"

    def test_dangling_reference_is_mapped(self, db_session):
        repo = BaseRepository(VetVisit, db_session)

        with pytest.raises(IntegrityViolationError) as exc_info:
            repo.create(animal_id=999)

        assert "does not exist" in exc_info.value.message

    def test_failed_write_keeps_earlier_work(self, db_session, animal_repo):
        """
        Behavior:
            - A write refused by the store only rolls back its own savepoint;
              rows flushed earlier in the same unit of work are still there.

        Importance:
            - One rejected form submission must not discard the rest of the session.
        """
        animal = animal_repo.create(name="Survivor")

        with pytest.raises(IntegrityViolationError):
            BaseRepository(VetVisit, db_session).create(animal_id=animal.id + 100)

        assert animal_repo.get_by_id(animal.id) is not None
        assert animal_repo.count() == 1


class TestBaseRepositoryRead:

    def test_get_by_id_and_or_raise(self, animal_repo, create_animal):
        animal = create_animal()

        assert animal_repo.get_by_id(animal.id) is animal
        assert animal_repo.get_by_id(animal.id + 1) is None

        with pytest.raises(NotFoundError) as exc_info:
            animal_repo.get_by_id_or_raise(animal.id + 1)
        assert exc_info.value.error_code == "not_found"

    def test_find_by_field(self, animal_repo, create_animal):
        create_animal(name="Maple")

        found = animal_repo.find_by_field("name", "Maple")

        assert found is not None and found.name == "Maple"
        assert animal_repo.find_by_field("name", "Nobody") is None

    def test_find_by_unknown_field(self, animal_repo):
        with pytest.raises(InvalidFieldError):
            animal_repo.find_by_field("nickname", "x")

    def test_find_by_field_skips_soft_deleted(self, animal_repo, create_animal):
        animal = create_animal(name="Ghost")
        animal_repo.soft_delete(animal.id)

        assert animal_repo.find_by_field("name", "Ghost") is None
        assert animal_repo.find_by_field("name", "Ghost", include_deleted=True) is animal

    def test_get_all_newest_first(self, animal_repo, create_animal):
        first = create_animal()
        second = create_animal()

        assert [a.id for a in animal_repo.get_all()] == [second.id, first.id]

    def test_get_all_order_by_and_pagination(self, animal_repo, create_animal):
        for name in ("Cedar", "Ash", "Birch"):
            create_animal(name=name)

        names = [a.name for a in animal_repo.get_all(order_by="name")]
        assert names == ["Ash", "Birch", "Cedar"]

        page = animal_repo.get_all(order_by="name", offset=1, limit=1)
        assert [a.name for a in page] == ["Birch"]

    def test_get_all_ignores_unknown_order_by(self, animal_repo, create_animal):
        create_animal()

        assert len(animal_repo.get_all(order_by="not_a_column")) == 1

    def test_exists_and_count(self, animal_repo, create_animal):
        create_animal(status="Ready")
        create_animal(status="Ready")
        other = create_animal(status="Adopted")

        assert animal_repo.exists(other.id)
        assert not animal_repo.exists(other.id + 10)
        assert animal_repo.count() == 3
        assert animal_repo.count(status="Ready") == 2

    def test_count_unknown_filter(self, animal_repo):
        with pytest.raises(InvalidFieldError):
            animal_repo.count(colour_of_eyes="blue")


class TestBaseRepositoryUpdate:

    def test_update_changes_fields_and_touches_updated_at(self, animal_repo, create_animal):
        animal = create_animal(status="In Care")
        before = animal.updated_at

        updated = animal_repo.update(animal.id, status="Ready", notes="Loves kids")

        assert updated is animal
        assert updated.status == "Ready"
        assert updated.notes == "Loves kids"
        assert updated.updated_at >= before

    def test_update_missing_row_returns_none(self, animal_repo):
        assert animal_repo.update(12345, status="Ready") is None

    def test_update_validates_merged_state(self, animal_repo, create_animal):
        """
        Behavior:
            - Clearing the required name or setting an invalid sex on an existing
              animal is rejected, and the stored values are unchanged.
        """
        animal = create_animal(name="Juniper", sex="F")

        with pytest.raises(ValidationError) as exc_info:
            animal_repo.update(animal.id, name="", sex="female")

        assert exc_info.value.messages_for("name") == ["is required"]
        assert exc_info.value.messages_for("sex") == ["must be M, F, or Unknown"]
        assert animal.name == "Juniper"
        assert animal.sex == "F"

    def test_update_unknown_field(self, animal_repo, create_animal):
        animal = create_animal()

        with pytest.raises(InvalidFieldError):
            animal_repo.update(animal.id, nickname="Bean")

    def test_update_unique_conflict_excludes_self(self, puppy_group_repo):
        spring = puppy_group_repo.create(group_name="Spring Litter")
        puppy_group_repo.create(group_name="Fall Litter")

        # renaming to its own name is not a conflict
        assert puppy_group_repo.update(spring.id, group_name="Spring Litter") is spring

        with pytest.raises(DuplicateError):
            puppy_group_repo.update(spring.id, group_name="Fall Litter")


class TestBaseRepositoryDelete:

    def test_soft_delete_and_restore(self, animal_repo, create_animal):
        """
        Behavior:
            - soft_delete() hides the row from get_all()/count() but get_by_id()
              still reads it; restore() brings it back.

        Importance:
            - Normal application deletes are reversible.
        """
        animal = create_animal()

        assert animal_repo.soft_delete(animal.id) is True
        assert animal_repo.get_all() == []
        assert animal_repo.count() == 0
        assert animal_repo.count(include_deleted=True) == 1
        assert animal_repo.get_by_id(animal.id).is_deleted is True

        assert animal_repo.restore(animal.id) is True
        assert [a.id for a in animal_repo.get_all()] == [animal.id]

    def test_soft_delete_missing_row(self, animal_repo):
        assert animal_repo.soft_delete(999) is False

    def test_soft_delete_unsupported_model(self, db_session):
        repo = BaseRepository(PuppyGroup, db_session)
        group = repo.create(group_name="No Flag")

        with pytest.raises(RepositoryError):
            repo.soft_delete(group.id)

    def test_hard_delete(self, animal_repo, create_animal):
        animal = create_animal()

        assert animal_repo.delete(animal.id) is True
        assert animal_repo.get_by_id(animal.id) is None
        assert animal_repo.count(include_deleted=True) == 0

    def test_hard_delete_missing_row(self, animal_repo):
        assert animal_repo.delete(999) is False
