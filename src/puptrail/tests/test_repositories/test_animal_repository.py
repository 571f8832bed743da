from datetime import datetime

import pytest

from puptrail.exceptions import DuplicateError, ValidationError
from puptrail.models import AnimalStatus


class TestAnimalCreate:

    @pytest.mark.parametrize("sex", ["M", "F", "Unknown", None])
    def test_accepts_known_sex_values(self, animal_repo, sex):
        animal = animal_repo.create(name="Willow", sex=sex)

        assert animal.sex == sex

    @pytest.mark.parametrize("sex", ["X", "m", "male", ""])
    def test_rejects_other_sex_values(self, animal_repo, sex):
        """
        Behavior:
            - Anything outside M / F / Unknown is rejected before a row is written.

        Importance:
            - Sex is used for spay/neuter tracking; free text would break it.
        """
        with pytest.raises(ValidationError) as exc_info:
            animal_repo.create(name="Willow", sex=sex)

        assert exc_info.value.messages_for("sex") == ["must be M, F, or Unknown"]
        assert animal_repo.count(include_deleted=True) == 0

    def test_duplicate_name_and_birth_date(self, animal_repo, sample_animal_data):
        """
        Behavior:
            - A second live animal with the same name and date of birth is refused.
        """
        animal_repo.create(**sample_animal_data)

        with pytest.raises(DuplicateError) as exc_info:
            animal_repo.create(**sample_animal_data)

        assert exc_info.value.fields == ["name", "date_of_birth"]

    def test_same_name_without_birth_date_is_allowed(self, animal_repo):
        animal_repo.create(name="Pup 1")
        animal_repo.create(name="Pup 1")

        assert animal_repo.count() == 2

    def test_duplicate_guard_ignores_soft_deleted(self, animal_repo, sample_animal_data):
        first = animal_repo.create(**sample_animal_data)
        animal_repo.soft_delete(first.id)

        again = animal_repo.create(**sample_animal_data)

        assert again.id != first.id

    def test_free_form_status_is_kept(self, animal_repo):
        animal = animal_repo.create(name="Rogue", status="Foster Hold")

        assert animal.status == "Foster Hold"
        assert animal.status not in {s.value for s in AnimalStatus}


class TestAnimalListings:

    def test_list_by_status_is_case_insensitive(self, animal_repo, create_animal):
        create_animal(name="Bravo", status="Ready")
        create_animal(name="Alpha", status="Ready")
        create_animal(name="Charlie", status="In Care")

        ready = animal_repo.list_by_status("ready")

        assert [a.name for a in ready] == ["Alpha", "Bravo"]

    def test_list_by_status_matches_wildcards_literally(self, animal_repo, create_animal):
        create_animal(name="Alpha", status="Ready")
        create_animal(name="Bravo", status="Vet_Pending")

        assert animal_repo.list_by_status("R_ady") == []
        assert animal_repo.list_by_status("%") == []
        assert [a.name for a in animal_repo.list_by_status("vet_pending")] == ["Bravo"]

    def test_list_by_intake_range_is_inclusive(self, animal_repo, create_animal):
        create_animal(name="Early", intake_date=datetime(2024, 1, 1))
        create_animal(name="Start", intake_date=datetime(2024, 2, 1))
        create_animal(name="End", intake_date=datetime(2024, 2, 29))
        create_animal(name="Late", intake_date=datetime(2024, 3, 15))

        found = animal_repo.list_by_intake_range(datetime(2024, 2, 1), datetime(2024, 2, 29))

        assert [a.name for a in found] == ["Start", "End"]

    def test_list_group(self, animal_repo, create_animal):
        create_animal(name="Dot", group_name="Polka Litter")
        create_animal(name="Spot", group_name="Polka Litter")
        hidden = create_animal(name="Blot", group_name="Polka Litter")
        create_animal(name="Solo")
        animal_repo.soft_delete(hidden.id)

        assert [a.name for a in animal_repo.list_group("Polka Litter")] == ["Dot", "Spot"]
        assert len(animal_repo.list_group("Polka Litter", include_deleted=True)) == 3
