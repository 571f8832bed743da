"""
Adoption repository.

`create()` validates the ids (positive integers) first, then checks that both the
animal and the adopter exist, so the caller gets a NotFoundError naming the
missing side instead of a bare foreign key failure.
"""

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from puptrail.exceptions.base import NotFoundError
from puptrail.models.adoption import Adoption
from puptrail.models.animal import Animal
from puptrail.models.person import Person
from puptrail.schemas.adoption import AdoptionCreate
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class AdoptionRepository(BaseRepository[Adoption]):

    def __init__(self, db: Session):
        super().__init__(Adoption, db, AdoptionCreate)

    def _check_create(self, data: dict) -> None:
        if self.db.get(Animal, data["animal_id"]) is None:
            logger.info("repo.create.missing_reference", extra={"model": "Adoption", "fields": ["animal_id"]})
            raise NotFoundError(f"Animal with ID {data['animal_id']} not found", fields=["animal_id"])

        if self.db.get(Person, data["person_id"]) is None:
            logger.info("repo.create.missing_reference", extra={"model": "Adoption", "fields": ["person_id"]})
            raise NotFoundError(f"Person with ID {data['person_id']} not found", fields=["person_id"])

    def list_for_animal(self, animal_id: int, include_deleted: bool = False) -> list[Adoption]:
        query = select(Adoption).where(Adoption.animal_id == animal_id).order_by(Adoption.date.desc())
        return self._list(query, include_deleted)

    def list_for_adopter(self, person_id: int, include_deleted: bool = False) -> list[Adoption]:
        query = select(Adoption).where(Adoption.person_id == person_id).order_by(Adoption.date.desc())
        return self._list(query, include_deleted)
