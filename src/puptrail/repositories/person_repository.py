"""
Person repository.

A person cannot be hard-deleted while they are the adopter on any adoption,
soft-deleted adoptions included; the store refuses the delete and `delete()`
raises IntegrityViolationError naming the adoptions that hold the person.
"""

import logging

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from puptrail.exceptions.base import IntegrityViolationError
from puptrail.exceptions.mapper import read_error_handler
from puptrail.models.adoption import Adoption
from puptrail.models.person import Person
from puptrail.schemas.person import PersonCreate
from .base_repository import BaseRepository, like_pattern

logger = logging.getLogger(__name__)


class PersonRepository(BaseRepository[Person]):

    def __init__(self, db: Session):
        super().__init__(Person, db, PersonCreate)

    def list_by_type(self, person_type: str, include_deleted: bool = False) -> list[Person]:
        """People of one type (Adopter, Vet, Contact, Volunteer), ordered by name."""
        query = select(Person).where(Person.type == person_type).order_by(Person.name)
        return self._list(query, include_deleted)

    def search_by_name(self, text: str, include_deleted: bool = False) -> list[Person]:
        """Case-insensitive substring search on the name; `%` and `_` match literally."""
        pattern = f"%{like_pattern(text.strip())}%"
        query = select(Person).where(Person.name.ilike(pattern, escape="\\")).order_by(Person.name)
        return self._list(query, include_deleted)

    def adoption_count(self, person_id: int) -> int:
        """Adoptions (soft-deleted ones included) that name this person as adopter."""
        query = select(func.count()).select_from(Adoption).where(Adoption.person_id == person_id)
        with read_error_handler("Adoption"):
            return self.db.execute(query).scalar_one()

    def delete(self, entity_id: int) -> bool:
        """
        Hard-delete a person. Vet visits and incomes that name them keep their row
        with the link cleared.

        Raises:
            IntegrityViolationError: the person is the adopter on an adoption.
        """
        adoptions = self.adoption_count(entity_id)
        if adoptions:
            logger.info(
                "repo.delete.blocked",
                extra={"model": self.model_name, "operation": "delete", "id": entity_id,
                       "relationship": "adoptions.person_id", "references": adoptions},
            )
            raise IntegrityViolationError(
                f"Person {entity_id} is the adopter on {adoptions} adoption(s) and cannot be deleted",
                fields=["adoptions.person_id"],
            )
        return super().delete(entity_id)
