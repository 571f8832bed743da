"""
Animal repository.

Extends BaseRepository with the listing queries the UI needs (by status, by intake
date range, by litter group) and a duplicate guard on create.
"""

import logging
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.orm import Session

from puptrail.exceptions.base import DuplicateError
from puptrail.models.animal import Animal
from puptrail.schemas.animal import AnimalCreate
from .base_repository import BaseRepository, like_pattern

logger = logging.getLogger(__name__)


class AnimalRepository(BaseRepository[Animal]):
    """
    Repository for Animal entity operations.

    Hard-deleting an animal removes its vet visits (and their services), adoptions
    and trip links, and clears `animal_id` on its expenses, incomes and attachments.
    """

    def __init__(self, db: Session):
        super().__init__(Animal, db, AnimalCreate)

    def _check_create(self, data: dict) -> None:
        """
        Refuse a second live animal with the same name and date of birth.

        Animals without a date of birth are never considered duplicates: litters
        are often entered with placeholder names before birth dates are known.
        """
        if not data.get("date_of_birth"):
            return

        query = (
            select(Animal.id)
            .where(Animal.name == data["name"])
            .where(Animal.date_of_birth == data["date_of_birth"])
            .where(Animal.is_deleted.is_(False))
            .limit(1)
        )
        if self.db.execute(query).scalar_one_or_none() is not None:
            logger.info("repo.create.duplicate_animal", extra={"model": "Animal", "fields": ["name", "date_of_birth"]})
            raise DuplicateError(
                f"An animal named {data['name']!r} with this date of birth already exists",
                fields=["name", "date_of_birth"],
            )

    def list_by_status(self, status: str, include_deleted: bool = False) -> list[Animal]:
        """Animals whose status matches, case-insensitively, ordered by name."""
        query = select(Animal).where(Animal.status.ilike(like_pattern(status), escape="\\")).order_by(Animal.name)
        return self._list(query, include_deleted)

    def list_by_intake_range(self, start: datetime, end: datetime, include_deleted: bool = False) -> list[Animal]:
        """Animals taken in between `start` and `end` (both inclusive), oldest intake first."""
        query = (
            select(Animal)
            .where(Animal.intake_date >= start)
            .where(Animal.intake_date <= end)
            .order_by(Animal.intake_date, Animal.id)
        )
        return self._list(query, include_deleted)

    def list_group(self, group_name: str, include_deleted: bool = False) -> list[Animal]:
        query = select(Animal).where(Animal.group_name == group_name).order_by(Animal.name)
        return self._list(query, include_deleted)
