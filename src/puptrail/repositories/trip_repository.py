"""
Trip repository.

Besides trip CRUD, manages the Trip <-> Animal join rows. A join row has no
identity of its own: it is identified by the (trip_id, animal_id) pair and is
removed by the store when either side is hard-deleted.
"""

import logging
from datetime import datetime

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from puptrail.exceptions.mapper import db_error_handler, read_error_handler
from puptrail.models.animal import Animal
from puptrail.models.trip import Trip, TripAnimal
from puptrail.schemas.trip import TripCreate
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class TripRepository(BaseRepository[Trip]):

    def __init__(self, db: Session):
        super().__init__(Trip, db, TripCreate)

    def list_between(self, start: datetime, end: datetime, include_deleted: bool = False) -> list[Trip]:
        """Trips dated between `start` and `end` (inclusive), most recent first."""
        query = (
            select(Trip)
            .where(Trip.date >= start)
            .where(Trip.date <= end)
            .order_by(Trip.date.desc(), Trip.id.desc())
        )
        return self._list(query, include_deleted)

    def add_animal(self, trip_id: int, animal_id: int) -> TripAnimal:
        """
        Put an animal on a trip. Adding the same pair twice returns the existing link.

        Raises:
            IntegrityViolationError: if the trip or the animal does not exist
        """
        with read_error_handler("TripAnimal"):
            existing = self.db.get(TripAnimal, (trip_id, animal_id))
        if existing is not None:
            return existing

        with db_error_handler(self.db, "TripAnimal", "create"):
            link = TripAnimal(trip_id=trip_id, animal_id=animal_id)
            self.db.add(link)
            self.db.flush()

        logger.info("repo.trip.animal_added", extra={"trip_id": trip_id, "animal_id": animal_id})
        return link

    def remove_animal(self, trip_id: int, animal_id: int) -> bool:
        with db_error_handler(self.db, "TripAnimal", "delete"):
            result = self.db.execute(
                delete(TripAnimal)
                .where(TripAnimal.trip_id == trip_id)
                .where(TripAnimal.animal_id == animal_id)
            )

        removed = result.rowcount > 0
        logger.info(
            "repo.trip.animal_removed",
            extra={"trip_id": trip_id, "animal_id": animal_id, "found": removed},
        )
        return removed

    def animals_on_trip(self, trip_id: int, include_deleted: bool = False) -> list[Animal]:
        query = (
            select(Animal)
            .join(TripAnimal, TripAnimal.animal_id == Animal.id)
            .where(TripAnimal.trip_id == trip_id)
            .order_by(Animal.name)
        )
        if not include_deleted:
            query = query.where(Animal.is_deleted.is_(False))

        with read_error_handler("Animal"):
            return list(self.db.execute(query).scalars().all())
