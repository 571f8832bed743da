"""
Vet visit repository.

Visits belong to an animal (deleted with it) and optionally name the vet (a
Person; the link is cleared if the person is deleted). Billed services hang off
a visit and are deleted with it.
"""

import logging
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.orm import Session

from puptrail.exceptions.base import ValidationError
from puptrail.exceptions.mapper import db_error_handler, read_error_handler
from puptrail.models.vet import VetService, VetVisit
from puptrail.schemas.base import validate_create
from puptrail.schemas.vet import VetServiceCreate, VetVisitCreate
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class VetVisitRepository(BaseRepository[VetVisit]):

    def __init__(self, db: Session):
        super().__init__(VetVisit, db, VetVisitCreate)

    def list_for_animal(self, animal_id: int, include_deleted: bool = False) -> list[VetVisit]:
        """The animal's visits, most recent first."""
        query = (
            select(VetVisit)
            .where(VetVisit.animal_id == animal_id)
            .order_by(VetVisit.date.desc(), VetVisit.id.desc())
        )
        return self._list(query, include_deleted)

    def add_service(self, visit_id: int, service_name: str, cost: Decimal | float | str = Decimal("0")) -> VetService:
        """
        Add a billed line to a visit.

        Raises:
            ValidationError: empty name or negative cost
            IntegrityViolationError: the visit does not exist
        """
        try:
            data = validate_create(
                VetServiceCreate,
                {"visit_id": visit_id, "service_name": service_name, "cost": cost},
            )
        except ValidationError as exc:
            logger.info(
                "repo.create.invalid_input",
                extra={"model": "VetService", "operation": "create", "invalid_fields": exc.fields},
            )
            raise

        with db_error_handler(self.db, "VetService", "create"):
            service = VetService(**data)
            self.db.add(service)
            self.db.flush()

        logger.info("repo.create.success", extra={"model": "VetService", "operation": "create", "id": service.id})
        return service

    def services_for_visit(self, visit_id: int) -> list[VetService]:
        query = select(VetService).where(VetService.visit_id == visit_id).order_by(VetService.id)
        with read_error_handler("VetService"):
            return list(self.db.execute(query).scalars().all())
