from sqlalchemy.orm import Session

from puptrail.models.intake import Intake
from puptrail.schemas.records import IntakeCreate
from .base_repository import BaseRepository


class IntakeRepository(BaseRepository[Intake]):
    """
    Litter intakes. Costs are stored exactly as given: `total_cost` is not
    recomputed from `puppy_count * cost_per_puppy`, even when they disagree.
    """

    def __init__(self, db: Session):
        super().__init__(Intake, db, IntakeCreate)
