from sqlalchemy import select
from sqlalchemy.orm import Session

from puptrail.models.finance import Income
from puptrail.schemas.finance import IncomeCreate
from .base_repository import BaseRepository


class IncomeRepository(BaseRepository[Income]):

    def __init__(self, db: Session):
        super().__init__(Income, db, IncomeCreate)

    def list_for_person(self, person_id: int, include_deleted: bool = False) -> list[Income]:
        query = select(Income).where(Income.person_id == person_id).order_by(Income.date, Income.id)
        return self._list(query, include_deleted)

    def list_for_group(self, group_name: str, include_deleted: bool = False) -> list[Income]:
        """Income recorded against a puppy group, matched by group name."""
        query = select(Income).where(Income.group_name == group_name).order_by(Income.date, Income.id)
        return self._list(query, include_deleted)
