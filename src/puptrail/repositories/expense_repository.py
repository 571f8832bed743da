from sqlalchemy import select
from sqlalchemy.orm import Session

from puptrail.models.finance import Expense
from puptrail.schemas.finance import ExpenseCreate
from .base_repository import BaseRepository


class ExpenseRepository(BaseRepository[Expense]):
    """Expenses; trip and animal links are cleared, not cascaded, on hard delete of either."""

    def __init__(self, db: Session):
        super().__init__(Expense, db, ExpenseCreate)

    def list_for_trip(self, trip_id: int, include_deleted: bool = False) -> list[Expense]:
        query = select(Expense).where(Expense.trip_id == trip_id).order_by(Expense.date, Expense.id)
        return self._list(query, include_deleted)

    def list_for_animal(self, animal_id: int, include_deleted: bool = False) -> list[Expense]:
        query = select(Expense).where(Expense.animal_id == animal_id).order_by(Expense.date, Expense.id)
        return self._list(query, include_deleted)
