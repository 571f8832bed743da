"""
Money owed repository.

`MoneyOwed.total_owed` and `MoneyOwed.is_fully_paid` are hybrid properties: on an
instance they are computed from the current `amount_owed` / `amount_paid`, and in
a query they compile to the same arithmetic in SQL. Nothing here writes them.
"""

import logging
from datetime import datetime
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.orm import Session

from puptrail.models.finance import MoneyOwed
from puptrail.schemas.base import validate_create
from puptrail.schemas.finance import MoneyOwedCreate, PaymentCreate
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class MoneyOwedRepository(BaseRepository[MoneyOwed]):

    def __init__(self, db: Session):
        super().__init__(MoneyOwed, db, MoneyOwedCreate)

    def record_payment(self, entity_id: int, amount: Decimal | float | str,
                       date_paid: datetime | None = None) -> MoneyOwed:
        """
        Add `amount` to what has been paid and stamp `date_paid` (now by default).

        Raises:
            NotFoundError: no debt with that id
            ValidationError: amount is not a positive number with at most two decimals
        """
        amount = validate_create(PaymentCreate, {"amount": amount})["amount"]

        debt = self.get_by_id_or_raise(entity_id)
        updated = self.update(
            entity_id,
            amount_paid=(debt.amount_paid or Decimal("0")) + amount,
            date_paid=date_paid or datetime.now(),
        )
        logger.info(
            "repo.money_owed.payment_recorded",
            extra={"id": entity_id, "fully_paid": updated.is_fully_paid},
        )
        return updated

    def list_outstanding(self) -> list[MoneyOwed]:
        """Debts not fully paid yet, oldest first."""
        query = (
            select(MoneyOwed)
            .where(~MoneyOwed.is_fully_paid)
            .order_by(MoneyOwed.date, MoneyOwed.id)
        )
        return self._list(query)
