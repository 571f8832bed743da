"""
Money: expenses, incomes and debts.

Money columns are `Numeric(12, 2)`. SQLite keeps them as REAL, so the exact
value lives on the Python side: the schemas only accept values with at most
12 digits and 2 decimals, every such value reads back unchanged (the dialect
quantizes to 2 places), and two of them compare in SQL the same way they do as
Decimals. That is what keeps `MoneyOwed.is_fully_paid` and its SQL form in
agreement.
"""

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Numeric, String, Text
from sqlalchemy.ext.hybrid import hybrid_property
from sqlalchemy.orm import Mapped, mapped_column, relationship

from puptrail.database.base import Base, SoftDeleteMixin, TimestampMixin

if TYPE_CHECKING:
    from .animal import Animal
    from .person import Person
    from .trip import Trip


class Expense(SoftDeleteMixin, Base):
    """
    Money spent: fuel, tolls, supplies, vet bills...

    Optionally tied to a trip and/or an animal; both links are cleared (not
    cascaded) when the referenced row is hard-deleted.
    """
    __tablename__ = "expenses"
    __table_args__ = (
        CheckConstraint("amount > 0", name="amount_positive"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)

    date: Mapped[datetime] = mapped_column(DateTime, default=datetime.now, nullable=False)
    category: Mapped[str] = mapped_column(String(100), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    currency: Mapped[str] = mapped_column(String(3), default="CAD", nullable=False)

    trip_id: Mapped[int | None] = mapped_column(ForeignKey("trips.id", ondelete="SET NULL"), index=True)
    animal_id: Mapped[int | None] = mapped_column(ForeignKey("animals.id", ondelete="SET NULL"), index=True)

    notes: Mapped[str | None] = mapped_column(Text)
    receipt_path: Mapped[str | None] = mapped_column(String)

    trip: Mapped[Optional["Trip"]] = relationship(back_populates="expenses")
    animal: Mapped[Optional["Animal"]] = relationship(back_populates="expenses")

    def __repr__(self) -> str:
        return f"<Expense(id={self.id!r}, category={self.category!r}, amount={self.amount!r})>"


class Income(SoftDeleteMixin, Base):
    """
    Money received: adoption fees, donations, group adoptions.

    `group_name` refers to a PuppyGroup by name only.
    """
    __tablename__ = "incomes"
    __table_args__ = (
        CheckConstraint("amount > 0", name="amount_positive"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)

    date: Mapped[datetime] = mapped_column(DateTime, default=datetime.now, nullable=False)
    type: Mapped[str] = mapped_column(String(100), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    currency: Mapped[str] = mapped_column(String(3), default="CAD", nullable=False)

    person_id: Mapped[int | None] = mapped_column(ForeignKey("people.id", ondelete="SET NULL"), index=True)
    animal_id: Mapped[int | None] = mapped_column(ForeignKey("animals.id", ondelete="SET NULL"), index=True)
    group_name: Mapped[str | None] = mapped_column(String(150), index=True)

    notes: Mapped[str | None] = mapped_column(Text)

    person: Mapped[Optional["Person"]] = relationship(back_populates="incomes")
    animal: Mapped[Optional["Animal"]] = relationship(back_populates="incomes")

    def __repr__(self) -> str:
        return f"<Income(id={self.id!r}, type={self.type!r}, amount={self.amount!r})>"


class MoneyOwed(TimestampMixin, Base):
    """
    A debt owed to the rescue.

    `total_owed` and `is_fully_paid` are computed from `amount_owed` and
    `amount_paid` on every access (and in SQL, for filtering); they have no columns.
    """
    __tablename__ = "money_owed"
    __table_args__ = (
        CheckConstraint("amount_owed > 0", name="amount_owed_positive"),
        CheckConstraint("amount_paid >= 0", name="amount_paid_non_negative"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)

    date: Mapped[datetime] = mapped_column(DateTime, default=datetime.now, nullable=False)
    amount_owed: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    amount_paid: Mapped[Decimal] = mapped_column(Numeric(12, 2), default=Decimal("0"), nullable=False)
    date_paid: Mapped[datetime | None] = mapped_column(DateTime)
    debtor: Mapped[str | None] = mapped_column(String(150))
    reason: Mapped[str | None] = mapped_column(String)
    notes: Mapped[str | None] = mapped_column(Text)

    @hybrid_property
    def total_owed(self) -> Decimal:
        # amount_paid is None until the first flush applies the column default
        return self.amount_owed - (self.amount_paid or Decimal("0"))

    @total_owed.inplace.expression
    @classmethod
    def _total_owed_expression(cls):
        return cls.amount_owed - cls.amount_paid

    @hybrid_property
    def is_fully_paid(self) -> bool:
        return (self.amount_paid or Decimal("0")) >= self.amount_owed

    @is_fully_paid.inplace.expression
    @classmethod
    def _is_fully_paid_expression(cls):
        return cls.amount_paid >= cls.amount_owed

    def __repr__(self) -> str:
        return f"<MoneyOwed(id={self.id!r}, debtor={self.debtor!r}, amount_owed={self.amount_owed!r})>"
