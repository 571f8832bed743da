from datetime import datetime
from decimal import Decimal

from sqlalchemy import CheckConstraint, DateTime, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from puptrail.database.base import Base, TimestampMixin


class Intake(TimestampMixin, Base):
    """
    A bulk purchase/intake of a litter.

    `total_cost` is expected to equal `puppy_count * cost_per_puppy` but is stored
    exactly as the caller supplies it; the store never recomputes it.
    """
    __tablename__ = "intakes"
    __table_args__ = (
        CheckConstraint("puppy_count >= 1", name="puppy_count_min"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)

    date: Mapped[datetime] = mapped_column(DateTime, default=datetime.now, nullable=False)
    puppy_count: Mapped[int] = mapped_column(nullable=False)
    location: Mapped[str | None] = mapped_column(String(200))
    cost_per_litter: Mapped[Decimal | None] = mapped_column(Numeric(12, 2))
    cost_per_puppy: Mapped[Decimal] = mapped_column(Numeric(12, 2), default=Decimal("0"), nullable=False)
    total_cost: Mapped[Decimal] = mapped_column(Numeric(12, 2), default=Decimal("0"), nullable=False)
    notes: Mapped[str | None] = mapped_column(Text)

    def __repr__(self) -> str:
        return f"<Intake(id={self.id!r}, date={self.date!r}, puppy_count={self.puppy_count!r})>"
