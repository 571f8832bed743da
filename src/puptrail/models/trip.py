from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from puptrail.database.base import Base, SoftDeleteMixin

if TYPE_CHECKING:
    from .animal import Animal
    from .finance import Expense


class Trip(SoftDeleteMixin, Base):
    """
    SQLAlchemy model for a transport Trip.

    Animals ride along through `TripAnimal` join rows; expenses may point at a trip
    and keep existing (with `trip_id` cleared) when the trip is hard-deleted.
    """
    __tablename__ = "trips"

    id: Mapped[int] = mapped_column(primary_key=True)

    date: Mapped[datetime] = mapped_column(DateTime, default=datetime.now, nullable=False, index=True)
    purpose: Mapped[str] = mapped_column(String, default="", nullable=False)
    start_location: Mapped[str | None] = mapped_column(String)
    end_location: Mapped[str | None] = mapped_column(String)
    distance_km: Mapped[Decimal | None] = mapped_column(Numeric(12, 2))
    fuel_litres: Mapped[Decimal | None] = mapped_column(Numeric(12, 2))
    fuel_cost: Mapped[Decimal | None] = mapped_column(Numeric(12, 2))
    notes: Mapped[str | None] = mapped_column(Text)
    country: Mapped[str] = mapped_column(String(50), default="Canada", nullable=False)

    animal_links: Mapped[list["TripAnimal"]] = relationship(
        back_populates="trip",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    expenses: Mapped[list["Expense"]] = relationship(back_populates="trip", passive_deletes=True)

    def __repr__(self) -> str:
        return f"<Trip(id={self.id!r}, date={self.date!r}, purpose={self.purpose!r})>"


class TripAnimal(Base):
    """
    Join row between Trip and Animal.

    No surrogate id: the (trip_id, animal_id) pair is the primary key, and the row
    disappears as soon as either side is hard-deleted.
    """
    __tablename__ = "trip_animals"

    trip_id: Mapped[int] = mapped_column(
        ForeignKey("trips.id", ondelete="CASCADE"),
        primary_key=True
    )
    animal_id: Mapped[int] = mapped_column(
        ForeignKey("animals.id", ondelete="CASCADE"),
        primary_key=True,
        index=True
    )

    trip: Mapped["Trip"] = relationship(back_populates="animal_links")
    animal: Mapped["Animal"] = relationship(back_populates="trip_links")

    def __repr__(self) -> str:
        return f"<TripAnimal(trip_id={self.trip_id!r}, animal_id={self.animal_id!r})>"
