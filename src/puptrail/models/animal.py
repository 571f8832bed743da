from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, DateTime, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from puptrail.database.base import Base, SoftDeleteMixin, TimestampMixin
from .enums import AnimalStatus

# Avoid circular import issues when using type hints for related models
if TYPE_CHECKING:
    from .trip import TripAnimal
    from .vet import VetVisit
    from .adoption import Adoption
    from .finance import Expense, Income
    from .attachment import FileAttachment


class Animal(SoftDeleteMixin, TimestampMixin, Base):
    """
    SQLAlchemy model for an Animal in the rescue's care.

    Deleting a row (hard delete) cascades to its vet visits, adoptions and trip links
    and clears `animal_id` on expenses, incomes and attachments. These actions are
    declared on the child foreign keys so the store enforces them itself.

    `group_name` is a by-value link to `PuppyGroup.group_name`, not a foreign key.
    """
    __tablename__ = "animals"
    __table_args__ = (
        CheckConstraint("sex IS NULL OR sex IN ('M', 'F', 'Unknown')", name="sex_valid"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    temp_name: Mapped[str | None] = mapped_column(String)
    breed: Mapped[str | None] = mapped_column(String(100))
    sex: Mapped[str | None] = mapped_column(String(7))
    colour: Mapped[str | None] = mapped_column(String(50))
    collar_colour: Mapped[str | None] = mapped_column(String(50))
    weight: Mapped[Decimal | None] = mapped_column(Numeric(12, 2))
    date_of_birth: Mapped[datetime | None] = mapped_column(DateTime)

    intake_date: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.now,
        nullable=False,
        index=True  # date-ranged listings
    )

    status: Mapped[str] = mapped_column(
        String(50),
        default=AnimalStatus.IN_CARE.value,
        nullable=False,
        index=True  # status-filtered listings
    )

    origin_location: Mapped[str | None] = mapped_column(String)
    origin_country: Mapped[str] = mapped_column(String(50), default="Canada", nullable=False)
    origin_notes: Mapped[str | None] = mapped_column(Text)
    microchip: Mapped[str | None] = mapped_column(String(50))
    group_name: Mapped[str | None] = mapped_column(String(150))
    notes: Mapped[str | None] = mapped_column(Text)
    photo_path: Mapped[str | None] = mapped_column(String)

    # Owned children. passive_deletes: the store's ON DELETE actions do the work.
    trip_links: Mapped[list["TripAnimal"]] = relationship(
        back_populates="animal",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    vet_visits: Mapped[list["VetVisit"]] = relationship(
        back_populates="animal",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    adoptions: Mapped[list["Adoption"]] = relationship(
        back_populates="animal",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    # Set-null children survive the animal
    expenses: Mapped[list["Expense"]] = relationship(back_populates="animal", passive_deletes=True)
    incomes: Mapped[list["Income"]] = relationship(back_populates="animal", passive_deletes=True)
    files: Mapped[list["FileAttachment"]] = relationship(back_populates="animal", passive_deletes=True)

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"<Animal(id={self.id!r}, name={self.name!r}, status={self.status!r})>"
