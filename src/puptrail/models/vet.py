from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from sqlalchemy import Boolean, DateTime, ForeignKey, Numeric, String, Text, false
from sqlalchemy.orm import Mapped, mapped_column, relationship

from puptrail.database.base import Base, SoftDeleteMixin

if TYPE_CHECKING:
    from .animal import Animal
    from .person import Person


class VetVisit(SoftDeleteMixin, Base):
    """
    SQLAlchemy model for a veterinary visit.

    Besides the free-form services list (`VetService`), a visit records a date/cost
    pair for each routine procedure: worming, de-fleaing, dental, spay/neuter and
    the rabies, distemper and DAPP vaccinations. `vaccinations_given` is a free-text
    summary such as "Rabies, DAPP".
    """
    __tablename__ = "vet_visits"

    id: Mapped[int] = mapped_column(primary_key=True)

    animal_id: Mapped[int] = mapped_column(
        ForeignKey("animals.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    # the vet; the visit survives if the person is deleted
    person_id: Mapped[int | None] = mapped_column(
        ForeignKey("people.id", ondelete="SET NULL"),
        index=True
    )

    date: Mapped[datetime] = mapped_column(DateTime, default=datetime.now, nullable=False)
    total_cost: Mapped[Decimal] = mapped_column(Numeric(12, 2), default=Decimal("0"), nullable=False)
    notes: Mapped[str | None] = mapped_column(Text)
    invoice_path: Mapped[str | None] = mapped_column(String)
    ready_for_adoption: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        server_default=false(),
        nullable=False
    )

    worming_date: Mapped[datetime | None] = mapped_column(DateTime)
    worming_cost: Mapped[Decimal | None] = mapped_column(Numeric(12, 2))
    defleaing_date: Mapped[datetime | None] = mapped_column(DateTime)
    defleaing_cost: Mapped[Decimal | None] = mapped_column(Numeric(12, 2))
    dental_date: Mapped[datetime | None] = mapped_column(DateTime)
    dental_cost: Mapped[Decimal | None] = mapped_column(Numeric(12, 2))
    spay_neuter_date: Mapped[datetime | None] = mapped_column(DateTime)
    spay_neuter_cost: Mapped[Decimal | None] = mapped_column(Numeric(12, 2))

    vaccinations_given: Mapped[str | None] = mapped_column(String)
    rabies_date: Mapped[datetime | None] = mapped_column(DateTime)
    rabies_cost: Mapped[Decimal | None] = mapped_column(Numeric(12, 2))
    distemper_date: Mapped[datetime | None] = mapped_column(DateTime)
    distemper_cost: Mapped[Decimal | None] = mapped_column(Numeric(12, 2))
    dapp_date: Mapped[datetime | None] = mapped_column(DateTime)
    dapp_cost: Mapped[Decimal | None] = mapped_column(Numeric(12, 2))

    animal: Mapped["Animal"] = relationship(back_populates="vet_visits")
    vet: Mapped[Optional["Person"]] = relationship(back_populates="vet_visits")
    services: Mapped[list["VetService"]] = relationship(
        back_populates="visit",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<VetVisit(id={self.id!r}, animal_id={self.animal_id!r}, date={self.date!r})>"


class VetService(Base):
    """One billed line of a vet visit."""
    __tablename__ = "vet_services"

    id: Mapped[int] = mapped_column(primary_key=True)

    visit_id: Mapped[int] = mapped_column(
        ForeignKey("vet_visits.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    service_name: Mapped[str] = mapped_column(String, default="", nullable=False)
    cost: Mapped[Decimal] = mapped_column(Numeric(12, 2), default=Decimal("0"), nullable=False)

    visit: Mapped["VetVisit"] = relationship(back_populates="services")

    def __repr__(self) -> str:
        return f"<VetService(id={self.id!r}, visit_id={self.visit_id!r}, service_name={self.service_name!r})>"
