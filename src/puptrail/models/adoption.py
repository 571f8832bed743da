from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, DateTime, ForeignKey, Numeric, String, Text, false
from sqlalchemy.orm import Mapped, mapped_column, relationship

from puptrail.database.base import Base, SoftDeleteMixin

if TYPE_CHECKING:
    from .animal import Animal
    from .person import Person


class Adoption(SoftDeleteMixin, Base):
    """
    SQLAlchemy model for an Adoption.

    Owned by the animal (cascade on animal delete). The adopter reference is RESTRICT:
    a person cannot be hard-deleted while any adoption row, soft-deleted or not,
    still names them.
    """
    __tablename__ = "adoptions"

    id: Mapped[int] = mapped_column(primary_key=True)

    animal_id: Mapped[int] = mapped_column(
        ForeignKey("animals.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    person_id: Mapped[int] = mapped_column(
        ForeignKey("people.id", ondelete="RESTRICT"),
        nullable=False,
        index=True
    )

    date: Mapped[datetime] = mapped_column(DateTime, default=datetime.now, nullable=False)
    agreed_fee: Mapped[Decimal | None] = mapped_column(Numeric(12, 2))
    paid_fee: Mapped[Decimal | None] = mapped_column(Numeric(12, 2))
    paid: Mapped[bool] = mapped_column(Boolean, default=False, server_default=false(), nullable=False)
    contract_path: Mapped[str | None] = mapped_column(String)
    notes: Mapped[str | None] = mapped_column(Text)

    animal: Mapped["Animal"] = relationship(back_populates="adoptions")
    adopter: Mapped["Person"] = relationship(back_populates="adoptions")

    def __repr__(self) -> str:
        return f"<Adoption(id={self.id!r}, animal_id={self.animal_id!r}, person_id={self.person_id!r})>"
