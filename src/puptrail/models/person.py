from typing import TYPE_CHECKING

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from puptrail.database.base import Base, CreatedAtMixin, SoftDeleteMixin
from .enums import PersonType

if TYPE_CHECKING:
    from .vet import VetVisit
    from .adoption import Adoption
    from .finance import Income


class Person(SoftDeleteMixin, CreatedAtMixin, Base):
    """
    SQLAlchemy model for a Person: adopter, vet, contact or volunteer.

    A person who is the adopter on any adoption row cannot be hard-deleted
    (ON DELETE RESTRICT). Vet visits and incomes only lose their link.
    """
    __tablename__ = "people"

    id: Mapped[int] = mapped_column(primary_key=True)

    name: Mapped[str] = mapped_column(String(150), nullable=False, index=True)
    email: Mapped[str | None] = mapped_column(String(200))
    phone: Mapped[str | None] = mapped_column(String(20))
    address: Mapped[str | None] = mapped_column(String(500))
    type: Mapped[str] = mapped_column(String(20), default=PersonType.ADOPTER.value, nullable=False)
    notes: Mapped[str | None] = mapped_column(Text)

    vet_visits: Mapped[list["VetVisit"]] = relationship(back_populates="vet", passive_deletes=True)
    # "all": the ORM must never null out adopter_id; the store blocks the delete instead
    adoptions: Mapped[list["Adoption"]] = relationship(back_populates="adopter", passive_deletes="all")
    incomes: Mapped[list["Income"]] = relationship(back_populates="person", passive_deletes=True)

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"<Person(id={self.id!r}, name={self.name!r}, type={self.type!r})>"
