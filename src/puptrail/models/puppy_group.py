from datetime import datetime

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from puptrail.database.base import Base, TimestampMixin


class PuppyGroup(TimestampMixin, Base):
    """
    A litter or sibling group.

    Animals and incomes point at a group by `group_name` value only, so renaming or
    deleting a group never touches them. Use `PuppyGroupRepository.members()` to
    follow the link. Group names are unique so that lookup is unambiguous.
    """
    __tablename__ = "puppy_groups"

    id: Mapped[int] = mapped_column(primary_key=True)

    group_name: Mapped[str] = mapped_column(String(150), nullable=False, unique=True)
    date_created: Mapped[datetime | None] = mapped_column(DateTime)
    image_path: Mapped[str | None] = mapped_column(String)
    notes: Mapped[str | None] = mapped_column(Text)

    def __repr__(self) -> str:
        return f"<PuppyGroup(id={self.id!r}, group_name={self.group_name!r})>"
