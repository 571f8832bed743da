from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import DateTime, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from puptrail.database.base import Base

if TYPE_CHECKING:
    from .animal import Animal


class FileAttachment(Base):
    """
    A stored file (photo, PDF, invoice) attached to some record.

    The owner is a loose `(owner_type, owner_id)` pair such as `("adoption", 12)`;
    nothing in the store checks it. Only `animal_id` is a real foreign key, and it
    is cleared when the animal is hard-deleted.

    `path` is relative to the docs root (see `database.paths.save_attachment`).
    """
    __tablename__ = "file_attachments"
    __table_args__ = (
        Index("ix_file_attachments_owner", "owner_type", "owner_id"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)

    owner_type: Mapped[str] = mapped_column(String(50), default="", nullable=False)
    owner_id: Mapped[int] = mapped_column(default=0, nullable=False)
    path: Mapped[str] = mapped_column(String, nullable=False)
    file_type: Mapped[str | None] = mapped_column(String(50))
    uploaded_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.now, nullable=False)

    animal_id: Mapped[int | None] = mapped_column(ForeignKey("animals.id", ondelete="SET NULL"), index=True)

    animal: Mapped[Optional["Animal"]] = relationship(back_populates="files")

    def __repr__(self) -> str:
        return f"<FileAttachment(id={self.id!r}, owner_type={self.owner_type!r}, owner_id={self.owner_id!r})>"
