from datetime import datetime

from sqlalchemy import Boolean, DateTime, String, Text, true
from sqlalchemy.orm import Mapped, mapped_column

from puptrail.database.base import Base, CreatedAtMixin


class License(CreatedAtMixin, Base):
    """
    Stored activation record. Key verification happens outside the store.
    """
    __tablename__ = "licenses"

    id: Mapped[int] = mapped_column(primary_key=True)

    licensee_name: Mapped[str] = mapped_column(String(255), nullable=False)
    license_key: Mapped[str] = mapped_column(Text, nullable=False)
    signature: Mapped[str] = mapped_column(Text, nullable=False)
    machine_id: Mapped[str] = mapped_column(String(32), nullable=False)
    activation_date: Mapped[datetime] = mapped_column(DateTime, default=datetime.now, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, server_default=true(), nullable=False)
    notes: Mapped[str | None] = mapped_column(Text)

    def __repr__(self) -> str:
        # key, signature and machine id stay out of reprs (they end up in logs)
        return f"<License(id={self.id!r}, licensee_name={self.licensee_name!r}, is_active={self.is_active!r})>"
