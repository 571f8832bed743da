"""
This Base class is used as the declarative base for all SQLAlchemy ORM models.
Import this Base class in any model module that defines ORM classes.
"""

from datetime import datetime
from sqlalchemy import Boolean, DateTime, false
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


# Naming convention for constraints and indexes
Base.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s"
}


class SoftDeleteMixin:
    """
    Adds the `is_deleted` flag.

    Normal application deletes only flip this flag; the row stays in the store and
    default reads filter it out. Physical deletes go through the repositories' hard
    `delete()` and fire the foreign keys' ON DELETE actions.
    """

    is_deleted: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        server_default=false(),
        nullable=False
    )


class CreatedAtMixin:
    # Python-side default so the caller sees the value right after flush
    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.now,
        nullable=False
    )


class TimestampMixin(CreatedAtMixin):
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.now,
        onupdate=datetime.now,
        nullable=False
    )
