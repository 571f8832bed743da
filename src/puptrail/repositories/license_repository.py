from sqlalchemy import select
from sqlalchemy.orm import Session

from puptrail.models.license import License
from puptrail.schemas.records import LicenseCreate
from .base_repository import BaseRepository


class LicenseRepository(BaseRepository[License]):
    """
    Stored activation records. Repository logging only ever names keys, and the
    logging RedactFilter masks `license_key`, `signature` and `machine_id` if
    they are passed as extras anyway.
    """

    def __init__(self, db: Session):
        super().__init__(License, db, LicenseCreate)

    def get_active(self) -> License | None:
        """The most recently activated active license, if any."""
        query = (
            select(License)
            .where(License.is_active.is_(True))
            .order_by(License.activation_date.desc(), License.id.desc())
            .limit(1)
        )
        return self.db.execute(query).scalars().first()
