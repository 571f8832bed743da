from sqlalchemy import select
from sqlalchemy.orm import Session

from puptrail.models.attachment import FileAttachment
from puptrail.schemas.records import FileAttachmentCreate
from .base_repository import BaseRepository


class FileAttachmentRepository(BaseRepository[FileAttachment]):
    """
    Attachments. The owner is a loose (owner_type, owner_id) pair; `for_owner` is
    a lookup by value, nothing checks that the owner exists.
    """

    def __init__(self, db: Session):
        super().__init__(FileAttachment, db, FileAttachmentCreate)

    def for_owner(self, owner_type: str, owner_id: int) -> list[FileAttachment]:
        query = (
            select(FileAttachment)
            .where(FileAttachment.owner_type == owner_type)
            .where(FileAttachment.owner_id == owner_id)
            .order_by(FileAttachment.uploaded_at, FileAttachment.id)
        )
        return self._list(query)
