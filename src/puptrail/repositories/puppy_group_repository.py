"""
Puppy group repository.

Groups are linked to animals and incomes by name only. These lookups follow the
link by value; nothing in the store ties the rows together, so renaming or
deleting a group leaves its members untouched.
"""

from sqlalchemy import select
from sqlalchemy.orm import Session

from puptrail.models.animal import Animal
from puptrail.models.finance import Income
from puptrail.models.puppy_group import PuppyGroup
from puptrail.schemas.records import PuppyGroupCreate
from .base_repository import BaseRepository


class PuppyGroupRepository(BaseRepository[PuppyGroup]):

    def __init__(self, db: Session):
        super().__init__(PuppyGroup, db, PuppyGroupCreate)

    def get_by_name(self, group_name: str) -> PuppyGroup | None:
        return self.find_by_field("group_name", group_name)

    def members(self, group_name: str, include_deleted: bool = False) -> list[Animal]:
        """Animals whose `group_name` matches."""
        query = select(Animal).where(Animal.group_name == group_name).order_by(Animal.name)
        if not include_deleted:
            query = query.where(Animal.is_deleted.is_(False))
        return list(self.db.execute(query).scalars().all())

    def income(self, group_name: str, include_deleted: bool = False) -> list[Income]:
        query = select(Income).where(Income.group_name == group_name).order_by(Income.date, Income.id)
        if not include_deleted:
            query = query.where(Income.is_deleted.is_(False))
        return list(self.db.execute(query).scalars().all())
