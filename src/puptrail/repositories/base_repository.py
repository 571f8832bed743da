"""
Base repository class providing common store operations.

This class serves as a reusable foundation for the entity repositories. It is
bound to one synchronous SQLAlchemy `Session` (a unit of work opened with
`Store.session()`) and implements the operations every entity shares:

    create / get_by_id / get_by_id_or_raise / find_by_field / get_all /
    update / soft_delete / restore / delete / exists / count

Entity repositories inherit from it and add their own queries. Like the rest of
the layer, repositories `flush()` but never `commit()`: when the changes become
permanent is the caller's decision (see `database.session.session_scope`).

Soft delete vs hard delete:
  - `soft_delete()` only sets `is_deleted`; default list/count reads skip the row
    and `restore()` brings it back.
  - `delete()` physically removes the row. The store fires the ON DELETE actions
    (cascade / set null / restrict) declared on the foreign keys, atomically with
    the delete. A restricted delete raises IntegrityViolationError and changes
    nothing.
"""

import time
import logging
from typing import Any, Generic, Type, TypeVar

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from puptrail.database.base import Base
from puptrail.exceptions.base import (
    DuplicateError,
    FieldError,
    IntegrityViolationError,
    InvalidFieldError,
    NotFoundError,
    RepositoryError,
    ValidationError,
)
from puptrail.exceptions.mapper import db_error_handler, read_error_handler
from puptrail.schemas.base import EntitySchema, validate_create, validate_update
from puptrail.validators.model_validators import (
    find_unique_conflicts,
    find_unknown_model_kwargs,
    get_required_columns,
)

# Type variable for the model class
ModelType = TypeVar("ModelType", bound=Base)

logger = logging.getLogger(__name__)


def like_pattern(text: str) -> str:
    """Escape LIKE wildcards in user text; use with `ilike(..., escape="\\\\")`."""
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class BaseRepository(Generic[ModelType]):
    """
    Generic base repository providing common CRUD operations.

    Type Parameters:
        ModelType: The SQLAlchemy model class this repository manages.
    """

    def __init__(self, model: Type[ModelType], db: Session, schema: Type[EntitySchema] | None = None):
        """
        Args:
            model: the model class (not an instance), e.g. Animal
            db: the session of the current unit of work
            schema: pydantic schema validating create/update payloads
        """
        self.model = model
        self.db = db
        self.schema = schema

    @property
    def model_name(self) -> str:
        return self.model.__name__

    @property
    def supports_soft_delete(self) -> bool:
        return hasattr(self.model, "is_deleted")

    def _not_deleted(self, query, include_deleted: bool = False):
        if self.supports_soft_delete and not include_deleted:
            query = query.where(self.model.is_deleted.is_(False))
        return query

    # =================================================================================================================
    # Create
    # =================================================================================================================

    def _check_create(self, data: dict[str, Any]) -> None:
        """
        Hook for entity-specific pre-write checks (duplicates, referenced rows).
        Runs after field validation, before the INSERT. Raise a RepositoryError to abort.
        """

    def create(self, **kwargs) -> ModelType:
        """
        Create an entity with validation + DB write. Logging:
        - DEBUG: start event with model name and provided keys (not values).
        - INFO: expected domain errors (invalid fields, invalid input, duplicate).
        - INFO: success event with created id and duration_ms.

        Raises:
            InvalidFieldError: unknown keyword arguments
            ValidationError: one FieldError per violated field rule
            DuplicateError: a unique constraint would be violated
            IntegrityViolationError: a referenced row does not exist
            StoreAccessError: the store cannot be written
        """
        logger.debug(
            "repo.create.start",
            extra={
                "model": self.model_name,
                "operation": "create",
                # keys only, never values
                "provided_keys": sorted(kwargs.keys()),
            },
        )

        # 1) unknown fields
        unknown = find_unknown_model_kwargs(self.model, kwargs)
        if unknown:
            logger.info(
                "repo.create.invalid_fields",
                extra={"model": self.model_name, "operation": "create", "invalid_fields": sorted(unknown)},
            )
            raise InvalidFieldError(f"Unknown field(s) for {self.model_name}: {', '.join(unknown)}", fields=unknown)

        # 2) field-level validation, every violation at once
        data = dict(kwargs)
        if self.schema is not None:
            try:
                data = validate_create(self.schema, data)
            except ValidationError as exc:
                logger.info(
                    "repo.create.invalid_input",
                    extra={"model": self.model_name, "operation": "create", "invalid_fields": exc.fields},
                )
                raise

        # an explicit None must not override a "now"/flag default
        defaults = {c.name for c in self.model.__table__.columns if c.default is not None}
        data = {k: v for k, v in data.items() if not (v is None and k in defaults)}

        # 3) required columns the schema does not cover
        missing = [c for c in get_required_columns(self.model) if data.get(c) is None]
        if missing:
            logger.info(
                "repo.create.missing_required",
                extra={"model": self.model_name, "operation": "create", "missing_fields": sorted(missing)},
            )
            raise ValidationError([FieldError(c, "is required") for c in missing], model_name=self.model_name)

        # 4) unique pre-check (best-effort; the store still enforces it)
        conflicts = find_unique_conflicts(self.db, self.model, data)
        if conflicts:
            logger.info(
                "repo.create.duplicate_precheck",
                extra={"model": self.model_name, "operation": "create", "conflict_fields": sorted(conflicts)},
            )
            raise DuplicateError(
                f"{self.model_name} already exists for field(s): {', '.join(sorted(conflicts))}",
                fields=sorted(conflicts),
            )

        self._check_create(data)

        # 5) write; integrity errors are mapped by the handler
        start = time.perf_counter()
        with db_error_handler(self.db, self.model_name, "create"):
            entity = self.model(**data)
            self.db.add(entity)
            self.db.flush()

        logger.info(
            "repo.create.success",
            extra={
                "model": self.model_name,
                "operation": "create",
                "id": getattr(entity, "id", None),
                "duration_ms": int((time.perf_counter() - start) * 1000),
            },
        )
        return entity

    # =================================================================================================================
    # Read (single entity)
    # =================================================================================================================

    def get_by_id(self, entity_id: int) -> ModelType | None:
        """
        Get an entity by its primary key, soft-deleted or not.

        This is the explicit read: a soft-deleted row is still returned (check
        `is_deleted`). Use `get_all()` / `count()` for filtered reads.
        """
        with read_error_handler(self.model_name):
            entity = self.db.get(self.model, entity_id)

        logger.debug("repo.get_by_id", extra={"model": self.model_name, "id": entity_id, "found": entity is not None})
        return entity

    def get_by_id_or_raise(self, entity_id: int) -> ModelType:
        entity = self.get_by_id(entity_id)
        if entity is None:
            raise NotFoundError(f"{self.model_name} with ID {entity_id} not found")
        return entity

    def find_by_field(self, field: str, value: Any, include_deleted: bool = False) -> ModelType | None:
        """
        Find the first entity whose `field` equals `value`.

        Raises:
            InvalidFieldError: if the field is not a column of the model
        """
        if find_unknown_model_kwargs(self.model, {field: value}):
            raise InvalidFieldError(f"{self.model_name} has no field '{field}'", fields=[field])

        query = select(self.model).where(getattr(self.model, field) == value)
        query = self._not_deleted(query, include_deleted).limit(1)

        with read_error_handler(self.model_name):
            return self.db.execute(query).scalars().first()

    # =================================================================================================================
    # Read (collections)
    # =================================================================================================================

    def _list(self, query, include_deleted: bool = False) -> list[ModelType]:
        query = self._not_deleted(query, include_deleted)
        with read_error_handler(self.model_name):
            return list(self.db.execute(query).scalars().all())

    def get_all(
        self,
        offset: int = 0,                # how many records to skip
        limit: int | None = 100,        # page size; None for everything
        order_by: str | None = None,    # optional column to sort by
        include_deleted: bool = False,
    ) -> list[ModelType]:
        """
        Get all entities with optional ordering and pagination.

        Soft-deleted rows are excluded unless `include_deleted` is True. Without
        `order_by`, results are newest first when the model has `created_at`,
        otherwise in id order.
        """
        query = select(self.model)

        if order_by:
            if order_by in self.model.__table__.columns:
                query = query.order_by(getattr(self.model, order_by))
            else:
                logger.warning(
                    "repo.get_all.invalid_order_by",
                    extra={"model": self.model_name, "order_by": order_by},
                )
        elif hasattr(self.model, "created_at"):
            query = query.order_by(self.model.created_at.desc(), self.model.id.desc())
        else:
            query = query.order_by(self.model.id)

        query = query.offset(offset)
        if limit is not None:
            query = query.limit(limit)

        entities = self._list(query, include_deleted)
        logger.debug("repo.get_all", extra={"model": self.model_name, "count": len(entities)})
        return entities

    # =================================================================================================================
    # Update
    # =================================================================================================================

    def update(self, entity_id: int, **kwargs) -> ModelType | None:
        """
        Update an entity by its ID.

        The merged state (current values + changes) is validated as a whole, so
        e.g. clearing a required field is rejected. `updated_at` is touched by the
        column's onupdate when the model has one.

        Returns:
            The updated entity, or None if no row has that id.
        """
        unknown = find_unknown_model_kwargs(self.model, kwargs)
        if unknown:
            logger.info(
                "repo.update.invalid_fields",
                extra={"model": self.model_name, "operation": "update", "invalid_fields": sorted(unknown)},
            )
            raise InvalidFieldError(f"Unknown field(s) for {self.model_name}: {', '.join(unknown)}", fields=unknown)

        entity = self.get_by_id(entity_id)
        if entity is None:
            logger.warning("repo.update.not_found", extra={"model": self.model_name, "id": entity_id})
            return None

        changes = dict(kwargs)
        if self.schema is not None:
            try:
                changes = validate_update(self.schema, entity, changes)
            except ValidationError as exc:
                logger.info(
                    "repo.update.invalid_input",
                    extra={"model": self.model_name, "operation": "update", "invalid_fields": exc.fields},
                )
                raise

        conflicts = {
            c for c in find_unique_conflicts(self.db, self.model, changes, exclude_id=entity_id)
        }
        if conflicts:
            raise DuplicateError(
                f"{self.model_name} already exists for field(s): {', '.join(sorted(conflicts))}",
                fields=sorted(conflicts),
            )

        with db_error_handler(self.db, self.model_name, "update"):
            for key, value in changes.items():
                setattr(entity, key, value)
            self.db.flush()

        logger.info(
            "repo.update.success",
            extra={"model": self.model_name, "operation": "update", "id": entity_id, "changed_keys": sorted(changes)},
        )
        return entity

    # =================================================================================================================
    # Soft delete
    # =================================================================================================================

    def _set_deleted(self, entity_id: int, flag: bool) -> bool:
        if not self.supports_soft_delete:
            raise RepositoryError(f"{self.model_name} does not support soft delete")

        entity = self.get_by_id(entity_id)
        if entity is None:
            return False

        with db_error_handler(self.db, self.model_name, "update"):
            entity.is_deleted = flag
            self.db.flush()
        return True

    def soft_delete(self, entity_id: int) -> bool:
        """Mark the row deleted. Returns False if there is no such row."""
        done = self._set_deleted(entity_id, True)
        logger.info("repo.soft_delete", extra={"model": self.model_name, "id": entity_id, "found": done})
        return done

    def restore(self, entity_id: int) -> bool:
        done = self._set_deleted(entity_id, False)
        logger.info("repo.restore", extra={"model": self.model_name, "id": entity_id, "found": done})
        return done

    # =================================================================================================================
    # Hard delete
    # =================================================================================================================

    def delete(self, entity_id: int) -> bool:
        """
        Physically delete the row; the store applies the referential actions.

        Returns:
            True if a row was deleted, False if none had that id.

        Raises:
            IntegrityViolationError: a RESTRICT foreign key still references the row
                (e.g. a person who is an adopter). Nothing is changed.
        """
        try:
            with db_error_handler(self.db, self.model_name, "delete"):
                result = self.db.execute(delete(self.model).where(self.model.id == entity_id))
        except IntegrityViolationError as exc:
            logger.info(
                "repo.delete.blocked",
                extra={"model": self.model_name, "operation": "delete", "id": entity_id, "constraint": exc.constraint},
            )
            raise

        # cascaded / nulled children already loaded in this session are stale now
        self.db.expire_all()

        if result.rowcount > 0:
            logger.info("repo.delete.success", extra={"model": self.model_name, "operation": "delete", "id": entity_id})
            return True

        logger.warning("repo.delete.not_found", extra={"model": self.model_name, "operation": "delete", "id": entity_id})
        return False

    # =================================================================================================================
    # Utility
    # =================================================================================================================

    def exists(self, entity_id: int) -> bool:
        """Whether a row with this id exists (soft-deleted rows included)."""
        query = select(func.count()).select_from(self.model).where(self.model.id == entity_id)
        with read_error_handler(self.model_name):
            return bool(self.db.execute(query).scalar_one())

    def count(self, include_deleted: bool = False, **filters: Any) -> int:
        """
        Count rows, optionally filtered by column equality.

            repo.count(status="In Care")
        """
        unknown = find_unknown_model_kwargs(self.model, filters)
        if unknown:
            raise InvalidFieldError(f"Unknown filter field(s) for {self.model_name}: {', '.join(unknown)}",
                                    fields=unknown)

        query = select(func.count()).select_from(self.model)
        for field, value in filters.items():
            query = query.where(getattr(self.model, field) == value)
        query = self._not_deleted(query, include_deleted)

        with read_error_handler(self.model_name):
            return self.db.execute(query).scalar_one()
