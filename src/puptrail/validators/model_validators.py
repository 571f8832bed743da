from typing import Iterable
from sqlalchemy import and_, select, UniqueConstraint
from sqlalchemy import inspect as sa_inspect
from sqlalchemy.orm import Session


def find_unknown_model_kwargs(model, kwargs: dict) -> list[str]:
    """
    Return list of unknown kwarg keys that are not mapped columns of the model.
    - model: the SQLAlchemy model class (not instance)
    - kwargs: dict of incoming kwargs to validate

    Relationships are not accepted: repositories take foreign key ids,
    not related objects.
    """
    mapper = sa_inspect(model)
    allowed = {attr.key for attr in mapper.column_attrs}
    return [k for k in kwargs.keys() if k not in allowed]


def get_required_columns(model) -> list[str]:
    """
    Columns that are NOT NULL and have no server/default and are not simple auto PKs.
    """
    cols = []
    for col in model.__table__.columns:
        has_default = col.default is not None or col.server_default is not None
        is_auto_pk = col.primary_key and col.autoincrement in (True, "auto") and len(model.__table__.primary_key.columns) == 1
        if not col.nullable and not has_default and not is_auto_pk:
            cols.append(col.name)
    return cols


def get_unique_column_sets(model) -> list[Iterable[str]]:
    """
    Return a list of unique column sets. Each item is an iterable of column names.
    Covers:
      - Column(unique=True)
      - UniqueConstraint in the table
      - Index(..., unique=True)
    """
    unique_sets = []

    for col in model.__table__.columns:
        if col.unique:
            unique_sets.append([col.name])

    for constraint in model.__table__.constraints:
        if isinstance(constraint, UniqueConstraint):
            unique_sets.append([c.name for c in constraint.columns])

    for idx in model.__table__.indexes:
        if idx.unique:
            unique_sets.append([c.name for c in idx.columns])

    return unique_sets


def find_unique_conflicts(db: Session, model, kwargs: dict, exclude_id: int | None = None) -> set[str]:
    """
    Run pre-insert queries to detect existing rows that would violate unique constraints.
    Returns a set of column names that conflict (best-effort).

    `exclude_id` skips the row being updated.
    """
    conflicts = set()

    for cols in get_unique_column_sets(model):
        # only check if all columns in this unique set are provided in kwargs
        if not all(c in kwargs for c in cols):
            continue

        conditions = [getattr(model, c) == kwargs[c] for c in cols]
        if exclude_id is not None:
            conditions.append(model.id != exclude_id)
        existing = db.execute(select(model).where(and_(*conditions)).limit(1)).scalars().first()
        if existing is not None:
            conflicts.update(cols)

    return conflicts
