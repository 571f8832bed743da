"""
Schema-level checks: table names, referential actions and constraints as the
store sees them (read back through the SQLite inspector, not the metadata).
"""

from decimal import Decimal

import pytest
from sqlalchemy import inspect, select

from puptrail.database.base import Base
from puptrail.models import Animal, MoneyOwed

EXPECTED_TABLES = {
    "animals",
    "people",
    "trips",
    "trip_animals",
    "vet_visits",
    "vet_services",
    "adoptions",
    "expenses",
    "incomes",
    "file_attachments",
    "intakes",
    "money_owed",
    "puppy_groups",
    "licenses",
}


def _on_delete(store, table: str, column: str) -> str | None:
    for fk in inspect(store.engine).get_foreign_keys(table):
        if fk["constrained_columns"] == [column]:
            return (fk.get("options") or {}).get("ondelete")
    raise AssertionError(f"no foreign key on {table}.{column}")


class TestSchema:

    def test_all_tables_created(self, store):
        assert EXPECTED_TABLES <= set(inspect(store.engine).get_table_names())
        assert EXPECTED_TABLES == set(Base.metadata.tables)

    @pytest.mark.parametrize(
        "table, column, action",
        [
            ("vet_visits", "animal_id", "CASCADE"),
            ("vet_visits", "person_id", "SET NULL"),
            ("vet_services", "visit_id", "CASCADE"),
            ("adoptions", "animal_id", "CASCADE"),
            ("adoptions", "person_id", "RESTRICT"),
            ("trip_animals", "trip_id", "CASCADE"),
            ("trip_animals", "animal_id", "CASCADE"),
            ("expenses", "trip_id", "SET NULL"),
            ("expenses", "animal_id", "SET NULL"),
            ("incomes", "person_id", "SET NULL"),
            ("incomes", "animal_id", "SET NULL"),
            ("file_attachments", "animal_id", "SET NULL"),
        ],
    )
    def test_referential_actions(self, store, table, column, action):
        assert _on_delete(store, table, column) == action

    def test_trip_animals_primary_key_is_the_pair(self, store):
        pk = inspect(store.engine).get_pk_constraint("trip_animals")

        assert sorted(pk["constrained_columns"]) == ["animal_id", "trip_id"]

    def test_foreign_keys_enforced_on_every_connection(self, store):
        with store.engine.connect() as conn:
            assert conn.exec_driver_sql("PRAGMA foreign_keys").scalar_one() == 1

    def test_constraint_names(self):
        names = {c.name for c in Animal.__table__.constraints if c.name}

        assert "ck_animals_sex_valid" in names


class TestMoneyOwedSqlExpressions:

    def test_hybrids_filter_in_sql(self, db_session, money_owed_repo):
        """
        Behavior:
            - total_owed and is_fully_paid also work as SQL expressions, so the
              store can filter and compute on them.
        """
        money_owed_repo.create(amount_owed=Decimal("100"), amount_paid=Decimal("25"), debtor="A")
        money_owed_repo.create(amount_owed=Decimal("10"), amount_paid=Decimal("10"), debtor="B")

        paid = db_session.execute(select(MoneyOwed.debtor).where(MoneyOwed.is_fully_paid)).scalars().all()
        remaining = db_session.execute(
            select(MoneyOwed.total_owed).where(MoneyOwed.debtor == "A")
        ).scalar_one()

        assert paid == ["B"]
        assert Decimal(str(remaining)) == Decimal("75")
