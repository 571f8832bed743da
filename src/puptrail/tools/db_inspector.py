"""
Store inspector / demo seeder.

    python -m puptrail.tools.db_inspector [--seed] <path-to-PupTrail.db>
    puptrail-dbinspect [--seed] <path-to-PupTrail.db>

Talks to the store file directly with SQL text (no ORM models), so it also works
against stores written by older schema revisions:

  - prints the number of live (not soft-deleted) animals, people and vet visits.
    A table without the `is_deleted` column is counted unfiltered.
  - with --seed, first inserts one demo animal and one vet visit for it, in a
    single transaction, unless the store already has animals.

Store problems are reported as one line of text; the process always exits 0.
"""

import argparse
import logging
from pathlib import Path
from typing import Callable, Sequence

from sqlalchemy import Connection, text
from sqlalchemy.exc import DBAPIError, OperationalError, SQLAlchemyError

from puptrail.config.settings import get_settings
from puptrail.core.logging.builder import setup_logging
from puptrail.database.session import create_store_engine

logger = logging.getLogger(__name__)

COUNTED_TABLES = (
    ("Animals", "animals"),
    ("People", "people"),
    ("VetVisits", "vet_visits"),
)

_INSERT_DEMO_ANIMAL = text(
    """
    INSERT INTO animals (name, breed, sex, collar_colour, weight, date_of_birth, intake_date, status,
                         notes, photo_path, created_at, updated_at, is_deleted, origin_country)
    VALUES ('Demo Pup', 'Mixed Breed', 'F', 'Blue', 42,
            datetime('now', 'localtime', '-1 year'), datetime('now', 'localtime', '-30 days'), 'In Care',
            'Friendly demo dog used for preview testing.', NULL,
            datetime('now', 'localtime'), datetime('now', 'localtime'), 0, 'Canada')
    """
)

_INSERT_DEMO_VISIT = text(
    """
    INSERT INTO vet_visits (animal_id, date, total_cost, notes, ready_for_adoption,
                            worming_date, defleaing_date, spay_neuter_date, vaccinations_given, is_deleted)
    VALUES (:animal_id, datetime('now', 'localtime', '-10 days'), 275.50,
            'Initial checkup, vaccinations, and spay.', 1,
            datetime('now', 'localtime', '-25 days'), datetime('now', 'localtime', '-20 days'),
            datetime('now', 'localtime', '-15 days'), 'Rabies, DAPP', 0)
    """
)


def count_live_rows(conn: Connection, table: str) -> int:
    """
    Count rows not marked deleted. Stores created before soft delete existed have
    no `is_deleted` column; for those every row counts.
    """
    try:
        return conn.execute(text(f"SELECT COUNT(*) FROM {table} WHERE is_deleted = 0")).scalar_one()
    except OperationalError as exc:
        if "no such column" not in str(exc.orig).lower():
            raise
        logger.debug("inspector.count_unfiltered", extra={"table": table})
        # the failed statement aborted the implicit transaction
        conn.rollback()
        return conn.execute(text(f"SELECT COUNT(*) FROM {table}")).scalar_one()


def seed_sample_data(conn: Connection, out: Callable[[str], None] = print) -> bool:
    """
    Insert the demo animal and its vet visit, all or nothing.

    Returns:
        True if rows were inserted, False if the store already had animals
        (the transaction is rolled back and nothing is written).
    """
    if conn.in_transaction():
        conn.commit()

    trans = conn.begin()
    try:
        existing = conn.execute(text("SELECT COUNT(*) FROM animals")).scalar_one()
        if existing > 0:
            out("Database already contains animals; skipping sample seed.")
            trans.rollback()
            return False

        animal_id = conn.execute(_INSERT_DEMO_ANIMAL).lastrowid
        conn.execute(_INSERT_DEMO_VISIT, {"animal_id": animal_id})
    except SQLAlchemyError:
        trans.rollback()
        raise

    trans.commit()
    out("Seeded demo animal and vet visit.")
    logger.info("inspector.seeded", extra={"animal_id": animal_id})
    return True


def inspect_store(path: str | Path, seed: bool = False, out: Callable[[str], None] = print) -> dict[str, int] | None:
    """
    Report (and optionally seed) the store at `path`.

    Returns the counts that were printed, or None when the store is missing or
    could not be read. Never raises for store errors.
    """
    db_path = Path(path)
    if not db_path.is_file():
        out(f"Database not found: {path}")
        return None

    engine = create_store_engine(db_path)
    try:
        with engine.connect() as conn:
            if seed:
                seed_sample_data(conn, out)

            counts = {label: count_live_rows(conn, table) for label, table in COUNTED_TABLES}
    except SQLAlchemyError as exc:
        cause = exc.orig if isinstance(exc, DBAPIError) and exc.orig is not None else exc
        logger.warning("inspector.failed", extra={"path": str(db_path), "cause": str(cause)})
        out(f"Failed to inspect database: {cause}")
        return None
    finally:
        engine.dispose()

    out(f"Database: {path}")
    out(f"  Animals:   {counts['Animals']}")
    out(f"  People:    {counts['People']}")
    out(f"  VetVisits: {counts['VetVisits']}")
    return counts


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="puptrail-dbinspect",
        description="Print row counts of a PupTrail store and optionally seed demo data.",
    )
    parser.add_argument("--seed", action="store_true", help="insert a demo animal and vet visit into an empty store")
    parser.add_argument("path", help="path to PupTrail.db")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(get_settings())
    inspect_store(args.path, seed=args.seed)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
