"""
Engine, session and schema setup for the local SQLite store.

Usage:
    store = Store.open(get_settings())
    with store.session() as db:
        AnimalRepository(db).create(name="Biscuit", sex="M")
    # committed here; rolled back instead if the block raised
"""

import logging
import uuid
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from sqlalchemy import Engine, create_engine, event
from sqlalchemy.exc import DatabaseError
from sqlalchemy.orm import Session, sessionmaker

from puptrail.config.settings import Settings
from puptrail.core.logging.filters import set_operation_id, reset_operation_id
from puptrail.database.base import Base
from puptrail.database.paths import ensure_directories, resolve_store_path
from puptrail.exceptions import StoreAccessError

logger = logging.getLogger(__name__)


def create_store_engine(store_path: Path | str, echo: bool = False) -> Engine:
    """
    Create the SQLAlchemy engine for a store file.

    Two connection-level settings matter for integrity:
      - `PRAGMA foreign_keys=ON` on every DBAPI connection. SQLite ignores declared
        foreign keys (and their ON DELETE actions) unless this is set per connection.
      - The driver's implicit transaction handling is turned off and SQLAlchemy emits
        BEGIN itself, so SAVEPOINTs and rollbacks behave as documented.
    """
    engine = create_engine(f"sqlite:///{Path(store_path).as_posix()}", echo=echo)

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN")

    return engine


def init_store(engine: Engine) -> None:
    """Create every table and index that does not exist yet (idempotent)."""
    # make sure all models are registered on Base.metadata
    import puptrail.models  # noqa: F401

    try:
        Base.metadata.create_all(engine)
    except DatabaseError as exc:
        # locked, not a database, read-only directory...
        raise StoreAccessError(f"Failed to open store: {exc.orig}", path=str(engine.url.database)) from exc
    logger.debug("store.schema_ready", extra={"path": engine.url.database})


def make_session_factory(engine: Engine) -> sessionmaker[Session]:
    # expire_on_commit=False: entities stay readable after the unit of work commits
    return sessionmaker(bind=engine, expire_on_commit=False)


@contextmanager
def session_scope(factory: sessionmaker[Session]) -> Iterator[Session]:
    """
    One unit of work: commit on success, roll back on any exception and re-raise.

    A fresh operation id is stamped into the logging context so every log line of
    the unit of work can be correlated.
    """
    token = set_operation_id(uuid.uuid4().hex[:12])
    session = factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
        reset_operation_id(token)


class Store:
    """
    The opened store: settings, engine and session factory bundled together.

    Settings are passed in explicitly so tests (and the maintenance utility) can
    point at an alternate data directory.
    """

    def __init__(self, settings: Settings, engine: Engine):
        self.settings = settings
        self.engine = engine
        self.session_factory = make_session_factory(engine)

    @classmethod
    def open(cls, settings: Settings) -> "Store":
        ensure_directories(settings)
        path = resolve_store_path(settings)
        engine = create_store_engine(path, echo=settings.SQLALCHEMY_ECHO)
        init_store(engine)
        logger.info("store.opened", extra={"path": str(path)})
        return cls(settings, engine)

    @property
    def path(self) -> Path:
        return self.settings.STORE_PATH

    def session(self):
        return session_scope(self.session_factory)

    def dispose(self) -> None:
        self.engine.dispose()
