"""
Core pytest configuration for the entire test suite.

This module provides only the store setup and core utilities needed across ALL
types of tests (repositories, models, the inspector, backups, logging).

Domain-specific fixtures (repositories, sample records) are located in:
- tests/test_fixtures/repository_fixtures.py

Every test gets its own docs root under `tmp_path`, so its own SQLite file with
foreign keys switched on. Nothing is shared between tests.
"""

from __future__ import annotations

# -------------------------------
# Standard library imports
# -------------------------------
import logging
from pathlib import Path
from typing import Iterator

# -------------------------------
# Early logging tuning (IMPORTANT)
# -------------------------------
# Set the level for noisy third-party loggers at import time (before importing modules that
# might initialize them). Keep this block above the puptrail imports.
NOISY_LOGGERS = (
    "sqlalchemy",
    "sqlalchemy.engine",
    "sqlalchemy.engine.Engine",
    "sqlalchemy.pool",
)
for _name in NOISY_LOGGERS:
    logging.getLogger(_name).setLevel(logging.WARNING)

# -------------------------------
# Third-party / project imports
# -------------------------------
import pytest
from pytest import FixtureRequest
from sqlalchemy.orm import Session

from puptrail.config.settings import Settings
from puptrail.core.logging.builder import setup_logging
from puptrail.database.session import Store

from .test_fixtures.settings_fixtures import make_settings

logger = logging.getLogger(__name__)


# -------------------------------
# Logging: install application logging early
# -------------------------------
@pytest.fixture(scope="session", autouse=True)
def configure_logging(request: FixtureRequest, tmp_path_factory):
    """
    Install application logging for the entire test session.

    Calls `setup_logging(settings)` so the same dictConfig used by the application
    (formatters, handlers, filters) is active in tests, then re-attaches pytest's
    capture handler, which dictConfig removes from the root logger, so
    `caplog.records` keeps working.
    """
    setup_logging(make_settings(tmp_path_factory.mktemp("logging")))

    caplog_plugin = request.config.pluginmanager.getplugin("logging-plugin")
    handler = getattr(caplog_plugin, "caplog_handler", None)
    if handler is not None:
        logging.getLogger().addHandler(handler)

    yield


# ------------------------------------------------------------------------------------------------
# STORE FIXTURES
# ------------------------------------------------------------------------------------------------

@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings whose docs root is `<tmp_path>/PupTrailsDocs`."""
    return make_settings(tmp_path / "PupTrailsDocs")


@pytest.fixture
def store(settings: Settings) -> Iterator[Store]:
    """
    An opened store: directories created, schema created, engine ready.
    The engine is disposed after the test so the file handle is released.
    """
    opened = Store.open(settings)
    logger.debug("Using test store: %s", opened.path)
    yield opened
    opened.dispose()


@pytest.fixture
def db_session(store: Store) -> Iterator[Session]:
    """
    A session on the test store.

    Repositories only flush, so everything a test writes stays in this session's
    transaction and is rolled back at the end. Tests that need committed data
    (e.g. for the raw-SQL inspector) use `store.session()` instead.
    """
    session = store.session_factory()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


# Repository test fixtures
from .test_fixtures.repository_fixtures import (  # noqa: E402
    animal_repo,
    person_repo,
    trip_repo,
    vet_visit_repo,
    adoption_repo,
    expense_repo,
    income_repo,
    intake_repo,
    money_owed_repo,
    puppy_group_repo,
    attachment_repo,
    license_repo,
    create_animal,
    create_person,
    sample_animal_data,
)
