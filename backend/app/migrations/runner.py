"""One-shot data migration runner.

Every migration follows the same lifecycle: connect, apply one bulk update
inside a transaction, report matched/modified counts, dispose the engine.
The outcome is the process exit code so automation can tell the cases apart:

    0  migration applied
    1  could not connect to the database
    2  DATABASE_URL missing or malformed
    3  the update or its commit failed (rolled back)
"""
import logging
import sys
from collections.abc import Callable
from dataclasses import dataclass

from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.errors import MigrationError
from app.core.logging import setup_logging
from app.db.session import create_sync_engine

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_CONNECTION_ERROR = 1
EXIT_CONFIG_ERROR = 2
EXIT_MIGRATION_ERROR = 3


@dataclass(frozen=True)
class UpdateResult:
    matched_count: int
    modified_count: int


@dataclass(frozen=True)
class Migration:
    name: str
    description: str
    apply: Callable[[Session], UpdateResult]


def run_migration(migration: Migration, database_url: str | None = None) -> int:
    """Run a migration against the configured database and return the exit code."""
    try:
        url = database_url or settings.sync_database_url
        if url:
            make_url(url)
    except ArgumentError as exc:
        logger.error("DATABASE_URL is not a valid database URL: %s", exc)
        return EXIT_CONFIG_ERROR
    if not url:
        logger.error("DATABASE_URL is not set; migration %s not started", migration.name)
        return EXIT_CONFIG_ERROR

    try:
        engine = create_sync_engine(url)
    except (SQLAlchemyError, ImportError) as exc:
        logger.error("Database connection error: %s", exc)
        return EXIT_CONNECTION_ERROR

    try:
        try:
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except SQLAlchemyError as exc:
            logger.error("Database connection error: %s", exc)
            return EXIT_CONNECTION_ERROR
        logger.info("Database connected for migration %s", migration.name)

        # The commit happens when the block exits, so commit failures land here too.
        try:
            with Session(engine) as db, db.begin():
                result = migration.apply(db)
        except MigrationError as exc:
            logger.error("Migration %s failed: %s", migration.name, exc.cause)
            return EXIT_MIGRATION_ERROR
        except Exception as exc:
            logger.error("Migration %s failed: %s", migration.name, exc, exc_info=True)
            return EXIT_MIGRATION_ERROR

        logger.info("Migration %s completed successfully", migration.name)
        logger.info("Matched %d rows", result.matched_count)
        logger.info("Modified %d rows", result.modified_count)
        return EXIT_OK
    finally:
        engine.dispose()
        logger.info("Database connection closed")


def main(migration: Migration) -> None:
    """Entry point used by ``python -m app.migrations.<name>``."""
    setup_logging()
    logger.info("%s: %s", migration.name, migration.description)
    sys.exit(run_migration(migration))
