"""
Blog Backend — Schema Migrator
===============================

What:  Creates the SQLite file and the `categories` / `posts` tables on first run.
When:  Once, from the application lifespan, before the server accepts requests.
How:   If the database file already exists, nothing happens. Otherwise any
       stale file of the same name is removed, a fresh empty file is created
       and the tables are created from Base.metadata.

Failure here is fatal: without a schema there is no service to offer, so
MigrationError propagates out of the lifespan and uvicorn aborts startup.

Alembic (backend/alembic/) produces the same schema for out-of-band upgrades.
"""

import logging
from pathlib import Path
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from blog.database import Base
from blog.exceptions import MigrationError
from blog import models  # noqa: F401  (registers tables on Base.metadata)

logger = logging.getLogger(__name__)


async def create_tables(engine: AsyncEngine) -> None:
    """Issue the DDL for every registered table."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def migrate(engine: AsyncEngine, database_path: Optional[Path]) -> None:
    """
    Recreate the database from scratch.

    Raises:
        MigrationError: The file could not be created or the DDL failed.
    """
    try:
        if database_path is not None:
            database_path.unlink(missing_ok=True)
            logger.info("Creating %s...", database_path)
            database_path.parent.mkdir(parents=True, exist_ok=True)
            database_path.touch()
            logger.info("%s created", database_path)

        logger.info("Creating categories and posts tables...")
        await create_tables(engine)
        logger.info("Tables created")
    except (OSError, SQLAlchemyError) as e:
        logger.critical("Schema migration failed: %s", str(e), exc_info=True)
        raise MigrationError(
            context={
                "database_path": str(database_path) if database_path else ":memory:",
                "error_type": type(e).__name__,
            },
        ) from e


async def ensure_schema(engine: AsyncEngine, database_path: Optional[Path]) -> bool:
    """
    Run `migrate` unless the database file already exists.

    In-memory databases have no file and are always migrated.
    Returns True when a migration ran.
    """
    if database_path is not None and database_path.is_file():
        logger.info("Using existing database %s", database_path)
        return False

    await migrate(engine, database_path)
    return True
