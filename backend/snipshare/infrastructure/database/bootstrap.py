"""Startup helpers: make sure the target database and the snippets table exist."""

import logging

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine

from snipshare.infrastructure.database.base import Base

logger = logging.getLogger(__name__)


async def ensure_postgres_database(database_url: str) -> None:
    """Issue ``CREATE DATABASE`` on a PostgreSQL server when the target is missing.

    SQLite files are created on first connect, so other backends are ignored.
    Failure is logged and startup continues; ``create_schema`` will then
    report the real connection error.
    """
    url = make_url(database_url)
    if url.get_backend_name() != "postgresql" or not url.database:
        return

    import asyncpg

    admin_dsn = url.set(drivername="postgresql", database="postgres").render_as_string(hide_password=False)
    try:
        conn = await asyncpg.connect(admin_dsn)
    except Exception as exc:
        logger.warning("Could not reach PostgreSQL to check '%s': %s", url.database, exc)
        return
    try:
        found = await conn.fetchval("SELECT 1 FROM pg_database WHERE datname = $1", url.database)
        if found is None:
            # Runs outside a transaction block, as CREATE DATABASE requires.
            await conn.execute(f'CREATE DATABASE "{url.database}"')
            logger.info("Created database '%s'", url.database)
    except Exception as exc:
        logger.warning("Could not create database '%s': %s", url.database, exc)
    finally:
        await conn.close()


async def create_schema(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
