"""
Database connection and pool management
"""

import asyncpg
import logging
from typing import Optional

from timesheet_rest.config.settings import (
    DATABASE_URL,
    DB_POOL_MIN_SIZE,
    DB_POOL_MAX_SIZE,
    DB_COMMAND_TIMEOUT,
)

logger = logging.getLogger(__name__)

# Identity columns accept explicit values so that save() can upsert by id.
# timesheet.project_id / employee_id are plain integers, not foreign keys.
SCHEMA_STATEMENTS = [
    """
    CREATE TABLE IF NOT EXISTS employee (
        id BIGINT GENERATED BY DEFAULT AS IDENTITY PRIMARY KEY,
        name TEXT
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS project (
        id BIGINT GENERATED BY DEFAULT AS IDENTITY PRIMARY KEY,
        name TEXT
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS timesheet (
        id BIGINT GENERATED BY DEFAULT AS IDENTITY PRIMARY KEY,
        project_id BIGINT,
        employee_id BIGINT,
        minutes INTEGER,
        created_at DATE
    )
    """,
]


async def init_database(dsn: Optional[str] = None) -> asyncpg.Pool:
    """Create the connection pool, verify it and make sure the tables exist"""
    dsn = dsn or DATABASE_URL
    if not dsn:
        raise ValueError("DATABASE_URL environment variable is required")

    pool = await asyncpg.create_pool(
        dsn,
        min_size=DB_POOL_MIN_SIZE,
        max_size=DB_POOL_MAX_SIZE,
        command_timeout=DB_COMMAND_TIMEOUT,
        statement_cache_size=0  # pgbouncer compatibility
    )

    # Test connection
    async with pool.acquire() as conn:
        await conn.fetchval("SELECT 1")

    await init_schema(pool)

    logger.info("Database initialized successfully")
    return pool


async def init_schema(pool: asyncpg.Pool) -> None:
    """Create the employee, project and timesheet tables if missing"""
    async with pool.acquire() as conn:
        async with conn.transaction():
            for statement in SCHEMA_STATEMENTS:
                await conn.execute(statement)
    logger.info("Database schema ready")


async def close_database(pool: Optional[asyncpg.Pool]) -> None:
    """Close database connection pool"""
    if pool:
        await pool.close()
    logger.info("Database connections closed")
