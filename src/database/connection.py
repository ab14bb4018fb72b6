"""
Database connection and pool management
"""

import asyncio
import asyncpg
import logging
from config.settings import get_database_config
from database.schema import ensure_users_table

logger = logging.getLogger(__name__)

# Global database pool
db_pool = None
schema_task = None

async def init_database():
    """Initialize database connection pool and schedule table creation"""
    global db_pool, schema_task
    try:
        config = get_database_config()
        logger.info(f"Using {config.describe()} for the PostgreSQL connection")
        db_pool = await asyncpg.create_pool(**config.pool_kwargs())
    except Exception as e:
        logger.error(f"Failed to create database pool: {e}")
        db_pool = None

    # Not awaited: the listener accepts connections while this runs
    schema_task = asyncio.create_task(ensure_users_table(db_pool))

    logger.info("Database initialized")


async def close_database():
    """Close database connection pool"""
    global db_pool, schema_task
    if schema_task and not schema_task.done():
        schema_task.cancel()
    schema_task = None

    if db_pool:
        await db_pool.close()
        db_pool = None
    logger.info("Database connections closed")

def get_db_pool():
    """Get the database pool instance"""
    return db_pool
