"""
Schema initialization for the users table
"""

import logging

logger = logging.getLogger(__name__)

CREATE_USERS_TABLE_SQL = """
    CREATE TABLE IF NOT EXISTS users (
        id SERIAL PRIMARY KEY,
        name TEXT,
        email TEXT
    )
"""


async def ensure_users_table(pool) -> bool:
    """
    Create the users table if it does not exist.

    Runs in the background at startup. Failures are logged and never
    propagate; requests that need storage will fail on their own.
    """
    if pool is None:
        logger.error("Error creating users table: database pool not initialized")
        return False

    try:
        async with pool.acquire() as conn:
            await conn.execute(CREATE_USERS_TABLE_SQL)
    except Exception as e:
        logger.error(f"Error creating users table: {e}")
        return False

    logger.info("users table ready")
    return True
