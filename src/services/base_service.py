"""
Base service layer for single-statement database operations
"""

import asyncio
import logging
import re
from typing import Dict, Any, List, Optional
from dataclasses import dataclass

import asyncpg

logger = logging.getLogger(__name__)

# PostgreSQL INTEGER (SERIAL) bounds
PG_INT_MIN = -2**31
PG_INT_MAX = 2**31 - 1

_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")

class PoolUnavailableError(RuntimeError):
    """Raised when a statement is attempted before the pool exists"""


# Failures talking to or executing against the database
STORAGE_ERRORS = (
    PoolUnavailableError,
    asyncpg.PostgresError,
    asyncpg.InterfaceError,
    OSError,
    asyncio.TimeoutError,
)

@dataclass
class ServiceResult:
    """Result from service operation"""
    success: bool
    data: Optional[List[Dict[str, Any]]] = None
    count: int = 0
    error: Optional[str] = None
    error_type: Optional[str] = None


class BaseService:
    """Base service wrapping a connection pool; one statement per connection checkout"""

    def __init__(self, pool):
        self.pool = pool

    @staticmethod
    def not_found(error: str) -> ServiceResult:
        return ServiceResult(success=False, error=error, error_type="RESOURCE_NOT_FOUND")

    @staticmethod
    def invalid(error: str) -> ServiceResult:
        return ServiceResult(success=False, error=error, error_type="VALIDATION_ERROR")

    @staticmethod
    def database_error(error: str) -> ServiceResult:
        return ServiceResult(success=False, error=error, error_type="DATABASE_ERROR")

    @staticmethod
    def parse_record_id(record_id: Any) -> Optional[int]:
        """
        Interpret an opaque path identifier as an integer key.

        Returns None when the value cannot match any row: not a base-10
        integer, or outside the INTEGER column range.
        """
        if isinstance(record_id, int) and not isinstance(record_id, bool):
            value = record_id
        elif isinstance(record_id, str) and _INTEGER_PATTERN.fullmatch(record_id.strip()):
            value = int(record_id.strip())
        else:
            return None

        if value < PG_INT_MIN or value > PG_INT_MAX:
            return None
        return value

    def _require_pool(self):
        if self.pool is None:
            raise PoolUnavailableError("Database pool not initialized")
        return self.pool

    async def fetch(self, query: str, *params) -> List[Dict[str, Any]]:
        """Run a statement returning rows"""
        async with self._require_pool().acquire() as conn:
            logger.info(f"Executing query: {query}")
            rows = await conn.fetch(query, *params)
        return [dict(row) for row in rows]

    async def fetchrow(self, query: str, *params) -> Optional[Dict[str, Any]]:
        """Run a statement returning at most one row"""
        async with self._require_pool().acquire() as conn:
            logger.info(f"Executing query: {query}")
            row = await conn.fetchrow(query, *params)
        return dict(row) if row is not None else None

    async def execute(self, query: str, *params) -> int:
        """
        Run a statement without a result set.

        Returns the affected row count parsed from the command tag,
        e.g. "DELETE 1" -> 1.
        """
        async with self._require_pool().acquire() as conn:
            logger.info(f"Executing statement: {query}")
            status = await conn.execute(query, *params)
        try:
            return int(status.split()[-1]) if status else 0
        except ValueError:
            return 0
