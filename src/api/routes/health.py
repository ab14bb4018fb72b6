"""
Health check API route
"""

from datetime import datetime
from fastapi import APIRouter, HTTPException
from database.connection import get_db_pool

router = APIRouter()

@router.get("/health")
async def health_check():
    """
    Health check - verifies a pooled connection can reach the database.

    Reports 503 while the database is unreachable; the rest of the API
    keeps serving and fails per request.
    """
    db_pool = get_db_pool()

    try:
        if db_pool is None:
            raise RuntimeError("database pool not initialized")

        async with db_pool.acquire() as conn:
            await conn.fetchval("SELECT 1")

        return {
            "status": "healthy",
            "timestamp": datetime.utcnow().isoformat(),
            "database": "connected"
        }

    except Exception as e:
        raise HTTPException(status_code=503, detail=f"Health check failed: {str(e)}")
