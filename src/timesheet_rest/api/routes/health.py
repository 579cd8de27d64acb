"""
Health check API route
"""

from datetime import datetime
from fastapi import APIRouter, HTTPException, Request

router = APIRouter()


@router.get("/health")
async def health_check(request: Request):
    """
    Health check

    Runs ``SELECT 1`` through the pool when the app owns one. Apps running
    on injected repositories report the database as not configured.
    """
    db_pool = getattr(request.app.state, "db_pool", None)

    response = {
        "status": "healthy",
        "timestamp": datetime.utcnow().isoformat(),
        "database": "not_configured"
    }

    if db_pool is None:
        return response

    try:
        async with db_pool.acquire() as conn:
            await conn.fetchval("SELECT 1")
    except Exception as e:
        raise HTTPException(status_code=503, detail=f"Health check failed: {str(e)}")

    response["database"] = "connected"
    return response
