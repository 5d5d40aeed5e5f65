"""
Recipe Box Health Check Endpoints
Liveness and readiness probes
"""

from fastapi import APIRouter, Depends, HTTPException, status
import asyncio
import time

from core.context import AppContext
from core.dependencies import get_context

router = APIRouter()


@router.get("")
async def health_check(context: AppContext = Depends(get_context)):
    """Basic health check endpoint"""
    return {
        "status": "healthy",
        "service": context.settings.APP_NAME,
        "version": context.settings.VERSION,
        "timestamp": time.time()
    }


@router.get("/ready")
async def readiness_check(context: AppContext = Depends(get_context)):
    """
    Readiness probe endpoint
    Checks the database connection
    """
    try:
        db_healthy = await asyncio.wait_for(context.database.check_connection(), timeout=5.0)
    except asyncio.TimeoutError:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail={"status": "not_ready", "error": "Health check timeout"}
        )

    if not db_healthy:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail={"status": "not_ready", "database": "disconnected"}
        )

    return {
        "status": "ready",
        "database": "connected",
        "timestamp": time.time()
    }
