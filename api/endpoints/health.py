"""
RecipeBox Health Check Endpoints
Liveness and readiness probes
"""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
import asyncio
import time

from core.config import settings
from core.database import DatabaseHealthCheck

router = APIRouter()


@router.get("")
async def health_check():
    """Basic health check endpoint"""
    return {
        "status": "healthy",
        "service": settings.APP_NAME,
        "version": settings.VERSION,
        "timestamp": time.time()
    }


@router.get("/live")
async def liveness_check():
    """Kubernetes liveness probe endpoint"""
    return {"status": "alive"}


@router.get("/ready")
async def readiness_check():
    """Kubernetes readiness probe endpoint; checks the database"""
    try:
        db_healthy = await asyncio.wait_for(DatabaseHealthCheck.check_connection(), timeout=5.0)
    except asyncio.TimeoutError:
        db_healthy = False

    if not db_healthy:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "database": "disconnected"}
        )

    return {
        "status": "ready",
        "database": "connected",
        "timestamp": time.time()
    }
