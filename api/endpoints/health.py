"""
Recipe Catalog Health Check Endpoints
System health monitoring and diagnostics
"""

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse
import asyncio
import time

from core.database import Database

router = APIRouter()


@router.get("")
async def health_check(request: Request):
    """Basic health check endpoint"""
    settings = request.app.state.settings
    return {
        "status": "healthy",
        "service": settings.APP_NAME,
        "version": settings.VERSION,
        "timestamp": time.time()
    }


@router.get("/live")
async def liveness_check():
    """Liveness probe endpoint"""
    return {"status": "alive"}


@router.get("/ready")
async def readiness_check(request: Request):
    """
    Readiness probe endpoint
    Checks the database connection
    """
    database: Database = request.app.state.db

    try:
        db_healthy = await asyncio.wait_for(database.check_connection(), timeout=5.0)
    except asyncio.TimeoutError:
        db_healthy = False

    content = {
        "status": "ready" if db_healthy else "not_ready",
        "database": "connected" if db_healthy else "disconnected",
        "timestamp": time.time()
    }
    if not db_healthy:
        return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content=content)
    return content
