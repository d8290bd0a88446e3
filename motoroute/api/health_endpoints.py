"""
Health check endpoint.

- GET /health: application status, database reachability and error counts
"""

from fastapi import APIRouter, Depends
from datetime import datetime
import logging
import time

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from motoroute.config import get_settings
from motoroute.core.db import get_db
from motoroute.core.error_handlers import error_handler

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])

# Application start time for uptime calculation
_app_start_time = time.time()


@router.get("/health")
async def health_check(db: AsyncSession = Depends(get_db)):
    """Health check with database status."""
    settings = get_settings()

    try:
        await db.execute(text("SELECT 1"))
        database = {"status": "healthy"}
    except (SQLAlchemyError, OSError) as e:
        logger.error(f"Database health check failed: {e}")
        database = {"status": "unhealthy", "error": type(e).__name__}

    return {
        "status": "healthy" if database["status"] == "healthy" else "unhealthy",
        "version": settings.app_version,
        "environment": settings.environment.value,
        "uptime_seconds": round(time.time() - _app_start_time, 1),
        "timestamp": datetime.utcnow().isoformat(),
        "details": {"database": database},
        "error_statistics": error_handler.get_error_statistics(),
    }
