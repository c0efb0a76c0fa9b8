"""
Health check endpoints

- /health/live  - the process is up
- /health/ready - the database answers a trivial query
"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from datetime import datetime
from typing import Any, Dict
import time

from faculty_portal.core.config import settings
from faculty_portal.core.database import get_session_local
from faculty_portal.core.logging_config import logger


router = APIRouter(prefix="/health", tags=["Health Checks"])


async def check_database() -> Dict[str, Any]:
    start = time.time()
    try:
        session_factory = get_session_local()
        async with session_factory() as session:
            await session.execute(text("SELECT 1"))
        return {
            "status": "healthy",
            "latency_ms": round((time.time() - start) * 1000, 2),
        }
    except SQLAlchemyError as e:
        logger.error(f"[HealthCheck] Database check failed: {e}")
        return {
            "status": "unhealthy",
            "latency_ms": round((time.time() - start) * 1000, 2),
            "error": str(e) if settings.DEBUG else "Database connection failed",
        }


@router.get("/live")
async def liveness():
    return {"status": "alive", "timestamp": datetime.utcnow().isoformat() + "Z"}


@router.get("/ready")
async def readiness():
    database = await check_database()
    ready = database["status"] == "healthy"
    return JSONResponse(
        status_code=200 if ready else 503,
        content={
            "status": "ready" if ready else "not_ready",
            "checks": {"database": database},
            "timestamp": datetime.utcnow().isoformat() + "Z",
        },
    )
