"""
Health check endpoints for load balancers and monitoring.
"""

import time
from datetime import datetime, timezone
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from pydantic import BaseModel

from ...db.session import get_db
from ...core.logger import logger

router = APIRouter()


class HealthStatus(BaseModel):
    status: str  # "healthy", "unhealthy"
    timestamp: datetime
    uptime_seconds: int
    version: str = "1.0.0"


class DatabaseHealth(BaseModel):
    status: str
    latency_ms: int


# Application start time for uptime calculation
app_start_time = time.time()


@router.get("", response_model=HealthStatus)
async def basic_health_check():
    return HealthStatus(
        status="healthy",
        timestamp=datetime.now(timezone.utc),
        uptime_seconds=int(time.time() - app_start_time),
    )


@router.get("/database", response_model=DatabaseHealth)
async def database_health_check(db: Session = Depends(get_db)):
    start = time.time()
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error(f"Database health check failed: {str(e)}")
        raise HTTPException(status_code=503, detail="Database unavailable")
    return DatabaseHealth(status="healthy", latency_ms=int((time.time() - start) * 1000))
