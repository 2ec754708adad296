"""Health check endpoints."""

import time
from datetime import datetime, timezone

from fastapi import APIRouter
from pydantic import BaseModel
from sqlalchemy import text

from app.api.deps import DbSession

router = APIRouter()


class HealthResponse(BaseModel):
    """Liveness response."""

    success: bool = True
    status: str
    timestamp: str


class DatabaseHealthResponse(HealthResponse):
    """Readiness response; the service depends on the database alone."""

    database_latency_ms: float | None = None
    error: str | None = None


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Process is up."""
    return HealthResponse(status="healthy", timestamp=_now())


@router.get("/health/detailed", response_model=DatabaseHealthResponse)
async def detailed_health_check(db: DbSession) -> DatabaseHealthResponse:
    """Process is up and can reach the database."""
    start = time.perf_counter()
    try:
        await db.execute(text("SELECT 1"))
    except Exception as e:
        return DatabaseHealthResponse(
            success=False, status="degraded", timestamp=_now(), error=str(e)
        )

    latency = (time.perf_counter() - start) * 1000
    return DatabaseHealthResponse(
        status="healthy", timestamp=_now(), database_latency_ms=round(latency, 2)
    )
