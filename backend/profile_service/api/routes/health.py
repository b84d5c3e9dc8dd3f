"""Health & Readiness Probes — liveness and readiness endpoints for container orchestration.

Invariants:
    - GET /health/live always returns 200 if the process is up (liveness)
    - GET /health and GET /health/ready return 503 if the database is unreachable
    - GET / reports service identity without touching the database

Design Decisions:
    - Separate liveness/readiness: liveness restarts the container,
      readiness removes it from the load balancer
"""

import logging
import time
from datetime import datetime, timezone

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/health", tags=["health"])
root_router = APIRouter(tags=["health"])

_STARTED_AT = time.monotonic()


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


async def _database_ok(request: Request) -> bool:
    db_manager = getattr(request.app.state, "db_manager", None)
    return await db_manager.health_check() if db_manager else False


@root_router.get("/")
async def service_info(request: Request):
    """Service identity banner."""
    settings = request.app.state.settings
    return {
        "status": "ok",
        "service": settings.service_name,
        "version": settings.version,
        "timestamp": _now(),
    }


@router.get("")
async def health_check(request: Request):
    """Full health report, including database connectivity."""
    started = time.perf_counter()
    settings = request.app.state.settings
    db_ok = await _database_ok(request)
    body = {
        "status": "healthy" if db_ok else "unhealthy",
        "timestamp": _now(),
        "uptime": round(time.monotonic() - _STARTED_AT, 3),
        "service": settings.service_name,
        "version": settings.version,
        "database": "connected" if db_ok else "disconnected",
    }
    logger.info(
        f"Health check completed: {body['status']}",
        extra={"duration_ms": round((time.perf_counter() - started) * 1000, 2)},
    )
    return JSONResponse(
        status_code=status.HTTP_200_OK if db_ok else status.HTTP_503_SERVICE_UNAVAILABLE,
        content=body,
    )


@router.get("/live", status_code=status.HTTP_200_OK)
async def liveness_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {"status": "alive"}


@router.get("/ready")
async def readiness_check(request: Request):
    """Readiness probe — includes database connectivity."""
    if not await _database_ok(request):
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not ready"},
        )
    return {"status": "ready"}
