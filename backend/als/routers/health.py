"""Health check endpoints for load balancers and monitoring."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from als.config import settings
from als.database import get_engine
from als.deps import get_storage
from als.services.storage import StorageFacade

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check():
    """Lightweight health check (no store or database access)."""
    return {
        "status": "ok",
        "service": "ALS",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": settings.environment,
    }


@router.get("/health/ready")
async def readiness_check(storage: StorageFacade = Depends(get_storage)):
    """Readiness: the local store must answer; the cloud is reported, not required.

    The back office keeps working local-only, so an unreachable cloud gives
    ``degraded`` with 200 while a broken local store gives 503.
    """
    checks = {
        "service": "ok",
        "local_store": "unknown",
        "cloud": "disabled",
    }

    local_ok = await storage.local.ping()
    checks["local_store"] = "ok" if local_ok else "error"

    engine = get_engine() if storage.is_cloud_active() else None
    cloud_ok = True
    if engine is not None:
        try:
            async with engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            checks["cloud"] = "ok"
        except (SQLAlchemyError, OSError) as e:
            checks["cloud"] = f"error: {str(e)[:100]}"
            cloud_ok = False

    if not local_ok:
        overall, code = "unhealthy", status.HTTP_503_SERVICE_UNAVAILABLE
    elif not cloud_ok:
        overall, code = "degraded", status.HTTP_200_OK
    else:
        overall, code = "healthy", status.HTTP_200_OK

    return JSONResponse(
        status_code=code,
        content={
            "status": overall,
            "service": "ALS",
            "checks": checks,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        },
    )
