import platform
from datetime import datetime, timezone
from fastapi import APIRouter

from trip_planner.config import settings
from trip_planner.core.rate_limit import limiter

router = APIRouter(tags=["status"])


@router.get("/api/version")
@limiter.exempt
async def version():
    """Liveness and build info. Polled by the deploy script, so it skips the auth gate."""
    return {
        "status": "online",
        "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        "env": settings.environment,
        # Key kept for existing clients; reports the Python runtime
        "node": f"python-{platform.python_version()}",
    }


@router.get("/health")
@limiter.exempt
async def health():
    return {"status": "healthy"}


@router.get("/ready")
@limiter.exempt
async def ready():
    """Readiness probe: extend here with Supabase checks if needed."""
    return {"status": "ready"}
