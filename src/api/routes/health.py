"""Service health endpoint (dependency checks)."""

import logging
from datetime import datetime, timezone
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from adapter.mongodb.connection import get_mongodb_client

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["health"])


def _check_mongodb() -> dict:
    """Ping the entry store. Never raises."""
    try:
        client = get_mongodb_client()
        if client is None:
            return {"status": "unhealthy", "message": "Not configured or unreachable"}
        client.admin.command('ping')
        return {"status": "healthy", "message": "Connection successful"}
    except Exception as e:
        logger.warning("MongoDB health check failed", extra={"error": str(e)[:200]})
        return {"status": "unhealthy", "message": f"Connection error: {str(e)[:200]}"}


@router.get("")
async def health():
    """Report overall status; 503 when any dependency is unhealthy.

    The completion endpoint is not checked.
    """
    services = {"mongodb": _check_mongodb()}
    healthy = all(s["status"] == "healthy" for s in services.values())

    return JSONResponse(
        status_code=status.HTTP_200_OK if healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "status": "healthy" if healthy else "degraded",
            "timestamp": datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
            "services": services,
        },
    )
