"""
Health endpoint for observability.

Returns uptime, version and database connectivity. Lightweight and
requires no authentication.
"""

import logging
import time
from typing import Any, Dict

from fastapi import APIRouter

logger = logging.getLogger(__name__)

# Start time for uptime calculation
_start_time: float = time.monotonic()


def set_start_time() -> None:
    """Reset the start time (called during app startup)."""
    global _start_time
    _start_time = time.monotonic()


def get_uptime_seconds() -> float:
    """Return seconds since the process started."""
    return time.monotonic() - _start_time


async def check_database_health() -> bool:
    """Check preferences database connectivity."""
    from ..core.database import health_check

    return await health_check()


def _get_version() -> str:
    from ..version import __version__

    return __version__


def create_health_router() -> APIRouter:
    """Create and return the health check router."""
    router = APIRouter()

    @router.get("/")
    async def root() -> Dict[str, str]:
        """Root endpoint for health checks and API info"""
        return {"message": "Life Weeks API", "version": _get_version(), "status": "running"}

    @router.get("/health")
    async def health_endpoint() -> Dict[str, Any]:
        """Lightweight health check endpoint (no auth required)."""
        db_healthy = await check_database_health()

        return {
            "status": "healthy" if db_healthy else "degraded",
            "service": "life-weeks",
            "version": _get_version(),
            "uptime_seconds": round(get_uptime_seconds(), 2),
            "database": "connected" if db_healthy else "disconnected",
        }

    return router
