"""Health check endpoint."""

import logging
import time

from fastapi import APIRouter, Request

from .. import __version__
from ..models import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["health"])

# Track service start time
_start_time = time.time()


def format_uptime(seconds_total: float) -> str:
    """Render an uptime in seconds as days/hours/minutes/seconds."""
    days, remainder = divmod(int(seconds_total), 86400)
    hours, remainder = divmod(remainder, 3600)
    minutes, seconds = divmod(remainder, 60)
    return f"Days: {days}, Hours: {hours}, Minutes: {minutes}, Seconds: {seconds}"


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    """Liveness probe. The process is healthy even when the database is not."""
    db_connected = False
    db = getattr(request.app.state, "db", None)
    if db is not None:
        try:
            await db.count_users()
            db_connected = True
        except Exception as e:
            logger.error(f"Database health check failed: {e}")

    return HealthResponse(
        healthy=True,
        status="healthy" if db_connected else "degraded",
        version=__version__,
        uptime=format_uptime(time.time() - _start_time),
        database_connected=db_connected,
    )
