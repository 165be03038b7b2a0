"""
HeroDex Backend — Health Check and Welcome Routes
===================================================

What:  GET /health for monitoring / load balancer probes, and GET / welcome.
How:   The health check runs SELECT 1 against the database.

Status levels:
    - healthy:   database reachable (HTTP 200)
    - unhealthy: database unreachable (HTTP 503, stop routing traffic)
"""

import logging
import time

from fastapi import APIRouter, Response
from sqlalchemy import text

from herodex import __version__
from herodex import database
from herodex.schemas.common import HealthResponse, WelcomeResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

# Set once at import, used for uptime reporting
_start_time = time.time()


@router.get("/", response_model=WelcomeResponse, summary="API welcome message")
async def welcome() -> WelcomeResponse:
    return WelcomeResponse(msg="Welcome To Our API!")


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    description=(
        "Returns the health status of the backend service and its database. "
        "Responds 503 when the database cannot be reached."
    ),
)
async def health_check(response: Response) -> HealthResponse:
    """
    Probe the database with SELECT 1 and report aggregate status.

    The probe opens its own connection from the engine rather than using the
    per-request session, so a broken pool shows up here.
    """
    db_status = "connected"
    overall = "healthy"

    try:
        async with database.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        db_status = "disconnected"
        overall = "unhealthy"
        response.status_code = 503
        logger.warning("Health check: database unreachable: %s", str(e))

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
