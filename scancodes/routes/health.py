"""
Scancodes — Health Check Route
===============================

What:  GET /health for monitoring and load balancer probes.
How:   Reports whether the startup-built pipeline is present and how many
       templates it serves. No rendering or scanning is performed.

Status levels:
    - healthy:   pipeline loaded
    - unhealthy: pipeline missing (HTTP 200 still; the body carries the state)
"""

import logging
import time

from fastapi import APIRouter, Request

from scancodes import __version__
from scancodes.config import settings
from scancodes.schemas.responses import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

# Initialized once when the module loads
_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(request: Request) -> HealthResponse:
    pipeline = getattr(request.app.state, "pipeline", None)

    if pipeline is None:
        logger.warning("Health check: pipeline not loaded")

    return HealthResponse(
        status="healthy" if pipeline is not None else "unhealthy",
        version=__version__,
        pipeline="loaded" if pipeline is not None else "missing",
        templates=len(pipeline.template_ids) if pipeline is not None else 0,
        scan_enabled=settings.scan_enabled,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
