"""Health Check Routes.

Liveness endpoints for load balancers and container health checks.

Author: Odiseo Team
Created: 2025-12-02
Version: 1.0.0
"""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from voice_relay.models.responses import HealthResponse

router = APIRouter(tags=["Health"])


@router.api_route("/", methods=["GET", "HEAD"], response_class=PlainTextResponse)
async def root() -> str:
    """Plain-text liveness probe."""
    return "OK"


@router.api_route("/healthz", methods=["GET", "HEAD"], response_model=HealthResponse)
async def healthz() -> HealthResponse:
    """JSON liveness probe.

    Returns:
        HealthResponse: Always ``{"ok": true}`` while the process serves requests.
    """
    return HealthResponse()
