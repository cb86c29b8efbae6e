"""Voice Relay Main Entry Point.

FastAPI application that proxies ElevenLabs conversation endpoints so the
API key never reaches the browser.

Author: Odiseo Team
Version: 1.0.0
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from fastapi import APIRouter, FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from fastapi.routing import APIRoute
from starlette.exceptions import HTTPException as StarletteHTTPException

from voice_relay import __service_name__, __version__
from voice_relay.api import build_webrtc_router, health_router
from voice_relay.config.settings import Settings, get_settings
from voice_relay.errors import RelayError
from voice_relay.middleware import (
    AccessLogMiddleware,
    OriginAllowListMiddleware,
    SecurityHeadersMiddleware,
)
from voice_relay.models.responses import NotFoundResponse
from voice_relay.services.relay import VoiceRelay
from voice_relay.services.upstream import ElevenLabsClient
from voice_relay.utils.logging import get_logger, setup_logging

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Handle startup and shutdown events."""
    settings: Settings = app.state.settings
    setup_logging(settings)

    logger.info(f"Voice Relay starting on http://{settings.host}:{settings.port}")
    if not settings.relay_config().is_complete:
        logger.warning("ELEVEN_API_KEY or ELEVEN_AGENT_ID missing: relay routes will return 500")
    logger.info(f"Routes: {', '.join(app.state.route_hint)}")

    yield

    logger.info("Voice Relay shutting down...")
    await app.state.relay.client.aclose()
    logger.info("Upstream client closed")


def register_exception_handlers(app: FastAPI) -> None:
    """Map relay errors and unmatched routes to their JSON bodies."""

    @app.exception_handler(RelayError)
    async def relay_error_handler(request: Request, exc: RelayError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.error_code}: {exc}")
        return JSONResponse(status_code=exc.status_code, content=exc.to_content())

    @app.exception_handler(StarletteHTTPException)
    async def not_found_handler(request: Request, exc: StarletteHTTPException) -> Response:
        # The surface is GET-only, so a wrong method on a known path is also unmatched
        if exc.status_code not in (404, 405):
            return await http_exception_handler(request, exc)
        body = NotFoundResponse(hint=request.app.state.route_hint)
        return JSONResponse(status_code=404, content=body.model_dump())


def get_route_paths(router: APIRouter) -> list[str]:
    """Full paths of the GET routes declared on a router, before it is mounted."""
    paths = []
    for route in router.routes:
        if not isinstance(route, APIRoute) or "GET" not in route.methods:
            continue
        path = route.path
        if router.prefix and not path.startswith(router.prefix):
            path = router.prefix + path
        paths.append(path)
    return paths


def create_app(
    settings: Settings | None = None,
    upstream_transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Configuration; loaded from the environment when omitted.
        upstream_transport: Optional httpx transport for the ElevenLabs client.

    Returns:
        Configured application with the relay attached to ``app.state``.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=__service_name__,
        description="Relays ElevenLabs conversation endpoints with a server-side API key",
        version=__version__,
        lifespan=lifespan,
    )

    config = settings.relay_config()
    app.state.settings = settings
    app.state.relay = VoiceRelay(config, ElevenLabsClient(config, transport=upstream_transport))

    # Innermost first: CORS headers, then the allow-list gate, then hardening
    # headers and the access log on every response including rejections.
    allowed_origins = settings.origin_allow_list
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["Content-Type", "X-Request-ID"],
    )
    app.add_middleware(OriginAllowListMiddleware, allowed_origins=allowed_origins)
    app.add_middleware(SecurityHeadersMiddleware, enable_hsts=True)
    app.add_middleware(AccessLogMiddleware)

    register_exception_handlers(app)

    webrtc_router = build_webrtc_router(settings)
    app.state.route_hint = [
        path for router in (health_router, webrtc_router) for path in get_route_paths(router)
    ]

    app.include_router(health_router)
    app.include_router(webrtc_router)

    return app
