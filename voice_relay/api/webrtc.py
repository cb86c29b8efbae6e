"""WebRTC Relay Routes.

Browser-facing endpoints that forward to ElevenLabs with the server-side key.
Which verify-agent variant is mounted, and whether the signed-url and
token-debug routes exist, depends on the deployment settings.

Author: Odiseo Team
Created: 2025-12-02
Version: 1.0.0
"""

from fastapi import APIRouter, HTTPException, Request, Response
from fastapi.responses import JSONResponse

from voice_relay.config.settings import Settings
from voice_relay.models.responses import (
    AgentNotFoundResponse,
    ErrorResponse,
    TokenDebugResponse,
    VerifyAgentResponse,
)
from voice_relay.services.relay import RelayResult, VoiceRelay
from voice_relay.services.upstream import UpstreamResponse

ERROR_RESPONSES = {500: {"model": ErrorResponse}}


def get_relay(request: Request) -> VoiceRelay:
    """Get the relay instance from app state.

    Raises:
        HTTPException: If the relay was not attached by create_app.
    """
    relay: VoiceRelay | None = getattr(request.app.state, "relay", None)
    if relay is None:
        raise HTTPException(status_code=500, detail="Relay not initialized")
    return relay


def to_response(result: UpstreamResponse | RelayResult) -> Response:
    """Render a relay outcome.

    Provider responses keep their status and exact body; relay results are
    serialized as JSON.
    """
    if isinstance(result, UpstreamResponse):
        return Response(
            content=result.text,
            status_code=result.status_code,
            media_type="application/json",
        )
    return JSONResponse(status_code=result.status_code, content=result.content)


async def webrtc_token(request: Request) -> Response:
    """Relay a WebRTC conversation token for the configured agent."""
    return to_response(await get_relay(request).fetch_token())


async def webrtc_signed_url(request: Request) -> Response:
    """Relay a signed conversation URL for the configured agent."""
    return to_response(await get_relay(request).fetch_signed_url())


async def verify_agent(request: Request) -> Response:
    """Relay the single agent lookup."""
    return to_response(await get_relay(request).verify_agent())


async def verify_agent_any(request: Request) -> Response:
    """Find the configured agent on the first provider endpoint that knows it."""
    return to_response(await get_relay(request).verify_agent_any())


async def webrtc_token_debug(request: Request) -> Response:
    """Fetch a token and show its decoded claims. Inspection only."""
    return to_response(await get_relay(request).debug_token())


def build_router(settings: Settings) -> APIRouter:
    """Assemble the relay routes enabled for this deployment."""
    router = APIRouter(prefix="/api", tags=["WebRTC"])

    router.add_api_route(
        "/webrtc-token", webrtc_token, methods=["GET", "HEAD"], responses=ERROR_RESPONSES
    )

    if settings.enable_signed_url:
        router.add_api_route(
            "/webrtc-signed-url",
            webrtc_signed_url,
            methods=["GET", "HEAD"],
            responses=ERROR_RESPONSES,
        )

    if settings.verify_agent_mode == "multi":
        router.add_api_route(
            "/verify-agent",
            verify_agent_any,
            methods=["GET", "HEAD"],
            responses={
                200: {"model": VerifyAgentResponse},
                404: {"model": AgentNotFoundResponse},
                **ERROR_RESPONSES,
            },
        )
    else:
        router.add_api_route(
            "/verify-agent", verify_agent, methods=["GET", "HEAD"], responses=ERROR_RESPONSES
        )

    if settings.enable_token_debug:
        router.add_api_route(
            "/webrtc-token-debug",
            webrtc_token_debug,
            methods=["GET", "HEAD"],
            responses={200: {"model": TokenDebugResponse}, **ERROR_RESPONSES},
        )

    return router
