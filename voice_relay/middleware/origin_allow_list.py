"""Origin Allow-List Middleware.

Rejects browser requests whose ``Origin`` is not explicitly allowed, before
any route runs. Requests without an ``Origin`` header (curl, server-to-server,
health probes) are always let through.

CORS response headers for allowed origins are added separately by
Starlette's CORSMiddleware.

Author: Odiseo Team
Created: 2025-12-02
Version: 1.0.0
"""

from collections.abc import Awaitable, Callable, Iterable

from fastapi import Request, Response, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from voice_relay.models.responses import OriginRejectedResponse
from voice_relay.utils.logging import get_logger

logger = get_logger(__name__)


class OriginAllowListMiddleware(BaseHTTPMiddleware):
    """Middleware enforcing an exact-match origin allow-list.

    Decision table:
    - no or empty Origin    -> allowed
    - Origin in allow-list  -> allowed
    - anything else         -> 403 {"error": "origin_not_allowed", "origin": ...}
    """

    def __init__(self, app: ASGIApp, allowed_origins: Iterable[str]) -> None:
        """Initialize the allow-list.

        Args:
            app: ASGI application.
            allowed_origins: Origins compared verbatim against the header.
        """
        super().__init__(app)
        self.allowed_origins = frozenset(allowed_origins)
        logger.info(
            f"OriginAllowListMiddleware initialized: {len(self.allowed_origins)} allowed origins"
        )

    def is_allowed(self, origin: str | None) -> bool:
        return not origin or origin in self.allowed_origins

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        origin = request.headers.get("origin")
        if not self.is_allowed(origin):
            logger.warning(f"Origin not allowed: {origin} ({request.method} {request.url.path})")
            return JSONResponse(
                status_code=status.HTTP_403_FORBIDDEN,
                content=OriginRejectedResponse(origin=origin).model_dump(),
            )
        return await call_next(request)
