"""Security Headers Middleware.

Adds the default hardening headers to every response. The relay is called
cross-origin from the voice widget, so the resource policy is
``cross-origin`` rather than ``same-origin``.

Author: Odiseo Team
Created: 2025-12-02
Version: 1.0.0
"""

from collections.abc import Awaitable, Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from voice_relay.utils.logging import get_logger

logger = get_logger(__name__)

# The relay only serves JSON and plain text, so nothing may be loaded or framed.
CONTENT_SECURITY_POLICY = "; ".join(
    [
        "default-src 'none'",
        "base-uri 'none'",
        "form-action 'none'",
        "frame-ancestors 'none'",
    ]
)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Middleware that adds security headers to all HTTP responses.

    Headers Applied:
    - Content-Security-Policy
    - Cross-Origin-Opener-Policy / Cross-Origin-Resource-Policy
    - Referrer-Policy
    - Strict-Transport-Security (HTTPS requests only)
    - X-Content-Type-Options, X-Frame-Options, X-DNS-Prefetch-Control
    - X-Permitted-Cross-Domain-Policies
    """

    def __init__(
        self,
        app: ASGIApp,
        enable_hsts: bool = True,
        hsts_max_age: int = 31536000,  # 1 year
        cross_origin_resource_policy: str = "cross-origin",
    ):
        """Initialize security headers middleware.

        Args:
            app: ASGI application.
            enable_hsts: Enable Strict-Transport-Security header.
            hsts_max_age: HSTS max-age in seconds (default: 1 year).
            cross_origin_resource_policy: Value of Cross-Origin-Resource-Policy.
        """
        super().__init__(app)
        self.enable_hsts = enable_hsts
        self.hsts_max_age = hsts_max_age
        self.cross_origin_resource_policy = cross_origin_resource_policy

        logger.info(
            f"SecurityHeadersMiddleware initialized: "
            f"HSTS={enable_hsts}, CORP={cross_origin_resource_policy}"
        )

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        response: Response = await call_next(request)
        headers = response.headers

        headers["Content-Security-Policy"] = CONTENT_SECURITY_POLICY
        headers["Cross-Origin-Opener-Policy"] = "same-origin"
        headers["Cross-Origin-Resource-Policy"] = self.cross_origin_resource_policy
        headers["Referrer-Policy"] = "no-referrer"
        headers["X-Content-Type-Options"] = "nosniff"
        headers["X-DNS-Prefetch-Control"] = "off"
        headers["X-Frame-Options"] = "SAMEORIGIN"
        headers["X-Permitted-Cross-Domain-Policies"] = "none"

        if self.enable_hsts and request.url.scheme == "https":
            headers["Strict-Transport-Security"] = f"max-age={self.hsts_max_age}; includeSubDomains"

        # Don't advertise the server stack
        for name in ("Server", "X-Powered-By"):
            if name in headers:
                del headers[name]

        return response
