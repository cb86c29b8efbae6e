"""Access Log Middleware.

One log line per request (method, path, status, response size, duration),
tagged with a request id that is echoed back in ``X-Request-ID``.

Author: Odiseo Team
Created: 2025-12-02
Version: 1.0.0
"""

import time
from collections.abc import Awaitable, Callable
from uuid import uuid4

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from voice_relay.utils.logging import get_logger

logger = get_logger("voice_relay.access")

REQUEST_ID_HEADER = "X-Request-ID"


class AccessLogMiddleware(BaseHTTPMiddleware):
    """Middleware that logs every request once it has been answered."""

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid4())
        structlog.contextvars.bind_contextvars(request_id=request_id)
        started = time.perf_counter()
        try:
            response = await call_next(request)
        finally:
            structlog.contextvars.unbind_contextvars("request_id")

        elapsed_ms = (time.perf_counter() - started) * 1000
        response.headers[REQUEST_ID_HEADER] = request_id
        logger.info(
            f"{request.method} {request.url.path} {response.status_code} "
            f"{response.headers.get('content-length', '-')} - {elapsed_ms:.3f} ms",
            request_id=request_id,
        )
        return response
