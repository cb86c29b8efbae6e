"""Voice relay models module."""

from voice_relay.models.responses import (
    AgentNotFoundResponse,
    ErrorResponse,
    HealthResponse,
    NotFoundResponse,
    OriginRejectedResponse,
    TokenDebugResponse,
    VerifyAgentResponse,
)

__all__ = [
    "AgentNotFoundResponse",
    "ErrorResponse",
    "HealthResponse",
    "NotFoundResponse",
    "OriginRejectedResponse",
    "TokenDebugResponse",
    "VerifyAgentResponse",
]
