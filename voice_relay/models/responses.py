"""Voice relay response models.

Pydantic v2 models for the JSON bodies the relay produces itself. Provider
bodies are passed through untouched and have no model here.

Author: Odiseo Team
Created: 2025-12-02
Version: 1.0.0
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class HealthResponse(BaseModel):
    """Liveness response."""

    ok: bool = Field(default=True)


class ErrorResponse(BaseModel):
    """Error produced by the relay.

    Attributes:
        error: Error code (snake_case identifier)
        detail: Stringified cause, only for unexpected failures
    """

    error: str = Field(..., description="Error code (e.g., 'missing_env_vars')")
    detail: str | None = Field(None, description="Stringified cause of the failure")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "error": "server_error",
                "detail": "ConnectError('[Errno -2] Name or service not known')",
            }
        }
    )


class NotFoundResponse(BaseModel):
    """Unmatched local route."""

    error: str = Field(default="not_found")
    hint: list[str] = Field(default_factory=list, description="Available routes")


class OriginRejectedResponse(BaseModel):
    """Request rejected by the origin allow-list."""

    error: str = Field(default="origin_not_allowed")
    origin: str


class VerifyAgentResponse(BaseModel):
    """First successful agent lookup.

    Exactly one of ``agent``, ``body`` or ``raw`` is set: the matched list
    entry, the whole JSON body, or the non-JSON body text.
    """

    ok: bool = Field(default=True)
    from_: str = Field(..., alias="from", description="Provider URL that answered")
    agent: dict[str, Any] | None = None
    body: Any = None
    raw: str | None = None

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "ok": True,
                "from": "https://api.elevenlabs.io/v1/convai/agents",
                "agent": {"agent_id": "agent_123", "name": "Support"},
            }
        },
    )


class AgentNotFoundResponse(BaseModel):
    """No candidate endpoint knows the configured agent."""

    ok: bool = Field(default=False)
    error: str = Field(default="agent_not_found_on_any_endpoint")
    agent_id: str = Field(..., alias="agentId")

    model_config = ConfigDict(populate_by_name=True)


class TokenDebugResponse(BaseModel):
    """Decoded token claims. Not signature-checked."""

    token_issued_for_agent_env: str
    decoded_payload: Any

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "token_issued_for_agent_env": "agent_123",
                "decoded_payload": {"exp": 1764700000, "sub": "conversation"},
            }
        }
    )
