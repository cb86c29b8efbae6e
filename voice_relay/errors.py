"""Relay error types.

Each class carries the HTTP status and machine-readable code it is rendered
with by the exception handlers registered in ``voice_relay.main``.

Author: Odiseo Team
Version: 1.0.0
"""

from typing import Any


class RelayError(Exception):
    """Base class for errors raised while serving a relay request."""

    status_code: int = 500
    error_code: str = "server_error"

    def to_content(self) -> dict[str, Any]:
        """Render the JSON body returned to the caller."""
        return {"error": self.error_code, "detail": str(self)}


class MissingConfigError(RelayError):
    """ELEVEN_API_KEY or ELEVEN_AGENT_ID is not configured."""

    error_code = "missing_env_vars"

    def to_content(self) -> dict[str, Any]:
        return {"error": self.error_code}


class UpstreamCallError(RelayError):
    """The outbound call itself failed (connection, TLS, protocol, body parsing)."""


class TokenDecodeError(UpstreamCallError):
    """The provider token could not be split or decoded."""
