"""ElevenLabs HTTP client.

Thin wrapper over ``httpx.AsyncClient`` that attaches the secret key to every
outbound call and separates two outcomes:

- the provider answered (any status): an ``UpstreamResponse`` is returned and
  the caller decides whether to pass it through;
- the call itself failed: ``UpstreamCallError`` is raised.

Concurrency:
- One AsyncClient per application, shared by all requests
- Handlers suspend on the network call, the event loop keeps serving others
- No retries and no timeout beyond the httpx defaults

Author: Odiseo Team
Created: 2025-12-02
Version: 1.0.0
"""

import json
from dataclasses import dataclass
from typing import Any

import httpx

from voice_relay.config.settings import RelayConfig
from voice_relay.errors import UpstreamCallError
from voice_relay.utils.logging import get_logger

logger = get_logger(__name__)

API_KEY_HEADER = "xi-api-key"


@dataclass(frozen=True)
class UpstreamResponse:
    """Status and raw body of a provider response.

    Attributes:
        status_code: HTTP status returned by the provider.
        text: Response body, undecoded.
        url: Full URL that was called (no credentials in it).
    """

    status_code: int
    text: str
    url: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def json(self) -> Any:
        """Parse the body as JSON.

        Raises:
            UpstreamCallError: If the body is not valid JSON.
        """
        try:
            return json.loads(self.text)
        except ValueError as e:
            raise UpstreamCallError(f"Invalid JSON from {self.url}: {e}") from e


class ElevenLabsClient:
    """Outbound GET client for the ElevenLabs API.

    Attributes:
        config: Provider configuration (key, agent id, base URL).
        _client: Shared httpx AsyncClient.
    """

    def __init__(
        self,
        config: RelayConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Provider configuration.
            transport: Optional httpx transport (tests inject a MockTransport).
        """
        self.config = config
        self._client = httpx.AsyncClient(base_url=config.api_base_url, transport=transport)
        logger.info(f"ElevenLabs client initialized (base_url: {config.api_base_url})")

    async def get(self, path: str, params: dict[str, str] | None = None) -> UpstreamResponse:
        """Issue a single GET to the provider.

        Args:
            path: Path under the base URL, already URL-encoded where needed.
            params: Query parameters, URL-encoded by httpx.

        Returns:
            UpstreamResponse with the provider's status and body.

        Raises:
            UpstreamCallError: On any transport or protocol failure.
        """
        try:
            response = await self._client.get(
                path,
                params=params,
                headers={API_KEY_HEADER: self.config.api_key},
            )
        except httpx.HTTPError as e:
            logger.error(f"ElevenLabs call failed: GET {path}: {e!r}")
            raise UpstreamCallError(repr(e)) from e

        logger.debug(f"ElevenLabs GET {response.url.path} -> {response.status_code}")
        return UpstreamResponse(
            status_code=response.status_code,
            text=response.text,
            url=str(response.url),
        )

    async def aclose(self) -> None:
        """Close the underlying connection pool."""
        await self._client.aclose()
