"""Voice relay operations.

Each operation maps one browser-facing route to the provider:
checks the configuration, performs the outbound call(s) and returns either
the provider response untouched (``UpstreamResponse``) or a locally shaped
JSON result (``RelayResult``).

Author: Odiseo Team
Created: 2025-12-02
Version: 1.0.0
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any
from urllib.parse import quote

from voice_relay.config.settings import RelayConfig
from voice_relay.errors import MissingConfigError, TokenDecodeError, UpstreamCallError
from voice_relay.services.upstream import ElevenLabsClient, UpstreamResponse
from voice_relay.utils.logging import get_logger
from voice_relay.utils.tokens import decode_token_payload

logger = get_logger(__name__)

TOKEN_PATH = "/v1/agents/conversations/webrtc-token"
SIGNED_URL_PATH = "/v1/convai/conversation/get-signed-url"
AGENT_PATH = "/v1/convai/agents/{agent_id}"


@dataclass(frozen=True)
class AgentLookupCandidate:
    """One provider endpoint that may know about the configured agent.

    Attributes:
        name: Short label used in logs.
        path_template: Path under the base URL; ``{agent_id}`` is substituted
            URL-encoded when present.
    """

    name: str
    path_template: str

    def path(self, agent_id: str) -> str:
        return self.path_template.format(agent_id=quote(agent_id, safe=""))


# Tried in order; the first non-404 answer wins.
AGENT_LOOKUP_CANDIDATES: tuple[AgentLookupCandidate, ...] = (
    AgentLookupCandidate("convai_agent", AGENT_PATH),
    AgentLookupCandidate("agent", "/v1/agents/{agent_id}"),
    AgentLookupCandidate("convai_agent_list", "/v1/convai/agents"),
)


@dataclass(frozen=True)
class RelayResult:
    """JSON body and status produced by the relay itself."""

    status_code: int
    content: dict[str, Any]


def find_agent(body: Any, agent_id: str) -> dict[str, Any] | None:
    """Search a list-shaped agent lookup body for the configured agent.

    Accepts either a bare list or an object holding an ``agents`` list;
    entries are matched on ``agent_id`` (or ``id``).
    """
    if isinstance(body, list):
        entries = body
    elif isinstance(body, dict) and isinstance(body.get("agents"), list):
        entries = body["agents"]
    else:
        return None

    for entry in entries:
        if not isinstance(entry, dict):
            continue
        if entry.get("agent_id", entry.get("id")) == agent_id:
            return entry
    return None


class VoiceRelay:
    """Relay between browser routes and the ElevenLabs API.

    Attributes:
        config: Immutable provider configuration.
        client: Outbound ElevenLabs client.
        candidates: Ordered agent lookup endpoints for ``verify_agent_any``.
    """

    def __init__(
        self,
        config: RelayConfig,
        client: ElevenLabsClient,
        candidates: Sequence[AgentLookupCandidate] = AGENT_LOOKUP_CANDIDATES,
    ) -> None:
        self.config = config
        self.client = client
        self.candidates = tuple(candidates)

    def _require_config(self) -> None:
        if not self.config.is_complete:
            logger.error("ELEVEN_API_KEY or ELEVEN_AGENT_ID is not configured")
            raise MissingConfigError("ELEVEN_API_KEY and ELEVEN_AGENT_ID must be set")

    def _url(self, path: str) -> str:
        return f"{self.config.api_base_url}{path}"

    async def fetch_token(self) -> UpstreamResponse:
        """Fetch a WebRTC conversation token for the configured agent."""
        self._require_config()
        return await self.client.get(TOKEN_PATH, params={"agent_id": self.config.agent_id})

    async def fetch_signed_url(self) -> UpstreamResponse:
        """Fetch a signed conversation URL for the configured agent."""
        self._require_config()
        return await self.client.get(SIGNED_URL_PATH, params={"agent_id": self.config.agent_id})

    async def verify_agent(self) -> UpstreamResponse:
        """Look the configured agent up on the single agent endpoint."""
        self._require_config()
        path = AGENT_PATH.format(agent_id=quote(self.config.agent_id, safe=""))
        return await self.client.get(path)

    async def verify_agent_any(self) -> UpstreamResponse | RelayResult:
        """Look the configured agent up on each candidate endpoint in order.

        Returns:
            RelayResult for a 2xx answer or when every candidate returned 404;
            the raw UpstreamResponse for any other non-404 error status.
        """
        self._require_config()
        agent_id = self.config.agent_id

        for candidate in self.candidates:
            path = candidate.path(agent_id)
            url = self._url(path)
            response = await self.client.get(path)

            if response.status_code == 404:
                logger.info(f"Agent lookup via {candidate.name}: 404, trying next")
                continue

            logger.info(f"Agent lookup via {candidate.name}: {response.status_code}")
            if not response.ok:
                return response

            try:
                body = response.json()
            except UpstreamCallError:
                return RelayResult(200, {"ok": True, "from": url, "raw": response.text})

            agent = find_agent(body, agent_id)
            if agent is not None:
                return RelayResult(200, {"ok": True, "from": url, "agent": agent})
            return RelayResult(200, {"ok": True, "from": url, "body": body})

        logger.warning(f"Agent {agent_id} not found on any of {len(self.candidates)} endpoints")
        return RelayResult(
            404,
            {"ok": False, "error": "agent_not_found_on_any_endpoint", "agentId": agent_id},
        )

    async def debug_token(self) -> UpstreamResponse | RelayResult:
        """Fetch a token and decode its claims for inspection.

        Returns:
            The raw UpstreamResponse when the provider refused the token,
            otherwise the decoded payload next to the configured agent id.

        Raises:
            UpstreamCallError: If the body is not JSON.
            TokenDecodeError: If the body carries no decodable token.
        """
        response = await self.fetch_token()
        if not response.ok:
            return response

        body = response.json()
        token = body.get("token") if isinstance(body, dict) else None
        if not isinstance(token, str):
            raise TokenDecodeError("provider response has no token field")

        return RelayResult(
            200,
            {
                "token_issued_for_agent_env": self.config.agent_id,
                "decoded_payload": decode_token_payload(token),
            },
        )
