"""Unit tests for VoiceRelay and the agent lookup candidates.

Author: Odiseo Team
Created: 2025-12-02
Version: 1.0.0
"""

import httpx
import pytest
import pytest_asyncio
from conftest import API_KEY, ELEVEN_BASE
from voice_relay.config.settings import RelayConfig
from voice_relay.errors import MissingConfigError, UpstreamCallError
from voice_relay.services.relay import (
    AgentLookupCandidate,
    RelayResult,
    VoiceRelay,
    find_agent,
)
from voice_relay.services.upstream import ElevenLabsClient, UpstreamResponse

# ============================================================================
# Fixtures
# ============================================================================


@pytest_asyncio.fixture
async def make_relay(upstream):
    """Factory for relays over the scripted provider."""
    clients = []

    def _make(agent_id: str = "agent 1/β", api_key: str = API_KEY, **kwargs) -> VoiceRelay:
        config = RelayConfig(api_key=api_key, agent_id=agent_id)
        client = ElevenLabsClient(config, transport=upstream.transport)
        clients.append(client)
        return VoiceRelay(config, client, **kwargs)

    yield _make

    for client in clients:
        await client.aclose()


# ============================================================================
# Configuration
# ============================================================================


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "operation",
    ["fetch_token", "fetch_signed_url", "verify_agent", "verify_agent_any", "debug_token"],
)
async def test_incomplete_config_raises_before_any_call(make_relay, upstream, operation):
    relay = make_relay(api_key="")

    with pytest.raises(MissingConfigError):
        await getattr(relay, operation)()

    assert upstream.requests == []


# ============================================================================
# Passthrough calls
# ============================================================================


@pytest.mark.asyncio
async def test_agent_id_is_url_encoded_in_query(make_relay, upstream):
    upstream.reply("/v1/convai/conversation/get-signed-url", 200, "{}")
    relay = make_relay()

    result = await relay.fetch_signed_url()

    assert isinstance(result, UpstreamResponse)
    (sent,) = upstream.requests
    assert sent.url.params["agent_id"] == "agent 1/β"


@pytest.mark.asyncio
async def test_verify_agent_encodes_agent_id_in_path(make_relay, upstream):
    relay = make_relay()

    result = await relay.verify_agent()

    assert result.status_code == 404
    assert upstream.requests[0].url.raw_path == b"/v1/convai/agents/agent%201%2F%CE%B2"


@pytest.mark.asyncio
async def test_transport_error_becomes_upstream_call_error(make_relay, upstream):
    upstream.error = httpx.ReadTimeout("read timed out")
    relay = make_relay()

    with pytest.raises(UpstreamCallError, match="read timed out"):
        await relay.fetch_token()


# ============================================================================
# verify_agent_any
# ============================================================================


@pytest.mark.asyncio
async def test_first_non_404_stops_the_search(make_relay, upstream):
    upstream.reply("/v1/convai/agents/Y", 200, '{"agent_id":"Y","name":"Front desk"}')
    relay = make_relay(agent_id="Y")

    result = await relay.verify_agent_any()

    assert result == RelayResult(
        200,
        {
            "ok": True,
            "from": f"{ELEVEN_BASE}/v1/convai/agents/Y",
            "body": {"agent_id": "Y", "name": "Front desk"},
        },
    )
    assert len(upstream.requests) == 1


@pytest.mark.asyncio
async def test_second_candidate_non_json_body_returned_raw(make_relay, upstream):
    upstream.reply("/v1/agents/Y", 200, "agent Y exists")
    relay = make_relay(agent_id="Y")

    result = await relay.verify_agent_any()

    assert result.content == {
        "ok": True,
        "from": f"{ELEVEN_BASE}/v1/agents/Y",
        "raw": "agent Y exists",
    }


@pytest.mark.asyncio
async def test_list_without_match_returns_whole_body(make_relay, upstream):
    upstream.reply("/v1/convai/agents", 200, '{"agents":[{"agent_id":"X"}]}')
    relay = make_relay(agent_id="Y")

    result = await relay.verify_agent_any()

    assert result.content["body"] == {"agents": [{"agent_id": "X"}]}
    assert "agent" not in result.content


@pytest.mark.asyncio
async def test_upstream_error_other_than_404_is_passed_through(make_relay, upstream):
    upstream.reply("/v1/convai/agents/Y", 401, '{"detail":"invalid_api_key"}')
    relay = make_relay(agent_id="Y")

    result = await relay.verify_agent_any()

    assert isinstance(result, UpstreamResponse)
    assert result.status_code == 401
    assert len(upstream.requests) == 1


@pytest.mark.asyncio
async def test_custom_candidate_list(make_relay, upstream):
    upstream.reply("/v2/agents", 200, '[{"id":"Y","name":"v2"}]')
    relay = make_relay(
        agent_id="Y",
        candidates=[AgentLookupCandidate("v2_list", "/v2/agents")],
    )

    result = await relay.verify_agent_any()

    assert result.content["agent"] == {"id": "Y", "name": "v2"}


# ============================================================================
# find_agent
# ============================================================================


def test_find_agent_in_bare_list():
    assert find_agent([{"agent_id": "a"}, {"agent_id": "b"}], "b") == {"agent_id": "b"}


def test_find_agent_prefers_agent_id_over_id():
    assert find_agent({"agents": [{"agent_id": "a", "id": "b"}]}, "b") is None


def test_find_agent_ignores_non_list_shapes():
    assert find_agent({"agent_id": "a"}, "a") is None
    assert find_agent("a", "a") is None
    assert find_agent({"agents": ["a", None]}, "a") is None
