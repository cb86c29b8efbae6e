"""Pytest configuration and shared fixtures.

The relay is driven through ``httpx.ASGITransport`` and the ElevenLabs API is
replaced by an ``httpx.MockTransport`` that records every outbound request.

Author: Odiseo Team
Created: 2025-12-02
Version: 1.0.0
"""

import httpx
import pytest
import pytest_asyncio
from voice_relay.config.settings import Settings
from voice_relay.main import create_app

API_KEY = "sk_0123456789abcdef0123456789abcdef0123456789abcdef"
AGENT_ID = "agent_123"
ALLOWED_ORIGIN = "https://voice.example.com"
ELEVEN_BASE = "https://api.elevenlabs.io"


class FakeElevenLabs:
    """Scripted provider: path -> (status, body) plus a request log."""

    def __init__(self) -> None:
        self.routes: dict[str, tuple[int, str]] = {}
        self.error: Exception | None = None
        self.requests: list[httpx.Request] = []

    def reply(self, path: str, status: int, body: str) -> None:
        self.routes[path] = (status, body)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        status, body = self.routes.get(request.url.path, (404, '{"detail":"not found"}'))
        return httpx.Response(status, text=body, headers={"content-type": "application/json"})

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


def make_settings(**overrides: object) -> Settings:
    """Build settings without reading .env; keyword names are env var names."""
    values: dict[str, object] = {
        "ELEVEN_API_KEY": API_KEY,
        "ELEVEN_AGENT_ID": AGENT_ID,
        "ALLOWED_ORIGINS": f"{ALLOWED_ORIGIN}, http://localhost:5173",
        "LOG_TO_FILE": False,
        "LOG_CONSOLE_ENABLED": False,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def upstream() -> FakeElevenLabs:
    """Scripted ElevenLabs API."""
    return FakeElevenLabs()


@pytest.fixture
def settings() -> Settings:
    """Complete configuration with a two-origin allow-list."""
    return make_settings()


@pytest_asyncio.fixture
async def client(settings, upstream):
    """HTTP client bound to a freshly built relay app."""
    app = create_app(settings, upstream_transport=upstream.transport)
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://relay.test") as c:
        yield c
    await app.state.relay.client.aclose()


@pytest_asyncio.fixture
async def make_client(upstream):
    """Factory for clients over apps built with custom settings."""
    apps = []
    clients = []

    async def _make(**overrides: object) -> httpx.AsyncClient:
        app = create_app(make_settings(**overrides), upstream_transport=upstream.transport)
        apps.append(app)
        c = httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://relay.test")
        clients.append(c)
        return c

    yield _make

    for c in clients:
        await c.aclose()
    for app in apps:
        await app.state.relay.client.aclose()
