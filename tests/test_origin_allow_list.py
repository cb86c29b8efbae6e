"""Tests for the origin allow-list and response headers.

Author: Odiseo Team
Created: 2025-12-02
Version: 1.0.0
"""

import pytest
from conftest import ALLOWED_ORIGIN


@pytest.mark.asyncio
async def test_request_without_origin_is_allowed(client):
    response = await client.get("/healthz")

    assert response.status_code == 200


@pytest.mark.asyncio
async def test_allowed_origin_gets_cors_headers(client):
    response = await client.get("/healthz", headers={"Origin": ALLOWED_ORIGIN})

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == ALLOWED_ORIGIN


@pytest.mark.asyncio
async def test_second_listed_origin_is_allowed(client):
    response = await client.get("/healthz", headers={"Origin": "http://localhost:5173"})

    assert response.status_code == 200


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "origin",
    [
        "https://evil.example.com",
        "https://voice.example.com.evil.net",
        "http://voice.example.com",
        "null",
    ],
)
async def test_unlisted_origin_rejected_before_routes(client, upstream, origin):
    response = await client.get("/api/webrtc-token", headers={"Origin": origin})

    assert response.status_code == 403
    assert response.json() == {"error": "origin_not_allowed", "origin": origin}
    assert upstream.requests == []


@pytest.mark.asyncio
async def test_empty_allow_list_rejects_every_browser(make_client):
    client = await make_client(ALLOWED_ORIGINS="")

    browser = await client.get("/healthz", headers={"Origin": "http://localhost:3000"})
    server = await client.get("/healthz")

    assert browser.status_code == 403
    assert server.status_code == 200


@pytest.mark.asyncio
async def test_preflight_from_allowed_origin(client):
    response = await client.options(
        "/api/webrtc-token",
        headers={"Origin": ALLOWED_ORIGIN, "Access-Control-Request-Method": "GET"},
    )

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == ALLOWED_ORIGIN


@pytest.mark.asyncio
async def test_security_headers_present(client):
    response = await client.get("/")

    assert response.headers["x-content-type-options"] == "nosniff"
    assert response.headers["cross-origin-resource-policy"] == "cross-origin"
    assert response.headers["referrer-policy"] == "no-referrer"
    assert "strict-transport-security" not in response.headers


@pytest.mark.asyncio
async def test_rejection_still_carries_security_headers(client):
    response = await client.get("/", headers={"Origin": "https://evil.example.com"})

    assert response.status_code == 403
    assert response.headers["x-content-type-options"] == "nosniff"


@pytest.mark.asyncio
async def test_request_id_echoed(client):
    response = await client.get("/healthz", headers={"X-Request-ID": "req-42"})

    assert response.headers["x-request-id"] == "req-42"


@pytest.mark.asyncio
async def test_request_id_generated_when_absent(client):
    response = await client.get("/healthz")

    assert response.headers["x-request-id"]


@pytest.mark.asyncio
async def test_empty_origin_header_treated_as_absent(client):
    response = await client.get("/healthz", headers={"Origin": ""})

    assert response.status_code == 200
    assert response.json() == {"ok": True}
