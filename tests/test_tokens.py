"""Unit tests for token payload decoding.

Author: Odiseo Team
Created: 2025-12-02
Version: 1.0.0
"""

import base64
import json

import pytest
from voice_relay.errors import TokenDecodeError, UpstreamCallError
from voice_relay.utils.tokens import decode_token_payload


def _segment(raw: bytes) -> str:
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode()


def test_decodes_middle_segment():
    claims = _segment(b'{"exp":123}')
    token = f"{_segment(b'{}')}.{claims}.sig"

    assert decode_token_payload(token) == {"exp": 123}


def test_decodes_url_safe_characters():
    # "~~~" encodes to "fn5-" and "???" to "Pz8_" at 3-byte aligned offsets
    payload = {"k": "~~~???"}
    segment = _segment(json.dumps(payload, separators=(",", ":")).encode())
    assert "-" in segment and "_" in segment
    token = f"h.{segment}.s"

    assert decode_token_payload(token) == payload


@pytest.mark.parametrize("padding", ["", "=", "=="])
def test_accepts_any_padding(padding):
    segment = base64.urlsafe_b64encode(b'{"a":1}').decode().rstrip("=") + padding

    assert decode_token_payload(f"h.{segment}.s") == {"a": 1}


@pytest.mark.parametrize("token", ["", "single", "h..s"])
def test_missing_payload_segment(token):
    with pytest.raises(TokenDecodeError, match="no payload segment"):
        decode_token_payload(token)


@pytest.mark.parametrize("segment", ["!!!!", _segment(b"not json"), _segment(b"\xff\xfe")])
def test_undecodable_payload(segment):
    with pytest.raises(TokenDecodeError):
        decode_token_payload(f"h.{segment}.s")


def test_decode_error_maps_to_server_error():
    assert issubclass(TokenDecodeError, UpstreamCallError)
    assert TokenDecodeError("x").to_content() == {"error": "server_error", "detail": "x"}
