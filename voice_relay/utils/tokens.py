"""Conversation token inspection.

Decodes the claims segment of a provider token for operators. Nothing here
verifies a signature, so the result must never drive an access decision.
"""

import base64
import binascii
import json
from typing import Any

from voice_relay.errors import TokenDecodeError


def _b64url_to_bytes(segment: str) -> bytes:
    standard = segment.rstrip("=").replace("-", "+").replace("_", "/")
    standard += "=" * (-len(standard) % 4)
    return base64.b64decode(standard, validate=True)


def decode_token_payload(token: str) -> Any:
    """Decode the middle (claims) segment of a dot-delimited token.

    Args:
        token: Token in ``header.payload.signature`` form.

    Returns:
        The parsed JSON payload.

    Raises:
        TokenDecodeError: If the token has no second segment or the segment
            is not base64url-encoded JSON.
    """
    parts = token.split(".")
    if len(parts) < 2 or not parts[1]:
        raise TokenDecodeError("token has no payload segment")

    try:
        raw = _b64url_to_bytes(parts[1])
        return json.loads(raw.decode("utf-8"))
    except (binascii.Error, UnicodeDecodeError, ValueError) as e:
        raise TokenDecodeError(f"token payload is not base64url JSON: {e}") from e
