"""Utility modules."""

from voice_relay.utils.logging import get_logger, sanitize_for_logging, setup_logging
from voice_relay.utils.tokens import decode_token_payload

__all__ = [
    "decode_token_payload",
    "get_logger",
    "sanitize_for_logging",
    "setup_logging",
]
