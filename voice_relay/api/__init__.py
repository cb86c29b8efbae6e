"""API routes package for Voice Relay."""

from voice_relay.api.health import router as health_router
from voice_relay.api.webrtc import build_router as build_webrtc_router

__all__ = ["build_webrtc_router", "health_router"]
