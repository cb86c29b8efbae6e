"""Configuration package for Voice Relay."""

from voice_relay.config.settings import RelayConfig, Settings, get_settings

__all__ = ["RelayConfig", "Settings", "get_settings"]
