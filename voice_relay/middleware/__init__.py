"""Middleware package for Voice Relay."""

from voice_relay.middleware.access_log import AccessLogMiddleware
from voice_relay.middleware.origin_allow_list import OriginAllowListMiddleware
from voice_relay.middleware.security_headers import SecurityHeadersMiddleware

__all__ = ["AccessLogMiddleware", "OriginAllowListMiddleware", "SecurityHeadersMiddleware"]
