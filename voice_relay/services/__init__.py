"""Services package for Voice Relay.

Author: Odiseo Team
Version: 1.0.0
"""

from voice_relay.services.relay import (
    AGENT_LOOKUP_CANDIDATES,
    AgentLookupCandidate,
    RelayResult,
    VoiceRelay,
)
from voice_relay.services.upstream import ElevenLabsClient, UpstreamResponse

__all__ = [
    "AGENT_LOOKUP_CANDIDATES",
    "AgentLookupCandidate",
    "ElevenLabsClient",
    "RelayResult",
    "UpstreamResponse",
    "VoiceRelay",
]
