"""Voice Relay API Service.

Keeps the ElevenLabs API key on the server: the browser calls the relay,
the relay attaches the key and forwards the call to the provider.
"""

__version__ = "1.0.0"
__service_name__ = "Voice Relay"
__author__ = "Odiseo Team"
