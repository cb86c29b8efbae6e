"""Voice Relay module entry point.

Allows running the relay from the project root: python .

Author: Odiseo Team
Created: 2025-12-02
Version: 1.0.0
"""

import uvicorn

from voice_relay.config.settings import get_settings
from voice_relay.main import create_app

if __name__ == "__main__":
    settings = get_settings()

    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
