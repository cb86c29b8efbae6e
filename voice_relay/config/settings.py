"""Application configuration using Pydantic v2 Settings.

Manages the provider credentials, origin allow-list, route toggles and logging
options loaded from environment variables.

Author: Odiseo Team
Version: 1.0.0
"""

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_ELEVEN_API_BASE_URL = "https://api.elevenlabs.io"


@dataclass(frozen=True)
class RelayConfig:
    """Immutable provider configuration handed to the relay.

    Attributes:
        api_key: ElevenLabs secret, only ever sent in the ``xi-api-key`` header.
        agent_id: Conversational agent identifier.
        api_base_url: Provider base URL without trailing slash.
    """

    api_key: str
    agent_id: str
    api_base_url: str = DEFAULT_ELEVEN_API_BASE_URL

    @property
    def is_complete(self) -> bool:
        """Both the secret and the agent id are present."""
        return bool(self.api_key) and bool(self.agent_id)


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings can be overridden via environment variables.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # ========================================================================
    # Server Configuration
    # ========================================================================
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=3000, ge=1, le=65535, alias="PORT")

    # ========================================================================
    # CORS Configuration
    # ========================================================================
    allowed_origins: str = Field(
        default="",
        alias="ALLOWED_ORIGINS",
        description="Comma-separated list of browser origins allowed to call the relay",
    )

    # ========================================================================
    # ElevenLabs Configuration
    # ========================================================================
    eleven_api_key: str = Field(
        default="",  # SECURITY: No default secret - must be set via environment
        alias="ELEVEN_API_KEY",
        description="ElevenLabs API key, attached server-side only",
    )
    eleven_agent_id: str = Field(default="", alias="ELEVEN_AGENT_ID")
    eleven_api_base_url: str = Field(
        default=DEFAULT_ELEVEN_API_BASE_URL,
        alias="ELEVEN_API_BASE_URL",
    )

    # ========================================================================
    # Route Configuration
    # ========================================================================
    # single: one agent lookup call; multi: ordered candidate lookup
    verify_agent_mode: Literal["single", "multi"] = Field(
        default="multi",
        alias="VERIFY_AGENT_MODE",
    )
    enable_signed_url: bool = Field(default=True, alias="ENABLE_SIGNED_URL")
    enable_token_debug: bool = Field(
        default=True,
        alias="ENABLE_TOKEN_DEBUG",
        description="Expose /api/webrtc-token-debug (inspection only, no signature check)",
    )

    # ========================================================================
    # Logging Configuration
    # ========================================================================
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_to_file: bool = Field(default=False, alias="LOG_TO_FILE")
    log_dir: Path = Field(default=Path("logs"), alias="LOG_DIR")
    log_console_enabled: bool = Field(default=True, alias="LOG_CONSOLE_ENABLED")
    log_json_format: bool = Field(default=True, alias="LOG_JSON_FORMAT")
    log_file_max_mb: int = Field(default=10, ge=1, le=100, alias="LOG_FILE_MAX_MB")
    log_file_backup_count: int = Field(default=5, ge=1, le=20, alias="LOG_FILE_BACKUP_COUNT")

    # ========================================================================
    # Derived values
    # ========================================================================

    @property
    def origin_allow_list(self) -> list[str]:
        """Parsed ALLOWED_ORIGINS, whitespace stripped and empties dropped."""
        return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]

    def relay_config(self) -> RelayConfig:
        """Build the immutable provider configuration."""
        return RelayConfig(
            api_key=self.eleven_api_key,
            agent_id=self.eleven_agent_id,
            api_base_url=self.eleven_api_base_url,
        )

    # ========================================================================
    # Validators
    # ========================================================================

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate and normalize log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        normalized = v.upper().strip()
        if normalized not in valid_levels:
            return "INFO"
        return normalized

    @field_validator("log_dir", mode="before")
    @classmethod
    def ensure_log_dir_path(cls, v: str | Path) -> Path:
        """Ensure log_dir is a Path object."""
        return Path(v) if isinstance(v, str) else v

    @field_validator("eleven_api_key", "eleven_agent_id", mode="before")
    @classmethod
    def strip_credentials(cls, v: str | None) -> str:
        """Treat whitespace-only values as missing."""
        return (v or "").strip()

    @field_validator("eleven_api_base_url", mode="after")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Require an absolute http(s) base URL, stored without trailing slash."""
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"ELEVEN_API_BASE_URL must start with http:// or https://: {v}")
        return v.rstrip("/")


@lru_cache
def get_settings() -> Settings:
    """Load settings from the environment once per process."""
    return Settings()
