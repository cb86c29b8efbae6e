"""Structured logging configuration using structlog with rotation.

Combines structlog for structured logging with redaction of provider
secrets and tokens before anything reaches a handler (CWE-532 mitigation).

Author: Odiseo Team
Version: 1.0.0
"""

import logging
import re
import sys
from logging.handlers import RotatingFileHandler
from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from voice_relay.config.settings import Settings

# ============================================================================
# SENSITIVE DATA SANITIZATION (CWE-532 mitigation)
# ============================================================================

SENSITIVE_PATTERNS: dict[str, tuple[str, str]] = {
    "jwt": (r"\beyJ[A-Za-z0-9_-]{10,}\.[A-Za-z0-9_-]{10,}\.[A-Za-z0-9_-]{10,}", "[JWT_REDACTED]"),
    "xi_api_key_header": (
        r"(xi-api-key['\"]?\s*[:=]\s*['\"]?)[^\s'\",}]+",
        r"\1[API_KEY_REDACTED]",
    ),
    "elevenlabs_key": (r"\bsk_[A-Za-z0-9]{32,}", "[ELEVEN_KEY_REDACTED]"),
    "bearer_token": (r"Bearer\s+[A-Za-z0-9_\-\.]+", "Bearer [TOKEN_REDACTED]"),
    "signed_url_token": (r"([?&]token=)[^&\s'\"]+", r"\1[TOKEN_REDACTED]"),
    "ipv4": (r"\b(\d{1,3}\.\d{1,3}\.)\d{1,3}\.\d{1,3}\b", r"\1***.***"),
}


def sanitize_for_logging(message: Any) -> str:
    """Sanitize sensitive data from log messages."""
    if isinstance(message, dict):
        message = str({str(k): sanitize_for_logging(v) for k, v in message.items()})
    elif isinstance(message, list):
        message = str([sanitize_for_logging(item) for item in message])
    else:
        message = str(message)

    for regex, replacement in SENSITIVE_PATTERNS.values():
        message = re.sub(regex, replacement, message, flags=re.IGNORECASE)

    return message


def sanitize_event_dict(
    _logger: Any, _method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Structlog processor to sanitize sensitive data from event dictionaries."""
    for key, value in list(event_dict.items()):
        if isinstance(value, str | dict | list):
            event_dict[key] = sanitize_for_logging(value)
    return event_dict


# ============================================================================
# STARTUP SUMMARY
# ============================================================================

BYTES_PER_MB = 1024 * 1024

COLORS = {
    "reset": "\033[0m",
    "bold": "\033[1m",
    "dim": "\033[2m",
    "cyan": "\033[36m",
    "green": "\033[32m",
    "yellow": "\033[33m",
    "red": "\033[31m",
}


def print_config_summary(settings: "Settings") -> None:
    """Print a formatted configuration summary. The API key itself is never shown."""
    if not settings.log_console_enabled:
        return

    c = COLORS

    def _line(label: str, value: str, color: str = "cyan") -> None:
        print(f"  {c['dim']}│{c['reset']} {label:<24} {c[color]}{value}{c['reset']}")

    def _section(title: str) -> None:
        print(f"\n  {c['green']}▶ {title}{c['reset']}")
        print(f"  {c['dim']}├{'─' * 55}{c['reset']}")

    print(f"{c['dim']}{'─' * 80}{c['reset']}")
    print(f"{c['cyan']}{c['bold']}  Voice Relay - ElevenLabs key proxy{c['reset']}")
    print(f"{c['dim']}{'─' * 80}{c['reset']}")

    _section("Server")
    _line("Host", settings.host)
    _line("Port", str(settings.port))
    origins = settings.origin_allow_list
    _line("Allowed Origins", ", ".join(origins) if origins else "(none, non-browser only)")

    _section("ElevenLabs")
    key_state = ("set", "green") if settings.eleven_api_key else ("MISSING", "red")
    _line("API Key", *key_state)
    _line("Agent ID", settings.eleven_agent_id or "MISSING", "yellow")
    _line("Base URL", settings.eleven_api_base_url)

    _section("Routes")
    _line("Verify Agent Mode", settings.verify_agent_mode)
    _line("Signed URL", "enabled" if settings.enable_signed_url else "disabled")
    _line("Token Debug", "enabled" if settings.enable_token_debug else "disabled", "yellow")

    _section("Logging")
    _line("Level", settings.log_level, "green")
    _line("File Logging", str(settings.log_dir) if settings.log_to_file else "disabled")
    print(f"\n{c['dim']}{'─' * 80}{c['reset']}\n")


# ============================================================================
# LOGGING SETUP
# ============================================================================

_logging_configured = False


def setup_logging(settings: "Settings") -> None:
    """Configure structured logging with rotation and sensitive data sanitization."""
    global _logging_configured  # noqa: PLW0603
    if _logging_configured:
        return
    _logging_configured = True

    log_level = getattr(logging, settings.log_level, logging.INFO)

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        sanitize_event_dict,  # type: ignore[list-item]
    ]

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    json_formatter = structlog.stdlib.ProcessorFormatter(
        processor=structlog.processors.JSONRenderer(),
        foreign_pre_chain=shared_processors,
    )
    console_formatter = structlog.stdlib.ProcessorFormatter(
        processor=structlog.dev.ConsoleRenderer(colors=True),
        foreign_pre_chain=shared_processors,
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if settings.log_console_enabled:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(console_formatter)
        console_handler.setLevel(log_level)
        root_logger.addHandler(console_handler)

    if settings.log_to_file:
        settings.log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            filename=settings.log_dir / "voice-relay.log",
            maxBytes=settings.log_file_max_mb * BYTES_PER_MB,
            backupCount=settings.log_file_backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(json_formatter if settings.log_json_format else console_formatter)
        file_handler.setLevel(log_level)
        root_logger.addHandler(file_handler)

    # Request lines come from AccessLogMiddleware
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    print_config_summary(settings)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)  # type: ignore[no-any-return]
