"""Relay configuration using pydantic-settings.

This module defines the RelaySettings class that reads configuration from
environment variables. No variable is required at startup: a missing
SLACK_URL is reported per invocation by the handler instead of failing
when the settings are loaded.
"""

import logging
from typing import Optional

import httpx
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class RelaySettings(BaseSettings):
    """Issue relay configuration from environment variables.

    Variables are read without a prefix (e.g., SLACK_URL,
    SLACK_TIMEOUT_SECONDS).

    Optional fields:
    - slack_url: Slack incoming-webhook URL. Blank values are treated as unset.
    - slack_timeout_seconds: Timeout for the outbound Slack call.
    - log_level: Standard library logging level name.
    - host, port: Bind address for the local FastAPI server.
    """

    model_config = SettingsConfigDict(
        case_sensitive=False,
    )

    # -------------------------------------------------------------------------
    # Slack Configuration
    # -------------------------------------------------------------------------
    # Incoming-webhook URL that receives the formatted issue summaries
    slack_url: Optional[str] = None

    # Timeout in seconds for the single outbound Slack request
    slack_timeout_seconds: float = 5.0

    # -------------------------------------------------------------------------
    # Logging Configuration
    # -------------------------------------------------------------------------
    log_level: str = "INFO"

    # -------------------------------------------------------------------------
    # Server Configuration
    # -------------------------------------------------------------------------
    # Host address to bind the local server to
    host: str = "0.0.0.0"

    # Port number for the local server
    port: int = 8080

    # -------------------------------------------------------------------------
    # Validators
    # -------------------------------------------------------------------------
    @field_validator("slack_url")
    @classmethod
    def normalize_slack_url(cls, v: Optional[str]) -> Optional[str]:
        """Strip whitespace, treat a blank URL as unset, and validate the rest."""
        if v is None or not v.strip():
            return None
        url = v.strip()
        try:
            parsed = httpx.URL(url)
        except httpx.InvalidURL as e:
            raise ValueError(f"slack_url is not a valid URL: {e}") from e
        if parsed.scheme not in ("http", "https") or not parsed.host:
            raise ValueError("slack_url must be an absolute http:// or https:// URL")
        return url

    @field_validator("slack_timeout_seconds")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        """Validate that the Slack timeout is positive."""
        if v <= 0:
            raise ValueError("slack_timeout_seconds must be greater than 0")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate that log level is a known logging level name."""
        level = v.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"log_level must be a logging level name, got {v!r}")
        return level

    @field_validator("port")
    @classmethod
    def validate_port(cls, v: int) -> int:
        """Validate that port is in valid range."""
        if not 1 <= v <= 65535:
            raise ValueError("port must be between 1 and 65535")
        return v


def get_settings() -> RelaySettings:
    """Create and return a RelaySettings instance.

    A new instance is built on every call so each invocation sees the
    current process environment.

    Returns:
        RelaySettings: Configured settings instance.

    Raises:
        pydantic.ValidationError: If a variable is set to an invalid value.
    """
    return RelaySettings()


def redact_secret(value: Optional[str], visible_chars: int = 4) -> str:
    """Redact a secret value, showing only the first few characters.

    Args:
        value: The secret value to redact. None renders as "<unset>".
        visible_chars: Number of characters to show at the start.

    Returns:
        Redacted string with asterisks replacing hidden characters.
    """
    if value is None:
        return "<unset>"
    if len(value) <= visible_chars:
        return "*" * len(value)
    return value[:visible_chars] + "*" * (len(value) - visible_chars)
