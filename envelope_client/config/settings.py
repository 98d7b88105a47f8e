"""Pydantic Settings for the envelope client.

All environment variables use the ENVELOPE_CLIENT_ prefix.
Example: ENVELOPE_CLIENT_BASE_URL=https://api.example.com

Applications apply the log level once at startup with
``configure_logging(settings.log_level)``.
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings


class ClientSettings(BaseSettings):
    """API client configuration validated from environment variables."""

    # Transport
    base_url: str  # e.g. "https://api.example.com/v1"
    timeout_seconds: float = Field(default=10.0, gt=0)
    default_headers: dict[str, str] = {}

    # Envelope
    result_field: str = Field(default="result", min_length=1)

    # Logging
    log_level: str = "INFO"

    model_config = {"env_prefix": "ENVELOPE_CLIENT_"}
