"""Configuration module: client settings."""

from envelope_client.config.settings import ClientSettings

__all__ = [
    "ClientSettings",
]
