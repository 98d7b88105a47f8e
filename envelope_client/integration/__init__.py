"""HTTP dispatch for envelope-wrapped APIs."""

from envelope_client.integration.api_service import ApiService

__all__ = [
    "ApiService",
]
