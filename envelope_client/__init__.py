"""Typed decoding of envelope-wrapped JSON API responses."""

from envelope_client.config import ClientSettings
from envelope_client.errors import (
    DecodeError,
    EnvelopeClientError,
    FormatError,
    HttpError,
    TransportError,
)
from envelope_client.integration import ApiService
from envelope_client.logging_config import configure_logging
from envelope_client.models import (
    BaseResponse,
    ElementDecoder,
    JsonDecodable,
    PartialResponse,
    decode_envelope,
    decode_envelope_collecting,
    decoder_for,
    model_decoder,
)

__all__ = [
    "ApiService",
    "BaseResponse",
    "ClientSettings",
    "DecodeError",
    "ElementDecoder",
    "EnvelopeClientError",
    "FormatError",
    "HttpError",
    "JsonDecodable",
    "PartialResponse",
    "TransportError",
    "configure_logging",
    "decode_envelope",
    "decode_envelope_collecting",
    "decoder_for",
    "model_decoder",
]
