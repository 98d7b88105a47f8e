"""Envelope models and element decoder helpers."""

from envelope_client.models.decoders import (
    ElementDecoder,
    JsonDecodable,
    decoder_for,
    json_type_name,
    model_decoder,
)
from envelope_client.models.responses import (
    DEFAULT_RESULT_FIELD,
    BaseResponse,
    PartialResponse,
    decode_envelope,
    decode_envelope_collecting,
)

__all__ = [
    "DEFAULT_RESULT_FIELD",
    "BaseResponse",
    "ElementDecoder",
    "JsonDecodable",
    "PartialResponse",
    "decode_envelope",
    "decode_envelope_collecting",
    "decoder_for",
    "json_type_name",
    "model_decoder",
]
