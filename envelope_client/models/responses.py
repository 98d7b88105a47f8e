"""Generic response envelope decoding.

Endpoints wrap their payload in an envelope:
{ result: <object> | [<object>, ...], ... }

Servers are inconsistent about returning a single result bare or wrapped in
a one-element array. ``decode_envelope`` absorbs that: callers always get a
list, built element by element with the decoder they supply.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field as dataclass_field
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict

from envelope_client.errors import DecodeError, EnvelopeClientError, FormatError
from envelope_client.models.decoders import ElementDecoder, json_type_name

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_RESULT_FIELD = "result"

# Exceptions an element decoder raises for missing or mistyped fields
_DECODER_FAILURES = (KeyError, TypeError, ValueError)


class BaseResponse(BaseModel, Generic[T]):
    """Decoded envelope: the payload normalized to a list of ``T``."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    result: list[T]

    @classmethod
    def from_json(
        cls,
        json: Any,
        from_json_t: ElementDecoder[T],
        *,
        field: str = DEFAULT_RESULT_FIELD,
    ) -> BaseResponse[T]:
        """Decode ``json`` into a BaseResponse using ``from_json_t`` per element."""
        return cls(result=decode_envelope(json, from_json_t, field=field))


@dataclass
class PartialResponse(Generic[T]):
    """Outcome of a collecting decode: good elements plus per-index errors."""

    items: list[T] = dataclass_field(default_factory=list)
    errors: dict[int, EnvelopeClientError] = dataclass_field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.errors


def _read_payload(body: Any, field: str) -> Any:
    """Return the payload under ``field``, or raise FormatError."""
    if not isinstance(body, dict):
        actual = json_type_name(body)
        raise FormatError(
            f"Response envelope must be a JSON object, got {actual}",
            field=field,
            actual_type=actual,
        )
    if field not in body:
        raise FormatError(
            f'Missing "{field}" field in response envelope',
            field=field,
        )
    payload = body[field]
    if not isinstance(payload, (dict, list)):
        actual = json_type_name(payload)
        raise FormatError(
            f'Unexpected JSON format for "{field}": {actual}',
            field=field,
            actual_type=actual,
        )
    return payload


def _element_format_error(field: str, index: int, element: Any) -> FormatError:
    actual = json_type_name(element)
    return FormatError(
        f'Element {index} of "{field}" must be a JSON object, got {actual}',
        field=field,
        actual_type=actual,
        index=index,
    )


def _decode_one(decode: ElementDecoder[T], element: dict, index: int | None) -> T:
    """Run the element decoder, mapping its failures to DecodeError."""
    try:
        return decode(element)
    except DecodeError as exc:
        if exc.index is None and index is not None:
            exc.index = index
            exc.details["index"] = index
        raise
    except _DECODER_FAILURES as exc:
        where = "element" if index is None else f"element {index}"
        raise DecodeError(f"Failed to decode {where}: {exc!r}", index=index) from exc


def decode_envelope(
    body: Any,
    decode: ElementDecoder[T],
    *,
    field: str = DEFAULT_RESULT_FIELD,
) -> list[T]:
    """Decode the envelope payload into a list of ``T``.

    A single object yields a one-element list; an array yields one value
    per element in source order. Fails fast: the first bad element aborts
    the whole call and no partial list is returned.

    Raises
    ------
    FormatError
        If the body is not an object, the payload field is missing or null,
        the payload is neither object nor array, or an array element is not
        an object (``index`` is set).
    DecodeError
        If ``decode`` fails on an element.
    """
    payload = _read_payload(body, field)

    if isinstance(payload, dict):
        logger.debug("Decoding single-object payload", extra={"field": field})
        return [_decode_one(decode, payload, None)]

    for index, element in enumerate(payload):
        if not isinstance(element, dict):
            raise _element_format_error(field, index, element)

    logger.debug(
        "Decoding array payload",
        extra={"field": field, "element_count": len(payload)},
    )
    return [_decode_one(decode, element, index) for index, element in enumerate(payload)]


def decode_envelope_collecting(
    body: Any,
    decode: ElementDecoder[T],
    *,
    field: str = DEFAULT_RESULT_FIELD,
) -> PartialResponse[T]:
    """Decode like ``decode_envelope`` but collect per-element failures.

    Envelope-level problems (body not an object, payload missing, null or
    of a scalar type) still raise FormatError. For a single-object payload
    the error, if any, is stored under index 0.
    """
    payload = _read_payload(body, field)
    elements = [payload] if isinstance(payload, dict) else payload
    partial: PartialResponse[T] = PartialResponse()

    for index, element in enumerate(elements):
        if not isinstance(element, dict):
            partial.errors[index] = _element_format_error(field, index, element)
        else:
            try:
                partial.items.append(_decode_one(decode, element, index))
                continue
            except DecodeError as exc:
                partial.errors[index] = exc
        logger.debug(
            "Skipping element: %s",
            partial.errors[index],
            extra={"field": field, "error_index": index},
        )

    logger.debug(
        "Decoded %d of %d element(s)",
        len(partial.items),
        len(elements),
        extra={"field": field, "element_count": len(elements)},
    )
    return partial
