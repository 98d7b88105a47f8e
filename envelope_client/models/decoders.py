"""Element decoder contract.

An element decoder turns one raw JSON object into one domain value. It is
passed in at every call site instead of being looked up from the target
type, so the envelope decoder never has to know how a ``T`` is built.
"""

from __future__ import annotations

from typing import Any, Callable, Protocol, TypeVar, runtime_checkable

from pydantic import BaseModel

T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)

RawJsonObject = dict[str, Any]
ElementDecoder = Callable[[RawJsonObject], T]


@runtime_checkable
class JsonDecodable(Protocol):
    """Domain types that know how to build themselves from a JSON object."""

    @classmethod
    def from_json(cls, data: RawJsonObject) -> Any: ...


def decoder_for(cls: type[T]) -> ElementDecoder[T]:
    """Return ``cls.from_json`` as an element decoder.

    Raises
    ------
    TypeError
        If ``cls`` has no callable ``from_json``.
    """
    from_json = getattr(cls, "from_json", None)
    if not callable(from_json):
        raise TypeError(f"{cls.__name__} does not define a callable from_json()")
    return from_json


def model_decoder(model_cls: type[M]) -> ElementDecoder[M]:
    """Build an element decoder from a pydantic model class.

    Validation failures surface as ``pydantic.ValidationError``, which the
    envelope decoder reports as a DecodeError.
    """

    def decode(data: RawJsonObject) -> M:
        return model_cls.model_validate(data)

    decode.__name__ = f"decode_{model_cls.__name__}"
    return decode


def json_type_name(value: object) -> str:
    """Name the JSON type of a parsed value, for error messages."""
    if value is None:
        return "null"
    # bool is a subclass of int
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__
