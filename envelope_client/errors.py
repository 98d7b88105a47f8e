"""Error hierarchy for envelope decoding and request dispatch.

All client errors extend EnvelopeClientError. A failed decode or request
reaches the caller as exactly one of:

- FormatError: the envelope or one of its elements has the wrong shape
- DecodeError: a caller-supplied element decoder rejected an element
- HttpError: the server answered with a non-success status
- TransportError: the request never got a response
"""

from __future__ import annotations


class EnvelopeClientError(Exception):
    """Base error for all envelope client errors."""

    message: str = "Envelope client error"

    def __init__(self, message: str | None = None, **kwargs: object) -> None:
        self.message = message or self.__class__.message
        self.details = kwargs
        super().__init__(self.message)


class FormatError(EnvelopeClientError):
    """Envelope payload missing, null, or of an unexpected JSON type."""

    message = "Unexpected response format"

    def __init__(
        self,
        message: str | None = None,
        *,
        field: str | None = None,
        actual_type: str | None = None,
        index: int | None = None,
    ) -> None:
        self.field = field
        self.actual_type = actual_type
        self.index = index
        super().__init__(message, field=field, actual_type=actual_type, index=index)


class DecodeError(EnvelopeClientError):
    """An element decoder failed on one element."""

    message = "Failed to decode element"

    def __init__(self, message: str | None = None, *, index: int | None = None) -> None:
        self.index = index
        super().__init__(message, index=index)


class HttpError(EnvelopeClientError):
    """Non-success HTTP status. Decoding is never attempted."""

    message = "HTTP error"

    def __init__(self, status_code: int, message: str | None = None) -> None:
        self.status_code = status_code
        super().__init__(
            message or f"HTTP error, code: {status_code}",
            status_code=status_code,
        )


class TransportError(EnvelopeClientError):
    """Network-level failure: timeout, refused connection, DNS."""

    message = "Transport error"
