"""Async HTTP dispatch for envelope-wrapped JSON APIs.

Executes GET/POST requests with httpx, merges caller headers over the
defaults (``Content-Type: application/json`` is always sent), checks the
status code, and hands the parsed body to a caller-supplied decoder.

No retries: every failure surfaces to the caller as one of HttpError,
TransportError, FormatError or DecodeError.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Mapping, TypeVar

import httpx

from envelope_client.config.settings import ClientSettings
from envelope_client.errors import FormatError, HttpError, TransportError
from envelope_client.models.decoders import ElementDecoder, json_type_name
from envelope_client.models.responses import DEFAULT_RESULT_FIELD, decode_envelope

logger = logging.getLogger(__name__)

T = TypeVar("T")

JSON_CONTENT_TYPE = "application/json"


class ApiService:
    """HTTP client for envelope-wrapped JSON endpoints.

    Parameters
    ----------
    base_url:
        Base URL every request path is resolved against
        (e.g. "https://api.example.com/v1").
    timeout_seconds:
        Per-request timeout handed to httpx (default 10.0).
    result_field:
        Envelope field holding the payload for ``get_result``/``post_result``.
    default_headers:
        Headers sent with every request; per-call headers override them.
    transport:
        Optional httpx transport, e.g. ``httpx.ASGITransport`` in tests.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout_seconds: float = 10.0,
        result_field: str = DEFAULT_RESULT_FIELD,
        default_headers: Mapping[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout_seconds = timeout_seconds
        self._result_field = result_field
        self._default_headers = dict(default_headers or {})
        self._transport = transport

    @classmethod
    def from_settings(
        cls,
        settings: ClientSettings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> ApiService:
        return cls(
            settings.base_url,
            timeout_seconds=settings.timeout_seconds,
            result_field=settings.result_field,
            default_headers=settings.default_headers,
            transport=transport,
        )

    @property
    def result_field(self) -> str:
        return self._result_field

    # ------------------------------------------------------------------
    # Whole-body decoding
    # ------------------------------------------------------------------

    async def get(
        self,
        path: str,
        *,
        from_json_t: Callable[[dict[str, Any]], T],
        query_parameters: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> T:
        """GET ``path`` and decode the whole JSON body with ``from_json_t``.

        Raises
        ------
        HttpError
            On a non-2xx status; ``from_json_t`` is not called.
        FormatError
            If the body is not valid JSON or not a JSON object.
        TransportError
            If the request fails before a response arrives.
        """
        response = await self._send(
            "GET", path, query_parameters=query_parameters, headers=headers
        )
        return self._process_response(response, from_json_t)

    async def post(
        self,
        path: str,
        *,
        body: Mapping[str, Any],
        from_json_t: Callable[[dict[str, Any]], T],
        headers: Mapping[str, str] | None = None,
        query_parameters: Mapping[str, Any] | None = None,
    ) -> T:
        """POST ``body`` as JSON to ``path`` and decode the response with ``from_json_t``."""
        response = await self._send(
            "POST",
            path,
            body=body,
            query_parameters=query_parameters,
            headers=headers,
        )
        return self._process_response(response, from_json_t)

    # ------------------------------------------------------------------
    # Envelope decoding
    # ------------------------------------------------------------------

    async def get_result(
        self,
        path: str,
        *,
        decode: ElementDecoder[T],
        query_parameters: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> list[T]:
        """GET ``path`` and decode the envelope payload element by element."""
        return await self.get(
            path,
            from_json_t=self._envelope_decoder(decode),
            query_parameters=query_parameters,
            headers=headers,
        )

    async def post_result(
        self,
        path: str,
        *,
        body: Mapping[str, Any],
        decode: ElementDecoder[T],
        headers: Mapping[str, str] | None = None,
        query_parameters: Mapping[str, Any] | None = None,
    ) -> list[T]:
        """POST ``body`` to ``path`` and decode the envelope payload."""
        return await self.post(
            path,
            body=body,
            from_json_t=self._envelope_decoder(decode),
            headers=headers,
            query_parameters=query_parameters,
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _envelope_decoder(self, decode: ElementDecoder[T]) -> Callable[[dict[str, Any]], list[T]]:
        field = self._result_field

        def from_json(data: dict[str, Any]) -> list[T]:
            return decode_envelope(data, decode, field=field)

        return from_json

    def _merge_headers(self, headers: Mapping[str, str] | None) -> httpx.Headers:
        # Case-insensitive, so "content-type" cannot survive next to the forced value
        merged = httpx.Headers(self._default_headers)
        merged.update(headers or {})
        merged["Content-Type"] = JSON_CONTENT_TYPE
        return merged

    async def _send(
        self,
        method: str,
        path: str,
        *,
        body: Mapping[str, Any] | None = None,
        query_parameters: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> httpx.Response:
        merged_headers = self._merge_headers(headers)
        params = dict(query_parameters) if query_parameters else None
        started = time.monotonic()

        try:
            async with httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout_seconds,
                transport=self._transport,
            ) as client:
                if method == "POST":
                    response = await client.post(
                        path,
                        json=dict(body or {}),
                        params=params,
                        headers=merged_headers,
                    )
                else:
                    response = await client.get(
                        path,
                        params=params,
                        headers=merged_headers,
                    )
        except httpx.TransportError as exc:
            logger.warning(
                "Request failed before a response: %s",
                exc.__class__.__name__,
                extra={"method": method, "path": path},
            )
            raise TransportError(f"{method} {path} failed: {exc}") from exc

        logger.info(
            "%s %s -> %d",
            method,
            path,
            response.status_code,
            extra={
                "method": method,
                "path": path,
                "status_code": response.status_code,
                "duration_ms": round((time.monotonic() - started) * 1000, 2),
            },
        )
        return response

    def _process_response(
        self,
        response: httpx.Response,
        from_json: Callable[[dict[str, Any]], T],
    ) -> T:
        if not response.is_success:
            logger.warning(
                "HTTP error, code: %d",
                response.status_code,
                extra={"status_code": response.status_code},
            )
            raise HttpError(response.status_code)

        try:
            json_object = response.json()
        except ValueError as exc:
            raise FormatError("Response body is not valid JSON") from exc

        if not isinstance(json_object, dict):
            actual = json_type_name(json_object)
            raise FormatError(
                f"Unexpected response format: {actual}",
                actual_type=actual,
            )
        return from_json(json_object)
