"""Property tests for structured logging.

Log entries are valid JSON carrying level, timestamp and the request/decode
context fields, and never carry credential values.
"""

from __future__ import annotations

import json
import logging

from hypothesis import given, settings, strategies as st

from envelope_client.logging_config import JsonFormatter


# --- Strategies ---

messages = st.text(min_size=1, max_size=100, alphabet="abcdefghijklmnopqrstuvwxyz0123456789 ._-/")
levels = st.sampled_from(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"])
paths = st.from_regex(r"/[a-z]{3,10}(/[a-z0-9]{1,10})?", fullmatch=True)
methods = st.sampled_from(["GET", "POST"])
status_codes = st.integers(min_value=100, max_value=599)
durations = st.floats(min_value=0.1, max_value=60000.0, allow_nan=False, allow_infinity=False)
element_counts = st.integers(min_value=0, max_value=1000)


def _make_record(
    message: str,
    level: str = "INFO",
    **extra: object,
) -> logging.LogRecord:
    """Create a LogRecord with optional extra attributes."""
    record = logging.LogRecord(
        name="test",
        level=getattr(logging, level),
        pathname="test.py",
        lineno=1,
        msg=message,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


# --- Structured log format ---

@settings(max_examples=100)
@given(message=messages, level=levels)
def test_structured_log_format_basic(message: str, level: str) -> None:
    formatter = JsonFormatter()
    record = _make_record(message, level=level)
    parsed = json.loads(formatter.format(record))

    assert "timestamp" in parsed
    assert parsed["level"] == level
    assert parsed["logger"] == "test"
    assert parsed["message"] == message


@settings(max_examples=100)
@given(
    message=messages,
    method=methods,
    path=paths,
    status_code=status_codes,
    duration_ms=durations,
)
def test_structured_log_format_request(
    message: str,
    method: str,
    path: str,
    status_code: int,
    duration_ms: float,
) -> None:
    formatter = JsonFormatter()
    record = _make_record(
        message,
        method=method,
        path=path,
        status_code=status_code,
        duration_ms=duration_ms,
    )
    parsed = json.loads(formatter.format(record))

    assert parsed["method"] == method
    assert parsed["path"] == path
    assert parsed["status_code"] == status_code
    assert parsed["duration_ms"] == duration_ms


@settings(max_examples=100)
@given(message=messages, element_count=element_counts)
def test_structured_log_format_decode(message: str, element_count: int) -> None:
    formatter = JsonFormatter()
    record = _make_record(
        message,
        level="DEBUG",
        field="result",
        element_count=element_count,
        error_index=element_count,
    )
    parsed = json.loads(formatter.format(record))

    assert parsed["field"] == "result"
    assert parsed["element_count"] == element_count
    assert parsed["error_index"] == element_count


@settings(max_examples=50)
@given(message=messages)
def test_absent_context_fields_are_omitted(message: str) -> None:
    parsed = json.loads(JsonFormatter().format(_make_record(message)))

    for name in ("method", "path", "status_code", "element_count"):
        assert name not in parsed


# --- No credentials in logs ---

@settings(max_examples=100)
@given(
    secret_value=st.text(min_size=8, max_size=32, alphabet="abcdefghijklmnopqrstuvwxyz0123456789"),
    prefix=st.sampled_from([
        "api_key=",
        "api-key: ",
        "secret=",
        "password=",
        "token=",
        "authorization: ",
    ]),
)
def test_no_credentials_in_logs(secret_value: str, prefix: str) -> None:
    formatter = JsonFormatter()

    tainted_message = f"Request failed with {prefix}{secret_value} in header"
    record = _make_record(tainted_message, level="ERROR")
    parsed = json.loads(formatter.format(record))

    assert secret_value not in parsed["message"], (
        f"Secret value '{secret_value}' found in log message"
    )


@settings(max_examples=50)
@given(secret_value=st.text(min_size=8, max_size=32, alphabet="abcdefghijklmnopqrstuvwxyz0123456789"))
def test_no_credentials_in_logged_path(secret_value: str) -> None:
    record = _make_record("GET", path=f"/items?token={secret_value}")
    parsed = json.loads(JsonFormatter().format(record))

    assert secret_value not in parsed["path"]
