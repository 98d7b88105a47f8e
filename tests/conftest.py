"""Shared test fixtures for the envelope client test suite."""

from __future__ import annotations

from dataclasses import dataclass

import pytest

from envelope_client.config.settings import ClientSettings


# ---------------------------------------------------------------------------
# Domain type used across tests
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Announcement:
    title: str
    content: str

    @classmethod
    def from_json(cls, data: dict) -> "Announcement":
        return cls(title=data["title"], content=data["content"])


class CountingDecoder:
    """Element decoder that records every object it is handed."""

    def __init__(self) -> None:
        self.calls: list[dict] = []

    def __call__(self, data: dict) -> Announcement:
        self.calls.append(data)
        return Announcement.from_json(data)

    @property
    def call_count(self) -> int:
        return len(self.calls)


# ---------------------------------------------------------------------------
# Ensure required env vars are set for ClientSettings in tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _set_test_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Set minimal env vars so ClientSettings can be instantiated in tests."""
    monkeypatch.setenv("ENVELOPE_CLIENT_BASE_URL", "http://testserver/api/v1")


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def settings() -> ClientSettings:
    """Test settings with safe defaults."""
    return ClientSettings(
        base_url="http://testserver/api/v1",
        timeout_seconds=5.0,
    )


@pytest.fixture
def announcement_cls() -> type[Announcement]:
    return Announcement


@pytest.fixture
def counting_decoder() -> CountingDecoder:
    return CountingDecoder()

