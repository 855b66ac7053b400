"""Shared fixtures for Helix SDK tests."""

import json
from typing import Any

import pytest

from helix_sdk import StaticCredential, TransportResponse
from helix_sdk.scopes import Scope


def envelope(items: list[dict[str, Any]], cursor: str | None = None, **extra: Any) -> bytes:
    body: dict[str, Any] = {"data": items, "pagination": {"cursor": cursor} if cursor else {}}
    body.update(extra)
    return json.dumps(body).encode()


class FakeTransport:
    """Transport replaying canned responses and recording every call."""

    def __init__(self, responses: list[TransportResponse]) -> None:
        self._responses = list(responses)
        self.calls: list[tuple[str, str, dict[str, str], bytes | None]] = []

    def send(self, method, uri, headers, body):
        self.calls.append((method, uri, dict(headers), body))
        if not self._responses:
            raise AssertionError(f"unexpected request: {method} {uri}")
        return self._responses.pop(0)


class AsyncFakeTransport(FakeTransport):
    async def send(self, method, uri, headers, body):  # type: ignore[override]
        return FakeTransport.send(self, method, uri, headers, body)


def ok(body: bytes, headers: dict[str, str] | None = None) -> TransportResponse:
    return TransportResponse(200, headers or {}, body)


def game(game_id: str, name: str = "Fortnite") -> dict[str, str]:
    return {
        "id": game_id,
        "name": name,
        "box_art_url": "https://static-cdn.jtvnw.net/ttv-boxart/Fortnite-52x72.jpg",
    }


@pytest.fixture
def make_envelope():
    return envelope


@pytest.fixture
def make_game():
    return game


@pytest.fixture
def make_ok():
    return ok


@pytest.fixture
def fake_transport():
    """Factory building a FakeTransport from canned responses."""
    return FakeTransport


@pytest.fixture
def async_fake_transport():
    return AsyncFakeTransport


@pytest.fixture
def credential() -> StaticCredential:
    return StaticCredential(access_token="validtoken", client="client-abc")


@pytest.fixture
def subscriber_credential() -> StaticCredential:
    return StaticCredential(
        access_token="validtoken",
        client="client-abc",
        scopes=frozenset({Scope.USER_READ_SUBSCRIPTIONS.value}),
    )
