"""Shared fixtures: an app wired to a stubbed OddsEngine upstream."""

import json

import httpx
import pytest
from fastapi.testclient import TestClient

from app import create_app
from config import Settings
from services.cache import ResponseCache


class FakeClock:
    def __init__(self, now: float = 1_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class StubUpstream:
    """Records every upstream call and answers with a configurable response."""

    def __init__(self):
        self.calls: list[httpx.Request] = []
        self.status_code = 200
        self.content: bytes = json.dumps({"events": [{"id": "evt_1", "league": "NBA"}]}).encode()
        self.error: Exception | None = None
        self.stream: httpx.AsyncByteStream | None = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        if self.error is not None:
            raise self.error
        if self.stream is not None:
            return httpx.Response(self.status_code, stream=self.stream)
        return httpx.Response(self.status_code, content=self.content)

    @property
    def call_count(self) -> int:
        return len(self.calls)


@pytest.fixture
def upstream():
    return StubUpstream()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return ResponseCache(clock=clock)


@pytest.fixture
def settings(tmp_path):
    return Settings(api_key="env-key", port=3001, static_dir=str(tmp_path / "missing"))


@pytest.fixture
def make_client(upstream, cache, settings):
    def _make(**overrides) -> TestClient:
        app = create_app(
            settings=overrides.get("settings", settings),
            transport=httpx.MockTransport(upstream),
            cache=overrides.get("cache", cache),
        )
        return TestClient(app)

    return _make


@pytest.fixture
def client(make_client):
    return make_client()
