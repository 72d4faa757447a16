import json
from typing import Callable, Dict, List

import httpx
import pytest
from fastapi.testclient import TestClient

from motion_bridge.config import BridgeConfig


class FakeProvider:
    def __init__(self, response_text):
        self._response_text = response_text
        self.calls: List[dict] = []

    def generate(self, *, system: str, user: str, json_mode: bool = False):
        self.calls.append({"system": system, "user": user, "json_mode": json_mode})
        return self._response_text


class FakeUpstream:
    """httpx MockTransport handler that dispatches on a URL substring and records requests."""

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self._routes: Dict[str, Callable[[httpx.Request], httpx.Response]] = {}

    def on(self, needle: str, handler: Callable[[httpx.Request], httpx.Response]) -> "FakeUpstream":
        self._routes[needle] = handler
        return self

    def calls_to(self, needle: str) -> List[httpx.Request]:
        return [r for r in self.requests if needle in str(r.url)]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        for needle, handler in self._routes.items():
            if needle in str(request.url):
                return handler(request)
        raise AssertionError(f"Unexpected request: {request.method} {request.url}")


def openai_reply(content):
    return lambda request: httpx.Response(
        200, json={"choices": [{"message": {"content": content}}]}
    )


def json_body(request: httpx.Request) -> dict:
    return json.loads(request.content)


BASE_CONFIG = BridgeConfig(
    openai_api_key="openai-key",
    motion_api_key="motion-key",
    motion_workspace_id="workspace-123",
)


@pytest.fixture
def fake_provider_factory():
    def _make(response_text):
        return FakeProvider(response_text)
    return _make


@pytest.fixture
def upstream():
    return FakeUpstream()


@pytest.fixture
def no_sleep(monkeypatch):
    delays: List[float] = []
    monkeypatch.setattr("integration.retry.time.sleep", delays.append)
    return delays


@pytest.fixture
def make_client(upstream, no_sleep):
    """Build a TestClient wired to the fake upstream with the given config."""
    from api.dependencies import get_config, get_http_client
    from api.main import app

    def _make(config: BridgeConfig = BASE_CONFIG) -> TestClient:
        def _client():
            with httpx.Client(transport=httpx.MockTransport(upstream)) as client:
                yield client

        app.dependency_overrides[get_config] = lambda: config
        app.dependency_overrides[get_http_client] = _client
        return TestClient(app)

    yield _make
    app.dependency_overrides.clear()


@pytest.fixture
def client(make_client):
    return make_client()
