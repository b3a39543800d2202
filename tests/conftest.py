"""Global test fixtures."""

import sys
from pathlib import Path

import httpx
import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from replicate_sdk.client import Client  # noqa: E402
from replicate_sdk.clients import endpoint as endpoint_mod  # noqa: E402

API_URL = "https://api.test/v1"
TRAINING_URL = "https://train.test/v1"


class FakeAPI:
    """
    Routes (method, path) to queued responses and records every request.

    The last queued response for a route is repeated once the queue drains.
    """

    def __init__(self):
        self.routes = {}
        self.requests = []

    def add(self, method, path, status=200, json=None, text=None):
        self.routes.setdefault((method, path), []).append((status, json, text))
        return self

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        queue = self.routes.get((request.method, request.url.path))
        if not queue:
            return httpx.Response(404, json={"detail": f"no route for {request.url.path}"})
        status, payload, text = queue.pop(0) if len(queue) > 1 else queue[0]
        if text is not None:
            return httpx.Response(status, text=text)
        if payload is None:
            return httpx.Response(status)
        return httpx.Response(status, json=payload)

    def calls(self, method, path):
        return [r for r in self.requests if r.method == method and r.url.path == path]

    def http_client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self.handler))


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    # Settings read REPLICATE_* from the environment; keep tests hermetic.
    for key in (
        "REPLICATE_API_TOKEN",
        "REPLICATE_WEBHOOK_URL",
        "REPLICATE_API_ENDPOINT_URL",
        "REPLICATE_DREAMBOOTH_ENDPOINT_URL",
        "REPLICATE_UPLOAD_ROOT",
        "REPLICATE_UPLOAD_ALLOWED_DOMAINS",
    ):
        monkeypatch.delenv(key, raising=False)
    yield


@pytest.fixture
def sleeps(monkeypatch):
    recorded = []
    monkeypatch.setattr(endpoint_mod.time, "sleep", recorded.append)
    return recorded


@pytest.fixture
def api():
    return FakeAPI()


@pytest.fixture
def client(api, sleeps):
    c = Client(
        api_token="test-token",
        api_endpoint_url=API_URL,
        dreambooth_endpoint_url=TRAINING_URL,
        http_client=api.http_client(),
    )
    yield c
    c.close()


@pytest.fixture
def make_client(api, sleeps):
    """Build a Client wired to the fake API with per-test overrides."""
    created = []

    def _make(**overrides):
        options = {
            "api_token": "test-token",
            "api_endpoint_url": API_URL,
            "dreambooth_endpoint_url": TRAINING_URL,
            "http_client": api.http_client(),
        }
        options.update(overrides)
        c = Client(**options)
        created.append(c)
        return c

    yield _make
    for c in created:
        c.close()
