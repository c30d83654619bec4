"""
Pytest configuration and fixtures for worldanvil-mcp tests.
"""

import json
import sys
from pathlib import Path

import httpx
import pytest

# Add src directory to Python path to allow importing worldanvil_mcp
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from worldanvil_mcp.client import WorldAnvilClient
from worldanvil_mcp.config import WorldAnvilConfig


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep WA_* variables from the developer's shell out of the tests."""
    for name in (
        "WA_APP_KEY",
        "WA_AUTH_TOKEN",
        "WA_PROXY_URL",
        "WA_API_HOST",
        "WA_TIMEOUT",
        "WA_MAX_RETRIES",
        "WA_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


class RecordingAPI:
    """Stub World Anvil API that records requests and replays queued responses.

    Responses are popped in order; once the queue is empty every request
    gets {"success": true}.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.responses: list[httpx.Response | Exception] = []

    def queue(self, status_code: int = 200, json_body=None, text: str | None = None) -> None:
        if text is not None:
            self.responses.append(httpx.Response(status_code, text=text))
        else:
            self.responses.append(httpx.Response(status_code, json=json_body))

    def queue_error(self, error: Exception) -> None:
        self.responses.append(error)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self.responses:
            return httpx.Response(200, json={"success": True})
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self):
        return json.loads(self.last.content)


@pytest.fixture
def api() -> RecordingAPI:
    return RecordingAPI()


@pytest.fixture
def direct_config() -> WorldAnvilConfig:
    return WorldAnvilConfig(app_key="test-app-key", auth_token="test-auth-token", retry_backoff=0)


@pytest.fixture
def client(api: RecordingAPI, direct_config: WorldAnvilConfig) -> WorldAnvilClient:
    """Direct-mode client wired to the stub API."""
    return WorldAnvilClient(direct_config, transport=api.transport)
