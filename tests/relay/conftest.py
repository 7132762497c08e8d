"""Shared fixtures for issue relay tests."""

import json
from typing import List

import httpx
import pytest

SLACK_URL = "https://hooks.slack.com/services/test/test/test"

SAMPLE_PAYLOAD = {
    "action": "opened",
    "repository": {"full_name": "octo-org/octo-repo"},
    "issue": {
        "html_url": "https://github.com/octo-org/octo-repo/issues/42",
        "number": 42,
        "title": "Bug report",
    },
    "sender": {"login": "octocat"},
}

RELAY_ENV_VARS = ("SLACK_URL", "SLACK_TIMEOUT_SECONDS", "LOG_LEVEL", "HOST", "PORT")


class StubSlackTransport:
    """Records requests and answers every one with a fixed response."""

    def __init__(self, status_code: int = 200, body: str = "ok") -> None:
        self.status_code = status_code
        self.body = body
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, text=self.body)

    @property
    def call_count(self) -> int:
        return len(self.requests)

    @property
    def last_request_body(self) -> str:
        return self.requests[-1].content.decode("utf-8")

    @property
    def last_request_json(self) -> dict:
        return json.loads(self.last_request_body)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every relay variable from the environment."""
    for name in RELAY_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def slack_env(clean_env):
    """Environment with SLACK_URL set to the test webhook."""
    clean_env.setenv("SLACK_URL", SLACK_URL)
    return clean_env


@pytest.fixture
def slack_stub() -> StubSlackTransport:
    return StubSlackTransport()


@pytest.fixture
def http_client(slack_stub):
    client = httpx.Client(transport=httpx.MockTransport(slack_stub))
    yield client
    client.close()


@pytest.fixture
def stub_slack_client():
    """Factory for (stub, client) pairs answering with a given response."""
    clients: List[httpx.Client] = []

    def _make(status_code: int = 200, body: str = "ok"):
        stub = StubSlackTransport(status_code=status_code, body=body)
        client = httpx.Client(transport=httpx.MockTransport(stub))
        clients.append(client)
        return stub, client

    yield _make

    for client in clients:
        client.close()


@pytest.fixture
def slack_url() -> str:
    return SLACK_URL


@pytest.fixture
def sample_payload() -> dict:
    return json.loads(json.dumps(SAMPLE_PAYLOAD))


@pytest.fixture
def sample_payload_json() -> str:
    return json.dumps(SAMPLE_PAYLOAD)
