"""Pytest configuration and fixtures."""

import json

import pytest

import insight_blueprint.source.base as base_mod
from insight_blueprint.config.loader import InsightConfig


class FakeResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, status_code=200, payload=None, text=None):
        self.status_code = status_code
        self.text = text if text is not None else json.dumps(payload)

    def json(self):
        return json.loads(self.text)


@pytest.fixture
def config():
    return InsightConfig(client_id="test-client", host="insight.example.com")


@pytest.fixture
def fake_get(monkeypatch):
    """Replace requests.get in the source module; queue responses, record calls."""

    class _FakeGet:
        def __init__(self):
            self.calls = []
            self.responses = []

        def respond(self, status_code=200, payload=None, text=None):
            self.responses.append(FakeResponse(status_code, payload, text))

        def __call__(self, url, params=None, headers=None, timeout=None):
            self.calls.append({"url": url, "params": params, "headers": headers, "timeout": timeout})
            return self.responses.pop(0)

    fake = _FakeGet()
    monkeypatch.setattr(base_mod.requests, "get", fake)
    return fake
