"""
Shared fixtures for the voice agent server tests.

No test talks to OpenAI or Upstash: providers are monkeypatched and the
memory store runs on an in-memory key-value fake.
"""

import copy
import json

import pytest
from fastapi.testclient import TestClient

from voice_agent.core.config import settings
from voice_agent.main import app
from voice_agent.memory import MemoryStore, get_memory_store


class FakeKV:
    """In-memory stand-in for UpstashRestClient (values kept as JSON text)."""

    def __init__(self, configured=True):
        self.configured = configured
        self.data = {}
        self.writes = []

    def get(self, key):
        if not self.configured or key not in self.data:
            return None
        raw = self.data[key]
        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            return raw

    def set(self, key, value):
        if not self.configured:
            return False
        self.writes.append((key, copy.deepcopy(value)))
        self.data[key] = json.dumps(value)
        return True

    def delete(self, key):
        if not self.configured:
            return False
        return self.data.pop(key, None) is not None


class FakeResponse:
    """Minimal requests.Response look-alike."""

    def __init__(self, status_code=200, json_data=None, text=None, content=b""):
        self.status_code = status_code
        self._json = json_data
        if text is None:
            text = json.dumps(json_data) if json_data is not None else ""
        self.text = text
        self.content = content or text.encode("utf-8")

    @property
    def ok(self):
        return 200 <= self.status_code < 400

    def json(self):
        if self._json is None:
            return json.loads(self.text)
        return self._json


@pytest.fixture
def kv():
    return FakeKV()


@pytest.fixture
def store(kv):
    return MemoryStore(kv=kv, key_prefix="memory:", max_notes=3)


@pytest.fixture
def client(store):
    app.dependency_overrides[get_memory_store] = lambda: store
    try:
        yield TestClient(app, raise_server_exceptions=False)
    finally:
        app.dependency_overrides.pop(get_memory_store, None)


@pytest.fixture
def openai_key(monkeypatch):
    monkeypatch.setattr(settings, "openai_api_key", "sk-test")
    monkeypatch.setattr(settings, "openai_base_url", "https://api.openai.test/v1")
    return "sk-test"


@pytest.fixture
def no_openai_key(monkeypatch):
    monkeypatch.setattr(settings, "openai_api_key", None)
