"""
Unit tests for the Upstash Redis REST client.
"""

import json

import pytest
import requests

from voice_agent.core.config import settings
from voice_agent.core.errors import UpstashError
from voice_agent.providers import upstash_rest
from voice_agent.providers.upstash_rest import UpstashRestClient
from conftest import FakeResponse

URL = "https://us1-test.upstash.io"
TOKEN = "tok"


@pytest.fixture
def kv():
    return UpstashRestClient(url=URL, token=TOKEN, timeout=1.0)


class TestGet:
    def test_decodes_json_and_encodes_key(self, kv, monkeypatch):
        calls = []

        def fake_get(url, headers=None, timeout=None):
            calls.append((url, headers, timeout))
            return FakeResponse(json_data={"result": json.dumps({"name": "Sam"})})

        monkeypatch.setattr(upstash_rest.requests, "get", fake_get)

        assert kv.get("memory:sam 1") == {"name": "Sam"}
        url, headers, timeout = calls[0]
        assert url == f"{URL}/get/memory%3Asam%201"
        assert headers == {"Authorization": f"Bearer {TOKEN}"}
        assert timeout == 1.0

    def test_non_json_value_is_returned_raw(self, kv, monkeypatch):
        monkeypatch.setattr(
            upstash_rest.requests, "get",
            lambda *a, **k: FakeResponse(json_data={"result": "hello"}),
        )
        assert kv.get("k") == "hello"

    def test_missing_key_returns_none(self, kv, monkeypatch):
        monkeypatch.setattr(
            upstash_rest.requests, "get",
            lambda *a, **k: FakeResponse(json_data={"result": None}),
        )
        assert kv.get("k") is None

    def test_http_error_raises(self, kv, monkeypatch):
        monkeypatch.setattr(
            upstash_rest.requests, "get",
            lambda *a, **k: FakeResponse(status_code=401, text="Unauthorized"),
        )
        with pytest.raises(UpstashError, match="401"):
            kv.get("k")

    def test_error_payload_raises(self, kv, monkeypatch):
        monkeypatch.setattr(
            upstash_rest.requests, "get",
            lambda *a, **k: FakeResponse(json_data={"error": "WRONGTYPE"}),
        )
        with pytest.raises(UpstashError, match="WRONGTYPE"):
            kv.get("k")

    def test_transport_error_raises(self, kv, monkeypatch):
        def boom(*args, **kwargs):
            raise requests.ConnectionError("no route")

        monkeypatch.setattr(upstash_rest.requests, "get", boom)
        with pytest.raises(UpstashError, match="no route"):
            kv.get("k")


class TestSetDelete:
    def test_set_posts_json_body(self, kv, monkeypatch):
        calls = []

        def fake_post(url, headers=None, data=None, timeout=None):
            calls.append((url, data))
            return FakeResponse(json_data={"result": "OK"})

        monkeypatch.setattr(upstash_rest.requests, "post", fake_post)

        assert kv.set("memory:sam", {"name": "Sàm"}) is True
        url, data = calls[0]
        assert url == f"{URL}/set/memory%3Asam"
        assert json.loads(data.decode("utf-8")) == {"name": "Sàm"}

    def test_set_http_error_raises(self, kv, monkeypatch):
        monkeypatch.setattr(
            upstash_rest.requests, "post",
            lambda *a, **k: FakeResponse(status_code=500, text="Internal Error"),
        )
        with pytest.raises(UpstashError, match="set HTTP 500"):
            kv.set("memory:sam", {"name": "Sam"})

    def test_set_error_payload_raises(self, kv, monkeypatch):
        monkeypatch.setattr(
            upstash_rest.requests, "post",
            lambda *a, **k: FakeResponse(json_data={"error": "ERR max request size exceeded"}),
        )
        with pytest.raises(UpstashError, match="max request size"):
            kv.set("memory:sam", {"name": "Sam"})

    def test_delete_reports_removal(self, kv, monkeypatch):
        monkeypatch.setattr(
            upstash_rest.requests, "get",
            lambda *a, **k: FakeResponse(json_data={"result": 1}),
        )
        assert kv.delete("memory:sam") is True

        monkeypatch.setattr(
            upstash_rest.requests, "get",
            lambda *a, **k: FakeResponse(json_data={"result": 0}),
        )
        assert kv.delete("memory:sam") is False


class TestUnconfigured:
    def test_no_http_calls_without_credentials(self, monkeypatch):
        monkeypatch.setattr(settings, "upstash_redis_rest_url", None)
        monkeypatch.setattr(settings, "upstash_redis_rest_token", None)

        def fail(*args, **kwargs):
            raise AssertionError("should not be called")

        monkeypatch.setattr(upstash_rest.requests, "get", fail)
        monkeypatch.setattr(upstash_rest.requests, "post", fail)

        kv = UpstashRestClient()
        assert kv.configured is False
        assert kv.get("k") is None
        assert kv.set("k", {"a": 1}) is False
        assert kv.delete("k") is False

    def test_reads_credentials_from_settings(self, monkeypatch):
        monkeypatch.setattr(settings, "upstash_redis_rest_url", URL + "/")
        monkeypatch.setattr(settings, "upstash_redis_rest_token", TOKEN)
        kv = UpstashRestClient()
        assert kv.configured is True
        assert kv._endpoint("get", "a/b") == f"{URL}/get/a%2Fb"
