"""
Unit tests for settings parsing and the logging helpers.
"""

import logging

from voice_agent.core.config import Settings
from voice_agent.utils.logging import SecretRedactingFilter, redact_secrets, resolve_level


class TestCorsOrigins:
    def test_default_allows_all(self, monkeypatch):
        monkeypatch.delenv("CORS_ALLOW_ORIGINS", raising=False)
        assert Settings(_env_file=None).cors_allow_origins == ["*"]

    def test_comma_separated_env(self, monkeypatch):
        monkeypatch.setenv("CORS_ALLOW_ORIGINS", "https://a.example, https://b.example,")
        assert Settings(_env_file=None).cors_allow_origins == [
            "https://a.example",
            "https://b.example",
        ]

    def test_single_origin_env(self, monkeypatch):
        monkeypatch.setenv("CORS_ALLOW_ORIGINS", "https://a.example")
        assert Settings(_env_file=None).cors_allow_origins == ["https://a.example"]

    def test_json_list_env(self, monkeypatch):
        monkeypatch.setenv("CORS_ALLOW_ORIGINS", '["https://a.example"]')
        assert Settings(_env_file=None).cors_allow_origins == ["https://a.example"]


class TestLogging:
    def test_resolve_level(self):
        assert resolve_level("warning") == logging.WARNING
        assert resolve_level(None, debug=True) == logging.DEBUG
        assert resolve_level("bogus") == logging.INFO
        assert resolve_level(logging.ERROR) == logging.ERROR

    def test_redact_secrets(self):
        text = "Authorization: Bearer tok.123-abc key=sk-proj-abcdef123 secret=ek_abcdef123"
        redacted = redact_secrets(text)
        assert "tok.123-abc" not in redacted
        assert "abcdef123" not in redacted
        assert "Bearer ***" in redacted
        assert "sk-***" in redacted
        assert "ek_***" in redacted

    def test_filter_rewrites_record(self):
        record = logging.LogRecord(
            "voice_agent", logging.WARNING, __file__, 1,
            "upstream said: %s", ("Bearer abc123",), None,
        )
        assert SecretRedactingFilter().filter(record) is True
        assert record.getMessage() == "upstream said: Bearer ***"
