"""Tests for settings and logging setup."""

import json
import logging

from infocard.config import Settings
from infocard.utils.logging import JSONFormatter, get_logger, request_id_var


def test_defaults_without_environment(monkeypatch):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    s = Settings(_env_file=None)
    assert s.fetch_timeout == 10.0
    assert s.browser_timeout == 30.0
    assert s.browser_headless is True
    assert s.cors_origins == ["http://localhost:5173"]
    assert s.openai_api_key == ""


def test_fallback_credentials_from_environment(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-env")
    monkeypatch.setenv("AZURE_OPENAI_API_KEY", "az-env")
    monkeypatch.delenv("AZURE_OPENAI_ENDPOINT", raising=False)
    s = Settings(_env_file=None)

    assert s.openai_api_key == "sk-env"
    configured = s.configured_providers()
    assert configured["openai"] is True
    # Azure needs both key and endpoint
    assert configured["azure"] is False


def test_allowed_origins_are_split(monkeypatch):
    monkeypatch.setenv("ALLOWED_ORIGINS", "http://a.example, http://b.example ,")
    assert Settings(_env_file=None).cors_origins == ["http://a.example", "http://b.example"]


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("infocard.test", logging.INFO, __file__, 10, "hello %s", ("world",), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_includes_context():
    line = JSONFormatter().format(_record(provider="openai", status_code=200, ignored="x"))
    data = json.loads(line)

    assert data["message"] == "hello world"
    assert data["level"] == "INFO"
    assert data["provider"] == "openai"
    assert data["status_code"] == 200
    assert "ignored" not in data
    assert data["timestamp"].endswith("Z")


def test_json_formatter_uses_request_id_from_context():
    token = request_id_var.set("req-123")
    try:
        data = json.loads(JSONFormatter().format(_record()))
    finally:
        request_id_var.reset(token)

    assert data["request_id"] == "req-123"


def test_structured_logger_attaches_request_id(caplog):
    logger = get_logger("infocard.test")
    token = request_id_var.set("req-456")
    try:
        with caplog.at_level(logging.INFO, logger="infocard.test"):
            logger.info("processing", extra={"stage": "static"})
    finally:
        request_id_var.reset(token)

    record = caplog.records[-1]
    assert record.request_id == "req-456"
    assert record.stage == "static"
