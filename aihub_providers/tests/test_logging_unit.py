"""Unit coverage for structured logging utilities."""

from __future__ import annotations

import io
import json
import logging

import pytest

from aihub_providers.base.log_support import JsonFormatter
from aihub_providers.base.logging import LogContext, configure_logger, get_logger, log_event


@pytest.fixture()
def log_stream(monkeypatch):
    """Attach a JSON handler to the shared logger at DEBUG and yield its buffer."""
    monkeypatch.setenv("AIHUB_LOG_LEVEL", "DEBUG")
    stream = io.StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(JsonFormatter())
    base = get_logger()
    base.addHandler(handler)
    try:
        yield stream
    finally:
        base.removeHandler(handler)
        configure_logger(level=logging.WARNING)


def _lines(stream: io.StringIO):
    return [json.loads(line) for line in stream.getvalue().splitlines() if line.strip()]


def test_get_logger_maps_names_under_base():
    assert get_logger("config").name == "aihub.config"  # nosec B101
    assert get_logger("aihub.http").name == "aihub.http"  # nosec B101
    assert get_logger().name == "aihub"  # nosec B101


def test_env_level_applies(monkeypatch):
    monkeypatch.setenv("AIHUB_LOG_LEVEL", "ERROR")
    assert get_logger().level == logging.ERROR  # nosec B101
    monkeypatch.setenv("AIHUB_LOG_LEVEL", "bogus")
    assert get_logger().level == logging.WARNING  # nosec B101


def test_log_event_hoists_fields_and_drops_none(log_stream):
    logger = get_logger("aihub.test")
    ctx = LogContext(provider="openai", model="gpt", extra={"request": "r1", "skip": None})
    log_event(logger, "http.response", ctx, status=200, error=None)
    (line,) = _lines(log_stream)
    assert line["event"] == "http.response"  # nosec B101
    assert line["provider"] == "openai"  # nosec B101
    assert line["request"] == "r1"  # nosec B101
    assert line["status"] == 200  # nosec B101
    assert line["level"] == "INFO"  # nosec B101
    assert line["logger"] == "aihub.test"  # nosec B101
    assert "error" not in line and "skip" not in line and "url" not in line  # nosec B101


def test_log_event_keep_none(log_stream):
    log_event(get_logger("aihub.test"), "x", keep_none=True, error=None)
    (line,) = _lines(log_stream)
    assert "error" in line and line["error"] is None  # nosec B101


def test_log_event_respects_level(log_stream):
    logger = get_logger("aihub.test")
    configure_logger(level=logging.WARNING)
    log_event(logger, "quiet", level=logging.DEBUG)
    log_event(logger, "loud", level=logging.WARNING)
    assert [line["event"] for line in _lines(log_stream)] == ["loud"]  # nosec B101


def test_json_formatter_plain_message_and_base_fields_win():
    formatter = JsonFormatter()
    record = logging.LogRecord("aihub.x", logging.INFO, __file__, 1, '{"level": "spoofed", "k": 1}', None, None)
    data = json.loads(formatter.format(record))
    assert data["level"] == "INFO"  # nosec B101
    assert data["k"] == 1  # nosec B101
    plain = logging.LogRecord("aihub.x", logging.INFO, __file__, 1, "hello %s", ("world",), None)
    assert json.loads(formatter.format(plain))["msg"] == "hello world"  # nosec B101


def test_resolver_never_logs_api_key(log_stream):
    from aihub_providers import ConfigResolver

    ConfigResolver([]).resolve("openai", {"api_key": "sk-secret-value-123"})
    text = log_stream.getvalue()
    assert "config.resolved" in text  # nosec B101
    assert "sk-secret-value-123" not in text  # nosec B101
