"""Logging configuration and request context."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest
import structlog

from observability import LogConfig, RequestContext, get_current_request_id, setup_logging
from observability.logger import _parse_size, add_context_fields, add_performance_fields


def test_log_config_from_env(monkeypatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("LOG_FORMAT", "TEXT")
    monkeypatch.setenv("LOG_BACKUP_COUNT", "2")

    config = LogConfig.from_env()
    config.validate()

    assert config.level == "DEBUG"
    assert config.format == "text"
    assert config.backup_count == 2


@pytest.mark.parametrize(
    "field, value",
    [("level", "LOUD"), ("format", "xml"), ("output", "remote"), ("backup_count", -1)],
)
def test_log_config_validate_rejects(field, value) -> None:
    config = LogConfig()
    setattr(config, field, value)

    with pytest.raises(ValueError):
        config.validate()


def test_parse_size() -> None:
    assert _parse_size("10KB") == 10 * 1024
    assert _parse_size("100MB") == 100 * 1024 * 1024
    assert _parse_size("1gb") == 1024 ** 3
    assert _parse_size("512") == 512


def test_setup_logging_to_file(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "exporter.log"
    setup_logging(level="INFO", format_type="json", output_type="file", file_path=str(log_file))

    structlog.get_logger("docker_health_exporter.test").info("log entry", container_id="abc")
    for handler in logging.getLogger().handlers:
        handler.flush()

    content = log_file.read_text(encoding="utf-8")
    assert '"event": "log entry"' in content
    assert '"container_id": "abc"' in content
    assert '"service": "docker-health-exporter"' in content


def test_context_fields_only_inside_request() -> None:
    assert "request_id" not in add_context_fields(None, None, {})

    with RequestContext(request_id="req-1", method="GET", path="/metrics"):
        fields = add_context_fields(None, None, {})
        assert get_current_request_id() == "req-1"

    assert fields["request_id"] == "req-1"
    assert fields["http_path"] == "/metrics"
    assert get_current_request_id() is None


def test_request_context_generates_id() -> None:
    with RequestContext(method="GET", path="/health") as ctx:
        assert ctx.request_id
        assert get_current_request_id() == ctx.request_id


def test_performance_fields() -> None:
    assert add_performance_fields(None, None, {"duration": 0.25})["duration_ms"] == 250.0
    assert "duration_ms" not in add_performance_fields(None, None, {})
