"""Unit tests for logging configuration and masking."""

from __future__ import annotations

import json
from typing import Any

import pytest
import structlog

from appfactory.application_factory import ApplicationFactory
from appfactory.infra.di.errors import ServiceConstructionError
from appfactory.infra.di.signature import Signature
from appfactory.infra.logging.config import configure_logging, is_configured


def _events(out: str) -> list[dict[str, Any]]:
    return [json.loads(line) for line in out.strip().splitlines() if line.startswith("{")]


@pytest.mark.unit
def test_configure_logging_sets_up_json_output(capsys: Any) -> None:
    """Test that configure_logging sets up JSON Lines output."""
    configure_logging(level="INFO")
    logger = structlog.get_logger("test")

    logger.info("test.event", extra="data")
    captured = capsys.readouterr().out.strip()

    assert captured, "Should have JSON output"
    payload = json.loads(captured)
    assert "ts" in payload
    assert "level" in payload
    assert "msg" in payload
    assert "event" in payload
    assert is_configured()


@pytest.mark.unit
def test_configure_logging_masks_sensitive_keys(capsys: Any) -> None:
    """Test that configure_logging masks sensitive values."""
    configure_logging(level="INFO")
    logger = structlog.get_logger("test.masking")

    secret_token = "secret_token_1234567890"

    logger.info(
        "test.masking.emit",
        token=secret_token,
        password="secret123",
        nested={"api_key": "key123", "other": "ok"},
    )

    out = capsys.readouterr().out.strip()
    payload = json.loads(out)

    assert payload.get("token") == "[REDACTED]"
    assert payload.get("password") == "[REDACTED]"
    assert payload.get("nested", {}).get("api_key") == "[REDACTED]"
    assert payload.get("nested", {}).get("other") == "ok"
    assert secret_token not in out


@pytest.mark.unit
def test_configure_logging_respects_level(capsys: Any) -> None:
    configure_logging(level="WARNING")
    logger = structlog.get_logger("test.level")

    logger.info("test.level.hidden")
    logger.warning("test.level.shown")

    events = [e["event"] for e in _events(capsys.readouterr().out)]
    assert events == ["test.level.shown"]


@pytest.mark.unit
def test_configure_logging_reads_level_from_environment(
    capsys: Any, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("APPFACTORY_LOG_LEVEL", "error")
    configure_logging()
    logger = structlog.get_logger("test.env")

    logger.warning("test.env.hidden")
    logger.error("test.env.shown")

    events = [e["event"] for e in _events(capsys.readouterr().out)]
    assert events == ["test.env.shown"]


@pytest.mark.unit
def test_di_events_are_logged_without_argument_values(capsys: Any) -> None:
    configure_logging(level="DEBUG")
    factory = ApplicationFactory.get_instance()
    factory.register_object("Connection", Signature.transient("Connection", lambda **kw: kw))

    factory.new_object("Connection", {"password": "hunter2", "host": "db"})
    ApplicationFactory.clear()

    out = capsys.readouterr().out
    events = _events(out)
    names = [e["event"] for e in events]

    assert "di.container.register" in names
    assert "application_factory.clear" in names
    construct = next(e for e in events if e["event"] == "di.builder.construct")
    assert construct["service"] == "Connection"
    assert construct["overrides"] == ["host", "password"]
    assert "hunter2" not in out


@pytest.mark.unit
def test_construction_failure_is_logged(capsys: Any) -> None:
    configure_logging(level="INFO")
    factory = ApplicationFactory.get_instance()

    def broken() -> None:
        raise ValueError("boom")

    factory.register_object("Broken", broken)

    with pytest.raises(ServiceConstructionError):
        factory.new_object("Broken")

    failures = [
        e for e in _events(capsys.readouterr().out) if e["event"] == "di.builder.construct_failed"
    ]
    assert len(failures) == 1
    assert failures[0]["service"] == "Broken"
    assert failures[0]["level"] == "warning"
