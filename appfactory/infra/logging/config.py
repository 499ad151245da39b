from __future__ import annotations

import logging
import sys
from typing import IO, Any, Mapping, MutableMapping, cast

import structlog

from appfactory.config.settings import get_app_settings
from appfactory.infra.result import is_sensitive_key

_configured: bool = False


def _add_msg_from_event(_: Any, __: str, event_dict: MutableMapping[str, Any]) -> Mapping[str, Any]:
    """Mirror structlog's ``event`` into ``msg`` so every line carries both keys."""

    if "msg" not in event_dict and isinstance(event_dict.get("event"), str):
        event_dict["msg"] = event_dict["event"]
    return event_dict


def _mask_sensitive_values(
    _: Any, __: str, event_dict: MutableMapping[str, Any]
) -> Mapping[str, Any]:
    """Redact values under secret-looking keys, at any depth.

    Uses the same key rule as ``Error.log_safe_context`` so a key such as
    ``db_password`` is masked in both places.
    """

    def mask_value(key: str, value: Any) -> Any:
        if isinstance(value, Mapping):
            typed_mapping = cast(Mapping[str, Any], value)
            return {
                nested_key: mask_value(nested_key, nested_value)
                for nested_key, nested_value in typed_mapping.items()
            }
        if isinstance(value, list):
            return [mask_value(key, item) for item in cast(list[Any], value)]
        if is_sensitive_key(key):
            return "[REDACTED]"
        return value

    return {key: mask_value(key, value) for key, value in event_dict.items()}


def is_configured() -> bool:
    return _configured


def configure_logging(level: str | None = None, *, stream: IO[str] | None = None) -> None:
    """Configure structlog/stdlib logging for JSON Lines output.

    Meant for the host's entry point; ``ApplicationFactory`` never calls it,
    because it replaces the root logger's handlers.

    - Keys: ts, level, msg, event
    - Timestamp: UTC ISO-8601
    - Level: argument, else ``APPFACTORY_LOG_LEVEL`` via AppSettings
    - Output: ``stream``, else stdout
    """

    global _configured

    raw_level: str = level if level is not None else get_app_settings().log_level
    log_level = getattr(logging, raw_level.upper(), logging.INFO)

    # force=True lets tests using capsys rebind the handler to the swapped stdout
    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        stream=stream if stream is not None else sys.stdout,
        force=True,
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True, key="ts"),
            _add_msg_from_event,
            _mask_sensitive_values,
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    _configured = True
