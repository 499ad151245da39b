"""Mutable runtime settings handed out by the application factory."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import structlog

from appfactory.config.settings import AppSettings, get_app_settings
from appfactory.infra.result import Error

LOGGER = structlog.get_logger(__name__)

_MISSING = object()


class SettingNotFoundError(Error, KeyError):
    """Requested a settings key that does not exist."""

    def __init__(self, key: str) -> None:
        super().__init__(f"Setting {key!r} is not defined", context={"key": key})
        self.key = key


class Settings:
    """Key/value view over the configuration, shared by every service.

    Values start as a copy of ``AppSettings`` and may be changed at runtime
    (tests, request-scoped tweaks). ``clear`` empties them and forgets the
    cached ``AppSettings`` so that a rebuilt instance re-reads the environment.
    """

    def __init__(self, values: Mapping[str, Any] | None = None) -> None:
        self._values: dict[str, Any] = dict(values or {})

    @classmethod
    def new_from_config(cls, config: AppSettings | None = None) -> "Settings":
        config = config if config is not None else get_app_settings()
        return cls(config.model_dump())

    def get(self, key: str, default: Any = _MISSING) -> Any:
        if key in self._values:
            return self._values[key]
        if default is _MISSING:
            raise SettingNotFoundError(key)
        return default

    def set(self, key: str, value: Any) -> "Settings":
        self._values[key] = value
        return self

    def has(self, key: str) -> bool:
        return key in self._values

    def to_dict(self) -> dict[str, Any]:
        return dict(self._values)

    def clear(self) -> None:
        self._values.clear()
        get_app_settings.cache_clear()
        LOGGER.debug("settings.clear")


__all__ = ["Settings", "SettingNotFoundError"]
