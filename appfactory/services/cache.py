"""In-process cache service and its factory."""

from __future__ import annotations

import threading
from typing import Any

_MISSING = object()


class Cache:
    """Dictionary-backed key/value cache labelled with its ``type``."""

    def __init__(self, type: str = "hash") -> None:
        self.type = type
        self._items: dict[str, Any] = {}
        self._lock = threading.Lock()

    def get(self, key: str, default: Any = None) -> Any:
        return self._items.get(key, default)

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._items[key] = value

    def has(self, key: str) -> bool:
        return key in self._items

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._items.pop(key, _MISSING) is not _MISSING

    def clear(self) -> None:
        with self._lock:
            self._items.clear()

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"Cache(type={self.type!r}, size={len(self._items)})"


class CacheFactory:
    """Builds caches, defaulting to the configured main cache type."""

    def __init__(self, main_cache_type: str = "hash") -> None:
        self.main_cache_type = main_cache_type

    def new_cache(self, cache_type: str | None = None) -> Cache:
        return Cache(type=cache_type or self.main_cache_type)


__all__ = ["Cache", "CacheFactory"]
