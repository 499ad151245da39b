"""Signature registry and shared-instance cache."""

from __future__ import annotations

import threading
from typing import Any

import structlog

from appfactory.infra.di.errors import UnknownServiceError
from appfactory.infra.di.signature import Signature

LOGGER = structlog.get_logger(__name__)


class DependencyContainer:
    """Maps service names to signatures and holds built shared instances.

    The container never constructs anything itself; see ``DependencyBuilder``.
    """

    def __init__(self) -> None:
        """Initialize an empty container."""
        self._signatures: dict[str, Signature] = {}
        self._cache: dict[str, Any] = {}
        self._name_locks: dict[str, threading.RLock] = {}
        self._lock = threading.RLock()

    def register(self, name: str, signature: Signature) -> None:
        """Store or replace the signature for ``name``.

        Re-registration is allowed (last write wins) and drops any instance
        cached for the previous signature.

        Args:
            name: The service name (used as the key).
            signature: How to build the service.
        """
        key = str(name)
        with self._lock:
            replaced = key in self._signatures
            self._signatures[key] = signature
            self._cache.pop(key, None)

        LOGGER.debug(
            "di.container.register",
            service=key,
            lifecycle=signature.lifecycle.value,
            replaced=replaced,
        )

    def unregister(self, name: str) -> None:
        """Remove the signature and any cached instance for ``name``.

        Raises:
            UnknownServiceError: If ``name`` is not registered.
        """
        key = str(name)
        with self._lock:
            if key not in self._signatures:
                raise UnknownServiceError(key)
            del self._signatures[key]
            self._cache.pop(key, None)

    def lookup(self, name: str) -> Signature:
        """Return the signature registered for ``name``.

        Raises:
            UnknownServiceError: If ``name`` was never registered.
        """
        try:
            return self._signatures[str(name)]
        except KeyError:
            raise UnknownServiceError(str(name)) from None

    def is_registered(self, name: str) -> bool:
        return str(name) in self._signatures

    def names(self) -> list[str]:
        """Sorted list of registered service names."""
        return sorted(self._signatures)

    def get_cached(self, name: str) -> Any | None:
        return self._cache.get(str(name))

    def has_cached(self, name: str) -> bool:
        return str(name) in self._cache

    def put_cached(
        self, name: str, instance: Any, signature: Signature | None = None
    ) -> bool:
        """Cache ``instance`` for ``name``.

        When ``signature`` is given the instance is stored only if that
        signature is still the registered one, so an instance built from a
        replaced or removed registration never lands in the cache.

        Returns:
            Whether the instance was stored.
        """
        key = str(name)
        with self._lock:
            if signature is not None and self._signatures.get(key) is not signature:
                return False
            self._cache[key] = instance
            return True

    def lock_for(self, name: str) -> threading.RLock:
        """Per-name re-entrant lock serializing first construction."""
        key = str(name)
        lock = self._name_locks.get(key)
        if lock is not None:
            return lock
        with self._lock:
            return self._name_locks.setdefault(key, threading.RLock())

    def clear(self) -> None:
        """Drop all cached instances; registered signatures are kept."""
        with self._lock:
            dropped = len(self._cache)
            self._cache.clear()

        LOGGER.debug("di.container.clear", dropped=dropped)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name in self._signatures

    def __len__(self) -> int:
        return len(self._signatures)


__all__ = ["DependencyContainer"]
