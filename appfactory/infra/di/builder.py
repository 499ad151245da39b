"""Construction engine resolving names to instances through a container."""

from __future__ import annotations

import threading
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from typing import Any

import structlog

from appfactory.infra.di.container import DependencyContainer
from appfactory.infra.di.errors import (
    ArgumentMismatchError,
    CircularDependencyError,
    ServiceConstructionError,
)
from appfactory.infra.di.signature import Reference, Signature

LOGGER = structlog.get_logger(__name__)


class DependencyBuilder:
    """Builds services from the signatures held by a ``DependencyContainer``.

    Shared signatures requested without overrides are cached in the container
    and returned by identity afterwards. Any override (even one equal to the
    default) yields a fresh, uncached instance.

    Factories may call back into the builder for their collaborators. Each
    thread tracks the names under construction so that cycles fail fast
    instead of recursing. A cycle split across threads (one thread builds A
    which needs B while another builds B which needs A) is detected from the
    lock wait-for chain and also raises ``CircularDependencyError``.

    An instance whose registration was replaced while it was being built is
    returned to its caller but not cached.
    """

    def __init__(self, container: DependencyContainer | None = None) -> None:
        self._container = container if container is not None else DependencyContainer()
        self._local = threading.local()
        # Wait-for graph for first constructions: name -> owning thread,
        # thread -> name it is blocked on
        self._graph_lock = threading.Lock()
        self._owners: dict[str, int] = {}
        self._waiting: dict[int, str] = {}

    def get_container(self) -> DependencyContainer:
        return self._container

    def new_object(
        self, name: str, args: Mapping[str, Any] | None = None, /, **kwargs: Any
    ) -> Any:
        """Return an instance of the service registered as ``name``.

        Args:
            name: Registered service name.
            args: Override arguments merged over the signature defaults.
            **kwargs: Further overrides; they win over ``args``.

        Raises:
            UnknownServiceError: ``name`` is not registered.
            ArgumentMismatchError: An override is not accepted by the factory.
            CircularDependencyError: ``name`` is already being built on this thread,
                or waiting for it would close a cycle with another thread.
            ServiceConstructionError: The factory (or a collaborator) failed.
        """
        signature = self._container.lookup(name)
        key = str(name)

        overrides: dict[str, Any] = dict(args or {})
        overrides.update(kwargs)

        if overrides or not signature.is_shared:
            return self._construct(key, signature, overrides)

        if self._container.has_cached(key):
            return self._container.get_cached(key)

        with self._construction_lock(key):
            # Double-check after acquiring lock
            if self._container.has_cached(key):
                return self._container.get_cached(key)

            signature = self._container.lookup(key)
            instance = self._construct(key, signature, None)
            if not self._container.put_cached(key, instance, signature):
                LOGGER.debug("di.builder.stale_instance", service=key)
            return instance

    @contextmanager
    def _construction_lock(self, key: str) -> Iterator[None]:
        """Hold the per-name lock of ``key`` for a first construction.

        Before blocking on a lock held by another thread, the wait-for chain
        is followed; if it leads back to the current thread the threads would
        deadlock, so ``CircularDependencyError`` is raised instead.
        """
        lock = self._container.lock_for(key)
        me = threading.get_ident()

        if not lock.acquire(blocking=False):
            with self._graph_lock:
                cycle = self._cross_thread_cycle(key, me)
                if cycle is not None:
                    raise CircularDependencyError(cycle)
                self._waiting[me] = key
            try:
                lock.acquire()
            finally:
                with self._graph_lock:
                    self._waiting.pop(me, None)

        with self._graph_lock:
            outermost = key not in self._owners
            if outermost:
                self._owners[key] = me
        try:
            yield
        finally:
            if outermost:
                with self._graph_lock:
                    self._owners.pop(key, None)
            lock.release()

    def _cross_thread_cycle(self, key: str, me: int) -> list[str] | None:
        # Caller holds _graph_lock
        path = [key]
        owner = self._owners.get(key)
        while owner is not None and owner != me:
            waiting_for = self._waiting.get(owner)
            if waiting_for is None or waiting_for in path:
                return None
            path.append(waiting_for)
            owner = self._owners.get(waiting_for)
        if owner is None:
            return None
        return [path[-1], *path]

    def is_constructing(self, name: str) -> bool:
        """Whether ``name`` is being built by the current thread."""
        return str(name) in self._stack()

    def _stack(self) -> list[str]:
        stack: list[str] | None = getattr(self._local, "stack", None)
        if stack is None:
            stack = []
            self._local.stack = stack
        return stack

    def _construct(
        self, key: str, signature: Signature, overrides: Mapping[str, Any] | None
    ) -> Any:
        stack = self._stack()
        if key in stack:
            cycle = stack[stack.index(key) :] + [key]
            raise CircularDependencyError(cycle)

        arguments = signature.merge_arguments(overrides)
        unexpected = signature.unexpected_arguments(arguments)
        if unexpected:
            raise ArgumentMismatchError(key, unexpected)

        LOGGER.debug(
            "di.builder.construct",
            service=key,
            lifecycle=signature.lifecycle.value,
            overrides=sorted(overrides or ()),
            depth=len(stack),
        )

        stack.append(key)
        try:
            resolved = {
                arg_name: self._resolve(value) for arg_name, value in arguments.items()
            }
            return signature.invoke(resolved)
        except Exception as exc:
            if not isinstance(exc, ServiceConstructionError):
                LOGGER.warning(
                    "di.builder.construct_failed",
                    service=key,
                    error_type=type(exc).__name__,
                    error=str(exc),
                )
            raise ServiceConstructionError(key, exc) from exc
        finally:
            stack.pop()

    def _resolve(self, value: Any) -> Any:
        if isinstance(value, Reference):
            return self.new_object(value.name)
        return value


__all__ = ["DependencyBuilder"]
