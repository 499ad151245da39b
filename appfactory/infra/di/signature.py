"""Object signatures: registered descriptors of how to build a named service."""

from __future__ import annotations

import inspect
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from appfactory.infra.di.lifecycle import Lifecycle


@dataclass(frozen=True, slots=True)
class Reference:
    """Declarative placeholder for a collaborator built by the same builder.

    A ``Reference`` stored in a signature's defaults (or passed as an override)
    is replaced by ``builder.new_object(reference.name)`` right before the
    factory is invoked.
    """

    name: str


@dataclass(frozen=True, slots=True, eq=False)
class Signature:
    """How to build one named service.

    Attributes:
        name: Unique key of the service inside a container.
        factory: Callable invoked with the merged keyword arguments.
        defaults: Named default arguments; call-time overrides win.
        lifecycle: ``SHARED`` instances are cached, ``TRANSIENT`` ones are not.
    """

    name: str
    factory: Callable[..., Any]
    defaults: Mapping[str, Any] = field(default_factory=dict)
    lifecycle: Lifecycle = Lifecycle.TRANSIENT

    def __post_init__(self) -> None:
        if not callable(self.factory):
            raise TypeError(f"Factory for {self.name!r} must be callable")
        # Defaults are stored as a read-only copy
        object.__setattr__(self, "defaults", MappingProxyType(dict(self.defaults)))

    @classmethod
    def shared(
        cls, name: str, factory: Callable[..., Any], /, **defaults: Any
    ) -> "Signature":
        return cls(name, factory, defaults, Lifecycle.SHARED)

    @classmethod
    def transient(
        cls, name: str, factory: Callable[..., Any], /, **defaults: Any
    ) -> "Signature":
        return cls(name, factory, defaults, Lifecycle.TRANSIENT)

    @classmethod
    def of_instance(cls, name: str, instance: Any) -> "Signature":
        """Register a pre-built object as a shared service."""

        def factory() -> Any:
            return instance

        return cls(name, factory, {}, Lifecycle.SHARED)

    @property
    def is_shared(self) -> bool:
        return self.lifecycle is Lifecycle.SHARED

    def merge_arguments(self, overrides: Mapping[str, Any] | None) -> dict[str, Any]:
        """Overlay ``overrides`` on the defaults; explicit values win."""
        merged = dict(self.defaults)
        if overrides:
            merged.update(overrides)
        return merged

    def unexpected_arguments(self, arguments: Mapping[str, Any]) -> list[str]:
        """Names in ``arguments`` the factory cannot accept.

        Factories taking ``**kwargs`` or whose signature cannot be inspected
        (some builtins) accept everything.
        """
        try:
            params = inspect.signature(self.factory).parameters
        except (TypeError, ValueError):
            return []

        if any(p.kind is inspect.Parameter.VAR_KEYWORD for p in params.values()):
            return []

        accepted = {
            param_name
            for param_name, param in params.items()
            if param.kind
            in (inspect.Parameter.POSITIONAL_OR_KEYWORD, inspect.Parameter.KEYWORD_ONLY)
        }
        return [key for key in arguments if key not in accepted]

    def invoke(self, arguments: Mapping[str, Any]) -> Any:
        return self.factory(**arguments)


__all__ = ["Reference", "Signature"]
