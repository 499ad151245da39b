"""Error taxonomy raised by the container and the builder.

None of these are recovered inside the DI layer; they propagate to the caller
of ``new_object`` (and through the facade to hook handlers or jobs).
"""

from __future__ import annotations

from typing import Sequence

from appfactory.infra.result import Error


class DIError(Error):
    """Base class for dependency injection failures."""


class UnknownServiceError(DIError, LookupError):
    """Lookup of a name that was never registered (a wiring bug)."""

    def __init__(self, service_name: str) -> None:
        super().__init__(
            f"Service {service_name!r} is not registered",
            context={"service": str(service_name)},
        )
        self.service_name = str(service_name)


class ServiceConstructionError(DIError):
    """A factory raised while building ``service_name``."""

    def __init__(self, service_name: str, cause: BaseException) -> None:
        super().__init__(
            f"Failed to construct service {service_name!r}: {cause}",
            context={"service": str(service_name), "cause_type": type(cause).__name__},
            cause=cause,
        )
        self.service_name = str(service_name)

    @property
    def chain(self) -> list[str]:
        """Service names from the outermost failing construction inwards."""
        names = [self.service_name]
        inner = self.cause
        while isinstance(inner, ServiceConstructionError):
            names.append(inner.service_name)
            inner = inner.cause
        return names

    @property
    def root_cause(self) -> BaseException | None:
        inner = self.cause
        while isinstance(inner, ServiceConstructionError):
            inner = inner.cause
        return inner


class ArgumentMismatchError(DIError, TypeError):
    """An override argument is not accepted by the signature's factory."""

    def __init__(self, service_name: str, unexpected: Sequence[str]) -> None:
        names = ", ".join(sorted(unexpected))
        super().__init__(
            f"Service {service_name!r} does not accept argument(s): {names}",
            context={"service": str(service_name), "unexpected": sorted(unexpected)},
        )
        self.service_name = str(service_name)
        self.unexpected = tuple(sorted(unexpected))


class CircularDependencyError(DIError, RuntimeError):
    """A construction chain requested a service that is still being built."""

    def __init__(self, cycle: Sequence[str]) -> None:
        path = " -> ".join(cycle)
        super().__init__(
            f"Circular dependency detected: {path}",
            context={"cycle": list(cycle)},
        )
        self.cycle = tuple(cycle)


__all__ = [
    "DIError",
    "UnknownServiceError",
    "ServiceConstructionError",
    "ArgumentMismatchError",
    "CircularDependencyError",
]
