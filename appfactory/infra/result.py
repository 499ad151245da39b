"""Base error type and a small Result (Ok / Err) toolkit.

This module provides:
- the ``Error`` base class used by every failure raised by the runtime
- ``Ok`` / ``Err`` wrappers and the ``Result`` union
- module-level error counters for diagnostics
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterator, Mapping, TypeVar, Union, cast

T = TypeVar("T")
E = TypeVar("E")
U = TypeVar("U")


_SENSITIVE_KEYS: tuple[str, ...] = (
    "password",
    "passwd",
    "secret",
    "token",
    "api_key",
    "apikey",
    "authorization",
    "auth",
)

_ERROR_COUNTERS: Counter[str] = Counter()


def is_sensitive_key(key: object) -> bool:
    """Whether a context or log key names a secret (substring, case-insensitive)."""
    key_lower = str(key).lower()
    return any(sk in key_lower for sk in _SENSITIVE_KEYS)


def _sanitize_context(context: Mapping[str, Any] | None) -> dict[str, Any]:
    """Mask values whose key looks sensitive, recursing into nested dicts."""
    if not context:
        return {}

    def _sanitize(value: Any) -> Any:
        if isinstance(value, dict):
            mapping = cast(Mapping[str, Any], value)
            sanitized_inner: dict[str, Any] = {}
            for k, v in mapping.items():
                sanitized_inner[k] = _sanitize("***redacted***" if is_sensitive_key(k) else v)
            return sanitized_inner
        return value

    sanitized: dict[str, Any] = {}
    for key, value in context.items():
        if is_sensitive_key(key):
            sanitized[key] = "***redacted***"
        else:
            sanitized[key] = _sanitize(value)
    return sanitized


def record_error(error: "Error") -> None:
    """Bump the per-type error counter."""
    key = type(error).__name__
    _ERROR_COUNTERS[key] += 1
    _ERROR_COUNTERS["__total__"] += 1


def get_error_metrics() -> dict[str, int]:
    return dict(_ERROR_COUNTERS)


def reset_error_metrics() -> None:
    """Reset error counters (tests and debugging only)."""
    _ERROR_COUNTERS.clear()


class Error(Exception):
    """Base error carrying a message, optional context and an optional cause."""

    def __init__(
        self,
        message: str,
        *,
        context: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.context: dict[str, Any] = dict(context or {})
        self.cause: BaseException | None = cause

    def to_dict(self) -> dict[str, Any]:
        return {
            "message": self.message,
            "context": dict(self.context),
            "cause": repr(self.cause) if self.cause is not None else None,
        }

    def __str__(self) -> str:  # pragma: no cover - delegates to message
        return self.message

    def log_safe_context(self) -> dict[str, Any]:
        """Return the context with sensitive values masked, safe for logging."""
        return _sanitize_context(self.context)


@dataclass(slots=True)
class Ok(Generic[T, E]):
    """Successful result."""

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value

    def unwrap_err(self) -> E:
        raise RuntimeError("Called unwrap_err() on Ok value.")

    def map(self, fn: Callable[[T], U]) -> "Result[U, E]":
        return Ok(fn(self.value))

    def and_then(self, fn: Callable[[T], "Result[U, E]"]) -> "Result[U, E]":
        return fn(self.value)

    def unwrap_or(self, default: T) -> T:
        return self.value

    def __iter__(self) -> Iterator[T]:
        yield self.value


@dataclass(slots=True)
class Err(Generic[T, E]):
    """Failed result."""

    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> T:
        raise RuntimeError(f"Called unwrap() on Err value: {self.error!r}")

    def unwrap_err(self) -> E:
        return self.error

    def map(self, fn: Callable[[T], U]) -> "Result[U, E]":
        return Err(self.error)

    def and_then(self, fn: Callable[[T], "Result[U, E]"]) -> "Result[U, E]":
        return Err(self.error)

    def unwrap_or(self, default: T) -> T:
        return default

    # An Err iterates as an empty collection
    def __iter__(self) -> Iterator[T]:
        return iter(())


Result = Union[Ok[T, E], Err[T, E]]


__all__ = [
    "Ok",
    "Err",
    "Result",
    "Error",
    "is_sensitive_key",
    "record_error",
    "get_error_metrics",
    "reset_error_metrics",
]
