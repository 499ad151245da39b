"""Result-aware wrapper around the dependency builder."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import structlog

from appfactory.infra.di.builder import DependencyBuilder
from appfactory.infra.di.errors import DIError
from appfactory.infra.result import Err, Error, Ok, Result, record_error

LOGGER = structlog.get_logger(__name__)


class ResultBuilder:
    """Wrapper around DependencyBuilder returning ``Ok`` / ``Err`` values.

    Only DI failures are turned into ``Err``; anything else still raises.
    """

    def __init__(self, base_builder: DependencyBuilder) -> None:
        """Initialize with a base builder."""
        self._base = base_builder

    @property
    def base(self) -> DependencyBuilder:
        return self._base

    def new_object(
        self, name: str, args: Mapping[str, Any] | None = None, /, **kwargs: Any
    ) -> Result[Any, Error]:
        try:
            return Ok(self._base.new_object(name, args, **kwargs))
        except DIError as exc:
            record_error(exc)
            LOGGER.error(
                "di.result_builder.error",
                service=str(name),
                error_type=type(exc).__name__,
                error=str(exc),
                context=exc.log_safe_context(),
            )
            return Err(exc)


__all__ = ["ResultBuilder"]
