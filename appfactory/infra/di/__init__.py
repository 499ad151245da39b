"""Dependency injection container for managing service dependencies."""

from appfactory.infra.di.builder import DependencyBuilder
from appfactory.infra.di.container import DependencyContainer
from appfactory.infra.di.errors import (
    ArgumentMismatchError,
    CircularDependencyError,
    DIError,
    ServiceConstructionError,
    UnknownServiceError,
)
from appfactory.infra.di.lifecycle import Lifecycle
from appfactory.infra.di.result_builder import ResultBuilder
from appfactory.infra.di.signature import Reference, Signature

__all__ = [
    "ArgumentMismatchError",
    "CircularDependencyError",
    "DIError",
    "DependencyBuilder",
    "DependencyContainer",
    "Lifecycle",
    "Reference",
    "ResultBuilder",
    "ServiceConstructionError",
    "Signature",
    "UnknownServiceError",
]
