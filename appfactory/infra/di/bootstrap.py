"""Bootstrap functions for setting up the default container."""

from __future__ import annotations

from appfactory.infra.di.builder import DependencyBuilder
from appfactory.infra.di.container import DependencyContainer
from appfactory.infra.di.lifecycle import Lifecycle
from appfactory.infra.di.signature import Reference, Signature
from appfactory.service_names import ServiceName
from appfactory.services.cache import Cache, CacheFactory
from appfactory.services.namespace_examiner import NamespaceExaminer
from appfactory.services.settings import Settings


def bootstrap_container() -> DependencyContainer:
    """Create a container holding the built-in signatures.

    Only services the runtime implements itself are registered here. Store,
    parsers, creators and job/factbox factories belong to the host and must be
    registered through ``ApplicationFactory.register_object``.

    Returns:
        A configured DependencyContainer instance.
    """
    container = DependencyContainer()

    container.register(
        ServiceName.SETTINGS,
        Signature.shared(ServiceName.SETTINGS, Settings.new_from_config),
    )

    # Cache type falls back to the configured main cache type
    def create_cache(settings: Settings, type: str | None = None) -> Cache:
        return Cache(type=type or settings.get("cache_type", "hash"))

    container.register(
        ServiceName.CACHE,
        Signature(
            ServiceName.CACHE,
            create_cache,
            {"settings": Reference(ServiceName.SETTINGS), "type": None},
            Lifecycle.SHARED,
        ),
    )

    def create_cache_factory(settings: Settings) -> CacheFactory:
        return CacheFactory(settings.get("cache_type", "hash"))

    container.register(
        ServiceName.CACHE_FACTORY,
        Signature.transient(
            ServiceName.CACHE_FACTORY,
            create_cache_factory,
            settings=Reference(ServiceName.SETTINGS),
        ),
    )

    def create_namespace_examiner(settings: Settings) -> NamespaceExaminer:
        return NamespaceExaminer.new_from_mapping(
            settings.get("namespaces_with_semantic_links", {})
        )

    container.register(
        ServiceName.NAMESPACE_EXAMINER,
        Signature.transient(
            ServiceName.NAMESPACE_EXAMINER,
            create_namespace_examiner,
            settings=Reference(ServiceName.SETTINGS),
        ),
    )

    return container


def bootstrap_builder() -> DependencyBuilder:
    """Builder over a freshly bootstrapped container."""
    return DependencyBuilder(bootstrap_container())


__all__ = ["bootstrap_container", "bootstrap_builder"]
