"""Application instance access for internal and external use."""

from __future__ import annotations

import threading
from collections.abc import Callable, Mapping
from typing import Any, ClassVar, cast

import structlog

from appfactory.config.settings import get_app_settings
from appfactory.infra.di.bootstrap import bootstrap_builder
from appfactory.infra.di.builder import DependencyBuilder
from appfactory.infra.di.lifecycle import Lifecycle
from appfactory.infra.di.signature import Signature
from appfactory.service_names import ServiceName
from appfactory.services.cache import Cache, CacheFactory
from appfactory.services.namespace_examiner import NamespaceExaminer
from appfactory.services.settings import Settings

LOGGER = structlog.get_logger(__name__)


class ApplicationFactory:
    """Process-wide access point to the dependency builder.

    Entry points such as hook handlers, jobs and special pages do not control
    the lifetime of the objects they work with, so they reach services through
    ``ApplicationFactory.get_instance()``. New code should receive its
    collaborators explicitly instead of relying on this global.

    Accessors named ``get_*`` return shared services, ``new_*`` return fresh
    ones (unless the registered signature says otherwise).
    """

    _instance: ClassVar[ApplicationFactory | None] = None
    _instance_lock: ClassVar[threading.Lock] = threading.Lock()

    def __init__(self, builder: DependencyBuilder | None = None) -> None:
        self._builder = builder if builder is not None else bootstrap_builder()

    @classmethod
    def get_instance(cls) -> ApplicationFactory:
        """Return the global instance, creating it on first use."""
        instance = cls._instance
        if instance is not None:
            return instance

        with cls._instance_lock:
            if cls._instance is None:
                cls._instance = cls(bootstrap_builder())
                LOGGER.debug("application_factory.created")
            return cls._instance

    @classmethod
    def clear(cls) -> None:
        """Reset the held settings and drop the global instance.

        The cached environment configuration is always dropped, so the next
        ``get_instance()`` starts from a freshly bootstrapped container that
        reads current values. Objects registered through ``register_object``
        are gone.
        """
        with cls._instance_lock:
            instance = cls._instance
            if instance is not None:
                container = instance._builder.get_container()
                settings = container.get_cached(ServiceName.SETTINGS)
                if isinstance(settings, Settings):
                    settings.clear()
            cls._instance = None
            get_app_settings.cache_clear()

        LOGGER.debug("application_factory.clear", had_instance=instance is not None)

    def get_builder(self) -> DependencyBuilder:
        return self._builder

    def register_object(
        self,
        name: str,
        signature: Signature | Callable[..., Any],
        *,
        defaults: Mapping[str, Any] | None = None,
        lifecycle: Lifecycle = Lifecycle.TRANSIENT,
    ) -> ApplicationFactory:
        """Register (or replace) how ``name`` is built.

        Args:
            name: Service name, usually a ``ServiceName`` member.
            signature: A ``Signature`` or a bare factory callable.
            defaults: Default arguments when ``signature`` is a callable.
            lifecycle: Sharing policy when ``signature`` is a callable.

        Returns:
            The factory itself, for chaining.
        """
        if not isinstance(signature, Signature):
            signature = Signature(str(name), signature, defaults or {}, lifecycle)
        self._builder.get_container().register(name, signature)
        return self

    def new_object(
        self, name: str, args: Mapping[str, Any] | None = None, /, **kwargs: Any
    ) -> Any:
        return self._builder.new_object(name, args, **kwargs)

    def get_settings(self) -> Settings:
        return cast(Settings, self._builder.new_object(ServiceName.SETTINGS))

    def get_store(self) -> Any:
        return self._builder.new_object(ServiceName.STORE)

    def get_cache(self) -> Cache:
        return cast(Cache, self._builder.new_object(ServiceName.CACHE))

    def new_cache_factory(self) -> CacheFactory:
        return cast(CacheFactory, self._builder.new_object(ServiceName.CACHE_FACTORY))

    def get_namespace_examiner(self) -> NamespaceExaminer:
        return cast(NamespaceExaminer, self._builder.new_object(ServiceName.NAMESPACE_EXAMINER))

    def new_title_creator(self) -> Any:
        return self._builder.new_object(ServiceName.TITLE_CREATOR)

    def new_page_creator(self) -> Any:
        return self._builder.new_object(ServiceName.PAGE_CREATOR)

    def new_job_factory(self) -> Any:
        return self._builder.new_object(ServiceName.JOB_FACTORY)

    def new_factbox_factory(self) -> Any:
        return self._builder.new_object(ServiceName.FACTBOX_FACTORY)

    def new_parser_data(self, title: Any, parser_output: Any) -> Any:
        return self._builder.new_object(
            ServiceName.PARSER_DATA, {"title": title, "parser_output": parser_output}
        )

    def new_content_parser(self, title: Any) -> Any:
        return self._builder.new_object(ServiceName.CONTENT_PARSER, {"title": title})

    def new_store_updater(self, semantic_data: Any) -> Any:
        """Build a store updater writing ``semantic_data`` to the shared store."""
        return self._builder.new_object(
            ServiceName.STORE_UPDATER,
            {"store": self.get_store(), "semantic_data": semantic_data},
        )

    def new_in_text_annotation_parser(self, parser_data: Any) -> Any:
        """Build an in-text annotation parser with finders from the collaborator factory."""
        collaborators = self.new_mw_collaborator_factory()
        return self._builder.new_object(
            ServiceName.IN_TEXT_ANNOTATION_PARSER,
            {
                "parser_data": parser_data,
                "magic_word_finder": collaborators.new_magic_word_finder(),
                "redirect_target_finder": collaborators.new_redirect_target_finder(),
            },
        )

    def new_mw_collaborator_factory(self) -> Any:
        return self._builder.new_object(
            ServiceName.MW_COLLABORATOR_FACTORY, {"application_factory": self}
        )

    def new_serializer_factory(self) -> Any:
        return self._builder.new_object(ServiceName.SERIALIZER_FACTORY)

    def new_property_annotator_factory(self) -> Any:
        return self._builder.new_object(ServiceName.PROPERTY_ANNOTATOR_FACTORY)

    def new_parser_function_factory(self, parser: Any) -> Any:
        return self._builder.new_object(ServiceName.PARSER_FUNCTION_FACTORY, {"parser": parser})

    def new_query_profiler_factory(self) -> Any:
        return self._builder.new_object(ServiceName.QUERY_PROFILER_FACTORY)

    def new_maintenance_factory(self) -> Any:
        return self._builder.new_object(ServiceName.MAINTENANCE_FACTORY)

    def new_query_parser(self) -> Any:
        return self._builder.new_object(ServiceName.QUERY_PARSER)


__all__ = ["ApplicationFactory"]
