import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, TypeVar

from .config.settings import Settings

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Registration:
    factory: Callable[[], Any]
    singleton: bool = False


@dataclass
class Container:
    """Collaborator registry shared by concurrent request workers."""

    _registrations: dict[type, Registration] = field(default_factory=dict)
    _singletons: dict[type, Any] = field(default_factory=dict)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)

    def register(
        self, interface: type[T], factory: Callable[[], T], singleton: bool = False
    ) -> None:
        """Register factory for interface, replacing any earlier registration.

        Args:
            interface: Interface type.
            factory: Factory function.
            singleton: Whether to cache instance.
        """
        with self._lock:
            self._registrations[interface] = Registration(factory, singleton)
            self._singletons.pop(interface, None)

    def is_registered(self, interface: type) -> bool:
        return interface in self._registrations

    def resolve(self, interface: type[T]) -> T:
        """Return an instance; singletons are created once even under concurrent calls."""
        registration = self._registrations.get(interface)
        if registration is None:
            raise KeyError(f"No factory registered for {interface}")

        if not registration.singleton:
            return registration.factory()

        with self._lock:
            if interface not in self._singletons:
                self._singletons[interface] = registration.factory()
            return self._singletons[interface]

    def reset(self) -> None:
        """Reset singletons (for testing)."""
        with self._lock:
            self._singletons.clear()


container = Container()


def configure_container(settings: Settings) -> Container:
    """Configure container with all dependencies.

    Args:
        settings: Application settings.

    Returns:
        Configured container.
    """
    from .core.decorators.chain import DecoratorChain
    from .core.protocols.backend import SearchBackendProtocol
    from .core.protocols.decorator import DecoratorChainProtocol
    from .core.protocols.field_types import FieldTypeResolverProtocol
    from .core.services.message_list_service import MessageListService
    from .core.services.query_builder import QueryBuilder
    from .infrastructure.backends.elasticsearch import ElasticsearchBackend
    from .infrastructure.backends.index_scope import IndexScope
    from .infrastructure.field_types.elasticsearch_resolver import (
        ElasticsearchFieldTypeResolver,
    )
    from .infrastructure.field_types.static_resolver import StaticFieldTypeResolver

    container.register(
        IndexScope,
        lambda: IndexScope(
            default_prefix=settings.index_prefix,
            stream_prefixes=settings.stream_index_prefixes,
        ),
        singleton=True,
    )

    container.register(
        SearchBackendProtocol,
        lambda: ElasticsearchBackend(
            host=settings.es_host,
            port=settings.es_port,
            scheme=settings.es_scheme,
            timeout=settings.es_timeout,
        ),
        singleton=True,
    )

    if settings.field_types_source == "file":
        container.register(
            FieldTypeResolverProtocol,
            lambda: StaticFieldTypeResolver.from_file(settings.field_types_path),
            singleton=True,
        )
    else:
        container.register(
            FieldTypeResolverProtocol,
            lambda: ElasticsearchFieldTypeResolver(
                base_url=f"{settings.es_scheme}://{settings.es_host}:{settings.es_port}",
                index_resolver=container.resolve(IndexScope),
                timeout=settings.es_timeout,
            ),
            singleton=True,
        )

    container.register(DecoratorChainProtocol, DecoratorChain, singleton=True)

    container.register(
        QueryBuilder,
        lambda: QueryBuilder(allow_highlighting=settings.allow_highlighting),
        singleton=True,
    )

    container.register(
        MessageListService,
        lambda: MessageListService(
            query_builder=container.resolve(QueryBuilder),
            field_type_resolver=container.resolve(FieldTypeResolverProtocol),
            backend=container.resolve(SearchBackendProtocol),
            decorator_chain=container.resolve(DecoratorChainProtocol),
            index_resolver=container.resolve(IndexScope),
        ),
        singleton=True,
    )

    logger.info("Container configured")
    return container
