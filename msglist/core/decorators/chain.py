"""Decorator chain - applies configured decorators in order."""

import logging
from typing import Callable, Optional, Sequence

from ..errors import DecorationError, SearchError
from ..models.message import SearchResponse
from ..models.search import DecoratorConfig
from ..protocols.decorator import DecoratorProtocol
from .builtin import (
    FormatStringDecorator,
    LookupTableDecorator,
    SyslogSeverityMapperDecorator,
)

logger = logging.getLogger(__name__)

DecoratorFactory = Callable[[DecoratorConfig], DecoratorProtocol]

DEFAULT_FACTORIES: dict[str, DecoratorFactory] = {
    "syslog_severity_mapper": SyslogSeverityMapperDecorator.from_config,
    "format_string": FormatStringDecorator.from_config,
    "lookup_table": LookupTableDecorator.from_config,
}


class DecoratorChain:
    """Ordered response decoration by decorator type name."""

    def __init__(self, factories: Optional[dict[str, DecoratorFactory]] = None):
        """Initialize chain.

        Args:
            factories: Decorator type -> factory. Built-ins if omitted.
        """
        self._factories = dict(DEFAULT_FACTORIES if factories is None else factories)

    def register(self, decorator_type: str, factory: DecoratorFactory) -> None:
        """Register a decorator factory under a type name."""
        self._factories[decorator_type] = factory

    def decorate(
        self, response: SearchResponse, decorators: Sequence[DecoratorConfig]
    ) -> SearchResponse:
        """Apply decorators ascending by order, ties in given sequence.

        Raises:
            DecorationError: Unknown decorator type or a decorator failed.
        """
        for config in sorted(decorators, key=lambda d: d.order):
            decorator = self._create(config)
            try:
                response = decorator.decorate(response)
            except SearchError:
                raise
            except Exception as e:
                logger.error(f"Decorator {config.type} failed: {e}")
                raise DecorationError(config.type, str(e), cause=e) from e

        if decorators:
            logger.debug(f"Applied {len(decorators)} decorator(s)")
        return response

    def _create(self, config: DecoratorConfig) -> DecoratorProtocol:
        factory = self._factories.get(config.type)
        if factory is None:
            raise DecorationError(config.type, "unknown decorator type")
        try:
            return factory(config)
        except (KeyError, TypeError, ValueError) as e:
            raise DecorationError(config.type, f"invalid configuration: {e}", cause=e) from e
