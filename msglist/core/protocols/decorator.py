"""Decorator protocols for dependency injection."""
from typing import Protocol, Sequence, runtime_checkable

from ..models.message import SearchResponse
from ..models.search import DecoratorConfig


@runtime_checkable
class DecoratorProtocol(Protocol):
    """A single response transformation."""

    def decorate(self, response: SearchResponse) -> SearchResponse:
        """Return a decorated copy of the response."""
        ...


@runtime_checkable
class DecoratorChainProtocol(Protocol):
    """Ordered set of response decorators."""

    def decorate(
        self,
        response: SearchResponse,
        decorators: Sequence[DecoratorConfig]
    ) -> SearchResponse:
        """Apply the configured decorators in order.

        Args:
            response: Assembled search response.
            decorators: Decorator configurations of the search type.

        Returns:
            Decorated response (possibly a new instance).
        """
        ...
