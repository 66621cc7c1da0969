"""Search backend protocol for dependency injection."""
from typing import Protocol, Sequence, runtime_checkable

from ..models.message import RawHit
from ..models.query import BackendQuery


@runtime_checkable
class SearchBackendProtocol(Protocol):
    """Protocol for executing compiled queries."""

    def execute(
        self,
        query: BackendQuery,
        indices: Sequence[str]
    ) -> tuple[list[RawHit], int]:
        """Execute query against the given indices.

        Args:
            query: Compiled backend query.
            indices: Index names or wildcard patterns.

        Returns:
            Hits in backend order and the total hit count.
        """
        ...
