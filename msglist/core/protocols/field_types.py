"""Field type resolver protocol for dependency injection."""
from typing import AbstractSet, Optional, Protocol, runtime_checkable


@runtime_checkable
class FieldTypeResolverProtocol(Protocol):
    """Protocol for looking up declared field storage types."""

    def resolve(self, stream_ids: AbstractSet[str], field: str) -> Optional[str]:
        """Resolve the storage type of a field.

        Args:
            stream_ids: Streams the query is scoped to.
            field: Field name.

        Returns:
            Type name, or None if unknown or heterogeneous across streams.
        """
        ...
