import logging
from typing import AbstractSet, Optional

logger = logging.getLogger(__name__)


class IndexScope:
    """Maps stream ids to the index patterns holding their messages."""

    def __init__(
        self,
        default_prefix: str = "graylog",
        stream_prefixes: Optional[dict[str, str]] = None,
    ):
        """Initialize scope.

        Args:
            default_prefix: Index prefix for streams without explicit mapping.
            stream_prefixes: Stream id -> index prefix.
        """
        self._default_prefix = default_prefix
        self._stream_prefixes = dict(stream_prefixes or {})

    def prefixes(self, stream_ids: AbstractSet[str]) -> list[str]:
        if not stream_ids:
            return [self._default_prefix]
        return sorted(
            {self._stream_prefixes.get(s, self._default_prefix) for s in stream_ids}
        )

    def __call__(self, stream_ids: AbstractSet[str]) -> list[str]:
        """Index wildcard patterns for the given streams."""
        return [f"{prefix}_*" for prefix in self.prefixes(stream_ids)]
