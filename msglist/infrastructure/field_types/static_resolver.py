import json
import logging
from pathlib import Path
from typing import AbstractSet, Optional

logger = logging.getLogger(__name__)


class StaticFieldTypeResolver:
    """Field type lookup from a per-stream table."""

    def __init__(self, types_by_stream: Optional[dict[str, dict[str, str]]] = None):
        """Initialize resolver.

        Args:
            types_by_stream: Stream id -> {field: type}.
        """
        self._types_by_stream = types_by_stream or {}

    @classmethod
    def from_file(cls, path: str) -> "StaticFieldTypeResolver":
        """Load the table from JSON."""
        config_file = Path(path)
        if not config_file.exists():
            logger.warning(f"Field types file {path} not found, using empty table")
            return cls()

        with open(config_file, "r", encoding="utf-8") as f:
            types_by_stream = json.load(f)
        logger.info(f"Field types loaded for {len(types_by_stream)} stream(s) from {path}")
        return cls(types_by_stream)

    def resolve(self, stream_ids: AbstractSet[str], field: str) -> Optional[str]:
        """Return the field type if all streams that know the field agree."""
        types = {
            self._types_by_stream[s][field]
            for s in stream_ids
            if field in self._types_by_stream.get(s, {})
        }
        return types.pop() if len(types) == 1 else None
