"""Message and response models."""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from .search import TimeRange

FIELD_TIMESTAMP = "timestamp"
FIELD_GL2_MESSAGE_ID = "gl2_message_id"
FIELD_ID = "_id"


@dataclass(frozen=True)
class RawHit:
    """Hit as returned by the search backend."""
    id: str
    index: str
    source: Any
    highlight_fields: dict[str, list[Any]] = field(default_factory=dict)


@dataclass(frozen=True)
class ResultMessageSummary:
    """Message as exposed in a search response."""
    highlight_ranges: dict[str, list[str]]
    message: dict[str, Any]
    index: str

    @property
    def id(self) -> Optional[str]:
        return self.message.get(FIELD_ID)

    def to_dict(self) -> dict[str, Any]:
        return {
            "highlight_ranges": self.highlight_ranges,
            "message": {k: _jsonable(v) for k, v in self.message.items()},
            "index": self.index,
        }


@dataclass(frozen=True)
class ResultMessage:
    """Parsed backend hit."""
    id: str
    index: str
    fields: dict[str, Any]
    highlight_ranges: dict[str, list[str]] = field(default_factory=dict)

    def to_summary(self) -> ResultMessageSummary:
        message = dict(self.fields)
        message[FIELD_ID] = self.id
        return ResultMessageSummary(
            highlight_ranges=self.highlight_ranges,
            message=message,
            index=self.index,
        )


@dataclass(frozen=True)
class SearchResponse:
    """Response handed through the decorator chain."""
    query: str
    built_query: str
    messages: tuple[ResultMessageSummary, ...]
    total_results: int
    from_: datetime
    to: datetime
    used_indices: frozenset[str] = frozenset()
    fields: frozenset[str] = frozenset()
    time: int = 0

    def __post_init__(self):
        object.__setattr__(self, "messages", tuple(self.messages))


@dataclass(frozen=True)
class MessageListResult:
    """Result envelope of a message list search type."""
    id: str
    messages: tuple[ResultMessageSummary, ...]
    effective_timerange: TimeRange
    total_results: int
    name: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "id": self.id,
            "type": "messages",
            "messages": [m.to_dict() for m in self.messages],
            "effective_timerange": self.effective_timerange.to_dict(),
            "total_results": self.total_results,
        }
        if self.name is not None:
            payload["name"] = self.name
        return payload


def _jsonable(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    return value
