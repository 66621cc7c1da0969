"""Domain models."""
from .message import (
    FIELD_GL2_MESSAGE_ID,
    FIELD_TIMESTAMP,
    MessageListResult,
    RawHit,
    ResultMessage,
    ResultMessageSummary,
    SearchResponse,
)
from .query import BackendQuery, FieldSort, Highlight
from .search import DecoratorConfig, SearchSpec, SortClause, SortOrder, TimeRange

__all__ = [
    "FIELD_GL2_MESSAGE_ID",
    "FIELD_TIMESTAMP",
    "MessageListResult",
    "RawHit",
    "ResultMessage",
    "ResultMessageSummary",
    "SearchResponse",
    "BackendQuery",
    "FieldSort",
    "Highlight",
    "DecoratorConfig",
    "SearchSpec",
    "SortClause",
    "SortOrder",
    "TimeRange",
]
