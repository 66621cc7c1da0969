"""Search request models."""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional, Sequence

from ..errors import InvalidSortError


class SortOrder(Enum):
    """Sort direction."""
    ASC = "ASC"
    DESC = "DESC"

    @classmethod
    def parse(cls, value: "SortOrder | str") -> "SortOrder":
        if isinstance(value, SortOrder):
            return value
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError:
                pass
        raise InvalidSortError(None, value, reason="sort order must be ASC or DESC")


@dataclass(frozen=True, eq=False)
class SortClause:
    """Sort on one field. Two clauses are equal when they sort the same field."""
    field: str
    order: SortOrder = SortOrder.DESC

    def __post_init__(self):
        if not isinstance(self.field, str) or not self.field.strip():
            raise InvalidSortError(self.field, self.order, reason="sort field must not be empty")
        if not isinstance(self.order, SortOrder):
            raise InvalidSortError(self.field, self.order, reason="sort order must be ASC or DESC")

    @classmethod
    def create(cls, field: str, order: "SortOrder | str" = SortOrder.DESC) -> "SortClause":
        """Build a clause, accepting the order as enum or case-insensitive string."""
        try:
            parsed = SortOrder.parse(order)
        except InvalidSortError:
            raise InvalidSortError(field, order, reason="sort order must be ASC or DESC")
        return cls(field=field, order=parsed)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SortClause):
            return NotImplemented
        return self.field == other.field

    def __hash__(self) -> int:
        return hash(self.field)


@dataclass(frozen=True)
class TimeRange:
    """Absolute time range, both bounds inclusive."""
    from_: datetime
    to: datetime

    def __post_init__(self):
        object.__setattr__(self, "from_", _as_utc(self.from_))
        object.__setattr__(self, "to", _as_utc(self.to))
        if self.from_ > self.to:
            raise ValueError(f"Time range start {self.from_} is after end {self.to}")

    def to_dict(self) -> dict[str, str]:
        return {
            "type": "absolute",
            "from": self.from_.isoformat(),
            "to": self.to.isoformat(),
        }


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


@dataclass(frozen=True)
class DecoratorConfig:
    """Configuration of one response decorator."""
    type: str
    config: dict[str, Any] = field(default_factory=dict)
    order: int = 0
    id: Optional[str] = None


@dataclass(frozen=True)
class SearchSpec:
    """Message list search request. Read-only once constructed."""
    id: str
    time_range: TimeRange
    query_string: str = ""
    limit: int = 0
    offset: int = 0
    fields: tuple[str, ...] = ()
    sorts: tuple[SortClause, ...] = ()
    effective_stream_ids: frozenset[str] = frozenset()
    decorators: tuple[DecoratorConfig, ...] = ()
    name: Optional[str] = None

    def __post_init__(self):
        if self.limit < 0:
            raise ValueError(f"limit must be non-negative, got {self.limit}")
        if self.offset < 0:
            raise ValueError(f"offset must be non-negative, got {self.offset}")
        object.__setattr__(self, "fields", _ordered_unique(self.fields))
        object.__setattr__(self, "sorts", tuple(self.sorts))
        object.__setattr__(self, "effective_stream_ids", frozenset(self.effective_stream_ids))
        object.__setattr__(self, "decorators", tuple(self.decorators))


def _ordered_unique(values: Sequence[str]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(values))
