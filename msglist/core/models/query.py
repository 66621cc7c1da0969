"""Backend query model."""
from dataclasses import dataclass, field
from typing import Any, Optional

from .search import SortOrder


@dataclass
class FieldSort:
    """Sort directive for a single field."""
    field: str
    order: SortOrder
    unmapped_type: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        options: dict[str, Any] = {"order": self.order.value.lower()}
        if self.unmapped_type is not None:
            options["unmapped_type"] = self.unmapped_type
        return {self.field: options}


@dataclass
class Highlight:
    """Highlight request."""
    highlight_query: dict[str, Any]
    fields: tuple[str, ...] = ("*",)
    require_field_match: bool = False
    fragment_size: int = 0
    number_of_fragments: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "require_field_match": self.require_field_match,
            "highlight_query": self.highlight_query,
            "fields": {
                name: {
                    "fragment_size": self.fragment_size,
                    "number_of_fragments": self.number_of_fragments,
                }
                for name in self.fields
            },
        }


@dataclass
class BackendQuery:
    """Query compiled for the search backend.

    Built incrementally by QueryBuilder, then handed to the backend.
    """
    query: dict[str, Any] = field(default_factory=lambda: {"match_all": {}})
    size: int = 0
    from_: int = 0
    source_includes: Optional[tuple[str, ...]] = None
    sorts: list[FieldSort] = field(default_factory=list)
    highlight: Optional[Highlight] = None

    def to_dict(self) -> dict[str, Any]:
        """Render the request body. A size of 0 is left to the backend default."""
        body: dict[str, Any] = {"query": self.query, "from": self.from_}
        if self.size:
            body["size"] = self.size
        if self.source_includes is not None:
            body["_source"] = {"includes": list(self.source_includes), "excludes": []}
        if self.sorts:
            body["sort"] = [s.to_dict() for s in self.sorts]
        if self.highlight is not None:
            body["highlight"] = self.highlight.to_dict()
        body["track_total_hits"] = True
        return body
