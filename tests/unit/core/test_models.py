"""Unit tests for search request models."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from msglist.core.errors import InvalidSortError, SearchError
from msglist.core.models.search import SearchSpec, SortClause, SortOrder, TimeRange


class TestSortClause:
    def test_equality_by_field_only(self) -> None:
        assert SortClause("source", SortOrder.ASC) == SortClause("source", SortOrder.DESC)
        assert SortClause("source", SortOrder.ASC) != SortClause("message", SortOrder.ASC)

    def test_hash_by_field(self) -> None:
        assert len({SortClause("a", SortOrder.ASC), SortClause("a", SortOrder.DESC)}) == 1

    @pytest.mark.parametrize("order", ["asc", "ASC", " Desc "])
    def test_create_parses_order(self, order: str) -> None:
        clause = SortClause.create("source", order)
        assert clause.order.value == order.strip().upper()

    def test_create_rejects_unknown_order(self) -> None:
        with pytest.raises(InvalidSortError) as exc_info:
            SortClause.create("source", "sideways")
        assert exc_info.value.field == "source"
        assert exc_info.value.order == "sideways"

    @pytest.mark.parametrize("field", ["", "   "])
    def test_rejects_empty_field(self, field: str) -> None:
        with pytest.raises(InvalidSortError):
            SortClause(field, SortOrder.ASC)

    def test_invalid_sort_is_search_error(self) -> None:
        with pytest.raises(SearchError):
            SortClause.create("", "asc")


class TestTimeRange:
    def test_naive_datetimes_are_utc(self) -> None:
        tr = TimeRange(from_=datetime(2024, 1, 1), to=datetime(2024, 1, 2))
        assert tr.from_.tzinfo == timezone.utc

    def test_rejects_inverted_range(self) -> None:
        with pytest.raises(ValueError):
            TimeRange(from_=datetime(2024, 1, 2), to=datetime(2024, 1, 1))


class TestSearchSpec:
    def test_rejects_negative_limit(self, time_range) -> None:
        with pytest.raises(ValueError):
            SearchSpec(id="x", time_range=time_range, limit=-1)

    def test_rejects_negative_offset(self, time_range) -> None:
        with pytest.raises(ValueError):
            SearchSpec(id="x", time_range=time_range, offset=-5)

    def test_fields_ordered_set(self, time_range) -> None:
        spec = SearchSpec(id="x", time_range=time_range, fields=("b", "a", "b"))
        assert spec.fields == ("b", "a")

    def test_is_frozen(self, time_range) -> None:
        spec = SearchSpec(id="x", time_range=time_range)
        with pytest.raises(Exception):
            spec.limit = 10  # type: ignore[misc]
