"""Shared fixtures."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

import pytest

from msglist.core.models.search import SearchSpec, TimeRange


@pytest.fixture
def time_range() -> TimeRange:
    return TimeRange(
        from_=datetime(2024, 3, 1, 11, 0, tzinfo=timezone.utc),
        to=datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc),
    )


@pytest.fixture
def make_spec(time_range: TimeRange):
    def _make(**overrides: Any) -> SearchSpec:
        values: dict[str, Any] = {
            "id": "search-type-1",
            "time_range": time_range,
            "query_string": "source:host-a",
            "limit": 150,
            "offset": 0,
            "effective_stream_ids": frozenset({"stream-1"}),
        }
        values.update(overrides)
        return SearchSpec(**values)

    return _make
