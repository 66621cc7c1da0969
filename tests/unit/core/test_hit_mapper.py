"""Unit tests for hit mapping."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from msglist.core.errors import ParseError
from msglist.core.services.hit_mapper import HitMapper

from fakes import make_hit


class TestHighlights:
    def test_fragment_order_preserved(self) -> None:
        hit = make_hit(highlight={"message": ["a", "b"]})
        assert HitMapper().map(hit).highlight_ranges["message"] == ["a", "b"]

    def test_fragments_converted_to_strings(self) -> None:
        hit = make_hit(highlight={"took_ms": [42]})
        assert HitMapper().map(hit).highlight_ranges == {"took_ms": ["42"]}

    def test_no_highlight_yields_empty_map(self) -> None:
        assert HitMapper().map(make_hit()).highlight_ranges == {}

    def test_markup_kept_verbatim(self) -> None:
        hit = make_hit(highlight={"message": ["<em>error</em> in module"]})
        assert HitMapper().map(hit).highlight_ranges["message"] == ["<em>error</em> in module"]

    def test_non_list_fragments_rejected(self) -> None:
        hit = make_hit(highlight={"message": "a"})
        with pytest.raises(ParseError):
            HitMapper().map(hit)


class TestSource:
    def test_identity_and_fields(self) -> None:
        message = HitMapper().map(make_hit("abc", "graylog_3"))
        assert message.id == "abc"
        assert message.index == "graylog_3"
        assert message.fields["message"] == "message abc"
        assert message.fields["source"] == "host-a"

    def test_arbitrary_keys_passed_through(self) -> None:
        source = {"message": "m", "custom_field": {"nested": True}, "streams": ["s1"]}
        message = HitMapper().map(make_hit(source=source))
        assert set(message.fields) == {"message", "custom_field", "streams"}

    @pytest.mark.parametrize(
        "value",
        [
            "2024-03-01 12:00:00.000",
            "2024-03-01T12:00:00.000Z",
            "2024-03-01T13:00:00+01:00",
            1709294400000,
        ],
    )
    def test_timestamp_parsed_to_utc(self, value) -> None:
        message = HitMapper().map(make_hit(source={"timestamp": value}))
        assert message.fields["timestamp"] == datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)

    def test_summary_carries_id_in_message(self) -> None:
        summary = HitMapper().map(make_hit("abc")).to_summary()
        assert summary.id == "abc"
        assert summary.message["_id"] == "abc"
        assert summary.index == "graylog_0"


class TestParseErrors:
    def test_non_mapping_source(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            HitMapper().map(make_hit("bad", source=["not", "an", "object"]))
        assert exc_info.value.hit_id == "bad"
        assert exc_info.value.index == "graylog_0"

    def test_invalid_timestamp(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            HitMapper().map(make_hit("bad", source={"timestamp": "yesterday"}))
        assert "bad" in exc_info.value.message

    @pytest.mark.parametrize("value", [10**20, float("nan"), float("inf"), float("-inf")])
    def test_out_of_range_epoch_timestamp(self, value) -> None:
        with pytest.raises(ParseError) as exc_info:
            HitMapper().map(make_hit("epoch", source={"timestamp": value}))
        assert exc_info.value.hit_id == "epoch"
        assert exc_info.value.index == "graylog_0"
        assert exc_info.value.cause is not None

    def test_missing_id(self) -> None:
        with pytest.raises(ParseError):
            HitMapper().map(make_hit(hit_id=""))
