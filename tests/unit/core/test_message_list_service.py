"""Unit tests for the message list search flow."""

from __future__ import annotations

import threading

import pytest

from msglist.core.errors import BackendExecutionError, ParseError, ResolverError, SearchCancelledError
from msglist.core.models.message import FIELD_GL2_MESSAGE_ID, FIELD_TIMESTAMP
from msglist.core.models.search import SortClause, SortOrder
from msglist.core.services.message_list_service import MessageListService
from msglist.core.services.query_builder import QueryBuilder

from fakes import FakeBackend, FakeFieldTypeResolver, NoopDecoratorChain, make_hit


def _service(backend: FakeBackend, resolver: FakeFieldTypeResolver | None = None, **kwargs) -> MessageListService:
    return MessageListService(
        query_builder=QueryBuilder(**kwargs),
        field_type_resolver=resolver or FakeFieldTypeResolver(),
        backend=backend,
        decorator_chain=NoopDecoratorChain(),
        index_resolver=lambda stream_ids: [f"{s}_*" for s in sorted(stream_ids)],
    )


class TestSearch:
    def test_end_to_end(self, make_spec, time_range) -> None:
        backend = FakeBackend(hits=[make_hit("a"), make_hit("b")], total=42)
        spec = make_spec(sorts=(SortClause(FIELD_TIMESTAMP, SortOrder.DESC),), name="recent")

        result = _service(backend).search(spec)

        assert [m.id for m in result.messages] == ["a", "b"]
        assert result.total_results == 42
        assert result.effective_timerange == time_range
        assert result.name == "recent"

        query, indices = backend.executed[0]
        assert indices == ["stream-1_*"]
        assert [(s.field, s.order) for s in query.sorts] == [
            (FIELD_TIMESTAMP, SortOrder.DESC),
            (FIELD_GL2_MESSAGE_ID, SortOrder.DESC),
        ]

    def test_highlights_flow_through(self, make_spec) -> None:
        backend = FakeBackend(hits=[make_hit(highlight={"message": ["x", "y"]})], total=1)
        result = _service(backend, allow_highlighting=True).search(make_spec())
        assert result.messages[0].highlight_ranges == {"message": ["x", "y"]}
        assert backend.executed[0][0].highlight is not None


class TestErrors:
    def test_backend_error_wrapped(self, make_spec) -> None:
        backend = FakeBackend(error=ConnectionError("refused"))
        with pytest.raises(BackendExecutionError) as exc_info:
            _service(backend).search(make_spec())
        assert isinstance(exc_info.value.cause, ConnectionError)
        assert exc_info.value.detail["indices"] == ["stream-1_*"]

    def test_backend_execution_error_unchanged(self, make_spec) -> None:
        error = BackendExecutionError("timeout", status=504)
        with pytest.raises(BackendExecutionError) as exc_info:
            _service(FakeBackend(error=error)).search(make_spec())
        assert exc_info.value is error

    def test_resolver_error_prevents_execution(self, make_spec) -> None:
        backend = FakeBackend()
        resolver = FakeFieldTypeResolver(error=RuntimeError("mongo down"))
        spec = make_spec(sorts=(SortClause("source", SortOrder.ASC),))
        with pytest.raises(ResolverError):
            _service(backend, resolver).search(spec)
        assert backend.executed == []

    def test_parse_error_propagates(self, make_spec) -> None:
        backend = FakeBackend(hits=[make_hit(source=None), make_hit("bad", source=42)], total=2)
        with pytest.raises(ParseError):
            _service(backend).search(make_spec())

    def test_cancelled(self, make_spec) -> None:
        cancel = threading.Event()
        cancel.set()
        backend = FakeBackend(hits=[make_hit()], total=1)
        with pytest.raises(SearchCancelledError):
            _service(backend).search(make_spec(), cancel_event=cancel)
