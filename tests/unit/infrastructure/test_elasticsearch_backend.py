"""Unit tests for the Elasticsearch backend client."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
import requests

from msglist.core.errors import BackendExecutionError
from msglist.core.models.query import BackendQuery
from msglist.infrastructure.backends.elasticsearch import ElasticsearchBackend
from msglist.infrastructure.backends.index_scope import IndexScope

_POST = "msglist.infrastructure.backends.elasticsearch.requests.post"


def _response(status: int = 200, payload: dict | None = None) -> MagicMock:
    resp = MagicMock()
    resp.status_code = status
    resp.json.return_value = payload or {}
    resp.text = "error"
    return resp


class TestExecute:
    def test_parses_hits(self) -> None:
        payload = {
            "hits": {
                "total": {"value": 1337, "relation": "eq"},
                "hits": [
                    {
                        "_id": "m1",
                        "_index": "graylog_2",
                        "_source": {"message": "hello"},
                        "highlight": {"message": ["<em>hello</em>"]},
                    },
                    {"_id": "m2", "_index": "graylog_2", "_source": {"message": "world"}},
                ],
            }
        }
        with patch(_POST, return_value=_response(200, payload)) as post:
            hits, total = ElasticsearchBackend(host="es", port=9200).execute(BackendQuery(size=10), ["graylog_*"])

        assert total == 1337
        assert [h.id for h in hits] == ["m1", "m2"]
        assert hits[0].highlight_fields == {"message": ["<em>hello</em>"]}
        assert hits[1].highlight_fields == {}
        assert post.call_args.args[0] == "http://es:9200/graylog_*/_search"
        assert post.call_args.kwargs["json"]["size"] == 10

    def test_joins_indices(self) -> None:
        with patch(_POST, return_value=_response(200, {"hits": {"total": 0, "hits": []}})) as post:
            ElasticsearchBackend().execute(BackendQuery(), ["a_*", "b_*"])
        assert post.call_args.args[0].endswith("/a_*,b_*/_search")

    def test_error_status(self) -> None:
        payload = {"error": {"type": "search_phase_execution_exception", "reason": "all shards failed"}}
        with patch(_POST, return_value=_response(400, payload)):
            with pytest.raises(BackendExecutionError) as exc_info:
                ElasticsearchBackend().execute(BackendQuery(), ["graylog_*"])
        assert exc_info.value.status == 400
        assert "all shards failed" in exc_info.value.message

    def test_connection_failure(self) -> None:
        with patch(_POST, side_effect=requests.ConnectionError("refused")):
            with pytest.raises(BackendExecutionError) as exc_info:
                ElasticsearchBackend().execute(BackendQuery(), ["graylog_*"])
        assert isinstance(exc_info.value.cause, requests.ConnectionError)


class TestIndexScope:
    def test_default_prefix_without_streams(self) -> None:
        assert IndexScope("graylog")(frozenset()) == ["graylog_*"]

    def test_mapped_and_unmapped_streams(self) -> None:
        scope = IndexScope("graylog", {"s-audit": "audit", "s-fw": "firewall"})
        assert scope(frozenset({"s-audit", "s-other", "s-fw"})) == ["audit_*", "firewall_*", "graylog_*"]
