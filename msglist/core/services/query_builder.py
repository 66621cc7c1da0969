"""Query builder - compiles a message list search into a backend query."""

import logging
from datetime import datetime
from typing import Any, Optional

from ..errors import InvalidSortError, ResolverError, SearchError
from ..models.message import FIELD_GL2_MESSAGE_ID, FIELD_TIMESTAMP
from ..models.query import BackendQuery, FieldSort, Highlight
from ..models.search import SearchSpec, SortClause, SortOrder
from ..protocols.field_types import FieldTypeResolverProtocol
from .sort_normalizer import SortNormalizer

logger = logging.getLogger(__name__)

SEQUENCE_FIELD_FALLBACK_TYPE = "keyword"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S.%f"


class QueryBuilder:
    """Builds backend queries for message list searches."""

    def __init__(
        self,
        allow_highlighting: bool = False,
        sort_normalizer: Optional[SortNormalizer] = None,
    ):
        """Initialize builder.

        Args:
            allow_highlighting: Deployment-wide highlighting toggle.
            sort_normalizer: Sort normalizer, default one if omitted.
        """
        self._allow_highlighting = allow_highlighting
        self._sort_normalizer = sort_normalizer or SortNormalizer()

    def build(
        self, spec: SearchSpec, field_type_resolver: FieldTypeResolverProtocol
    ) -> BackendQuery:
        """Compile the search spec.

        Args:
            spec: Message list search request.
            field_type_resolver: Lookup for fallback types of sort fields.

        Returns:
            Backend query.

        Raises:
            InvalidSortError: A requested sort is malformed.
            ResolverError: Field type lookup failed.
        """
        for sort in spec.sorts:
            self._validate_sort(sort)

        query = BackendQuery(
            query=self._base_query(spec),
            size=spec.limit,
            from_=spec.offset,
        )

        if spec.fields:
            query.source_includes = tuple(spec.fields)

        for sort in self._sort_normalizer.normalize(spec.sorts):
            query.sorts.append(self._field_sort(spec, sort, field_type_resolver))

        if self._allow_highlighting:
            query.highlight = Highlight(
                highlight_query=self._query_string_query(spec.query_string),
                fields=("*",),
                require_field_match=False,
                fragment_size=0,
                number_of_fragments=0,
            )

        logger.debug(f"Compiled query for {spec.id}: {query.to_dict()}")
        return query

    @staticmethod
    def _validate_sort(sort: Any) -> None:
        if not isinstance(sort, SortClause):
            raise InvalidSortError(sort, None, reason="not a sort clause")
        if not isinstance(sort.field, str) or not sort.field.strip():
            raise InvalidSortError(sort.field, sort.order, reason="sort field must not be empty")
        if sort.order not in (SortOrder.ASC, SortOrder.DESC):
            raise InvalidSortError(sort.field, sort.order, reason="sort order must be ASC or DESC")

    def _field_sort(
        self,
        spec: SearchSpec,
        sort: SortClause,
        field_type_resolver: FieldTypeResolverProtocol,
    ) -> FieldSort:
        field_sort = FieldSort(field=sort.field, order=sort.order)

        if sort.field == FIELD_GL2_MESSAGE_ID:
            # old indices might not have a mapping for the sequence field
            field_sort.unmapped_type = SEQUENCE_FIELD_FALLBACK_TYPE
            return field_sort

        try:
            field_type = field_type_resolver.resolve(spec.effective_stream_ids, sort.field)
        except SearchError:
            raise
        except Exception as e:
            logger.error(f"Field type lookup for '{sort.field}' failed: {e}")
            raise ResolverError(sort.field, spec.effective_stream_ids, cause=e) from e

        if field_type:
            field_sort.unmapped_type = field_type
        return field_sort

    def _base_query(self, spec: SearchSpec) -> dict[str, Any]:
        filters: list[dict[str, Any]] = [
            {
                "range": {
                    FIELD_TIMESTAMP: {
                        "gte": _format_timestamp(spec.time_range.from_),
                        "lte": _format_timestamp(spec.time_range.to),
                        "format": "yyyy-MM-dd HH:mm:ss.SSS",
                    }
                }
            }
        ]
        if spec.effective_stream_ids:
            filters.append({"terms": {"streams": sorted(spec.effective_stream_ids)}})

        return {
            "bool": {
                "must": self._query_string_query(spec.query_string),
                "filter": filters,
            }
        }

    @staticmethod
    def _query_string_query(query_string: str) -> dict[str, Any]:
        if not query_string.strip() or query_string.strip() == "*":
            return {"match_all": {}}
        return {"query_string": {"query": query_string, "allow_leading_wildcard": True}}


def _format_timestamp(value: datetime) -> str:
    return value.strftime(TIMESTAMP_FORMAT)[:-3]
