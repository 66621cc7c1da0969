"""Error hierarchy for message list search."""

import json
from typing import Any, Iterable, Optional


class SearchError(Exception):
    """Root of the search error hierarchy.

    Args:
        message: Human-readable description.
        code: Machine-readable slug.
        detail: Extra context (field name, hit id, ...).
        cause: Original exception that triggered this error.
    """

    default_code = "search_error"

    def __init__(
        self,
        message: str,
        *,
        code: Optional[str] = None,
        detail: Optional[dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.detail: dict[str, Any] = detail or {}
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, default=str)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"

    def to_dict(self) -> dict[str, Any]:
        """Serialise to a plain dict (safe for logging / HTTP responses)."""
        payload: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
            "detail": self.detail,
        }
        if self.cause is not None:
            payload["cause"] = repr(self.cause)
        return payload


class InvalidSortError(SearchError):
    default_code = "invalid_sort"

    def __init__(self, field: Any, order: Any = None, reason: str = "invalid sort"):
        super().__init__(
            f"{reason}: field={field!r} order={order!r}",
            detail={"field": field, "order": order},
        )
        self.field = field
        self.order = order


class ResolverError(SearchError):
    default_code = "field_type_resolution_failed"

    def __init__(
        self,
        field: str,
        stream_ids: Iterable[str],
        cause: Optional[BaseException] = None,
    ):
        streams = sorted(stream_ids)
        super().__init__(
            f"Could not resolve type of field {field!r}",
            detail={"field": field, "stream_ids": streams},
            cause=cause,
        )
        self.field = field
        self.stream_ids = streams


class ParseError(SearchError):
    default_code = "hit_parse_failed"

    def __init__(
        self,
        hit_id: Any,
        index: Any,
        reason: str,
        cause: Optional[BaseException] = None,
    ):
        super().__init__(
            f"Could not parse hit {hit_id!r} from index {index!r}: {reason}",
            detail={"hit_id": hit_id, "index": index},
            cause=cause,
        )
        self.hit_id = hit_id
        self.index = index


class BackendExecutionError(SearchError):
    default_code = "backend_execution_failed"

    def __init__(
        self,
        message: str,
        *,
        status: Optional[int] = None,
        indices: Iterable[str] = (),
        cause: Optional[BaseException] = None,
    ):
        super().__init__(
            message,
            detail={"status": status, "indices": list(indices)},
            cause=cause,
        )
        self.status = status


class DecorationError(SearchError):
    default_code = "decoration_failed"

    def __init__(
        self,
        decorator_type: str,
        reason: str,
        cause: Optional[BaseException] = None,
    ):
        super().__init__(
            f"Decorator {decorator_type!r} failed: {reason}",
            detail={"decorator": decorator_type},
            cause=cause,
        )
        self.decorator_type = decorator_type


class SearchCancelledError(SearchError):
    default_code = "search_cancelled"

    def __init__(self, search_type_id: str):
        super().__init__(
            f"Search {search_type_id!r} was cancelled",
            detail={"search_type_id": search_type_id},
        )
        self.search_type_id = search_type_id
