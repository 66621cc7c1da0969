import logging
from typing import Any, Sequence

import requests

from msglist.core.errors import BackendExecutionError
from msglist.core.models.message import RawHit
from msglist.core.models.query import BackendQuery

logger = logging.getLogger(__name__)


class ElasticsearchBackend:
    """Search backend using the Elasticsearch HTTP API."""

    def __init__(
        self,
        host: str = "localhost",
        port: int = 9200,
        scheme: str = "http",
        timeout: float = 60.0,
    ):
        """Initialize backend client.

        Args:
            host: Elasticsearch host.
            port: Elasticsearch port.
            scheme: http or https.
            timeout: Request timeout in seconds.
        """
        self._base_url = f"{scheme}://{host}:{port}"
        self._timeout = timeout

    @property
    def base_url(self) -> str:
        return self._base_url

    def execute(
        self, query: BackendQuery, indices: Sequence[str]
    ) -> tuple[list[RawHit], int]:
        """Run the query against the given indices."""
        target = ",".join(indices) if indices else "_all"
        url = f"{self._base_url}/{target}/_search"

        try:
            resp = requests.post(
                url,
                params={"ignore_unavailable": "true", "allow_no_indices": "true"},
                json=query.to_dict(),
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            raise BackendExecutionError(
                f"Search request to {target} failed: {e}", indices=indices, cause=e
            ) from e

        if resp.status_code != 200:
            raise BackendExecutionError(
                f"Search on {target} returned {resp.status_code}: {_error_reason(resp)}",
                status=resp.status_code,
                indices=indices,
            )

        try:
            data = resp.json()
        except ValueError as e:
            raise BackendExecutionError(
                f"Search on {target} returned invalid JSON",
                status=resp.status_code,
                indices=indices,
                cause=e,
            ) from e

        hits_section = data.get("hits", {})
        hits = [
            RawHit(
                id=hit.get("_id"),
                index=hit.get("_index"),
                source=hit.get("_source"),
                highlight_fields=hit.get("highlight", {}),
            )
            for hit in hits_section.get("hits", [])
        ]
        total = _total_hits(hits_section.get("total", 0))

        logger.debug(f"Backend returned {len(hits)}/{total} hits from {target}")
        return hits, total


def _total_hits(total: Any) -> int:
    if isinstance(total, dict):
        return int(total.get("value", 0))
    return int(total or 0)


def _error_reason(resp: requests.Response) -> str:
    try:
        error = resp.json().get("error", {})
    except ValueError:
        return resp.text[:200]
    if isinstance(error, dict):
        return error.get("reason") or error.get("type") or str(error)
    return str(error)
