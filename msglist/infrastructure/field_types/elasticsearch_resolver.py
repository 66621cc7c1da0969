import logging
from typing import AbstractSet, Callable, Optional

import requests

from msglist.core.errors import ResolverError

logger = logging.getLogger(__name__)


class ElasticsearchFieldTypeResolver:
    """Field type lookup using index field mappings."""

    def __init__(
        self,
        base_url: str,
        index_resolver: Callable[[AbstractSet[str]], list[str]],
        timeout: float = 10.0,
    ):
        """Initialize resolver.

        Args:
            base_url: Elasticsearch base URL.
            index_resolver: Maps stream ids to index patterns.
            timeout: Request timeout in seconds.
        """
        self._base_url = base_url.rstrip("/")
        self._index_resolver = index_resolver
        self._timeout = timeout

    def resolve(self, stream_ids: AbstractSet[str], field: str) -> Optional[str]:
        """Return the field type if all indices mapping it agree."""
        indices = ",".join(self._index_resolver(stream_ids))
        url = f"{self._base_url}/{indices}/_mapping/field/{field}"

        try:
            resp = requests.get(
                url,
                params={"ignore_unavailable": "true", "allow_no_indices": "true"},
                timeout=self._timeout,
            )
            if resp.status_code == 404:
                return None
            resp.raise_for_status()
            data = resp.json()
        except (requests.RequestException, ValueError) as e:
            logger.error(f"Mapping lookup for '{field}' on {indices} failed: {e}")
            raise ResolverError(field, stream_ids, cause=e) from e

        types = set()
        for index_mapping in data.values():
            field_mapping = index_mapping.get("mappings", {}).get(field)
            if not field_mapping:
                continue
            leaf = field_mapping.get("full_name", field).rsplit(".", 1)[-1]
            mapping = field_mapping.get("mapping", {}).get(leaf, {})
            if "type" in mapping:
                types.add(mapping["type"])

        if len(types) == 1:
            return types.pop()
        if len(types) > 1:
            logger.debug(f"Field '{field}' has conflicting types {sorted(types)}")
        return None
