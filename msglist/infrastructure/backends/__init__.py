"""Search backend implementations."""
from .elasticsearch import ElasticsearchBackend
from .index_scope import IndexScope

__all__ = ["ElasticsearchBackend", "IndexScope"]
