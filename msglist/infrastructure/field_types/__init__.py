"""Field type resolver implementations."""
from .elasticsearch_resolver import ElasticsearchFieldTypeResolver
from .static_resolver import StaticFieldTypeResolver

__all__ = ["ElasticsearchFieldTypeResolver", "StaticFieldTypeResolver"]
