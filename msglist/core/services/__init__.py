"""Core business services."""
from .hit_mapper import HitMapper
from .message_list_service import MessageListService
from .query_builder import QueryBuilder
from .result_assembler import ResultAssembler
from .sort_normalizer import SortNormalizer

__all__ = [
    "HitMapper",
    "MessageListService",
    "QueryBuilder",
    "ResultAssembler",
    "SortNormalizer",
]
