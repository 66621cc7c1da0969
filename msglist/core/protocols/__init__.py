"""Protocol interfaces for dependency injection."""
from .backend import SearchBackendProtocol
from .decorator import DecoratorChainProtocol, DecoratorProtocol
from .field_types import FieldTypeResolverProtocol

__all__ = [
    "SearchBackendProtocol",
    "DecoratorChainProtocol",
    "DecoratorProtocol",
    "FieldTypeResolverProtocol",
]
