"""Search response decorators."""
from .base import MessageDecorator
from .builtin import FormatStringDecorator, LookupTableDecorator, SyslogSeverityMapperDecorator
from .chain import DecoratorChain

__all__ = [
    "MessageDecorator",
    "FormatStringDecorator",
    "LookupTableDecorator",
    "SyslogSeverityMapperDecorator",
    "DecoratorChain",
]
