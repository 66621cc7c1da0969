import logging
from abc import ABC, abstractmethod
from dataclasses import replace
from typing import Any

from ..models.message import ResultMessageSummary, SearchResponse

logger = logging.getLogger(__name__)


class MessageDecorator(ABC):
    """Base class for decorators that rewrite messages one by one."""

    def decorate(self, response: SearchResponse) -> SearchResponse:
        """Return a copy of the response with every message decorated."""
        if not response.messages:
            return response

        messages = tuple(self._decorate_summary(m) for m in response.messages)
        return replace(response, messages=messages)

    def _decorate_summary(self, summary: ResultMessageSummary) -> ResultMessageSummary:
        message = self.decorate_message(dict(summary.message))
        return replace(summary, message=message)

    @abstractmethod
    def decorate_message(self, message: dict[str, Any]) -> dict[str, Any]:
        """Decorate a copy of the message fields."""
        ...
