"""Result assembler - builds the decorated message list result."""

import logging
from typing import Optional, Protocol, Sequence

from ..errors import DecorationError, SearchCancelledError, SearchError
from ..models.message import MessageListResult, RawHit, SearchResponse
from ..models.search import SearchSpec, TimeRange
from ..protocols.decorator import DecoratorChainProtocol
from .hit_mapper import HitMapper

logger = logging.getLogger(__name__)


class CancellationSignal(Protocol):
    def is_set(self) -> bool:
        ...


class ResultAssembler:
    """Turns raw hits into a decorated result envelope."""

    def __init__(self, hit_mapper: Optional[HitMapper] = None):
        self._hit_mapper = hit_mapper or HitMapper()

    def assemble(
        self,
        spec: SearchSpec,
        raw_hits: Sequence[RawHit],
        total_hit_count: int,
        time_range: TimeRange,
        decorator_chain: DecoratorChainProtocol,
        cancel_event: Optional[CancellationSignal] = None,
    ) -> MessageListResult:
        """Assemble the search type result.

        Args:
            spec: Message list search request.
            raw_hits: Hits in backend order.
            total_hit_count: Total hits reported by the backend.
            time_range: Effective time range of the search.
            decorator_chain: Response decorators.
            cancel_event: Signal that discards the assembly when set.

        Returns:
            Result envelope.

        Raises:
            ParseError: A hit could not be parsed.
            DecorationError: The decorator chain failed.
            SearchCancelledError: The request was cancelled.
        """
        messages = []
        for hit in raw_hits:
            self._check_cancelled(spec, cancel_event)
            messages.append(self._hit_mapper.map(hit).to_summary())

        response = SearchResponse(
            query=spec.query_string,
            built_query=spec.query_string,
            messages=tuple(messages),
            total_results=total_hit_count,
            from_=time_range.from_,
            to=time_range.to,
        )

        self._check_cancelled(spec, cancel_event)
        decorated = self._decorate(response, spec, decorator_chain)
        self._check_cancelled(spec, cancel_event)

        logger.info(
            f"Message list {spec.id}: {len(decorated.messages)} messages, "
            f"{decorated.total_results} total"
        )

        return MessageListResult(
            id=spec.id,
            name=spec.name,
            messages=decorated.messages,
            effective_timerange=time_range,
            total_results=decorated.total_results,
        )

    @staticmethod
    def _decorate(
        response: SearchResponse,
        spec: SearchSpec,
        decorator_chain: DecoratorChainProtocol,
    ) -> SearchResponse:
        try:
            return decorator_chain.decorate(response, spec.decorators)
        except SearchError:
            raise
        except Exception as e:
            logger.error(f"Decorating {spec.id} failed: {e}")
            raise DecorationError("chain", str(e), cause=e) from e

    @staticmethod
    def _check_cancelled(spec: SearchSpec, cancel_event: Optional[CancellationSignal]) -> None:
        if cancel_event is not None and cancel_event.is_set():
            logger.info(f"Message list {spec.id} cancelled, discarding results")
            raise SearchCancelledError(spec.id)
