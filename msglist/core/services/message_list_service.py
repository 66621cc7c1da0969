"""Message list service - core message list search flow."""

import logging
from typing import Callable, Optional, Sequence

from ..errors import BackendExecutionError, SearchError
from ..models.message import MessageListResult
from ..models.search import SearchSpec
from ..protocols.backend import SearchBackendProtocol
from ..protocols.decorator import DecoratorChainProtocol
from ..protocols.field_types import FieldTypeResolverProtocol
from .query_builder import QueryBuilder
from .result_assembler import CancellationSignal, ResultAssembler

logger = logging.getLogger(__name__)


class MessageListService:
    """Compiles, executes and assembles message list searches."""

    def __init__(
        self,
        query_builder: QueryBuilder,
        field_type_resolver: FieldTypeResolverProtocol,
        backend: SearchBackendProtocol,
        decorator_chain: DecoratorChainProtocol,
        index_resolver: Callable[[frozenset[str]], Sequence[str]],
        assembler: Optional[ResultAssembler] = None,
    ):
        """Initialize message list service.

        Args:
            query_builder: Query builder.
            field_type_resolver: Field type lookup for sort fallbacks.
            backend: Search backend.
            decorator_chain: Response decorators.
            index_resolver: Maps stream ids to the indices to search.
            assembler: Result assembler.
        """
        self._query_builder = query_builder
        self._field_type_resolver = field_type_resolver
        self._backend = backend
        self._decorator_chain = decorator_chain
        self._index_resolver = index_resolver
        self._assembler = assembler or ResultAssembler()

    def search(
        self,
        spec: SearchSpec,
        cancel_event: Optional[CancellationSignal] = None,
    ) -> MessageListResult:
        """Run a message list search.

        Args:
            spec: Message list search request.
            cancel_event: Signal that aborts the request when set.

        Returns:
            Decorated result envelope.
        """
        query = self._query_builder.build(spec, self._field_type_resolver)
        indices = list(self._index_resolver(spec.effective_stream_ids))

        try:
            hits, total = self._backend.execute(query, indices)
        except SearchError:
            raise
        except Exception as e:
            logger.error(f"Search {spec.id} failed on {indices}: {e}")
            raise BackendExecutionError(str(e), indices=indices, cause=e) from e

        logger.info(
            f"Search {spec.id}: {len(hits)} hits of {total} for '{spec.query_string[:50]}'"
        )

        return self._assembler.assemble(
            spec,
            hits,
            total,
            spec.time_range,
            self._decorator_chain,
            cancel_event=cancel_event,
        )
