"""Sort normalization - default sort and timestamp tie-break."""

import logging
from typing import Optional, Sequence

from ..models.message import FIELD_GL2_MESSAGE_ID, FIELD_TIMESTAMP
from ..models.search import SortClause, SortOrder

logger = logging.getLogger(__name__)


class SortNormalizer:
    """Produces the final sort list sent to the backend."""

    def __init__(
        self,
        timestamp_field: str = FIELD_TIMESTAMP,
        sequence_field: str = FIELD_GL2_MESSAGE_ID,
    ):
        """Initialize normalizer.

        Args:
            timestamp_field: Field holding the message timestamp.
            sequence_field: Field encoding receipt order, used as tie-break.
        """
        self._timestamp_field = timestamp_field
        self._sequence_field = sequence_field

    @property
    def default_sort(self) -> SortClause:
        return SortClause(self._timestamp_field, SortOrder.DESC)

    def normalize(self, sorts: Sequence[SortClause]) -> list[SortClause]:
        """Normalize requested sorts.

        Empty input becomes exactly one DESC timestamp sort. Otherwise a
        timestamp sort without a sequence sort gets a sequence sort with the
        same order inserted right after it. Only the first clause per field
        is kept.

        Args:
            sorts: Requested sort clauses, possibly empty.

        Returns:
            Non-empty list of sort clauses.
        """
        result = self._first_per_field(sorts)
        if not result:
            # Default sort is returned alone, without the sequence tie-break.
            # Messages sharing a timestamp have no guaranteed order here.
            return [self.default_sort]

        timestamp_sort = self._find(result, self._timestamp_field)
        sequence_sort = self._find(result, self._sequence_field)

        if timestamp_sort is not None and sequence_sort is None:
            position = result.index(timestamp_sort) + 1
            result.insert(position, SortClause(self._sequence_field, timestamp_sort.order))
            logger.debug(
                f"Added tie-break sort on {self._sequence_field} ({timestamp_sort.order.value})"
            )

        return result

    @staticmethod
    def _first_per_field(sorts: Sequence[SortClause]) -> list[SortClause]:
        seen: set[str] = set()
        unique = []
        for sort in sorts:
            if sort.field in seen:
                continue
            seen.add(sort.field)
            unique.append(sort)
        return unique

    @staticmethod
    def _find(sorts: list[SortClause], field: str) -> Optional[SortClause]:
        return next((s for s in sorts if s.field == field), None)
