"""Hit mapper - converts backend hits into result messages."""

import logging
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

from ..errors import ParseError
from ..models.message import FIELD_ID, FIELD_TIMESTAMP, RawHit, ResultMessage

logger = logging.getLogger(__name__)

_TIMESTAMP_FORMATS = ("%Y-%m-%d %H:%M:%S.%f", "%Y-%m-%d %H:%M:%S")


class HitMapper:
    """Maps raw hits to ResultMessage, keeping highlight fragments."""

    def map(self, hit: RawHit) -> ResultMessage:
        """Parse a single hit.

        Args:
            hit: Raw backend hit.

        Returns:
            Parsed result message.

        Raises:
            ParseError: The hit source is not a valid message.
        """
        if not isinstance(hit.id, str) or not hit.id:
            raise ParseError(hit.id, hit.index, "missing message id")
        if not isinstance(hit.index, str) or not hit.index:
            raise ParseError(hit.id, hit.index, "missing index name")
        if not isinstance(hit.source, Mapping):
            raise ParseError(
                hit.id, hit.index, f"source is {type(hit.source).__name__}, not an object"
            )

        fields = {k: v for k, v in hit.source.items() if k != FIELD_ID}
        if FIELD_TIMESTAMP in fields:
            fields[FIELD_TIMESTAMP] = self._parse_timestamp(hit, fields[FIELD_TIMESTAMP])

        return ResultMessage(
            id=hit.id,
            index=hit.index,
            fields=fields,
            highlight_ranges=self._highlights(hit),
        )

    @staticmethod
    def _highlights(hit: RawHit) -> dict[str, list[str]]:
        highlights = {}
        for field, fragments in (hit.highlight_fields or {}).items():
            if isinstance(fragments, (str, bytes)) or not isinstance(fragments, (list, tuple)):
                raise ParseError(hit.id, hit.index, f"highlight for '{field}' is not a list")
            highlights[field] = [str(fragment) for fragment in fragments]
        return highlights

    @staticmethod
    def _parse_timestamp(hit: RawHit, value: Any) -> datetime:
        if isinstance(value, datetime):
            parsed = value
        elif isinstance(value, (int, float)) and not isinstance(value, bool):
            try:
                parsed = datetime.fromtimestamp(value / 1000, tz=timezone.utc)
            except (OverflowError, OSError, ValueError) as e:
                raise ParseError(
                    hit.id, hit.index, f"invalid timestamp {value!r}", cause=e
                ) from e
        elif isinstance(value, str):
            parsed = _parse_timestamp_string(value)
            if parsed is None:
                raise ParseError(hit.id, hit.index, f"invalid timestamp {value!r}")
        else:
            raise ParseError(hit.id, hit.index, f"invalid timestamp {value!r}")

        if parsed.tzinfo is None:
            return parsed.replace(tzinfo=timezone.utc)
        return parsed.astimezone(timezone.utc)


def _parse_timestamp_string(value: str) -> datetime | None:
    for fmt in _TIMESTAMP_FORMATS:
        try:
            return datetime.strptime(value, fmt)
        except ValueError:
            continue
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
