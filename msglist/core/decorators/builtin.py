import logging
import re
from typing import Any, Optional

from ..models.search import DecoratorConfig
from .base import MessageDecorator

logger = logging.getLogger(__name__)

SYSLOG_SEVERITIES = {
    0: "Emergency",
    1: "Alert",
    2: "Critical",
    3: "Error",
    4: "Warning",
    5: "Notice",
    6: "Informational",
    7: "Debug",
}

_PLACEHOLDER = re.compile(r"\$\{([^}]+)\}")


class SyslogSeverityMapperDecorator(MessageDecorator):
    """Map numeric syslog levels to severity names."""

    def __init__(self, source_field: str = "level", target_field: str = "level"):
        """Initialize decorator.

        Args:
            source_field: Field holding the numeric level.
            target_field: Field receiving the severity name.
        """
        self._source_field = source_field
        self._target_field = target_field

    @classmethod
    def from_config(cls, config: DecoratorConfig) -> "SyslogSeverityMapperDecorator":
        source = config.config.get("source_field", "level")
        return cls(source_field=source, target_field=config.config.get("target_field", source))

    def decorate_message(self, message: dict[str, Any]) -> dict[str, Any]:
        value = message.get(self._source_field)
        try:
            level = int(value)
        except (TypeError, ValueError):
            return message

        name = SYSLOG_SEVERITIES.get(level)
        if name is not None:
            message[self._target_field] = f"{name} ({level})"
        return message


class FormatStringDecorator(MessageDecorator):
    """Render a ${field} template into a target field."""

    def __init__(self, format_string: str, target_field: str, require_all_fields: bool = False):
        """Initialize decorator.

        Args:
            format_string: Template with ${field} placeholders.
            target_field: Field receiving the rendered string.
            require_all_fields: Skip messages missing any referenced field.
        """
        self._format_string = format_string
        self._target_field = target_field
        self._require_all_fields = require_all_fields
        self._referenced = _PLACEHOLDER.findall(format_string)

    @classmethod
    def from_config(cls, config: DecoratorConfig) -> "FormatStringDecorator":
        return cls(
            format_string=config.config["format_string"],
            target_field=config.config["target_field"],
            require_all_fields=bool(config.config.get("require_all_fields", False)),
        )

    def decorate_message(self, message: dict[str, Any]) -> dict[str, Any]:
        if self._require_all_fields and any(f not in message for f in self._referenced):
            return message

        message[self._target_field] = _PLACEHOLDER.sub(
            lambda m: _stringify(message.get(m.group(1))), self._format_string
        )
        return message


class LookupTableDecorator(MessageDecorator):
    """Replace field values through a static lookup table."""

    def __init__(
        self,
        source_field: str,
        table: dict[str, Any],
        target_field: Optional[str] = None,
        default: Optional[Any] = None,
    ):
        """Initialize decorator.

        Args:
            source_field: Field whose value is looked up.
            table: Lookup table, keys compared as strings.
            target_field: Field receiving the looked up value.
            default: Value used on misses. Misses leave the message untouched if None.
        """
        self._source_field = source_field
        self._target_field = target_field or f"{source_field}_decorated"
        self._table = {str(k): v for k, v in table.items()}
        self._default = default

    @classmethod
    def from_config(cls, config: DecoratorConfig) -> "LookupTableDecorator":
        return cls(
            source_field=config.config["source_field"],
            table=config.config.get("table", {}),
            target_field=config.config.get("target_field"),
            default=config.config.get("default"),
        )

    def decorate_message(self, message: dict[str, Any]) -> dict[str, Any]:
        if self._source_field not in message:
            return message

        value = self._table.get(_stringify(message[self._source_field]), self._default)
        if value is not None:
            message[self._target_field] = value
        return message


def _stringify(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return ", ".join(_stringify(v) for v in value)
    return str(value)
