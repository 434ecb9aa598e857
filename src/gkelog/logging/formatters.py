"""
Console rendering for the stdio sink.
"""

from __future__ import annotations

from datetime import datetime, timezone

from structlog.typing import EventDict

_RESET = "\x1b[0m"

_COLORS = {
    "timestamp": "\x1b[90m",
    "logger": "\x1b[35m",
    "key": "\x1b[34m",
    "value": "\x1b[2m",
}

_LEVEL_COLORS = {
    "DEBUG": "\x1b[36m",
    "INFO": "\x1b[32m",
    "WARNING": "\x1b[33m",
    "ERROR": "\x1b[31m",
    "CRITICAL": "\x1b[1;31m",
    "PANIC": "\x1b[1;37;41m",
}


def _paint(text: str, color: str | None, use_color: bool) -> str:
    if not use_color or not color:
        return text
    return f"{color}{text}{_RESET}"


class ConsoleFormatter:
    """Renders an event as aligned columns: timestamp | level | logger | message key=value..."""

    EXCLUDED_KEYS = {"level", "message", "event", "logger", "timestamp", "_name"}
    TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
    TIMESTAMP_WIDTH = 19
    LEVEL_WIDTH = 8
    LOGGER_WIDTH = 32
    SEPARATOR = " | "

    @classmethod
    def configure(
        cls,
        *,
        timestamp_format: str | None = None,
        level_width: int | None = None,
        logger_width: int | None = None,
        separator: str | None = None,
    ) -> None:
        """Configure alignment and rendering parameters."""
        if timestamp_format:
            cls.TIMESTAMP_FORMAT = timestamp_format
            cls.TIMESTAMP_WIDTH = len(datetime.now().strftime(timestamp_format))
        if level_width:
            cls.LEVEL_WIDTH = level_width
        if logger_width:
            cls.LOGGER_WIDTH = logger_width
        if separator is not None:
            cls.SEPARATOR = separator

    @staticmethod
    def _fit_right(text: str, width: int) -> str:
        if width <= 0:
            return text
        if len(text) > width:
            text = text[-width:] if width <= 3 else "..." + text[-(width - 3) :]
        return f"{text:>{width}}"

    @classmethod
    def _format_timestamp(cls, raw_timestamp: str | None) -> str:
        if raw_timestamp:
            try:
                dt = datetime.fromisoformat(raw_timestamp.replace("Z", "+00:00"))
                if dt.tzinfo is None:
                    dt = dt.replace(tzinfo=timezone.utc)
                return dt.astimezone().strftime(cls.TIMESTAMP_FORMAT)
            except (ValueError, TypeError):
                pass
        return datetime.now().strftime(cls.TIMESTAMP_FORMAT)

    @classmethod
    def format(cls, event_dict: EventDict, *, use_color: bool = True) -> str:
        """Format an event dict into an aligned line."""
        level = str(event_dict.get("level", "info")).upper()
        message = str(event_dict.get("message", event_dict.get("event", "")))
        logger_name = str(event_dict.get("logger", "root"))

        extras = [
            f"{_paint(str(k), _COLORS['key'], use_color)}={_paint(str(v), _COLORS['value'], use_color)}"
            for k, v in event_dict.items()
            if k not in cls.EXCLUDED_KEYS
        ]
        if extras:
            message = f"{message} " + " ".join(extras)

        return cls.SEPARATOR.join(
            [
                _paint(
                    cls._fit_right(cls._format_timestamp(event_dict.get("timestamp")), cls.TIMESTAMP_WIDTH),
                    _COLORS["timestamp"],
                    use_color,
                ),
                _paint(cls._fit_right(level, cls.LEVEL_WIDTH), _LEVEL_COLORS.get(level), use_color),
                _paint(cls._fit_right(logger_name, cls.LOGGER_WIDTH), _COLORS["logger"], use_color),
                message,
            ]
        )
