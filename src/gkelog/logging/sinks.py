"""
Output sinks for the host logging library.

The output sink receives every rendered event after hooks have fired.
Replacing it with :class:`DiscardSink` leaves hooks as the only delivery path.
"""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from typing import Any, Literal

import orjson
from structlog.typing import EventDict

from .formatters import ConsoleFormatter

LogFormat = Literal["console", "json"]


def orjson_dumps(v: Any, *, default: Any = str) -> str:
    """Fast JSON serialization using orjson."""
    return orjson.dumps(v, default=default, option=orjson.OPT_UTC_Z | orjson.OPT_NAIVE_UTC).decode()


# =============================================================================
# Sink Abstraction (Strategy Pattern)
# =============================================================================


class BaseSink(ABC):
    """Abstract base class for output sinks."""

    @abstractmethod
    def emit(self, event_dict: EventDict) -> None:
        """Emit a log event to the sink."""
        ...

    def close(self) -> None:
        """Release resources held by the sink."""


class StdioSink(BaseSink):
    """Standard I/O sink with configurable format.

    Args:
        fmt: Output format - "console" (aligned human-readable) or "json"
        stream: Output stream (default: the current sys.stderr)
    """

    def __init__(self, fmt: LogFormat = "console", stream: Any = None):
        self._fmt = fmt
        self._stream = stream

    @property
    def fmt(self) -> LogFormat:
        return self._fmt

    def emit(self, event_dict: EventDict) -> None:
        stream = self._stream or sys.stderr
        if self._fmt == "json":
            output = orjson_dumps(event_dict)
        else:
            use_color = bool(getattr(stream, "isatty", lambda: False)())
            output = ConsoleFormatter.format(event_dict, use_color=use_color)

        stream.write(output + "\n")
        stream.flush()


class DiscardSink(BaseSink):
    """Drops everything."""

    def emit(self, event_dict: EventDict) -> None:
        pass
