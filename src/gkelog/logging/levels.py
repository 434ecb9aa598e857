"""
Severity levels of the host logging library.
"""

from __future__ import annotations

from enum import IntEnum


class Level(IntEnum):
    """Ordered severity levels, most severe first."""

    PANIC = 0
    FATAL = 1
    ERROR = 2
    WARN = 3
    INFO = 4
    DEBUG = 5

    @classmethod
    def from_name(cls, name: str | None) -> Level | None:
        """Parse a structlog/stdlib level name; unknown names give ``None``."""
        if not name:
            return None
        return _NAME_TO_LEVEL.get(str(name).lower())


_NAME_TO_LEVEL = {
    "panic": Level.PANIC,
    "fatal": Level.FATAL,
    "critical": Level.FATAL,
    "error": Level.ERROR,
    "exception": Level.ERROR,
    "warning": Level.WARN,
    "warn": Level.WARN,
    "info": Level.INFO,
    "debug": Level.DEBUG,
}

ALL_LEVELS: tuple[Level, ...] = tuple(Level)


class PanicError(Exception):
    """Raised by ``logger.panic()`` after the entry has been logged."""
