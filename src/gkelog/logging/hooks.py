"""
Hook interface and the entry model handed to hooks.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Sequence

from structlog.typing import EventDict

from .levels import Level

# Keys consumed by Entry itself; everything else ends up in Entry.fields
_ENTRY_KEYS = {"level", "message", "event", "logger", "timestamp"}


@dataclass(frozen=True)
class Entry:
    """A single log entry as seen by hooks.

    ``level`` is a :class:`Level` for known levels and the raw level name
    otherwise.
    """

    level: Level | str
    message: str
    logger: str = "root"
    timestamp: str | None = None
    fields: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_event_dict(cls, event_dict: EventDict) -> Entry:
        raw_level = event_dict.get("level", "")
        level = Level.from_name(raw_level)
        message = event_dict.get("message", event_dict.get("event", ""))
        return cls(
            level=level if level is not None else str(raw_level),
            message="" if message is None else str(message),
            logger=str(event_dict.get("logger", "root")),
            timestamp=event_dict.get("timestamp"),
            fields={k: v for k, v in event_dict.items() if k not in _ENTRY_KEYS},
        )


class Hook(ABC):
    """Anything that wants to observe log entries.

    A hook declares the levels it subscribes to and receives every matching
    entry through :meth:`fire`.
    """

    @abstractmethod
    def levels(self) -> Sequence[Level]:
        """Levels this hook is fired for."""
        ...

    @abstractmethod
    def fire(self, entry: Entry) -> None:
        """Handle one entry."""
        ...
