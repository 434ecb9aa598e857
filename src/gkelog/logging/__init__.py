"""
Host logging library for gkelog.

Structured logging built on structlog with two integration points:

- hooks: objects implementing ``levels()`` and ``fire(entry)`` receive every
  entry at a subscribed level
- output: a replaceable sink (stdio console/json by default, discard once a
  hook takes over delivery)

Library: structlog + orjson.
"""

from .core import (
    add_hook,
    clear_hooks,
    configure_logging,
    get_hooks,
    get_logger,
    get_output,
    is_configured,
    set_output,
)
from .hooks import Entry, Hook
from .levels import ALL_LEVELS, Level, PanicError
from .sinks import BaseSink, DiscardSink, StdioSink

__all__ = [
    "ALL_LEVELS",
    "BaseSink",
    "DiscardSink",
    "Entry",
    "Hook",
    "Level",
    "PanicError",
    "StdioSink",
    "add_hook",
    "clear_hooks",
    "configure_logging",
    "get_hooks",
    "get_logger",
    "get_output",
    "is_configured",
    "set_output",
]
