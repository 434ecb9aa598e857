"""
Core logging configuration, hook registry and output redirection.
"""

from __future__ import annotations

import logging
import sys
import threading
from datetime import datetime, timezone
from typing import Any

import structlog
from structlog.typing import EventDict, WrappedLogger

from gkelog.config import settings

from .hooks import Entry, Hook
from .levels import PanicError
from .sinks import BaseSink, LogFormat, StdioSink

# =============================================================================
# Global State
# =============================================================================

_hooks: tuple[Hook, ...] = ()
_hooks_lock = threading.Lock()
_output: BaseSink = StdioSink()
_configured = False


def get_logger(name: str | None = None) -> Any:
    """Get a structured logger instance. Call configure_logging() first."""
    return structlog.get_logger(_name=name or "root")


def add_hook(hook: Hook) -> None:
    """Register a hook; it is fired for every entry at one of its levels."""
    global _hooks
    with _hooks_lock:
        _hooks = _hooks + (hook,)


def get_hooks() -> tuple[Hook, ...]:
    return _hooks


def clear_hooks() -> None:
    global _hooks
    with _hooks_lock:
        _hooks = ()


def set_output(sink: BaseSink) -> None:
    """Replace the default output sink."""
    global _output
    previous, _output = _output, sink
    if previous is not sink:
        previous.close()


def get_output() -> BaseSink:
    return _output


def is_configured() -> bool:
    return _configured


# =============================================================================
# Structlog Processors
# =============================================================================


def add_timestamp(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Add ISO 8601 timestamp to log event."""
    event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    return event_dict


def add_logger_name(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Add logger name to log event."""
    event_dict["logger"] = event_dict.pop("_name", "root")
    return event_dict


def rename_event_key(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Rename 'event' to 'message'."""
    if "event" in event_dict:
        event_dict["message"] = event_dict.pop("event")
    return event_dict


def dispatch_to_hooks(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Fire every registered hook subscribed to the entry's level."""
    hooks = _hooks
    if not hooks:
        return event_dict

    entry = Entry.from_event_dict(event_dict)
    for hook in hooks:
        if entry.level not in hook.levels():
            continue
        try:
            hook.fire(entry)
        except Exception as exc:
            sys.stderr.write(f"Failed to fire hook: {exc}\n")
    return event_dict


def render_to_output(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> str:
    """Write the event to the current output sink. Returns empty to suppress default output."""
    try:
        _output.emit(event_dict)
    except Exception:
        pass  # Fail silently to avoid breaking the application
    return ""


# =============================================================================
# Configuration Logic
# =============================================================================


class SilentLogger:
    """Wrapped logger that writes nowhere; render_to_output already did the work."""

    def msg(self, *args: Any, **kw: Any) -> None:
        pass

    log = debug = info = warning = warn = error = err = exception = msg
    critical = fatal = failure = panic = notset = msg


_SILENT_LOGGER = SilentLogger()


class SilentLoggerFactory:
    """Logger factory that returns a logger writing to nowhere."""

    def __call__(self, *args: Any) -> SilentLogger:
        return _SILENT_LOGGER


def _make_wrapper_class(min_level: int) -> type:
    """Filtering bound logger extended with ``panic``."""
    base = structlog.make_filtering_bound_logger(min_level)

    class HostBoundLogger(base):  # type: ignore[misc, valid-type]
        def panic(self, event: str, *args: Any, **kw: Any) -> None:
            """Log at PANIC level, then raise PanicError."""
            if args:
                event = event % args
            self._proxy_to_logger("panic", event, **kw)
            raise PanicError(event)

    return HostBoundLogger


def _configure_structlog(level: int) -> None:
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            add_timestamp,
            add_logger_name,
            rename_event_key,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            dispatch_to_hooks,
            render_to_output,
        ],
        wrapper_class=_make_wrapper_class(level),
        context_class=dict,
        logger_factory=SilentLoggerFactory(),
        cache_logger_on_first_use=False,
    )


def configure_logging(
    *,
    level: str | None = None,
    fmt: LogFormat | None = None,
    capture_stdlib: bool | None = None,
) -> None:
    """
    Configure the host logging library.

    Unset arguments fall back to ``settings.logging`` (GKELOG_LOG_* variables).

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        fmt: Output format of the stdio sink (console, json)
        capture_stdlib: Route stdlib logging records through the pipeline
    """
    global _configured
    from .formatters import ConsoleFormatter
    from .interceptors import intercept_stdlib

    log_settings = settings.logging
    level_name = (level or log_settings.level.value).upper()
    numeric_level = getattr(logging, level_name, logging.INFO)
    log_format: LogFormat = "json" if (fmt or log_settings.format.value).lower() == "json" else "console"

    ConsoleFormatter.configure(
        timestamp_format=log_settings.console_timestamp_format,
        level_width=log_settings.console_level_width,
        logger_width=log_settings.console_logger_width,
        separator=log_settings.console_separator,
    )

    # An output redirected by set_output() is left in place
    if isinstance(_output, StdioSink):
        set_output(StdioSink(fmt=log_format))

    _configure_structlog(numeric_level)
    _configured = True

    if log_settings.capture_stdlib if capture_stdlib is None else capture_stdlib:
        intercept_stdlib(numeric_level)
