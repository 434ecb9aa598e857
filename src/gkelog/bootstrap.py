"""
One-time bootstrap of the Cloud Logging hook.

Nothing happens at import time. The process entry point calls
:func:`bootstrap_or_exit` (or :func:`init_hook` to handle errors itself)
once at startup:

    from gkelog import bootstrap_or_exit

    def main() -> None:
        bootstrap_or_exit()
        ...
"""

from __future__ import annotations

import threading
from typing import Optional

from gkelog.config import PodSettings
from gkelog.errors import BootstrapError
from gkelog.identity import resolve_identity
from gkelog.logging import DiscardSink, add_hook, configure_logging, get_logger, is_configured, set_output
from gkelog.platform import MetadataClient
from gkelog.stackdriver import ClientFactory, StackdriverHook, default_client_factory, new_hook

_init_lock = threading.Lock()
_initialized = False
_hook: Optional[StackdriverHook] = None
_error: Optional[BootstrapError] = None


def bootstrap(
    *,
    metadata: Optional[MetadataClient] = None,
    pod: Optional[PodSettings] = None,
    client_factory: ClientFactory = default_client_factory,
) -> Optional[StackdriverHook]:
    """Resolve the identity and install the hook. Not guarded; see init_hook().

    Returns ``None`` and touches nothing when not running on GCE. On success
    the hook is registered and the default output is discarded, so entries
    are delivered through Cloud Logging only.

    Raises:
        BootstrapError: any resolution or client construction failure
    """
    identity = resolve_identity(metadata or MetadataClient(), pod)
    if identity is None:
        return None

    hook = new_hook(identity, client_factory)
    add_hook(hook)
    set_output(DiscardSink())
    return hook


def init_hook(
    *,
    metadata: Optional[MetadataClient] = None,
    pod: Optional[PodSettings] = None,
    client_factory: ClientFactory = default_client_factory,
) -> Optional[StackdriverHook]:
    """Run :func:`bootstrap` at most once per process.

    Later calls, concurrent or not, return the first outcome: the same hook,
    ``None``, or the same error raised again. Unexpected failures are
    wrapped in a BootstrapError so they are never mistaken for "not on GCE".
    """
    global _initialized, _hook, _error
    with _init_lock:
        if not _initialized:
            _initialized = True
            try:
                _hook = bootstrap(metadata=metadata, pod=pod, client_factory=client_factory)
            except BootstrapError as exc:
                _error = exc
            except Exception as exc:
                _error = BootstrapError(f"bootstrap failed: {exc}", code="BOOTSTRAP_FAILED")
                _error.__cause__ = exc
        if _error is not None:
            raise _error
        return _hook


def reset_hook() -> None:
    """Forget the outcome of init_hook() (for tests)."""
    global _initialized, _hook, _error
    with _init_lock:
        _initialized = False
        _hook = None
        _error = None


def bootstrap_or_exit(**kwargs) -> Optional[StackdriverHook]:
    """Process entry point helper: init_hook(), exiting with status 1 on failure."""
    if not is_configured():
        configure_logging()
    try:
        return init_hook(**kwargs)
    except BootstrapError as exc:
        get_logger("gkelog.bootstrap").critical(str(exc), code=exc.code, **exc.details)
        raise SystemExit(1) from exc
