"""
Interceptors for capturing standard library logs.
"""

import logging

from .core import get_logger

# Loggers used by the Cloud Logging client and its transports. Their records
# are never routed back into the hook pipeline, a hook write must not log
# into itself.
TRANSPORT_LOGGER_PREFIXES = (
    "google.cloud",
    "google.api_core",
    "google.auth",
    "grpc",
    "urllib3",
    "httpx",
    "httpcore",
)


class RedirectStdLibHandler(logging.Handler):
    """
    Redirect standard library logging events to structlog so that records
    from third-party libraries reach the registered hooks and the output sink.
    """

    def emit(self, record: logging.LogRecord) -> None:
        try:
            if "structlog" in record.name or record.name.startswith(TRANSPORT_LOGGER_PREFIXES):
                return

            # Format message using stdlib's formatting (handles %s args)
            msg = self.format(record)
            logger = get_logger(record.name or "stdlib")
            logger.log(getattr(logging, record.levelname, logging.INFO), msg)
        except Exception:
            self.handleError(record)


def intercept_stdlib(level: int) -> None:
    """Replace the root logger's handlers with the redirect handler."""
    root_logger = logging.getLogger()
    root_logger.handlers = []
    root_logger.setLevel(level)
    root_logger.addHandler(RedirectStdLibHandler())
