"""
gkelog: forward structured logs to Google Cloud Logging from GKE pods.

Call :func:`bootstrap_or_exit` once at process start. On GKE the hook is
registered and every log entry goes to Cloud Logging, tagged with the
cluster, namespace and component of the pod; elsewhere logging keeps
writing to stderr.
"""

from gkelog.bootstrap import bootstrap, bootstrap_or_exit, init_hook, reset_hook
from gkelog.logging import configure_logging, get_logger

__all__ = [
    "bootstrap",
    "bootstrap_or_exit",
    "configure_logging",
    "get_logger",
    "init_hook",
    "reset_hook",
]
