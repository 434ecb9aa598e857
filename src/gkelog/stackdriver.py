"""
Forwarding hook to Google Cloud Logging (Stackdriver).

Every entry of the host logging library is written to a Cloud Logging logger
named after the component, attached to a ``container`` monitored resource
labelled with the cluster and namespace.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Sequence

from google.cloud import logging as gcloud_logging
from google.cloud.logging_v2.resource import Resource

from gkelog.errors import ClientConstructionError
from gkelog.identity import Identity
from gkelog.logging import ALL_LEVELS, Entry, Hook, Level

RESOURCE_TYPE = "container"

ClientFactory = Callable[[str], Any]


class Severity(str, Enum):
    """Cloud Logging severities used by the hook."""

    DEFAULT = "DEFAULT"
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


_SEVERITIES = {
    Level.PANIC: Severity.CRITICAL,
    Level.FATAL: Severity.CRITICAL,
    Level.ERROR: Severity.ERROR,
    Level.WARN: Severity.WARNING,
    Level.INFO: Severity.INFO,
    Level.DEBUG: Severity.DEBUG,
}


def to_severity(level: Level | str) -> Severity:
    """Map a host level to a Cloud Logging severity; unknown levels give DEFAULT."""
    if not isinstance(level, Level):
        return Severity.DEFAULT
    return _SEVERITIES.get(level, Severity.DEFAULT)


def container_resource(cluster: str, namespace: str) -> Resource:
    return Resource(
        type=RESOURCE_TYPE,
        labels={
            "cluster_name": cluster,
            "namespace_id": namespace,
        },
    )


def default_client_factory(project_id: str) -> gcloud_logging.Client:
    return gcloud_logging.Client(project=project_id)


class StackdriverHook(Hook):
    """Hook writing each entry's message to Cloud Logging."""

    def __init__(self, identity: Identity, logger: Any) -> None:
        self._identity = identity
        self._logger = logger

    @property
    def identity(self) -> Identity:
        return self._identity

    def levels(self) -> Sequence[Level]:
        return ALL_LEVELS

    def fire(self, entry: Entry) -> None:
        # Fire and forget: delivery is up to the Cloud Logging client
        self._logger.log_text(entry.message, severity=to_severity(entry.level).value)


def new_hook(identity: Identity, client_factory: ClientFactory = default_client_factory) -> StackdriverHook:
    """Create the Cloud Logging client and the hook bound to ``identity``.

    Raises:
        ClientConstructionError: the client could not be created
    """
    try:
        client = client_factory(identity.project_id)
        logger = client.logger(
            identity.component,
            resource=container_resource(identity.cluster, identity.namespace),
        )
    except Exception as exc:
        raise ClientConstructionError(identity.project_id, exc) from exc

    return StackdriverHook(identity, logger)
