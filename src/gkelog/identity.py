"""
Runtime identity of the process: which project, cluster, namespace and
component it belongs to.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from gkelog.config import PodSettings
from gkelog.errors import MetadataError, MissingEnvironmentError, PatternMismatchError
from gkelog.platform import MetadataClient

# gke-<cluster>-<pool name>-pool-<suffix>
CLUSTER_PATTERN = re.compile(r"^gke-(.+)-.+-pool-.+")
# <component>-<replica set hash>-<pod suffix>
COMPONENT_PATTERN = re.compile(r"^(.+)-.+-.+")


@dataclass(frozen=True)
class Identity:
    project_id: str
    cluster: str
    namespace: str
    component: str


def _extract(pattern: re.Pattern[str], value: str, what: str) -> str:
    match = pattern.match(value)
    if match is None or len(match.groups()) != 1 or not match.group(1):
        raise PatternMismatchError(
            f"Convert {what} failed: {value!r} does not match {pattern.pattern}",
            value=value,
            pattern=pattern.pattern,
        )
    return match.group(1)


def to_cluster_id(instance_name: str) -> str:
    """``gke-mycluster-abc-pool-xyz`` -> ``mycluster``"""
    return _extract(CLUSTER_PATTERN, instance_name, "instance to cluster id")


def to_component_name(pod_name: str) -> str:
    """``myservice-7d9f-abcde`` -> ``myservice``"""
    return _extract(COMPONENT_PATTERN, pod_name, "pod name to component name")


def resolve_identity(metadata: MetadataClient, pod: PodSettings | None = None) -> Identity | None:
    """Resolve the identity, or return ``None`` when not running on GCE.

    Raises:
        MetadataError: project id or instance name lookup failed
        MissingEnvironmentError: POD_NAMESPACE or POD_NAME is empty
        PatternMismatchError: instance or pod name has an unexpected shape
    """
    if not metadata.on_gce():
        return None

    project_id = metadata.project_id()
    if not project_id:
        raise MetadataError("metadata: empty project id", path="project/project-id")
    instance = metadata.instance_name()

    pod = pod or PodSettings()
    if not pod.namespace:
        raise MissingEnvironmentError("POD_NAMESPACE")
    if not pod.name:
        raise MissingEnvironmentError("POD_NAME")

    return Identity(
        project_id=project_id,
        cluster=to_cluster_id(instance),
        namespace=pod.namespace,
        component=to_component_name(pod.name),
    )
