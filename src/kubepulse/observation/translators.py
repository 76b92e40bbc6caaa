"""Map raw Kubernetes objects to snapshot records.

Every builder tolerates missing data: absent metadata, empty label maps,
missing condition or container-status lists all fall back to fixed defaults.
"""

from __future__ import annotations

from typing import Any

from kubepulse.observation.models import DeploymentInfo, NodeInfo, NodeMetrics, PodInfo

# Upstream renders an unset quantity as the canonical zero.
ZERO_QUANTITY = "0"

# Checked in this order; each role is emitted at most once.
NODE_ROLE_LABELS: tuple[tuple[str, str], ...] = (
    ("node-role.kubernetes.io/control-plane", "control-plane"),
    ("node-role.kubernetes.io/master", "control-plane"),
    ("node-role.kubernetes.io/worker", "worker"),
)
DEFAULT_NODE_ROLE = "worker"


def _quantity(resources: dict[str, Any] | None, key: str) -> str:
    """Return the quantity string for key exactly as the API rendered it."""
    value = (resources or {}).get(key)
    if value is None or value == "":
        return ZERO_QUANTITY
    return str(value)


def node_roles(labels: dict[str, str] | None) -> list[str]:
    """Derive normalized roles from node labels."""
    labels = labels or {}
    roles: list[str] = []
    for key, role in NODE_ROLE_LABELS:
        if key in labels and role not in roles:
            roles.append(role)
    return roles or [DEFAULT_NODE_ROLE]


def node_ready(conditions: list[Any] | None) -> bool:
    """True only when a Ready condition is explicitly "True"."""
    ready = False
    for c in conditions or []:
        if getattr(c, "type", None) == "Ready":
            ready = getattr(c, "status", None) == "True"
    return ready


def build_node_info(node: Any) -> NodeInfo:
    """Build NodeInfo from V1Node."""
    meta = getattr(node, "metadata", None)
    status = getattr(node, "status", None)
    capacity = getattr(status, "capacity", None)
    return NodeInfo(
        name=getattr(meta, "name", None) or "",
        roles=node_roles(getattr(meta, "labels", None)),
        ready=node_ready(getattr(status, "conditions", None)),
        cpu_capacity=_quantity(capacity, "cpu"),
        memory_capacity=_quantity(capacity, "memory"),
    )


def build_pod_info(pod: Any) -> PodInfo:
    """Build PodInfo from V1Pod."""
    meta = getattr(pod, "metadata", None)
    status = getattr(pod, "status", None)
    restarts = sum(
        getattr(cs, "restart_count", 0) or 0
        for cs in getattr(status, "container_statuses", None) or []
    )
    return PodInfo(
        name=getattr(meta, "name", None) or "",
        namespace=getattr(meta, "namespace", None) or "",
        phase=getattr(status, "phase", None) or "",
        restarts=restarts,
        node=getattr(getattr(pod, "spec", None), "node_name", None) or "",
    )


def build_deployment_info(deployment: Any) -> DeploymentInfo:
    """Build DeploymentInfo from V1Deployment.

    An unset ``spec.replicas`` and an explicit zero both report desired=0.
    """
    meta = getattr(deployment, "metadata", None)
    spec = getattr(deployment, "spec", None)
    status = getattr(deployment, "status", None)
    return DeploymentInfo(
        name=getattr(meta, "name", None) or "",
        namespace=getattr(meta, "namespace", None) or "",
        desired=getattr(spec, "replicas", None) or 0,
        ready=getattr(status, "ready_replicas", None) or 0,
    )


def build_node_metrics(item: dict[str, Any]) -> NodeMetrics:
    """Build NodeMetrics from a metrics.k8s.io NodeMetrics item (a plain dict)."""
    usage = item.get("usage") or {}
    return NodeMetrics(
        name=(item.get("metadata") or {}).get("name") or "",
        cpu=_quantity(usage, "cpu"),
        memory=_quantity(usage, "memory"),
    )
