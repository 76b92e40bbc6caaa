"""Builders for fake Kubernetes API objects."""

from types import SimpleNamespace
from typing import Any
from unittest.mock import MagicMock

import pytest
from kubernetes.client.rest import ApiException

from kubepulse.observation.collector import ClusterReader, MetricsReader


def make_node(
    name: str = "node-1",
    labels: dict[str, str] | None = None,
    conditions: list[tuple[str, str]] | None = None,
    capacity: dict[str, str] | None = None,
) -> SimpleNamespace:
    """V1Node-shaped object; conditions are (type, status) pairs."""
    return SimpleNamespace(
        metadata=SimpleNamespace(name=name, labels=labels),
        status=SimpleNamespace(
            capacity=capacity,
            conditions=[SimpleNamespace(type=t, status=s) for t, s in conditions] if conditions is not None else None,
        ),
    )


def make_pod(
    name: str = "web-1",
    namespace: str = "default",
    phase: str | None = "Running",
    restarts: list[int | None] | None = None,
    node_name: str | None = "node-1",
) -> SimpleNamespace:
    """V1Pod-shaped object; restarts holds one restart_count per container status."""
    statuses = None
    if restarts is not None:
        statuses = [SimpleNamespace(name=f"c{i}", restart_count=r) for i, r in enumerate(restarts)]
    return SimpleNamespace(
        metadata=SimpleNamespace(name=name, namespace=namespace),
        spec=SimpleNamespace(node_name=node_name),
        status=SimpleNamespace(phase=phase, container_statuses=statuses),
    )


def make_deployment(
    name: str = "web",
    namespace: str = "default",
    replicas: int | None = 2,
    ready_replicas: int | None = 2,
) -> SimpleNamespace:
    return SimpleNamespace(
        metadata=SimpleNamespace(name=name, namespace=namespace),
        spec=SimpleNamespace(replicas=replicas),
        status=SimpleNamespace(ready_replicas=ready_replicas),
    )


def make_node_metrics(name: str = "node-1", cpu: str = "250m", memory: str = "1024Mi") -> dict[str, Any]:
    return {
        "kind": "NodeMetrics",
        "apiVersion": "metrics.k8s.io/v1beta1",
        "metadata": {"name": name},
        "timestamp": "2024-01-01T00:00:00Z",
        "window": "10s",
        "usage": {"cpu": cpu, "memory": memory},
    }


def api_error(status: int = 500, reason: str = "Internal Server Error") -> ApiException:
    return ApiException(status=status, reason=reason)


@pytest.fixture
def cluster_reader() -> MagicMock:
    """ClusterReader double returning one node, one pod and one deployment."""
    reader = MagicMock(spec=ClusterReader)
    reader.list_nodes.return_value = [
        make_node(
            labels={"node-role.kubernetes.io/control-plane": ""},
            conditions=[("Ready", "True")],
            capacity={"cpu": "4", "memory": "16Gi"},
        )
    ]
    reader.list_pods.return_value = [make_pod(restarts=[1, 2])]
    reader.list_deployments.return_value = [make_deployment()]
    return reader


@pytest.fixture
def metrics_reader() -> MagicMock:
    reader = MagicMock(spec=MetricsReader)
    reader.list_node_metrics.return_value = [make_node_metrics()]
    return reader
