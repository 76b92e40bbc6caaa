"""Observation layer: read cluster state and flatten it into a Snapshot."""

from kubepulse.observation.collector import (
    ClusterReader,
    MetricsReader,
    SnapshotCollector,
    probe_metrics_api,
)
from kubepulse.observation.models import (
    DeploymentInfo,
    NodeInfo,
    NodeMetrics,
    PodInfo,
    Snapshot,
)

__all__ = [
    "ClusterReader",
    "DeploymentInfo",
    "MetricsReader",
    "NodeInfo",
    "NodeMetrics",
    "PodInfo",
    "Snapshot",
    "SnapshotCollector",
    "probe_metrics_api",
]
