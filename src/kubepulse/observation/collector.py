"""Collect nodes, pods, deployments and node usage into a Snapshot."""

from __future__ import annotations

import logging
from typing import Any, Callable, TypeVar

from kubernetes import client, config

from kubepulse.observation.models import Snapshot
from kubepulse.observation.translators import (
    build_deployment_info,
    build_node_info,
    build_node_metrics,
    build_pod_info,
)

logger = logging.getLogger(__name__)

METRICS_GROUP = "metrics.k8s.io"
METRICS_VERSION = "v1beta1"

T = TypeVar("T")


def load_kube_config(kubeconfig: str | None = None, context: str | None = None) -> client.Configuration:
    """Load in-cluster or kubeconfig-based configuration.

    Raises ``config.ConfigException`` when neither is usable.
    """
    try:
        config.load_incluster_config()
        logger.info("Loaded in-cluster Kubernetes config")
        return client.Configuration.get_default_copy()
    except config.ConfigException:
        pass
    kwargs: dict[str, Any] = {}
    if kubeconfig:
        kwargs["config_file"] = str(kubeconfig)
    if context:
        kwargs["context"] = context
    config.load_kube_config(**kwargs)
    logger.info("Loaded kubeconfig%s", f" (context={context})" if context else "")
    return client.Configuration.get_default_copy()


def _call_opts(request_timeout: float | None) -> dict[str, Any]:
    return {"_request_timeout": request_timeout} if request_timeout is not None else {}


def _reason(exc: Exception) -> str:
    return str(getattr(exc, "reason", None) or exc)


class ClusterReader:
    """Cluster-wide list calls against the core and apps APIs."""

    def __init__(
        self,
        core: client.CoreV1Api,
        apps: client.AppsV1Api,
        request_timeout: float | None = None,
    ) -> None:
        self._core = core
        self._apps = apps
        self._opts = _call_opts(request_timeout)

    def list_nodes(self) -> list[Any]:
        return self._core.list_node(**self._opts).items

    def list_pods(self) -> list[Any]:
        return self._core.list_pod_for_all_namespaces(**self._opts).items

    def list_deployments(self) -> list[Any]:
        return self._apps.list_deployment_for_all_namespaces(**self._opts).items


class MetricsReader:
    """Node usage from the metrics aggregation API (metrics-server)."""

    def __init__(self, custom: client.CustomObjectsApi, request_timeout: float | None = None) -> None:
        self._custom = custom
        self._opts = _call_opts(request_timeout)

    def list_node_metrics(self) -> list[dict[str, Any]]:
        result = self._custom.list_cluster_custom_object(
            group=METRICS_GROUP,
            version=METRICS_VERSION,
            plural="nodes",
            **self._opts,
        )
        return result.get("items") or []


def probe_metrics_api(api_client: client.ApiClient) -> bool:
    """Return True if the cluster serves the metrics.k8s.io API group.

    Called once at startup; the answer holds for the life of the process.
    """
    try:
        groups = client.ApisApi(api_client).get_api_versions().groups or []
    except Exception as e:
        logger.warning("Metrics API discovery failed, node usage disabled: %s", _reason(e))
        logger.debug("Metrics API discovery error", exc_info=True)
        return False
    available = any(g.name == METRICS_GROUP for g in groups)
    if available:
        logger.info("Metrics API %s/%s available", METRICS_GROUP, METRICS_VERSION)
    else:
        logger.warning("Metrics API %s not served by this cluster, node usage disabled", METRICS_GROUP)
    return available


def _attempt(what: str, fetch: Callable[[], list[Any]], build: Callable[[Any], T]) -> list[T] | None:
    """Run one list query and translate its items; None if the query failed."""
    try:
        items = fetch()
    except Exception as e:
        logger.warning("Failed to list %s: %s", what, _reason(e))
        logger.debug("List %s error", what, exc_info=True)
        return None
    return [build(item) for item in items]


class SnapshotCollector:
    """Builds one Snapshot per call from independent, failure-tolerant queries."""

    def __init__(self, cluster: ClusterReader, metrics: MetricsReader | None = None) -> None:
        self.cluster = cluster
        self.metrics = metrics

    @classmethod
    def from_kube_config(
        cls,
        kubeconfig: str | None = None,
        context: str | None = None,
        request_timeout: float | None = None,
    ) -> SnapshotCollector:
        """Connect to the cluster and decide once whether node usage is available."""
        cfg = load_kube_config(kubeconfig, context)
        api_client = client.ApiClient(cfg)
        cluster = ClusterReader(
            client.CoreV1Api(api_client),
            client.AppsV1Api(api_client),
            request_timeout=request_timeout,
        )
        metrics = None
        if probe_metrics_api(api_client):
            metrics = MetricsReader(client.CustomObjectsApi(api_client), request_timeout=request_timeout)
        return cls(cluster, metrics)

    @property
    def metrics_enabled(self) -> bool:
        return self.metrics is not None

    def collect(self) -> Snapshot:
        """Run all queries in sequence; a failed query contributes its empty default."""
        nodes = _attempt("nodes", self.cluster.list_nodes, build_node_info)
        pods = _attempt("pods", self.cluster.list_pods, build_pod_info)
        deployments = _attempt("deployments", self.cluster.list_deployments, build_deployment_info)
        node_metrics = None
        if self.metrics is not None:
            node_metrics = _attempt("node metrics", self.metrics.list_node_metrics, build_node_metrics)

        snapshot = Snapshot(
            nodes=nodes or [],
            pods=pods or [],
            deployments=deployments or [],
            node_metrics=node_metrics,
        )
        logger.debug(
            "Snapshot: %d nodes, %d pods, %d deployments, node metrics %s",
            len(snapshot.nodes),
            len(snapshot.pods),
            len(snapshot.deployments),
            "absent" if node_metrics is None else len(node_metrics),
        )
        return snapshot
