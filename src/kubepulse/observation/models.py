"""Reporting models for the cluster snapshot served to the dashboard."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class NodeInfo(BaseModel):
    """Node identity, roles, readiness and capacity."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    roles: list[str] = Field(default_factory=list)
    ready: bool = False
    cpu_capacity: str = Field(default="0", alias="cpuCapacity")
    memory_capacity: str = Field(default="0", alias="memCapacity")


class NodeMetrics(BaseModel):
    """Point-in-time node usage from the metrics API."""

    name: str
    cpu: str = "0"
    memory: str = "0"


class PodInfo(BaseModel):
    """Summary of a pod."""

    name: str
    namespace: str
    phase: str  # Pending | Running | Succeeded | Failed | Unknown
    restarts: int = 0
    node: str = ""


class DeploymentInfo(BaseModel):
    """Deployment replica summary."""

    name: str
    namespace: str
    desired: int = 0
    ready: int = 0


class Snapshot(BaseModel):
    """Everything returned by one call to the metrics endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    nodes: list[NodeInfo] = Field(default_factory=list)
    pods: list[PodInfo] = Field(default_factory=list)
    deployments: list[DeploymentInfo] = Field(default_factory=list)
    node_metrics: list[NodeMetrics] | None = Field(
        default=None,
        alias="nodeMetrics",
        description="None when the metrics API is absent or its query failed",
    )

    def to_payload(self) -> dict[str, Any]:
        """Render as the JSON document served by the API (nodeMetrics omitted when None)."""
        return self.model_dump(by_alias=True, exclude_none=True)
