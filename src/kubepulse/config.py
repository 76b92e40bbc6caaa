"""Configuration and environment for the kubepulse server."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_STATIC_DIR = Path(__file__).parent / "static"


class Settings(BaseSettings):
    """Server settings loaded from environment and .env."""

    model_config = SettingsConfigDict(
        env_prefix="KUBEPULSE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Kubernetes
    kubeconfig: Path | None = Field(
        default=None,
        description="Path to kubeconfig; only used when not running in-cluster",
    )
    context: str | None = Field(default=None, description="Kubernetes context to use")
    request_timeout: float | None = Field(
        default=None,
        gt=0,
        description="Client-side timeout in seconds for each list call (unset: no timeout)",
    )

    # HTTP
    host: str = Field(default="0.0.0.0", description="Address to listen on")
    port: int = Field(default=8080, ge=1, le=65535, description="Port to listen on")
    static_dir: Path = Field(
        default=DEFAULT_STATIC_DIR,
        description="Directory holding the prebuilt UI bundle served at /",
    )


def get_settings(**overrides: Any) -> Settings:
    """Return validated settings instance; keyword overrides take precedence over env."""
    return Settings(**overrides)
