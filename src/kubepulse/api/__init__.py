"""HTTP API for the dashboard."""

from kubepulse.api.app import create_app

__all__ = ["create_app"]
