"""CLI entrypoint for the kubepulse server."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import uvicorn
from kubernetes.config import ConfigException
from pydantic import ValidationError
from rich.logging import RichHandler

from kubepulse import __version__
from kubepulse.api import create_app
from kubepulse.config import get_settings
from kubepulse.observation import SnapshotCollector


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="kubepulse: serve a JSON snapshot of nodes, pods, deployments and node usage.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--kubeconfig",
        type=Path,
        default=None,
        help="Path to kubeconfig when not running in-cluster (default: KUBECONFIG env or ~/.kube/config)",
    )
    parser.add_argument(
        "--context",
        default=None,
        help="Kubernetes context to use",
    )
    parser.add_argument("--host", default=None, help="Address to listen on (default: from env or 0.0.0.0)")
    parser.add_argument("--port", type=int, default=None, help="Port to listen on (default: from env or 8080)")
    parser.add_argument(
        "--static-dir",
        type=Path,
        default=None,
        help="Directory with the UI bundle served at / (default: bundled placeholder)",
    )
    parser.add_argument(
        "--request-timeout",
        type=float,
        default=None,
        help="Timeout in seconds for each Kubernetes list call",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Entrypoint for kubepulse CLI."""
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True)],
    )
    logger = logging.getLogger("kubepulse")

    overrides = {
        "kubeconfig": args.kubeconfig,
        "context": args.context,
        "host": args.host,
        "port": args.port,
        "static_dir": args.static_dir,
        "request_timeout": args.request_timeout,
    }
    try:
        settings = get_settings(**{k: v for k, v in overrides.items() if v is not None})
    except ValidationError as e:
        logger.error("Invalid settings:\n%s", e)
        return 2

    try:
        collector = SnapshotCollector.from_kube_config(
            kubeconfig=str(settings.kubeconfig) if settings.kubeconfig else None,
            context=settings.context,
            request_timeout=settings.request_timeout,
        )
    except ConfigException:
        logger.exception("Could not load Kubernetes configuration")
        return 2

    app = create_app(collector, settings)
    logger.info("Listening on %s:%d", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)
    return 0


if __name__ == "__main__":
    sys.exit(main())
