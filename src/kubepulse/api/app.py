"""HTTP surface: the snapshot endpoint plus the static UI bundle."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from kubepulse import __version__
from kubepulse.config import Settings, get_settings
from kubepulse.observation import SnapshotCollector

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Cluster Snapshot"])


def get_collector(request: Request) -> SnapshotCollector:
    return request.app.state.collector


@router.get("/metrics")
def get_metrics(collector: SnapshotCollector = Depends(get_collector)) -> JSONResponse:
    """
    Return nodes, pods, deployments and (when available) node usage.

    Always 200: a query that fails upstream shows up as an empty list,
    or as a missing nodeMetrics key for node usage.
    """
    return JSONResponse(content=collector.collect().to_payload())


def create_app(collector: SnapshotCollector, settings: Settings | None = None) -> FastAPI:
    opts = settings or get_settings()
    app = FastAPI(
        title="kubepulse",
        version=__version__,
        description="Read-only cluster snapshot for the kubepulse dashboard",
    )
    app.state.collector = collector
    app.include_router(router)

    # Mounted last so /api routes take precedence over the catch-all.
    if opts.static_dir.is_dir():
        app.mount("/", StaticFiles(directory=opts.static_dir, html=True), name="static")
    else:
        logger.warning("Static bundle directory %s not found; serving API only", opts.static_dir)
    return app
