"""Process entry points: standalone server, cluster primary and worker."""

import logging
import os
from collections.abc import Callable

import uvicorn
from fastapi import FastAPI

from user_cluster.api.app import create_app
from user_cluster.api.proxy import create_proxy_app
from user_cluster.app_logging import configure_logging
from user_cluster.config import Settings
from user_cluster.containers import build_container, build_proxy_container

logger = logging.getLogger(__name__)

Serve = Callable[..., None]


def _serve_with_uvicorn(app: FastAPI, host: str, port: int) -> None:
    uvicorn.run(app, host=host, port=port)


def run_standalone(settings: Settings, serve: Serve = _serve_with_uvicorn) -> None:
    """Serve the user API from a single process on the base port."""
    configure_logging(settings.log_level)
    app = create_app(build_container(settings))
    logger.info("Server running at http://%s:%s", settings.host, settings.port)
    serve(app, host=settings.host, port=settings.port)


def run_worker(settings: Settings, serve: Serve = _serve_with_uvicorn) -> None:
    """Serve the user API on the port assigned by the primary."""
    if settings.worker_port is None:
        raise ValueError("WORKER_PORT must be set for a cluster worker")
    configure_logging(settings.log_level)
    app = create_app(build_container(settings))
    logger.info("Worker %s started on port %s", os.getpid(), settings.worker_port)
    serve(app, host=settings.host, port=settings.worker_port)


def run_primary(settings: Settings, serve: Serve = _serve_with_uvicorn) -> None:
    """Spawn the workers and run the load-balancing proxy on the base port."""
    configure_logging(settings.log_level)
    container = build_proxy_container(settings)
    app = create_proxy_app(container)
    logger.info("Primary %s is running", os.getpid())
    logger.info(
        "Load balancer listening on port %s (%s workers, %s selection)",
        settings.port,
        len(container.pool.ports),
        settings.balancing_strategy,
    )
    serve(app, host=settings.host, port=settings.port)


def run_cluster(settings: Settings, serve: Serve = _serve_with_uvicorn) -> None:
    """Take the worker role when spawned by a primary, the primary role otherwise."""
    if settings.is_worker:
        run_worker(settings, serve)
    else:
        run_primary(settings, serve)
