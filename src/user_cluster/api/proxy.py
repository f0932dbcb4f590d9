"""FastAPI application factory for the primary's reverse proxy."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse, StreamingResponse
from starlette.background import BackgroundTask

from user_cluster.adapters.worker_proxy import end_to_end_headers
from user_cluster.app_logging import configure_logging
from user_cluster.containers import ProxyContainer
from user_cluster.domain.errors import UpstreamProxyError

_FORWARDED_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def create_proxy_app(container: ProxyContainer) -> FastAPI:
    """Create the dispatcher app that spreads requests over the worker pool.

    Starting the app spawns the workers; shutting it down terminates them and
    closes the upstream HTTP session.
    """
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        state_container: ProxyContainer = app.state.container
        await state_container.pool.start()
        logger.info("Spawned workers on ports %s", state_container.pool.ports)
        try:
            yield
        finally:
            await state_container.pool.stop()
            await state_container.close_resources()

    app = FastAPI(
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        redirect_slashes=False,
    )
    app.state.container = container

    @app.exception_handler(UpstreamProxyError)
    async def handle_proxy_error(
        request: Request, exc: UpstreamProxyError
    ) -> PlainTextResponse:
        logger.error("Proxy error: %s", exc.message)
        return PlainTextResponse(
            UpstreamProxyError.default_message, status_code=exc.status_code
        )

    @app.api_route(
        "/{full_path:path}", methods=_FORWARDED_METHODS, include_in_schema=False
    )
    async def forward(request: Request) -> StreamingResponse:
        """Relay the request to a worker and stream its response back."""
        state_container: ProxyContainer = request.app.state.container
        port = state_container.selector.choose(state_container.pool.live_ports())
        raw_path = request.scope.get("raw_path") or request.url.path.encode()
        target = raw_path.split(b"?", 1)[0]
        if request.url.query:
            target += b"?" + request.url.query.encode()
        body = await request.body()
        upstream = await state_container.worker_proxy.send(
            port,
            request.method,
            target,
            request.headers.raw,
            body,
        )
        response = StreamingResponse(
            upstream.aiter_raw(),
            status_code=upstream.status_code,
            background=BackgroundTask(upstream.aclose),
        )
        response.raw_headers = end_to_end_headers(upstream.headers.raw)
        return response

    return app
