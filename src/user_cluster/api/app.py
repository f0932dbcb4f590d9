"""FastAPI application factory for a worker."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from user_cluster.api.users import router as users_router
from user_cluster.app_logging import configure_logging
from user_cluster.containers import AppContainer
from user_cluster.domain.errors import InternalError, RouteNotFound, UserClusterError


def _error_response(error: UserClusterError) -> JSONResponse:
    return JSONResponse({"error": error.message}, status_code=error.status_code)


def create_app(container: AppContainer) -> FastAPI:
    """Create a worker app serving the user routes from the container's store."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    app = FastAPI(
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        redirect_slashes=False,
    )
    app.state.container = container

    app.include_router(users_router)

    @app.exception_handler(UserClusterError)
    async def handle_domain_error(
        request: Request, exc: UserClusterError
    ) -> JSONResponse:
        return _error_response(exc)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        # A known path with an unsupported method is a plain miss too.
        if exc.status_code in {404, 405}:
            return _error_response(RouteNotFound(request.method, request.url.path))
        return JSONResponse(
            {"error": exc.detail}, status_code=exc.status_code, headers=exc.headers
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            "Unexpected error handling %s %s",
            request.method,
            request.url.path,
            exc_info=exc,
        )
        return _error_response(InternalError(exc))

    return app
