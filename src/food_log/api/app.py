"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, JSONResponse, Response

from food_log.api.pages import render_error, render_page
from food_log.api.pages import router as pages_router
from food_log.api.routes import router as api_router
from food_log.app_logging import configure_logging
from food_log.containers import AppContainer
from food_log.errors import (
    FoodLogError,
    IntegrityError,
    NotFoundError,
    StorageFault,
    ValidationError,
)

INTERNAL_ERROR = 500

_STATUS_CODES: dict[type[FoodLogError], int] = {
    ValidationError: 422,
    NotFoundError: 404,
    IntegrityError: 409,
    StorageFault: 500,
}


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info(
            "Serving food log: environment=%s db_path=%s",
            container.settings.environment,
            container.database.path,
        )
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(api_router)
    app.include_router(pages_router)

    @app.exception_handler(FoodLogError)
    async def food_log_error_handler(request: Request, exc: FoodLogError) -> Response:
        """Map domain errors to HTTP responses."""
        status_code = status_for_error(exc)
        if status_code >= INTERNAL_ERROR:
            logger.error(
                "Storage failure on %s %s",
                request.method,
                request.url.path,
                exc_info=exc,
            )
        else:
            logger.info(
                "Request rejected: path=%s error=%s: %s",
                request.url.path,
                type(exc).__name__,
                exc.message,
            )
        if request.url.path.startswith("/api"):
            return JSONResponse(
                {"error": type(exc).__name__, "detail": exc.message},
                status_code=status_code,
            )
        return HTMLResponse(
            render_page(render_error("Error", exc.message)),
            status_code=status_code,
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app


def status_for_error(exc: FoodLogError) -> int:
    """Return the HTTP status for a domain error."""
    for error_type, status_code in _STATUS_CODES.items():
        if isinstance(exc, error_type):
            return status_code
    return INTERNAL_ERROR
