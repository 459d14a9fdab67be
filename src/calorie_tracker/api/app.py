"""FastAPI application factory."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from calorie_tracker.api.admin import router as admin_router
from calorie_tracker.api.catalog import router as catalog_router
from calorie_tracker.api.tracking import router as tracking_router
from calorie_tracker.app_logging import configure_logging
from calorie_tracker.containers import AppContainer
from calorie_tracker.domain.errors import (
    ForbiddenError,
    InvalidReferenceError,
    NotFoundError,
    ValidationError,
)


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    app = FastAPI(title="Calorie Tracker")
    app.state.container = container

    app.include_router(admin_router)
    app.include_router(catalog_router)
    app.include_router(tracking_router)

    @app.exception_handler(ValidationError)
    async def validation_error(_: Request, exc: ValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"detail": str(exc)},
        )

    @app.exception_handler(NotFoundError)
    async def not_found(_: Request, exc: NotFoundError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)}
        )

    @app.exception_handler(ForbiddenError)
    async def forbidden(_: Request, exc: ForbiddenError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_403_FORBIDDEN, content={"detail": str(exc)}
        )

    @app.exception_handler(InvalidReferenceError)
    async def invalid_reference(
        request: Request, exc: InvalidReferenceError
    ) -> JSONResponse:
        logger.error(
            "Invalid reference data while handling %s",
            request.url.path,
            exc_info=exc,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Stored nutrition data is inconsistent"},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
