"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from bitelog.api.categories import router as categories_router
from bitelog.api.foods import router as foods_router
from bitelog.api.meals import router as meals_router
from bitelog.app_logging import configure_logging
from bitelog.containers import AppContainer
from bitelog.domain.errors import (
    ConstraintViolationError,
    CyclicDependencyError,
    DataAccessError,
    DuplicateNameError,
    IngredientNotFoundError,
    InvalidFoodItemError,
    InvalidMealEntryError,
)

_STATUS_BY_ERROR: dict[type[Exception], int] = {
    CyclicDependencyError: status.HTTP_422_UNPROCESSABLE_ENTITY,
    IngredientNotFoundError: status.HTTP_422_UNPROCESSABLE_ENTITY,
    InvalidFoodItemError: status.HTTP_422_UNPROCESSABLE_ENTITY,
    InvalidMealEntryError: status.HTTP_422_UNPROCESSABLE_ENTITY,
    DuplicateNameError: status.HTTP_409_CONFLICT,
    ConstraintViolationError: status.HTTP_409_CONFLICT,
    DataAccessError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(categories_router)
    app.include_router(foods_router)
    app.include_router(meals_router)

    async def domain_error_handler(request: Request, exc: Exception) -> JSONResponse:
        status_code = _status_for(exc)
        if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error(
                "Storage failure on %s %s: %s", request.method, request.url.path, exc
            )
        else:
            logger.warning(
                "Rejected %s %s: %s", request.method, request.url.path, exc
            )
        return JSONResponse(
            status_code=status_code,
            content={"error": type(exc).__name__, "detail": str(exc)},
        )

    for error_type in _STATUS_BY_ERROR:
        app.add_exception_handler(error_type, domain_error_handler)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app


def _status_for(exc: Exception) -> int:
    for error_type in type(exc).__mro__:
        if error_type in _STATUS_BY_ERROR:
            return _STATUS_BY_ERROR[error_type]
    return status.HTTP_500_INTERNAL_SERVER_ERROR
