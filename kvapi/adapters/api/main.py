# kvapi/adapters/api/main.py
from typing import Optional

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from kvapi import __version__
from kvapi.adapters.api.routers import health, items
from kvapi.core.domain.exceptions import (
    DomainError,
    InvalidArgumentError,
    NotFoundError,
    ServiceNotConfiguredError,
)
from kvapi.core.use_cases.check_health import HealthAggregator
from kvapi.core.use_cases.item_crud import ItemService
from kvapi.shared.config import Settings, settings as default_settings
from kvapi.shared.telemetry import instrument_fastapi

logger = structlog.get_logger()

# Framework-level statuses get fixed, client-safe messages
_HTTP_ERROR_MESSAGES = {
    status.HTTP_404_NOT_FOUND: "route not found",
    status.HTTP_405_METHOD_NOT_ALLOWED: "method not allowed",
}


def _error(status_code: int, message: str, headers: Optional[dict] = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


def register_exception_handlers(app: FastAPI) -> None:
    """
    The single place where error kinds become HTTP statuses.
    Every layer below raises domain exceptions and stays transport-agnostic.
    """

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        message = _HTTP_ERROR_MESSAGES.get(exc.status_code, str(exc.detail))
        return _error(exc.status_code, message, headers=getattr(exc, "headers", None))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return _error(status.HTTP_400_BAD_REQUEST, "invalid request")

    @app.exception_handler(ServiceNotConfiguredError)
    async def not_configured_handler(request: Request, exc: ServiceNotConfiguredError):
        return _error(status.HTTP_404_NOT_FOUND, exc.message)

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        return _error(status.HTTP_404_NOT_FOUND, exc.message)

    @app.exception_handler(InvalidArgumentError)
    async def invalid_argument_handler(request: Request, exc: InvalidArgumentError):
        return _error(status.HTTP_400_BAD_REQUEST, exc.message)

    @app.exception_handler(DomainError)
    async def domain_error_handler(request: Request, exc: DomainError):
        # Unavailable and friends: message is already sanitized by the adapter
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, exc.message)

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error("unhandled_exception", path=request.url.path, error=str(exc), exc_info=True)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "internal server error")


def create_app(
    health_aggregator: HealthAggregator,
    item_service: Optional[ItemService] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    """
    Factory function to create the FastAPI application.

    Args:
        health_aggregator: always required; backs GET /health.
        item_service: optional; when None the /items routes answer
            404 "item service not configured".
        settings: defaults to the process-wide settings.
    """
    settings = settings or default_settings

    app = FastAPI(
        title=settings.APP_NAME,
        version=__version__,
        description="CRUD over a key-value collection, plus aggregated health",
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url=None,
        openapi_url="/openapi.json" if settings.DEBUG else None,
        redirect_slashes=False,
    )

    app.state.health_aggregator = health_aggregator
    app.state.item_service = item_service
    app.state.default_list_limit = settings.DEFAULT_LIST_LIMIT

    register_exception_handlers(app)
    instrument_fastapi(app, settings)

    app.include_router(health.router)
    app.include_router(items.router)

    return app
