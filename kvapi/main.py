# kvapi/main.py
"""
Process entrypoint: configure logging/telemetry, assemble the container,
and serve the FastAPI app with uvicorn.

    python -m kvapi.main        # or the `kvapi` console script
"""
from typing import Optional

import structlog
import uvicorn
from fastapi import FastAPI

from kvapi.adapters.api.main import create_app
from kvapi.shared.config import StorageBackend, settings
from kvapi.shared.container import Container
from kvapi.shared.logging_config import configure_logging
from kvapi.shared.telemetry import setup_telemetry

logger = structlog.get_logger()


def build_app(container: Optional[Container] = None) -> FastAPI:
    """Wires the container's use cases into the HTTP adapter."""
    container = container or Container()

    backend = StorageBackend(container.config.STORAGE_BACKEND()).value
    item_service = container.item_service()

    # Every later log line (request handlers included) carries these
    structlog.contextvars.bind_contextvars(
        service=container.config.APP_NAME(),
        backend=backend,
        collection=item_service.collection if item_service is not None else None,
    )

    if item_service is not None:
        logger.info("item_routes_enabled")
    else:
        logger.info("item_routes_disabled")

    return create_app(
        health_aggregator=container.health_aggregator(),
        item_service=item_service,
        settings=settings,
    )


def main() -> None:
    configure_logging(settings)
    setup_telemetry(settings)

    app = build_app()

    logger.info("starting_api_server", host=settings.HOST, port=settings.PORT, env=settings.APP_ENV.value)
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
