"""FastAPI application factory.

Creates and configures the FastAPI application with telemetry,
middleware and route registration. Run it with::

    uvicorn --factory weatherapi.api.app:create_app

or ``python -m weatherapi``.
"""

import random
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from weatherapi import __version__
from weatherapi.api.middleware.context import LoggingContextMiddleware
from weatherapi.api.routes import register_routes
from weatherapi.config import get_settings
from weatherapi.config.settings import Settings
from weatherapi.observability.logging import get_logger
from weatherapi.observability.telemetry import Telemetry, setup_telemetry
from weatherapi.observability.tracing import instrument_app, instrument_http_clients

logger = get_logger(__name__)


def create_app(
    settings: Settings | None = None,
    telemetry: Telemetry | None = None,
    rng: random.Random | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    This factory function creates a fully configured FastAPI app with:
    - OpenTelemetry trace and log pipelines (unless ``telemetry`` is given)
    - Server-span instrumentation for inbound requests
    - Request logging context middleware
    - Swagger UI in the development environment only
    - All routes registered

    Args:
        settings: Settings to use; loaded from config/ and the environment
            when omitted
        telemetry: Pre-built telemetry, e.g. with in-memory exporters
        rng: Random source shared by all requests

    Returns:
        Configured FastAPI application

    Raises:
        ConfigurationError: If settings are loaded here and are invalid
    """
    settings = settings or get_settings()

    if telemetry is None:
        telemetry = setup_telemetry(settings)
        telemetry.install_global()
        if telemetry.tracer_provider is not None:
            instrument_http_clients(telemetry.tracer_provider)

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
        logger.info("app_started", environment=settings.environment)
        yield
        telemetry.shutdown()

    docs_enabled = settings.is_development
    app = FastAPI(
        title="Weather API",
        description="Random five-day forecasts instrumented with OpenTelemetry",
        version=__version__,
        debug=settings.debug,
        docs_url=settings.api.docs_url if docs_enabled else None,
        redoc_url=None,
        openapi_url=settings.api.openapi_url if docs_enabled else None,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.telemetry = telemetry
    app.state.rng = rng or random.Random()

    app.add_middleware(LoggingContextMiddleware)

    register_routes(app, settings)

    # Add OpenTelemetry instrumentation
    if telemetry.tracer_provider is not None:
        instrument_app(app, telemetry.tracer_provider)
        logger.debug("opentelemetry_instrumentation_enabled")

    logger.info(
        "app_created",
        environment=settings.environment,
        docs_enabled=docs_enabled,
        diagnostic_routes=settings.api.diagnostic_routes,
    )

    return app
