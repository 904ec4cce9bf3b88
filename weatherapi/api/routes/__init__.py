"""API route registration.

This module provides helper functions for registering API routers
with the FastAPI application.
"""

from fastapi import FastAPI

from weatherapi.config.settings import Settings
from weatherapi.observability.logging import get_logger

logger = get_logger(__name__)


def register_routes(app: FastAPI, settings: Settings) -> None:
    """Register all routes with the FastAPI application.

    Args:
        app: FastAPI application instance
        settings: Settings deciding which optional routes are exposed
    """
    from weatherapi.api.routes.forecast import diagnostics_router
    from weatherapi.api.routes.forecast import router as forecast_router
    from weatherapi.api.routes.health import get_metrics
    from weatherapi.api.routes.health import router as health_router

    app.include_router(forecast_router, tags=["WeatherForecast"])

    if settings.api.diagnostic_routes:
        app.include_router(diagnostics_router, tags=["Diagnostics"])

    app.include_router(health_router, tags=["Health"])

    if settings.observability.metrics.enabled:
        app.add_api_route(
            settings.observability.metrics.path,
            get_metrics,
            methods=["GET"],
            tags=["Health"],
        )

    logger.debug(
        "routes_registered",
        diagnostic_routes=settings.api.diagnostic_routes,
        metrics=settings.observability.metrics.enabled,
    )
