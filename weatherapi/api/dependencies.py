"""Dependency injection for API routes.

Process-level collaborators (settings, telemetry, random source) are built
once by the application factory and stored on ``app.state``. Routes receive
them through these dependencies, which tests can replace with
``app.dependency_overrides``.
"""

import random
from typing import Annotated

from fastapi import Depends, Request

from weatherapi.api.services.forecast import ForecastService
from weatherapi.config.settings import Settings
from weatherapi.observability.telemetry import Telemetry


def get_settings(request: Request) -> Settings:
    """Get the settings the application was created with."""
    settings: Settings = request.app.state.settings
    return settings


def get_telemetry(request: Request) -> Telemetry:
    """Get the process telemetry (tracer and log pipeline)."""
    telemetry: Telemetry = request.app.state.telemetry
    return telemetry


def get_random(request: Request) -> random.Random:
    """Get the shared random source."""
    rng: random.Random = request.app.state.rng
    return rng


def get_forecast_service(
    telemetry: Annotated[Telemetry, Depends(get_telemetry)],
    rng: Annotated[random.Random, Depends(get_random)],
) -> ForecastService:
    """Build the forecast service for one request.

    The service is stateless; building it per request keeps the injected
    collaborators explicit.
    """
    return ForecastService(telemetry=telemetry, rng=rng)


# Type aliases for dependency injection
SettingsDep = Annotated[Settings, Depends(get_settings)]
TelemetryDep = Annotated[Telemetry, Depends(get_telemetry)]
ForecastServiceDep = Annotated[ForecastService, Depends(get_forecast_service)]
