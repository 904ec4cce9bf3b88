"""Weather forecast endpoints."""

from fastapi import APIRouter

from weatherapi.api.dependencies import ForecastServiceDep
from weatherapi.models.forecast import ForecastEntry, LogLevelAck

router = APIRouter()

diagnostics_router = APIRouter()


@router.get(
    "/weatherforecast",
    response_model=list[ForecastEntry],
    operation_id="GetWeatherForecast",
)
def get_weather_forecast(service: ForecastServiceDep) -> list[ForecastEntry]:
    """Get a randomly generated forecast for the next five days."""
    return service.generate_forecast()


@diagnostics_router.get(
    "/weatherforecast/error",
    operation_id="SimulateError",
    responses={500: {"description": "Always returned; the failure is intentional"}},
)
def simulate_error(service: ForecastServiceDep) -> None:
    """Fail on purpose to exercise error tracing and logging.

    The RuntimeError is not handled, so the client sees the framework's
    default 500 response.
    """
    service.fail_intentionally()


@diagnostics_router.get(
    "/weatherforecast/logs/{level}",
    response_model=LogLevelAck,
    operation_id="TestLogLevel",
)
def emit_log_level(level: str, service: ForecastServiceDep) -> LogLevelAck:
    """Emit one log entry at ``level`` (debug, info, warning, error, critical)."""
    return service.emit_log(level)
