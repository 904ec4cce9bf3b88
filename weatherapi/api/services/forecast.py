"""Forecast generation and diagnostic handlers.

ForecastService holds the instrumented request logic behind the
/weatherforecast routes. It receives its telemetry, logger, random source
and clock from the caller, so every route shares one set of
process-level collaborators without resolving globals.
"""

import logging
import random
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any

import structlog
from opentelemetry._logs import SeverityNumber

from weatherapi.models.forecast import (
    MAX_TEMPERATURE_C,
    MIN_TEMPERATURE_C,
    SUMMARIES,
    ForecastEntry,
    LogLevelAck,
)
from weatherapi.observability.logging import get_logger
from weatherapi.observability.metrics import (
    FORECAST_ENTRIES,
    FORECASTS_GENERATED,
    HANDLER_ERRORS,
    LOG_EMISSIONS,
    SIMULATED_FAILURES,
)
from weatherapi.observability.telemetry import SpanHandle, Telemetry

FORECAST_DAYS = 5

INTENTIONAL_FAILURE_MESSAGE = "Intentional failure for observability testing"

ERROR_CLASSIFICATION: dict[str, str] = {
    "error.type": "SimulatedError",
    "error.severity": "high",
    "error.category": "observability_test",
}


@dataclass(frozen=True)
class LogLevelSpec:
    """How one requested level is logged and reported."""

    name: str
    severity_number: int
    log_level: int

    @property
    def is_error(self) -> bool:
        """Whether the entry marks the handler span as failed."""
        return self.log_level >= logging.ERROR


LOG_LEVELS: dict[str, LogLevelSpec] = {
    "debug": LogLevelSpec("Debug", SeverityNumber.DEBUG.value, logging.DEBUG),
    "info": LogLevelSpec("Info", SeverityNumber.INFO.value, logging.INFO),
    "warning": LogLevelSpec("Warning", SeverityNumber.WARN.value, logging.WARNING),
    "error": LogLevelSpec("Error", SeverityNumber.ERROR.value, logging.ERROR),
    "critical": LogLevelSpec("Critical", SeverityNumber.FATAL.value, logging.CRITICAL),
}

# Reported for unrecognized levels, which are logged as errors
INVALID_LEVEL = LOG_LEVELS["error"]


class ForecastService:
    """Instrumented handlers for the forecast routes.

    Args:
        telemetry: Span source for handler spans
        logger: Structured logger; defaults to this module's logger
        rng: Random source for temperatures and summaries
        today: Clock returning the current local date
    """

    def __init__(
        self,
        telemetry: Telemetry,
        logger: structlog.stdlib.BoundLogger | None = None,
        rng: random.Random | None = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._telemetry = telemetry
        self._logger = logger or get_logger(__name__)
        self._rng = rng or random.Random()
        self._today = today

    def generate_forecast(self, days: int = FORECAST_DAYS) -> list[ForecastEntry]:
        """Generate one entry per day for the next ``days`` days, starting tomorrow.

        Raises:
            Exception: Anything raised during generation, after it has been
                recorded on the span and logged
        """
        with self._telemetry.start_span(
            "GetWeatherForecast",
            {"weather.operation": "forecast_generation", "weather.forecast_days": days},
        ) as root:
            self._logger.info("forecast_generation_started", forecast_days=days)

            try:
                with self._telemetry.start_span(
                    "ProcessWeatherData",
                    {"processing.type": "weather_calculation"},
                ) as processing:
                    start = self._today()
                    forecast = [
                        self._generate_entry(start, index, processing)
                        for index in range(1, days + 1)
                    ]
                    processing.set_tag("processing.records_generated", len(forecast))
                    processing.ok()

                root.set_tag("weather.forecast_count", len(forecast))
                root.ok("Forecast generated successfully")
                root.add_event("Forecast generated successfully")

                self._logger.info("forecast_generated", forecast_count=len(forecast))
                FORECASTS_GENERATED.inc()
                FORECAST_ENTRIES.inc(len(forecast))

                return forecast
            except Exception as e:
                root.error(str(e))
                root.add_event(
                    "Forecast generation failed",
                    {"error.message": str(e)},
                )
                self._logger.exception("forecast_generation_failed", error=str(e))
                HANDLER_ERRORS.labels(operation="forecast_generation").inc()
                raise

    def _generate_entry(self, start: date, index: int, span: SpanHandle) -> ForecastEntry:
        temperature_c = self._rng.randrange(MIN_TEMPERATURE_C, MAX_TEMPERATURE_C)
        summary = self._rng.choice(SUMMARIES)

        span.add_event(
            f"Generated forecast for day {index}: {temperature_c}°C, {summary}",
            {
                "day.index": index,
                "temperature.celsius": temperature_c,
                "summary": summary,
            },
        )

        return ForecastEntry(
            date=start + timedelta(days=index),
            temperature_c=temperature_c,
            summary=summary,
        )

    def fail_intentionally(self) -> None:
        """Record a failure on both spans, log it, then raise it.

        Raises:
            RuntimeError: Always
        """
        with self._telemetry.start_span(
            "SimulateError",
            {"weather.operation": "error_test", "error.simulated": True},
        ) as root:
            with self._telemetry.start_span(
                "ProcessErrorScenario",
                {"processing.type": "error_simulation"},
            ) as processing:
                processing.add_event("Simulated error", ERROR_CLASSIFICATION)
                processing.error(INTENTIONAL_FAILURE_MESSAGE)

            root.add_event("Simulated error", ERROR_CLASSIFICATION)
            root.error(INTENTIONAL_FAILURE_MESSAGE)

            log_fields: dict[str, Any] = {
                key.replace(".", "_"): value for key, value in ERROR_CLASSIFICATION.items()
            }
            self._logger.error("simulated_error", reason=INTENTIONAL_FAILURE_MESSAGE, **log_fields)
            self._logger.critical(
                "simulated_error_critical",
                reason=INTENTIONAL_FAILURE_MESSAGE,
                **log_fields,
            )
            SIMULATED_FAILURES.inc()

            raise RuntimeError(INTENTIONAL_FAILURE_MESSAGE)

    def emit_log(self, level: str) -> LogLevelAck:
        """Emit exactly one log entry at the requested level.

        Unrecognized levels are logged at Error and reported as Error with
        the offending input in the message. Never raises.
        """
        spec = LOG_LEVELS.get(level.strip().lower())

        with self._telemetry.start_span(
            "TestLogLevel",
            {"log.requested_level": level},
        ) as span:
            if spec is None:
                message = (
                    f"Invalid log level '{level}'. "
                    f"Valid levels: {', '.join(LOG_LEVELS)}"
                )
                self._logger.error("invalid_log_level", requested_level=level)
                LOG_EMISSIONS.labels(level="invalid").inc()

                span.set_tag("log.valid", False)
                span.error(message)
                return LogLevelAck(
                    level=INVALID_LEVEL.name,
                    message=message,
                    severity_number=INVALID_LEVEL.severity_number,
                )

            message = f"Emitted one log entry at {spec.name} level"
            self._logger.log(
                spec.log_level,
                "log_level_test",
                requested_level=level,
                severity_number=spec.severity_number,
            )
            LOG_EMISSIONS.labels(level=spec.name.lower()).inc()

            span.set_tag("log.valid", True)
            span.set_tag("log.severity_number", spec.severity_number)
            if spec.is_error:
                span.error(message)
            else:
                span.ok(message)

            return LogLevelAck(
                level=spec.name,
                message=message,
                severity_number=spec.severity_number,
            )
