"""Prometheus metrics for the Weather API.

Counters for forecast generation, simulated failures and log-level
exercises, exposed on GET /metrics.
"""

from prometheus_client import Counter

FORECASTS_GENERATED = Counter(
    "weatherapi_forecasts_generated_total",
    "Total number of forecasts returned",
)

FORECAST_ENTRIES = Counter(
    "weatherapi_forecast_entries_total",
    "Total number of daily forecast entries generated",
)

HANDLER_ERRORS = Counter(
    "weatherapi_handler_errors_total",
    "Total number of failed handler invocations",
    labelnames=["operation"],
)

SIMULATED_FAILURES = Counter(
    "weatherapi_simulated_failures_total",
    "Total number of intentional failures raised",
)

LOG_EMISSIONS = Counter(
    "weatherapi_log_emissions_total",
    "Log entries emitted by the log-level endpoint",
    labelnames=["level"],
)
