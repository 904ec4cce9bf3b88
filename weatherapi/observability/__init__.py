"""Observability: structured logging, distributed tracing, metrics.

Provides standardized observability primitives using structlog for logging,
OpenTelemetry for tracing and log export, and Prometheus for metrics.
"""

from weatherapi.observability.logging import (
    get_logger,
    setup_logging,
    setup_otel_logging,
)
from weatherapi.observability.metrics import (
    FORECAST_ENTRIES,
    FORECASTS_GENERATED,
    HANDLER_ERRORS,
    LOG_EMISSIONS,
    SIMULATED_FAILURES,
)
from weatherapi.observability.telemetry import SpanHandle, Telemetry, setup_telemetry
from weatherapi.observability.tracing import (
    build_resource,
    get_current_span_id,
    get_current_trace_id,
    instrument_app,
    instrument_http_clients,
    setup_tracing,
)

__all__ = [
    # Logging
    "setup_logging",
    "setup_otel_logging",
    "get_logger",
    # Metrics
    "FORECASTS_GENERATED",
    "FORECAST_ENTRIES",
    "HANDLER_ERRORS",
    "LOG_EMISSIONS",
    "SIMULATED_FAILURES",
    # Tracing
    "build_resource",
    "setup_tracing",
    "instrument_app",
    "instrument_http_clients",
    "get_current_trace_id",
    "get_current_span_id",
    # Handler-facing telemetry
    "SpanHandle",
    "Telemetry",
    "setup_telemetry",
]
