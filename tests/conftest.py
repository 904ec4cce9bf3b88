"""Shared test fixtures for the Weather API test suite."""

import os
import random
from collections.abc import Callable, Generator
from datetime import date

import pytest
from opentelemetry.sdk._logs.export import InMemoryLogExporter
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter

from tests.helpers import FIXED_TODAY
from weatherapi.config.models.observability import (
    ExporterConfig,
    LoggingConfig,
    ObservabilityConfig,
)
from weatherapi.config.settings import Settings, set_toml_config
from weatherapi.observability.logging import reset_handlers
from weatherapi.observability.telemetry import Telemetry, setup_telemetry


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Hide configuration variables of the machine running the tests."""
    for key in list(os.environ):
        if key.startswith(("WEATHERAPI_", "OTEL_")):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None, None, None]:
    """Clear the settings cache before and after each test.

    This ensures test isolation for configuration tests.
    """
    from weatherapi.config import get_settings

    get_settings.cache_clear()
    set_toml_config({})
    yield
    get_settings.cache_clear()
    set_toml_config({})


@pytest.fixture
def log_level() -> str:
    """Minimum log level for the telemetry fixture; override per module."""
    return "DEBUG"


@pytest.fixture
def settings(log_level: str) -> Settings:
    """Settings with collector export disabled."""
    return Settings(
        environment="test",
        host_name="test-host",
        observability=ObservabilityConfig(
            service_name="weather-test",
            service_namespace="tests",
            logging=LoggingConfig(level=log_level, format="json"),
            exporter=ExporterConfig(enabled=False),
        ),
    )


@pytest.fixture
def span_exporter() -> InMemorySpanExporter:
    """Collects every finished span."""
    return InMemorySpanExporter()


@pytest.fixture
def log_exporter() -> InMemoryLogExporter:
    """Collects every emitted OpenTelemetry log record."""
    return InMemoryLogExporter()


@pytest.fixture
def telemetry(
    settings: Settings,
    span_exporter: InMemorySpanExporter,
    log_exporter: InMemoryLogExporter,
) -> Generator[Telemetry, None, None]:
    """Telemetry wired to in-memory exporters."""
    telemetry = setup_telemetry(
        settings,
        span_exporters=[span_exporter],
        log_exporters=[log_exporter],
    )
    # Drop the startup record so tests only see what they emit
    log_exporter.clear()
    span_exporter.clear()
    yield telemetry
    telemetry.shutdown()
    reset_handlers()


@pytest.fixture
def rng() -> random.Random:
    """Deterministic random source."""
    return random.Random(1234)


@pytest.fixture
def today() -> Callable[[], date]:
    """Clock pinned to a fixed day."""
    return lambda: FIXED_TODAY

