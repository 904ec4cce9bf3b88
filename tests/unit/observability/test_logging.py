"""Tests for structured logging."""

import json
import logging
from collections.abc import Generator

import pytest
from opentelemetry._logs import SeverityNumber
from opentelemetry.sdk._logs.export import InMemoryLogExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from structlog.contextvars import bind_contextvars, clear_contextvars

from tests.helpers import finished_log_records
from weatherapi.config.models.observability import ExporterConfig
from weatherapi.observability.logging import (
    get_logger,
    reset_handlers,
    setup_logging,
    setup_otel_logging,
)


@pytest.fixture(autouse=True)
def restore_handlers() -> Generator[None, None, None]:
    """Remove handlers installed by each test."""
    yield
    reset_handlers()
    clear_contextvars()


def stdout_events(out: str) -> list[dict[str, object]]:
    return [json.loads(line) for line in out.splitlines() if line.strip()]


class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_sets_root_threshold(self) -> None:
        """Should apply the level to the root logger."""
        setup_logging(level="ERROR", console=False)

        assert logging.getLogger().level == logging.ERROR

    def test_json_console_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Should write one JSON object per entry, keyword args included."""
        setup_logging(level="INFO", format="json")

        get_logger("weather.test").info("forecast_ready", forecast_count=5)

        events = stdout_events(capsys.readouterr().out)
        assert events[-1]["event"] == "forecast_ready"
        assert events[-1]["forecast_count"] == 5
        assert events[-1]["level"] == "info"
        assert events[-1]["logger"] == "weather.test"

    def test_below_threshold_discarded(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Should drop entries below the configured level."""
        setup_logging(level="WARNING", format="json")

        logger = get_logger("weather.test")
        logger.info("quiet")
        logger.warning("loud")

        events = [event["event"] for event in stdout_events(capsys.readouterr().out)]
        assert "quiet" not in events
        assert "loud" in events

    def test_console_disabled(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Should not write to stdout without a console handler."""
        setup_logging(level="DEBUG", console=False)

        get_logger("weather.test").error("unseen")

        assert capsys.readouterr().out == ""

    def test_reconfigure_replaces_handlers(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Should not duplicate console output when called twice."""
        setup_logging(level="INFO", format="json")
        setup_logging(level="INFO", format="json")

        get_logger("weather.test").info("once")

        events = [event["event"] for event in stdout_events(capsys.readouterr().out)]
        assert events.count("once") == 1

    def test_context_vars_in_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Should include values bound to structlog contextvars."""
        setup_logging(level="INFO", format="json")
        bind_contextvars(request_id="req-1")

        get_logger("weather.test").info("with_context")

        assert stdout_events(capsys.readouterr().out)[-1]["request_id"] == "req-1"

    def test_trace_ids_in_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Should add trace and span ids inside an active span."""
        setup_logging(level="INFO", format="json")
        provider = TracerProvider()

        with provider.get_tracer("test").start_as_current_span("unit") as span:
            get_logger("weather.test").info("inside_span")
            trace_id = format(span.get_span_context().trace_id, "032x")

        event = stdout_events(capsys.readouterr().out)[-1]
        assert event["trace_id"] == trace_id
        assert "span_id" in event


class TestSetupOtelLogging:
    """Tests for the OpenTelemetry log pipeline."""

    @pytest.fixture
    def exporter(self) -> Generator[InMemoryLogExporter, None, None]:
        exporter = InMemoryLogExporter()
        setup_logging(level="INFO", console=False)
        provider = setup_otel_logging(
            Resource.create({"service.name": "weather-test"}),
            ExporterConfig(enabled=False),
            [exporter],
        )
        yield exporter
        provider.shutdown()

    def test_exports_with_attributes(self, exporter: InMemoryLogExporter) -> None:
        """Keyword arguments become attributes of the exported record."""
        get_logger("weather.test").warning("hot_day", temperature_c=41)

        record = finished_log_records(exporter)[-1]
        assert record.body == "hot_day"
        assert record.severity_number == SeverityNumber.WARN
        assert record.attributes["temperature_c"] == 41

    def test_threshold_applies_to_export(self, exporter: InMemoryLogExporter) -> None:
        """Entries below the root level are never exported."""
        get_logger("weather.test").debug("too_quiet")

        assert finished_log_records(exporter) == []

    def test_records_correlated_with_trace(self, exporter: InMemoryLogExporter) -> None:
        """Entries logged inside a span carry its trace and span ids."""
        provider = TracerProvider()

        with provider.get_tracer("test").start_as_current_span("unit") as span:
            get_logger("weather.test").error("broken")
            context = span.get_span_context()

        record = finished_log_records(exporter)[-1]
        assert record.trace_id == context.trace_id
        assert record.span_id == context.span_id


def test_sdk_diagnostics_not_exported(capsys: pytest.CaptureFixture[str]) -> None:
    """Exporter failures reach the console but never re-enter the log pipeline."""
    exporter = InMemoryLogExporter()
    setup_logging(level="WARNING", format="json")
    provider = setup_otel_logging(
        Resource.create({"service.name": "weather-test"}),
        ExporterConfig(enabled=False),
        [exporter],
    )

    logging.getLogger("opentelemetry.exporter.otlp.proto.grpc.exporter").error("export_failed")
    get_logger("weather.test").error("handler_failed")

    assert [record.body for record in finished_log_records(exporter)] == ["handler_failed"]
    events = [event["event"] for event in stdout_events(capsys.readouterr().out)]
    assert "export_failed" in events
    provider.shutdown()
