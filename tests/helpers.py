"""Helpers for inspecting in-memory telemetry in tests."""

from datetime import date
from typing import Any

from opentelemetry.sdk._logs.export import InMemoryLogExporter
from opentelemetry.sdk.trace import ReadableSpan
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter

FIXED_TODAY = date(2026, 10, 19)


def spans_by_name(exporter: InMemorySpanExporter) -> dict[str, ReadableSpan]:
    """Index finished spans by name (names are unique per request in these tests)."""
    return {span.name: span for span in exporter.get_finished_spans()}


def finished_log_records(exporter: InMemoryLogExporter) -> list[Any]:
    """Unwrap exported log data into OpenTelemetry log records."""
    return [getattr(item, "log_record", item) for item in exporter.get_finished_logs()]


def event_names(span: ReadableSpan) -> list[str]:
    return [event.name for event in span.events]
