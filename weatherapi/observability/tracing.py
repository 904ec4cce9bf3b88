"""OpenTelemetry distributed tracing setup.

Builds the process resource, the tracer provider and its OTLP/gRPC export
pipeline, and wires automatic instrumentation for inbound FastAPI requests
and outbound httpx calls.
"""

from collections.abc import Mapping

from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.httpx import HTTPXClientInstrumentor
from opentelemetry.sdk.resources import (
    DEPLOYMENT_ENVIRONMENT,
    HOST_NAME,
    SERVICE_NAME,
    SERVICE_NAMESPACE,
    Resource,
)
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SimpleSpanProcessor,
    SpanExporter,
)

from weatherapi.config.models.observability import ExporterConfig
from weatherapi.config.settings import Settings


def build_resource(settings: Settings) -> Resource:
    """Create the resource attached to every span and log record.

    ``Resource.create`` also merges the SDK's telemetry.sdk.* attributes and
    anything set through OTEL_RESOURCE_ATTRIBUTES.

    Args:
        settings: Application settings

    Returns:
        Resource with service, namespace, environment and host attributes
    """
    observability = settings.observability
    return Resource.create(
        {
            SERVICE_NAME: observability.service_name,
            SERVICE_NAMESPACE: observability.service_namespace,
            DEPLOYMENT_ENVIRONMENT: settings.environment,
            HOST_NAME: settings.host_name,
        }
    )


def grpc_headers(headers: Mapping[str, str]) -> dict[str, str]:
    """Normalize export headers for gRPC metadata, which must be lowercase."""
    return {key.lower(): value for key, value in headers.items()}


def setup_tracing(
    resource: Resource,
    exporter: ExporterConfig,
    extra_exporters: list[SpanExporter] | None = None,
) -> TracerProvider:
    """Initialize an OpenTelemetry tracer provider.

    The collector and console exporters sit behind a BatchSpanProcessor, so
    spans are exported from a background thread and request handlers never
    wait on the network. Extra exporters get a SimpleSpanProcessor and see
    each span as soon as it ends.

    Args:
        resource: Resource shared with the log pipeline
        exporter: Collector export settings
        extra_exporters: Additional exporters (e.g. in-memory ones in tests)

    Returns:
        Configured TracerProvider (not installed globally)
    """
    provider = TracerProvider(resource=resource)

    if exporter.enabled and exporter.otlp_endpoint:
        otlp_exporter = OTLPSpanExporter(
            endpoint=exporter.otlp_endpoint,
            insecure=exporter.insecure,
            headers=grpc_headers(exporter.headers),
            timeout=exporter.timeout,
        )
        provider.add_span_processor(BatchSpanProcessor(otlp_exporter))

    if exporter.console:
        provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))

    for extra in extra_exporters or []:
        provider.add_span_processor(SimpleSpanProcessor(extra))

    return provider


def instrument_app(app: FastAPI, tracer_provider: TracerProvider) -> None:
    """Create server spans for every inbound request to the app."""
    FastAPIInstrumentor.instrument_app(app, tracer_provider=tracer_provider)


def instrument_http_clients(tracer_provider: TracerProvider) -> None:
    """Create client spans for outbound httpx requests, process-wide."""
    instrumentor = HTTPXClientInstrumentor()
    if not instrumentor.is_instrumented_by_opentelemetry:
        instrumentor.instrument(tracer_provider=tracer_provider)


def get_current_trace_id() -> str | None:
    """Get the current trace ID as a hex string.

    Returns:
        Trace ID or None if not in a trace
    """
    span = trace.get_current_span()
    if span and span.get_span_context().is_valid:
        return format(span.get_span_context().trace_id, "032x")
    return None


def get_current_span_id() -> str | None:
    """Get the current span ID as a hex string.

    Returns:
        Span ID or None if not in a span
    """
    span = trace.get_current_span()
    if span and span.get_span_context().is_valid:
        return format(span.get_span_context().span_id, "016x")
    return None

