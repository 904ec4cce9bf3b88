"""Explicit telemetry handle passed to request handlers.

Handlers never look up a global tracer. They receive a ``Telemetry``
instance built once at startup and open spans through it::

    with telemetry.start_span("GetWeatherForecast", {"weather.forecast_days": 5}) as span:
        span.add_event("started")
        ...

Every span opened this way is ended when its block exits and always carries
a terminal status: whatever the handler set explicitly, otherwise Error when
an exception escapes the block and Ok when it does not.
"""

from collections.abc import Iterator, Mapping
from contextlib import contextmanager

from opentelemetry import trace
from opentelemetry.sdk._logs import LoggerProvider
from opentelemetry.sdk._logs.export import LogExporter
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SpanExporter
from opentelemetry.trace import Span, Status, StatusCode, Tracer

from weatherapi.config.settings import Settings
from weatherapi.observability.logging import (
    get_logger,
    setup_logging,
    setup_otel_logging,
)
from weatherapi.observability.tracing import build_resource, setup_tracing

AttributeValue = str | bool | int | float

logger = get_logger(__name__)


class SpanHandle:
    """Wrapper around one span that remembers the status it was given."""

    def __init__(self, span: Span, name: str) -> None:
        self._span = span
        self._name = name
        self._status = StatusCode.UNSET
        self._status_message: str | None = None

    @property
    def name(self) -> str:
        return self._name

    @property
    def status(self) -> StatusCode:
        return self._status

    @property
    def status_message(self) -> str | None:
        return self._status_message

    @property
    def is_finalized(self) -> bool:
        """Whether a terminal status (Ok or Error) has been set."""
        return self._status is not StatusCode.UNSET

    def set_tag(self, key: str, value: AttributeValue) -> "SpanHandle":
        self._span.set_attribute(key, value)
        return self

    def add_event(
        self,
        name: str,
        attributes: Mapping[str, AttributeValue] | None = None,
    ) -> "SpanHandle":
        self._span.add_event(name, attributes=dict(attributes or {}))
        return self

    def set_status(self, code: StatusCode, message: str | None = None) -> "SpanHandle":
        """Set the span status.

        OpenTelemetry only keeps a description on Error statuses, so an Ok
        message is recorded as the ``status.message`` attribute instead.
        """
        if code is StatusCode.ERROR:
            self._span.set_status(Status(code, message))
        else:
            self._span.set_status(Status(code))
            if message:
                self._span.set_attribute("status.message", message)
        self._status = code
        self._status_message = message
        return self

    def ok(self, message: str | None = None) -> "SpanHandle":
        return self.set_status(StatusCode.OK, message)

    def error(self, message: str) -> "SpanHandle":
        return self.set_status(StatusCode.ERROR, message)

    def record_exception(self, exception: BaseException) -> "SpanHandle":
        self._span.record_exception(exception)
        return self


class Telemetry:
    """Tracer and providers shared by the whole process.

    Args:
        tracer: Tracer used for handler spans
        tracer_provider: Provider behind the tracer, if owned by this instance
        logger_provider: OpenTelemetry log provider, if owned by this instance
    """

    def __init__(
        self,
        tracer: Tracer,
        tracer_provider: TracerProvider | None = None,
        logger_provider: LoggerProvider | None = None,
    ) -> None:
        self._tracer = tracer
        self.tracer_provider = tracer_provider
        self.logger_provider = logger_provider

    @property
    def tracer(self) -> Tracer:
        return self._tracer

    @contextmanager
    def start_span(
        self,
        name: str,
        tags: Mapping[str, AttributeValue] | None = None,
    ) -> Iterator[SpanHandle]:
        """Open a span that is current for the duration of the block.

        Spans opened inside the block become its children.

        Args:
            name: Span name
            tags: Initial span attributes

        Yields:
            Handle for tagging, events and status
        """
        with self._tracer.start_as_current_span(
            name,
            attributes=dict(tags) if tags else None,
            record_exception=False,
            set_status_on_exception=False,
        ) as span:
            handle = SpanHandle(span, name)
            try:
                yield handle
            except BaseException as exc:
                if not handle.is_finalized:
                    handle.record_exception(exc)
                    handle.error(str(exc) or type(exc).__name__)
                raise
            else:
                if not handle.is_finalized:
                    handle.ok()

    def install_global(self) -> None:
        """Make this instance's tracer provider the process-wide default.

        Needed only for libraries that resolve the global provider themselves.
        """
        if self.tracer_provider is not None:
            trace.set_tracer_provider(self.tracer_provider)

    def shutdown(self) -> None:
        """Flush and shut down owned providers."""
        logger.debug("telemetry_shutdown")
        if self.tracer_provider is not None:
            self.tracer_provider.shutdown()
        if self.logger_provider is not None:
            self.logger_provider.shutdown()


def setup_telemetry(
    settings: Settings,
    span_exporters: list[SpanExporter] | None = None,
    log_exporters: list[LogExporter] | None = None,
) -> Telemetry:
    """Build the trace and log pipelines described by the settings.

    Args:
        settings: Application settings
        span_exporters: Extra span exporters, e.g. InMemorySpanExporter
        log_exporters: Extra log exporters, e.g. InMemoryLogExporter

    Returns:
        Telemetry ready to be injected into handlers
    """
    observability = settings.observability
    exporter = observability.exporter

    # Console mirroring is on in development, or whenever there is no
    # collector to send logs to.
    setup_logging(
        level=observability.logging.level,
        format=observability.logging.format,
        console=exporter.console or not exporter.enabled,
        include_trace_id=observability.logging.include_trace_id,
    )

    resource = build_resource(settings)
    logger_provider = setup_otel_logging(resource, exporter, log_exporters)

    tracer_provider: TracerProvider | None = None
    tracer: Tracer
    if observability.tracing.enabled:
        tracer_provider = setup_tracing(resource, exporter, span_exporters)
    if tracer_provider is not None and observability.tracing.custom_spans:
        tracer = tracer_provider.get_tracer(observability.tracing.source_name)
    else:
        tracer = trace.NoOpTracer()

    logger.info(
        "telemetry_initialized",
        service_name=observability.service_name,
        service_namespace=observability.service_namespace,
        environment=settings.environment,
        otlp_endpoint=exporter.otlp_endpoint if exporter.enabled else "",
        log_level=observability.logging.level,
        custom_spans=observability.tracing.custom_spans,
    )

    return Telemetry(tracer, tracer_provider, logger_provider)

