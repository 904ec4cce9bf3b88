"""Structured logging configuration using structlog.

structlog events are rendered into standard library ``logging`` calls so
that a single threshold on the root logger governs every sink: the
OpenTelemetry ``LoggingHandler`` (which attaches the active trace and span
ids and exports over OTLP) and, when enabled, a local console handler.
Keyword arguments on a log call travel as ``extra`` and become attributes
on the exported record.
"""

import logging
import sys
from typing import Any, cast

import structlog
from opentelemetry.exporter.otlp.proto.grpc._log_exporter import OTLPLogExporter
from opentelemetry.sdk._logs import LoggerProvider, LoggingHandler
from opentelemetry.sdk._logs.export import LogExporter, SimpleLogRecordProcessor
from opentelemetry.sdk.resources import Resource
from structlog.types import EventDict, WrappedLogger

from weatherapi.config.models.observability import ExporterConfig
from weatherapi.observability.tracing import (
    get_current_span_id,
    get_current_trace_id,
    grpc_headers,
)

# Handlers installed by this module, removed again on reconfiguration
_installed_handlers: list[logging.Handler] = []


def add_trace_context(
    _logger: WrappedLogger,
    _method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Add the active trace and span ids to console output."""
    trace_id = get_current_trace_id()
    if trace_id is not None:
        event_dict["trace_id"] = trace_id
        event_dict["span_id"] = get_current_span_id()
    return event_dict


class ExcludeSdkRecords(logging.Filter):
    """Drop records logged by the OpenTelemetry SDK and its exporters.

    Export failures are logged at ERROR; sending them back through the
    failing pipeline would trigger another export. They still reach the
    console handler when one is installed.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        return not record.name.startswith("opentelemetry")


def _install_handler(handler: logging.Handler) -> None:
    logging.getLogger().addHandler(handler)
    _installed_handlers.append(handler)


def reset_handlers() -> None:
    """Detach every handler previously installed by this module."""
    root = logging.getLogger()
    while _installed_handlers:
        handler = _installed_handlers.pop()
        root.removeHandler(handler)
        handler.close()


def setup_logging(
    level: str = "WARNING",
    format: str = "json",
    console: bool = True,
    include_trace_id: bool = True,
) -> None:
    """Configure structured logging.

    Args:
        level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
            Records below it are discarded before reaching any handler.
        format: Console output format - "json" or "console"
        console: Whether to write log lines to stdout
        include_trace_id: Whether console lines carry trace_id/span_id
    """
    reset_handlers()

    root = logging.getLogger()
    root.setLevel(level.upper())

    if console:
        pre_chain: list[Any] = [
            structlog.stdlib.ExtraAdder(),
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
        ]
        if include_trace_id:
            pre_chain.append(add_trace_context)

        renderer: Any
        if format == "json":
            renderer = structlog.processors.JSONRenderer()
        else:
            renderer = structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())

        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(
            structlog.stdlib.ProcessorFormatter(
                foreign_pre_chain=pre_chain,
                processors=[
                    structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                    renderer,
                ],
            )
        )
        _install_handler(handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.stdlib.render_to_log_kwargs,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def setup_otel_logging(
    resource: Resource,
    exporter: ExporterConfig,
    extra_exporters: list[LogExporter] | None = None,
) -> LoggerProvider:
    """Route standard library log records into an OpenTelemetry pipeline.

    Args:
        resource: Resource shared with the trace pipeline
        exporter: Collector export settings
        extra_exporters: Additional exporters (e.g. in-memory ones in tests)

    Returns:
        Configured LoggerProvider (not installed globally)
    """
    provider = LoggerProvider(resource=resource)

    if exporter.enabled and exporter.otlp_endpoint:
        otlp_exporter = OTLPLogExporter(
            endpoint=exporter.otlp_endpoint,
            insecure=exporter.insecure,
            headers=grpc_headers(exporter.headers),
            timeout=exporter.timeout,
        )
        provider.add_log_record_processor(SimpleLogRecordProcessor(otlp_exporter))

    for extra in extra_exporters or []:
        provider.add_log_record_processor(SimpleLogRecordProcessor(extra))

    handler = LoggingHandler(level=logging.NOTSET, logger_provider=provider)
    handler.addFilter(ExcludeSdkRecords())
    _install_handler(handler)

    return provider


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a logger instance bound to the given name.

    Args:
        name: Logger name (typically __name__ of the module)

    Returns:
        A bound structlog logger
    """
    return cast(structlog.stdlib.BoundLogger, structlog.get_logger(name))
