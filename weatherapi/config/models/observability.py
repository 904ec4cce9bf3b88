"""Observability configuration models."""

from typing import Literal
from urllib.parse import urlparse

from pydantic import BaseModel, Field, field_validator, model_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
LogFormat = Literal["json", "console"]

SUPPORTED_ENDPOINT_SCHEMES = frozenset({"http", "https"})


class LoggingConfig(BaseModel):
    """Logging configuration.

    ``level`` is the minimum severity accepted by the whole pipeline. Entries
    below it are dropped before they reach the console or the OTLP exporter.
    """

    level: LogLevel = Field(default="WARNING", description="Minimum log level")
    format: LogFormat = Field(default="json", description="Console output format")
    include_trace_id: bool = Field(
        default=True,
        description="Include trace and span IDs in console logs",
    )


class TracingConfig(BaseModel):
    """Distributed tracing configuration."""

    enabled: bool = Field(default=True, description="Enable tracing")
    custom_spans: bool = Field(
        default=True,
        description="Emit handler-level spans in addition to HTTP server spans",
    )
    source_name: str = Field(
        default="WeatherAPI",
        description="Instrumentation scope name for custom spans",
    )


class ExporterConfig(BaseModel):
    """OTLP/gRPC export configuration shared by traces and logs."""

    enabled: bool = Field(default=True, description="Export to a remote collector")
    otlp_endpoint: str | None = Field(
        default=None,
        description="OTLP gRPC collector endpoint, e.g. http://alloy:4317",
    )
    headers: dict[str, str] = Field(
        default_factory=lambda: {"X-Scope-OrgID": "otel"},
        description="Static headers sent with every export request",
    )
    timeout: float = Field(default=10.0, gt=0, description="Export timeout in seconds")
    console: bool = Field(
        default=False,
        description="Mirror spans and logs to stdout",
    )

    @field_validator("otlp_endpoint")
    @classmethod
    def validate_endpoint(cls, value: str | None) -> str | None:
        """Reject endpoints that are not absolute http(s) URLs."""
        if value is None or value == "":
            return None
        parsed = urlparse(value)
        if parsed.scheme not in SUPPORTED_ENDPOINT_SCHEMES:
            raise ValueError(
                f"OTLP endpoint must use http or https, got {value!r}"
            )
        if not parsed.hostname:
            raise ValueError(f"OTLP endpoint has no host: {value!r}")
        # Accessing .port raises ValueError for out-of-range or non-numeric ports
        parsed.port  # noqa: B018
        return value

    @property
    def insecure(self) -> bool:
        """Whether the gRPC channel should skip TLS."""
        return self.otlp_endpoint is not None and self.otlp_endpoint.startswith("http://")

    @model_validator(mode="after")
    def require_endpoint_when_enabled(self) -> "ExporterConfig":
        """An enabled exporter needs somewhere to send data."""
        if self.enabled and self.otlp_endpoint is None:
            raise ValueError(
                "OTLP export is enabled but no endpoint is configured; "
                "set OTEL_EXPORTER_OTLP_ENDPOINT"
            )
        return self


class MetricsConfig(BaseModel):
    """Metrics configuration."""

    enabled: bool = Field(default=True, description="Enable metrics")
    path: str = Field(default="/metrics", description="Metrics endpoint path")


class ObservabilityConfig(BaseModel):
    """Observability configuration."""

    service_name: str = Field(default="api", description="service.name resource attribute")
    service_namespace: str = Field(
        default="observability",
        description="service.namespace resource attribute",
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig,
        description="Logging settings",
    )
    tracing: TracingConfig = Field(
        default_factory=TracingConfig,
        description="Tracing settings",
    )
    exporter: ExporterConfig = Field(
        default_factory=lambda: ExporterConfig(enabled=False),
        description="Collector export settings",
    )
    metrics: MetricsConfig = Field(
        default_factory=MetricsConfig,
        description="Metrics settings",
    )
