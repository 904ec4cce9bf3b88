"""Weather forecast demo service instrumented with OpenTelemetry."""

__version__ = "1.0.0"
