"""Configuration model exports.

    from weatherapi.config.models import APIConfig, ObservabilityConfig
"""

from weatherapi.config.models.api import APIConfig
from weatherapi.config.models.observability import (
    ExporterConfig,
    LoggingConfig,
    MetricsConfig,
    ObservabilityConfig,
    TracingConfig,
)

__all__ = [
    "APIConfig",
    "ExporterConfig",
    "LoggingConfig",
    "MetricsConfig",
    "ObservabilityConfig",
    "TracingConfig",
]
