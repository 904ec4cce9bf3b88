"""Domain models returned by the API."""

from weatherapi.models.forecast import (
    SUMMARIES,
    ForecastEntry,
    LogLevelAck,
    celsius_to_fahrenheit,
)

__all__ = ["SUMMARIES", "ForecastEntry", "LogLevelAck", "celsius_to_fahrenheit"]
