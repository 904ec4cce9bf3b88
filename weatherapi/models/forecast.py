"""Forecast response models."""

import datetime

from pydantic import BaseModel, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_camel

SUMMARIES: tuple[str, ...] = (
    "Freezing",
    "Bracing",
    "Chilly",
    "Cool",
    "Mild",
    "Warm",
    "Balmy",
    "Hot",
    "Sweltering",
    "Scorching",
)
"""Fixed set of forecast summary labels."""

MIN_TEMPERATURE_C = -20
MAX_TEMPERATURE_C = 55
"""Exclusive upper bound for generated temperatures."""


def celsius_to_fahrenheit(temperature_c: int) -> int:
    """Convert Celsius to Fahrenheit the way the forecast reports it."""
    return 32 + round(temperature_c / 0.5556)


class ForecastEntry(BaseModel):
    """One day of a generated forecast.

    Serialized with camelCase keys:
        {"date": "2026-10-20", "temperatureC": 12, "temperatureF": 54, "summary": "Cool"}
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    date: datetime.date
    """Calendar day this entry forecasts."""

    temperature_c: int = Field(ge=MIN_TEMPERATURE_C, lt=MAX_TEMPERATURE_C)
    """Temperature in degrees Celsius."""

    summary: str
    """One of SUMMARIES."""

    @computed_field(alias="temperatureF")  # type: ignore[prop-decorator]
    @property
    def temperature_f(self) -> int:
        """Temperature in degrees Fahrenheit."""
        return celsius_to_fahrenheit(self.temperature_c)


class LogLevelAck(BaseModel):
    """Acknowledgment returned by the log-level endpoint."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    level: str
    """Canonical level name the entry was logged at."""

    message: str
    """Description of what was logged."""

    severity_number: int
    """OpenTelemetry severity number of the emitted entry."""
