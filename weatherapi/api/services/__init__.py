"""Request handling services."""

from weatherapi.api.services.forecast import ForecastService

__all__ = ["ForecastService"]
