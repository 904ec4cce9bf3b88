"""Exception hierarchy for the Weather API.

Startup problems are raised as ConfigurationError and stop the process
before it starts serving. Simulated request failures are plain
RuntimeErrors and are deliberately left to the framework's default
500 handling.
"""


class WeatherAPIError(Exception):
    """Base exception for all Weather API errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ConfigurationError(WeatherAPIError):
    """Raised when configuration cannot be loaded or validated."""
