"""API middleware."""

from weatherapi.api.middleware.context import LoggingContextMiddleware

__all__ = ["LoggingContextMiddleware"]
