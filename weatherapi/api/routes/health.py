"""Health check and metrics endpoints."""

from datetime import UTC, datetime

from fastapi import APIRouter, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from weatherapi import __version__
from weatherapi.api.dependencies import SettingsDep
from weatherapi.api.models.health import HealthResponse
from weatherapi.observability.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
def health_check(settings: SettingsDep) -> HealthResponse:
    """Report that the process is up and which service it is."""
    logger.debug("health_check_request")

    return HealthResponse(
        status="healthy",
        service=settings.observability.service_name,
        environment=settings.environment,
        version=__version__,
        timestamp=datetime.now(UTC),
    )


def get_metrics() -> Response:
    """Get Prometheus metrics.

    Returns metrics in Prometheus text format for scraping.
    """
    logger.debug("metrics_request")

    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST,
    )
