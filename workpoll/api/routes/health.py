"""
Health check routes.
"""

from fastapi import APIRouter
from fastapi.responses import Response

from workpoll.constants import HEALTH_PATH
from workpoll.observability.metrics import get_metrics
from workpoll.types.api import HealthResponse

router = APIRouter(tags=["Health"])


@router.get(
    HEALTH_PATH,
    response_model=HealthResponse,
    summary="Health check",
    description="Liveness only. Always answers UP.",
)
async def health_check() -> HealthResponse:
    """Report that the service is alive."""
    return HealthResponse(status="UP")


@router.get(
    "/metrics",
    summary="Prometheus metrics",
    description="Expose Prometheus metrics.",
)
async def metrics() -> Response:
    """
    Expose Prometheus metrics.

    Returns:
        Prometheus-formatted metrics.
    """
    metrics_collector = get_metrics()
    return Response(
        content=metrics_collector.get_metrics(),
        media_type=metrics_collector.get_content_type(),
    )
