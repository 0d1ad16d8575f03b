"""Observability API endpoints.

Provides metrics and health checks for monitoring.
"""

from fastapi import APIRouter, Depends, Response
from fastapi.responses import JSONResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from dependencies import get_codec
from domain.edifact import EdifactOrdersCodec

from .health import (
    HealthStatus,
    check_codec_health,
    check_standards_health,
    get_overall_health,
)
from .logging_config import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["Observability"])


@router.get(
    "/metrics",
    summary="Prometheus metrics endpoint",
    include_in_schema=False,
)
def metrics():
    """Expose Prometheus metrics in text exposition format."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)


@router.get(
    "/health",
    summary="Health check endpoint",
    description="Returns health status of the EDIFACT codec and the product identifier validators",
)
def health_check(codec: EdifactOrdersCodec = Depends(get_codec)):
    """Check health of all gateway components.

    Returns 200 OK unless a component is unhealthy, then 503.
    """
    components = {
        "edifact_codec": check_codec_health(codec),
        "standards": check_standards_health(),
    }
    overall_status = get_overall_health(components)

    response_data = {
        "status": overall_status.value,
        "message_type": codec.message_type,
        "components": {
            name: {
                "status": comp.status.value,
                "message": comp.message,
                "latency_ms": comp.latency_ms,
            }
            for name, comp in components.items()
        },
    }

    if overall_status == HealthStatus.UNHEALTHY:
        logger.warning(f"Health check failed: {response_data['components']}")

    status_code = 200 if overall_status != HealthStatus.UNHEALTHY else 503
    return JSONResponse(content=response_data, status_code=status_code)
