"""Health check utilities.

The gateway has no external dependencies, so health is a self-check of
the codec: a fixed order must survive an encode/decode round trip.
"""

import time
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Dict, Optional

from domain.edifact import EdifactOrdersCodec, EdifactError, Order, OrderItem
from domain.standards import validate_eclass_code, validate_gtin

from .logging_config import get_logger

logger = get_logger(__name__)


class HealthStatus(str, Enum):
    """Health check status enum."""
    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"
    DEGRADED = "degraded"


@dataclass
class ComponentHealth:
    """Health status for a single component."""
    status: HealthStatus
    message: Optional[str] = None
    latency_ms: Optional[float] = None


_SAMPLE_ORDER = Order(
    order_number="HEALTH-1",
    buyer_id="BUYER",
    seller_id="SELLER",
    order_date=date(2024, 1, 15),
    items=(OrderItem(1, "40123456789010", 1, Decimal("1.00")),),
)


def check_codec_health(codec: EdifactOrdersCodec) -> ComponentHealth:
    """Round-trip a fixed order through the codec.

    Args:
        codec: Codec instance used by the gateway

    Returns:
        ComponentHealth: Codec health status
    """
    start = time.perf_counter()
    try:
        result = codec.decode(codec.encode(_SAMPLE_ORDER))
    except EdifactError as e:
        logger.error(f"Codec health check failed: {e}", exc_info=True)
        return ComponentHealth(status=HealthStatus.UNHEALTHY, message=f"Codec error: {e}")
    latency_ms = (time.perf_counter() - start) * 1000

    if not result.success or result.order.items != _SAMPLE_ORDER.items:
        return ComponentHealth(
            status=HealthStatus.UNHEALTHY,
            message="Codec round trip did not reproduce the sample order",
        )
    return ComponentHealth(
        status=HealthStatus.HEALTHY,
        message="Codec round trip OK",
        latency_ms=round(latency_ms, 2),
    )


def check_standards_health() -> ComponentHealth:
    """Known-good identifiers must validate."""
    if validate_gtin("40123456789010") and validate_eclass_code("11101501"):
        return ComponentHealth(status=HealthStatus.HEALTHY, message="Validators OK")
    return ComponentHealth(status=HealthStatus.DEGRADED, message="Validator self-check failed")


def get_overall_health(components: Dict[str, ComponentHealth]) -> HealthStatus:
    """Determine overall health from component statuses.

    Args:
        components: Dictionary of component health statuses

    Returns:
        HealthStatus: Overall system health
    """
    if all(c.status == HealthStatus.HEALTHY for c in components.values()):
        return HealthStatus.HEALTHY

    if any(c.status == HealthStatus.UNHEALTHY for c in components.values()):
        return HealthStatus.UNHEALTHY

    return HealthStatus.DEGRADED
