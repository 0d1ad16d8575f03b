"""Observability module for the trade document gateway.

Provides structured logging, metrics, and health checks.
"""

from .logging_config import configure_logging, get_logger
from .metrics import (
    edifact_messages_total,
    edifact_message_bytes,
    standards_checks_total,
    record_standards_check,
)
from .request_id import request_id_var, get_request_id, set_request_id, generate_request_id
from .health import HealthStatus, ComponentHealth
from .middleware import RequestIDMiddleware

__all__ = [
    # Logging
    "configure_logging",
    "get_logger",
    # Metrics
    "edifact_messages_total",
    "edifact_message_bytes",
    "standards_checks_total",
    "record_standards_check",
    # Request ID
    "request_id_var",
    "get_request_id",
    "set_request_id",
    "generate_request_id",
    # Health
    "HealthStatus",
    "ComponentHealth",
    # Middleware
    "RequestIDMiddleware",
]
