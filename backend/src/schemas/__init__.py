"""Pydantic Schemas for the trade document gateway API"""

from .edifact import (
    OrderItemSchema,
    OrderSchema,
    EncodeResponse,
    ValidationReportResponse,
    DecodeErrorResponse,
    GtinCheckResponse,
    Gs1KeyCheckResponse,
    BulkGtinRequest,
    BulkGtinResponse,
    EclassCheckResponse,
)

__all__ = [
    # Orders
    "OrderItemSchema",
    "OrderSchema",
    "EncodeResponse",
    "ValidationReportResponse",
    "DecodeErrorResponse",
    # Standards
    "GtinCheckResponse",
    "Gs1KeyCheckResponse",
    "BulkGtinRequest",
    "BulkGtinResponse",
    "EclassCheckResponse",
]
