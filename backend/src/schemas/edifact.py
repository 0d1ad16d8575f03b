"""Pydantic schemas for the EDIFACT gateway API"""

from datetime import date
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from domain.edifact import Order, OrderItem


class OrderItemSchema(BaseModel):
    """One order line.

    Values are range-checked by the encoder, which reports them as
    invalid_field errors.
    """
    line_number: int
    product_code: str
    quantity: int
    unit_price: Decimal

    class Config:
        from_attributes = True


class OrderSchema(BaseModel):
    """Purchase order as accepted by POST /orders/encode and returned by
    POST /orders/decode.

    Header fields are optional here so that missing values reach the
    encoder and come back as a missing_field error naming all of them.
    """
    order_number: Optional[str] = None
    buyer_id: Optional[str] = None
    seller_id: Optional[str] = None
    order_date: Optional[date] = None
    items: list[OrderItemSchema] = Field(default_factory=list)
    status: Optional[str] = None

    def to_domain(self) -> Order:
        return Order(
            order_number=self.order_number,
            buyer_id=self.buyer_id,
            seller_id=self.seller_id,
            order_date=self.order_date,
            items=tuple(
                OrderItem(
                    line_number=item.line_number,
                    product_code=item.product_code,
                    quantity=item.quantity,
                    unit_price=item.unit_price,
                )
                for item in self.items
            ),
            status=self.status,
        )

    @classmethod
    def from_domain(cls, order: Order) -> "OrderSchema":
        return cls(
            order_number=order.order_number,
            buyer_id=order.buyer_id,
            seller_id=order.seller_id,
            order_date=order.order_date,
            items=[OrderItemSchema.model_validate(item) for item in order.items],
            status=order.status,
        )


class EncodeResponse(BaseModel):
    """Response schema for POST /orders/encode."""
    message_type: str
    message_reference: str
    segment_count: int
    message: str


class ValidationReportResponse(BaseModel):
    """Response schema for POST /orders/validate.

    errors maps a category (segment tag, SEQUENCE or GENERAL) to its messages.
    """
    valid: bool
    errors: dict[str, list[str]] = Field(default_factory=dict)


class DecodeErrorResponse(BaseModel):
    """Body returned when an inbound message cannot be decoded."""
    error: str
    message: str
    errors: dict[str, list[str]] = Field(default_factory=dict)
    segment: Optional[str] = None


class GtinCheckResponse(BaseModel):
    """Result of a single GTIN-14 check."""
    gtin: str
    valid: bool
    check_digit: Optional[int] = None


class Gs1KeyCheckResponse(BaseModel):
    """Result of a GLN or SSCC check."""
    value: str
    valid: bool
    check_digit: Optional[int] = None


class BulkGtinRequest(BaseModel):
    """Request schema for POST /standards/gtin/bulk."""
    gtins: list[str] = Field(..., min_length=1, max_length=1000)


class BulkGtinResponse(BaseModel):
    """Per-GTIN results plus counts."""
    results: dict[str, bool]
    valid_count: int
    invalid_count: int


class EclassCheckResponse(BaseModel):
    """Result of an eCl@ss code check."""
    code: str
    valid: bool
    version: Optional[int] = None
    display: Optional[str] = None
