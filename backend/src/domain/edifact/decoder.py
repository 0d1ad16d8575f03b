"""EDIFACT D.01B ORDERS message -> Order.

Decoding runs in fixed stages: size check, segment split, structural
validation, value extraction. Each stage either hands over to the next or
ends the decode with a DecodeResult describing what failed. A failed
decode never returns a partially populated Order.
"""

import logging
import re
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Mapping, Optional, Union

from .errors import DecodeErrorKind, SemanticExtractionError
from .grammar import (
    MAX_NUMERIC_DIGITS,
    PARTY_BUYER,
    PARTY_SELLER,
    SEGMENT_GRAMMAR,
    SegmentRule,
    segment_tag,
)
from .models import Order, OrderItem, Segment
from .port import DecodeError, DecodeResult
from .syntax import split_segments
from .validator import (
    DEFAULT_MAX_MESSAGE_BYTES,
    check_size,
    message_size,
    read_text,
    validate_segments,
)

logger = logging.getLogger(__name__)


_INTEGER_PATTERN = re.compile(r"[0-9]+")


def _positive_int(value: str, segment: str, name: str) -> int:
    if not _INTEGER_PATTERN.fullmatch(value):
        raise SemanticExtractionError(segment, f"{name} '{value}' is not a positive integer")
    if len(value) > MAX_NUMERIC_DIGITS:
        raise SemanticExtractionError(segment, f"{name} exceeds {MAX_NUMERIC_DIGITS} digits")
    number = int(value)
    if number <= 0:
        raise SemanticExtractionError(segment, f"{name} must be positive, got {number}")
    return number


def _amount(value: str, segment: str) -> Decimal:
    # Comma is the alternative EDIFACT decimal mark
    try:
        amount = Decimal(value.replace(",", "."))
    except InvalidOperation:
        raise SemanticExtractionError(segment, f"amount '{value}' is not a decimal number")
    if not amount.is_finite() or amount < 0:
        raise SemanticExtractionError(segment, f"amount '{value}' must be a non-negative number")
    return amount


def _document_date(value: str) -> date:
    try:
        return datetime.strptime(value, "%Y%m%d").date()
    except ValueError:
        raise SemanticExtractionError("DTM", f"'{value}' is not a valid CCYYMMDD date")


class _OrderAssembler:
    """Collects values while walking validated segments."""

    def __init__(self):
        self.order_number: Optional[str] = None
        self.buyer_id: Optional[str] = None
        self.seller_id: Optional[str] = None
        self.order_date: Optional[date] = None
        self.items: list[OrderItem] = []
        self._line: Optional[dict] = None
        self._line_numbers: set[int] = set()

    def feed(self, segment: Segment) -> None:
        handler = getattr(self, f"_on_{segment.tag.lower()}", None)
        if handler is not None:
            handler(segment)

    def _on_bgm(self, segment: Segment) -> None:
        self.order_number = segment.component(1)

    def _on_dtm(self, segment: Segment) -> None:
        self.order_date = _document_date(segment.component(0, 1))

    def _on_nad(self, segment: Segment) -> None:
        # Repeated parties overwrite earlier ones (last one wins)
        qualifier = segment.component(0)
        if qualifier == PARTY_BUYER:
            self.buyer_id = segment.component(1)
        elif qualifier == PARTY_SELLER:
            self.seller_id = segment.component(1)

    def _on_lin(self, segment: Segment) -> None:
        line_number = _positive_int(segment.component(0), "LIN", "line number")
        if line_number in self._line_numbers:
            raise SemanticExtractionError("LIN", f"duplicate line number {line_number}")
        self._line_numbers.add(line_number)
        self._line = {
            "line_number": line_number,
            "product_code": segment.component(1, 0),
        }

    def _on_qty(self, segment: Segment) -> None:
        self._line["quantity"] = _positive_int(segment.component(0, 1), "QTY", "quantity")

    def _on_moa(self, segment: Segment) -> None:
        self._line["unit_price"] = _amount(segment.component(0, 1), "MOA")
        self.items.append(OrderItem(**self._line))
        self._line = None

    def build(self) -> Order:
        for name in ("order_number", "buyer_id", "seller_id", "order_date"):
            if not getattr(self, name):
                raise SemanticExtractionError("GENERAL", f"message carries no {name}")
        return Order(
            order_number=self.order_number,
            buyer_id=self.buyer_id,
            seller_id=self.seller_id,
            order_date=self.order_date,
            items=tuple(self.items),
        )


def decode_order(
    message: Union[str, bytes, None],
    max_message_bytes: int = DEFAULT_MAX_MESSAGE_BYTES,
    grammar: Mapping[str, SegmentRule] = SEGMENT_GRAMMAR,
) -> DecodeResult:
    """Parse an EDIFACT ORDERS message into a new Order.

    Args:
        message: Raw message text or UTF-8 bytes
        max_message_bytes: Inputs above this size are rejected before parsing
        grammar: Segment grammar table

    Returns:
        DecodeResult with the Order, or with a DecodeError whose kind is
        OVERSIZED_INPUT, STRUCTURAL_VIOLATION or SEMANTIC_EXTRACTION
    """
    errors = check_size(message, max_message_bytes)
    if errors:
        return DecodeResult.failed(DecodeError(
            kind=DecodeErrorKind.OVERSIZED_INPUT,
            message="EDIFACT message exceeds the maximum size",
            errors=errors,
            size_bytes=message_size(message),
            max_bytes=max_message_bytes,
        ))

    text, errors = read_text(message)
    if not errors:
        raw_segments = split_segments(text)
        errors = validate_segments(raw_segments, grammar)
    if errors:
        return DecodeResult.failed(DecodeError(
            kind=DecodeErrorKind.STRUCTURAL_VIOLATION,
            message="EDIFACT message validation failed",
            errors=errors,
        ))

    assembler = _OrderAssembler()
    try:
        for raw in raw_segments:
            if segment_tag(raw) in grammar:
                assembler.feed(Segment.from_raw(raw))
        order = assembler.build()
    except SemanticExtractionError as e:
        return DecodeResult.failed(DecodeError(
            kind=DecodeErrorKind.SEMANTIC_EXTRACTION,
            message=e.message,
            segment=e.segment,
        ))

    logger.debug(
        f"Decoded EDIFACT order {order.order_number} with {len(order.items)} items"
    )
    return DecodeResult.ok(order)
