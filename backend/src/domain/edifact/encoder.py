"""Order -> EDIFACT D.01B ORDERS message.

The message is assembled as a list of Segment values and rendered with a
single join once every segment has been built, so a failure part-way
through never yields message text.
"""

import logging
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping, Optional
from uuid import uuid4

from .errors import InvalidFieldError, MissingFieldError
from .grammar import (
    AMOUNT_LINE_ITEM,
    CONTROL_LINE_ITEMS,
    DATE_FORMAT_CCYYMMDD,
    DATE_QUALIFIER_DOCUMENT,
    DEFAULT_ASSOCIATION_CODE,
    DOCUMENT_TYPE_PURCHASE_ORDER,
    FIXED_SEGMENT_COUNT,
    ITEM_NUMBER_TYPE,
    MAX_NUMERIC_DIGITS,
    MESSAGE_FUNCTION_ORIGINAL,
    MESSAGE_IDENTIFIER,
    PARTY_BUYER,
    PARTY_SELLER,
    QUANTITY_ORDERED,
    SECTION_DETAIL,
    SEGMENT_GRAMMAR,
    SEGMENTS_PER_ITEM,
    SegmentRule,
)
from .models import EdifactMessage, Order, OrderItem, Segment
from .syntax import COMPONENT_SEPARATOR, sanitize

logger = logging.getLogger(__name__)


# UNH 0062 message reference is an..14
MESSAGE_REFERENCE_LENGTH = 14
REQUIRED_FIELDS = ("order_number", "buyer_id", "seller_id", "order_date", "items")


def generate_message_reference() -> str:
    """Fresh opaque message reference, unique per call."""
    return uuid4().hex[:MESSAGE_REFERENCE_LENGTH]


def expected_segment_count(item_count: int) -> int:
    return FIXED_SEGMENT_COUNT + SEGMENTS_PER_ITEM * item_count


def _component(*values: str) -> str:
    return COMPONENT_SEPARATOR.join(values)


class _SegmentBuilder:
    """Builds segments checked against the grammar's element counts."""

    def __init__(self, grammar: Mapping[str, SegmentRule]):
        self._grammar = grammar
        self.segments: list[Segment] = []

    def add(self, tag: str, *elements: str) -> None:
        rule = self._grammar[tag]
        if len(elements) != rule.element_count:
            raise ValueError(
                f"{tag} segment takes {rule.element_count} elements, got {len(elements)}"
            )
        self.segments.append(Segment(tag=tag, elements=tuple(elements)))


def _missing_fields(order: Order) -> list[str]:
    missing = []
    for name in REQUIRED_FIELDS:
        value = getattr(order, name, None)
        if value is None:
            missing.append(name)
        elif name == "items":
            if len(value) == 0:
                missing.append(name)
        elif name != "order_date" and not sanitize(value).strip():
            missing.append(name)
    return missing


def _positive_int(value: Any, field: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidFieldError(field, f"expected a positive integer, got {value!r}")
    if abs(value) >= 10 ** MAX_NUMERIC_DIGITS:
        raise InvalidFieldError(field, f"exceeds {MAX_NUMERIC_DIGITS} digits")
    if value <= 0:
        raise InvalidFieldError(field, f"must be positive, got {value}")
    return value


def _unit_price(value: Any, field: str) -> Decimal:
    if isinstance(value, bool) or value is None:
        raise InvalidFieldError(field, f"expected a decimal amount, got {value!r}")
    try:
        price = value if isinstance(value, Decimal) else Decimal(str(value))
    except InvalidOperation:
        raise InvalidFieldError(field, f"expected a decimal amount, got {value!r}")
    if not price.is_finite():
        raise InvalidFieldError(field, f"must be a finite amount, got {value!r}")
    if price < 0:
        raise InvalidFieldError(field, f"must not be negative, got {price}")
    return price


def _format_date(value: Any) -> str:
    if isinstance(value, datetime):
        value = value.date()
    if not isinstance(value, date):
        raise InvalidFieldError("order_date", f"expected a date, got {value!r}")
    return value.strftime("%Y%m%d")


def _checked_items(items: Any) -> list[OrderItem]:
    """Validate item values and return them in line-number order."""
    seen = set()
    for index, item in enumerate(items):
        prefix = f"items[{index}]"
        line_number = _positive_int(item.line_number, f"{prefix}.line_number")
        _positive_int(item.quantity, f"{prefix}.quantity")
        _unit_price(item.unit_price, f"{prefix}.unit_price")
        if not sanitize(item.product_code).strip():
            raise MissingFieldError(f"{prefix}.product_code")
        if line_number in seen:
            raise InvalidFieldError(f"{prefix}.line_number", f"duplicate line number {line_number}")
        seen.add(line_number)
    return sorted(items, key=lambda item: item.line_number)


def build_message(
    order: Order,
    message_reference: Optional[str] = None,
    association_code: str = DEFAULT_ASSOCIATION_CODE,
    grammar: Mapping[str, SegmentRule] = SEGMENT_GRAMMAR,
) -> EdifactMessage:
    """Build the ORDERS segments for an order.

    Args:
        order: Order with at least one item
        message_reference: Reference for UNH/UNT; generated when omitted
        association_code: Association assigned code appended to UNH 0065
        grammar: Segment grammar table

    Returns:
        EdifactMessage with 8 + 3 * len(order.items) segments; UNT declares
        expected_segment_count(), which leaves UNH out

    Raises:
        MissingFieldError: order number, parties, date or items missing
        InvalidFieldError: an item value cannot be transmitted
    """
    missing = _missing_fields(order)
    if missing:
        raise MissingFieldError(missing[0], missing)

    items = _checked_items(order.items)
    order_date = _format_date(order.order_date)
    reference = sanitize(message_reference or generate_message_reference())

    message_identifier = MESSAGE_IDENTIFIER
    if association_code:
        message_identifier = _component(MESSAGE_IDENTIFIER, sanitize(association_code))

    builder = _SegmentBuilder(grammar)
    builder.add("UNH", reference, message_identifier)
    builder.add("BGM", DOCUMENT_TYPE_PURCHASE_ORDER, sanitize(order.order_number), MESSAGE_FUNCTION_ORIGINAL)
    builder.add("DTM", _component(DATE_QUALIFIER_DOCUMENT, order_date, DATE_FORMAT_CCYYMMDD))
    builder.add("NAD", PARTY_BUYER, sanitize(order.buyer_id))
    builder.add("NAD", PARTY_SELLER, sanitize(order.seller_id))

    for item in items:
        price = format(_unit_price(item.unit_price, "unit_price"), "f")
        builder.add("LIN", sanitize(item.line_number), _component(sanitize(item.product_code), ITEM_NUMBER_TYPE))
        builder.add("QTY", _component(QUANTITY_ORDERED, sanitize(item.quantity)))
        builder.add("MOA", _component(AMOUNT_LINE_ITEM, sanitize(price)))

    builder.add("UNS", SECTION_DETAIL)
    builder.add("CNT", _component(CONTROL_LINE_ITEMS, str(len(items))))
    builder.add("UNT", str(expected_segment_count(len(items))), reference)

    return EdifactMessage(segments=tuple(builder.segments))


def encode_order(
    order: Order,
    message_reference: Optional[str] = None,
    association_code: str = DEFAULT_ASSOCIATION_CODE,
    grammar: Mapping[str, SegmentRule] = SEGMENT_GRAMMAR,
) -> str:
    """Serialize an order into EDIFACT ORDERS text.

    The result starts with
    "UNH+<reference>+ORDERS:D:01B:UN:EAN010'BGM+220+<order number>+9'".
    """
    message = build_message(order, message_reference, association_code, grammar)
    logger.debug(
        f"Encoded order {order.order_number} as {len(message)} segments (ref={message.reference})"
    )
    return message.render()
