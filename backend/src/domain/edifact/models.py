"""Domain models for EDIFACT ORDERS conversion.

Order and OrderItem are owned by the calling service; the codec only reads
them when encoding and builds fresh instances when decoding. Segment and
EdifactMessage live for the duration of one encode or decode call.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Iterator, Optional

from .syntax import (
    ELEMENT_SEPARATOR,
    SEGMENT_TERMINATOR,
    split_components,
    split_elements,
    unescape,
)


# Validation categories that are not segment tags
SEQUENCE = "SEQUENCE"
GENERAL = "GENERAL"


@dataclass(frozen=True)
class OrderItem:
    """One order line (LIN/QTY/MOA group)."""
    line_number: int
    product_code: str
    quantity: int
    unit_price: Decimal


@dataclass(frozen=True)
class Order:
    """Purchase order as exchanged with trading partners.

    status is managed by the order service and is never written to the
    message; decoded orders carry status=None.
    """
    order_number: str
    buyer_id: str
    seller_id: str
    order_date: date
    items: tuple[OrderItem, ...] = ()
    status: Optional[str] = None


@dataclass(frozen=True)
class Segment:
    """A single segment: tag plus raw (escaped) data elements."""
    tag: str
    elements: tuple[str, ...] = ()

    @classmethod
    def from_raw(cls, raw_segment: str) -> "Segment":
        """Tokenize a raw segment string without its terminator."""
        tag, *elements = split_elements(raw_segment)
        return cls(tag=tag, elements=tuple(elements))

    def component(self, element_index: int, component_index: int = 0) -> str:
        """Unescaped value of one component, "" if it is not present."""
        if element_index >= len(self.elements):
            return ""
        components = split_components(self.elements[element_index])
        if component_index >= len(components):
            return ""
        return unescape(components[component_index])

    def render(self) -> str:
        return ELEMENT_SEPARATOR.join((self.tag, *self.elements)) + SEGMENT_TERMINATOR


@dataclass(frozen=True)
class EdifactMessage:
    """Ordered segments of one UNH..UNT message."""
    segments: tuple[Segment, ...]

    @property
    def reference(self) -> Optional[str]:
        if not self.segments or self.segments[0].tag != "UNH":
            return None
        return self.segments[0].component(0)

    @property
    def declared_segment_count(self) -> Optional[int]:
        if not self.segments or self.segments[-1].tag != "UNT":
            return None
        value = self.segments[-1].component(0)
        return int(value) if value.isdigit() else None

    def __len__(self) -> int:
        return len(self.segments)

    def render(self) -> str:
        return "".join(segment.render() for segment in self.segments)


@dataclass
class ValidationErrorSet:
    """Validation findings grouped by category.

    Categories are segment tags, SEQUENCE or GENERAL. Messages keep the
    order in which they were found. An empty set means the message is valid.
    """
    errors: dict[str, list[str]] = field(default_factory=dict)

    def add(self, category: str, message: str) -> None:
        self.errors.setdefault(category, []).append(message)

    def extend(self, other: "ValidationErrorSet") -> None:
        for category, messages in other.errors.items():
            for message in messages:
                self.add(category, message)

    @property
    def categories(self) -> list[str]:
        return list(self.errors)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def get(self, category: str) -> list[str]:
        return list(self.errors.get(category, []))

    def to_dict(self) -> dict[str, list[str]]:
        return {category: list(messages) for category, messages in self.errors.items()}

    def __contains__(self, category: object) -> bool:
        return category in self.errors

    def __iter__(self) -> Iterator[str]:
        return iter(self.errors)

    def __len__(self) -> int:
        """Total number of messages across all categories."""
        return sum(len(messages) for messages in self.errors.values())

    def __bool__(self) -> bool:
        return bool(self.errors)
