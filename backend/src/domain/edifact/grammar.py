"""Segment grammar for the EDIFACT D.01B ORDERS subset.

The table is built once at import time and exposed through a read-only
mapping, so it can be shared between threads without locking.
"""

import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional


MESSAGE_TYPE = "ORDERS"
DIRECTORY_VERSION = "D"
DIRECTORY_RELEASE = "01B"
CONTROLLING_AGENCY = "UN"
MESSAGE_IDENTIFIER = f"{MESSAGE_TYPE}:{DIRECTORY_VERSION}:{DIRECTORY_RELEASE}:{CONTROLLING_AGENCY}"
DEFAULT_ASSOCIATION_CODE = "EAN010"

# Code list values used by this subset
DOCUMENT_TYPE_PURCHASE_ORDER = "220"
MESSAGE_FUNCTION_ORIGINAL = "9"
DATE_QUALIFIER_DOCUMENT = "137"
DATE_FORMAT_CCYYMMDD = "203"
PARTY_BUYER = "BY"
PARTY_SELLER = "SE"
ITEM_NUMBER_TYPE = "EN"
QUANTITY_ORDERED = "21"
AMOUNT_LINE_ITEM = "203"
SECTION_DETAIL = "S"
CONTROL_LINE_ITEMS = "2"

# UNT control count: BGM DTM NAD NAD UNS CNT UNT plus one LIN/QTY/MOA group
# per item. UNH is not counted, so a one-item message declares 10.
FIXED_SEGMENT_COUNT = 7
SEGMENTS_PER_ITEM = 3

# Digit limits for UNT/CNT control counts
MAX_COUNT_DIGITS = 6
# Digit limit for line numbers and quantities
MAX_NUMERIC_DIGITS = 9

# A data value: plain characters or released pairs, never a bare separator
_VALUE = r"(?:\?.|[^?'+:])+"
_COUNT = rf"[0-9]{{1,{MAX_COUNT_DIGITS}}}"

_TAG_PATTERN = re.compile(r"([A-Z0-9]{3})(?:\+|$)")


@dataclass(frozen=True)
class SegmentRule:
    """Recognition rule for one segment tag.

    Attributes:
        tag: Three-letter segment tag
        pattern: Compiled pattern for a raw segment without its terminator
        element_count: Number of data elements following the tag
        description: Human-readable purpose of the segment
    """
    tag: str
    pattern: re.Pattern
    element_count: int
    description: str

    def matches(self, raw_segment: str) -> bool:
        return self.pattern.fullmatch(raw_segment) is not None


def _rule(tag: str, pattern: str, element_count: int, description: str) -> SegmentRule:
    return SegmentRule(tag, re.compile(pattern, re.DOTALL), element_count, description)


SEGMENT_GRAMMAR: Mapping[str, SegmentRule] = MappingProxyType({
    rule.tag: rule
    for rule in (
        _rule(
            "UNH",
            rf"UNH\+{_VALUE}\+{MESSAGE_IDENTIFIER}(?::{_VALUE})?",
            2,
            "Message header",
        ),
        _rule(
            "BGM",
            rf"BGM\+{DOCUMENT_TYPE_PURCHASE_ORDER}\+{_VALUE}\+{MESSAGE_FUNCTION_ORIGINAL}",
            3,
            "Beginning of message (purchase order, original)",
        ),
        _rule(
            "DTM",
            rf"DTM\+{DATE_QUALIFIER_DOCUMENT}:[0-9]{{8}}:{DATE_FORMAT_CCYYMMDD}",
            1,
            "Document date (CCYYMMDD)",
        ),
        _rule(
            "NAD",
            rf"NAD\+(?:{PARTY_BUYER}|{PARTY_SELLER})\+{_VALUE}",
            2,
            "Name and address (buyer or seller)",
        ),
        _rule(
            "LIN",
            rf"LIN\+{_VALUE}\+{_VALUE}:{ITEM_NUMBER_TYPE}",
            2,
            "Line item",
        ),
        _rule(
            "QTY",
            rf"QTY\+{QUANTITY_ORDERED}:{_VALUE}",
            1,
            "Ordered quantity",
        ),
        _rule(
            "MOA",
            rf"MOA\+{AMOUNT_LINE_ITEM}:{_VALUE}",
            1,
            "Line item amount",
        ),
        _rule(
            "UNS",
            rf"UNS\+{SECTION_DETAIL}",
            1,
            "Section control",
        ),
        _rule(
            "CNT",
            rf"CNT\+{CONTROL_LINE_ITEMS}:{_COUNT}",
            1,
            "Control total (number of line items)",
        ),
        _rule(
            "UNT",
            rf"UNT\+{_COUNT}\+{_VALUE}",
            2,
            "Message trailer",
        ),
    )
})


def segment_tag(raw_segment: str) -> Optional[str]:
    """Return the tag of a raw segment, or None if it has no valid tag.

    Example:
        >>> segment_tag("BGM+220+PO1+9")
        'BGM'
        >>> segment_tag("garbage") is None
        True
    """
    match = _TAG_PATTERN.match(raw_segment)
    return match.group(1) if match else None


def rule_for(tag: Optional[str], grammar: Mapping[str, SegmentRule] = SEGMENT_GRAMMAR) -> Optional[SegmentRule]:
    if tag is None:
        return None
    return grammar.get(tag)


def is_registered(tag: Optional[str], grammar: Mapping[str, SegmentRule] = SEGMENT_GRAMMAR) -> bool:
    return rule_for(tag, grammar) is not None
