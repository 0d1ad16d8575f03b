"""Structural and business validation of inbound ORDERS messages.

Checks are collected, never raised: every function returns a complete
ValidationErrorSet so a gateway can report all defects of a message at once.
The size check runs before any splitting so oversized input never gets
tokenized.
"""

import logging
from typing import Mapping, Optional, Union

from .grammar import (
    PARTY_BUYER,
    PARTY_SELLER,
    SEGMENT_GRAMMAR,
    SegmentRule,
    segment_tag,
)
from .models import GENERAL, SEQUENCE, Segment, ValidationErrorSet
from .syntax import split_segments

logger = logging.getLogger(__name__)


DEFAULT_MAX_MESSAGE_BYTES = 1_048_576  # 1 MiB

# Segments every order message must contain (besides UNH/UNT)
MANDATORY_SEGMENTS = (
    ("BGM+", "Message must contain a BGM segment"),
    ("DTM+", "Message must contain a DTM segment"),
    (f"NAD+{PARTY_BUYER}+", "Message must contain a buyer (NAD+BY) segment"),
    (f"NAD+{PARTY_SELLER}+", "Message must contain a seller (NAD+SE) segment"),
    ("LIN+", "Message must contain at least one LIN segment"),
)


def message_size(message: Union[str, bytes, None]) -> int:
    """Size of a message in UTF-8 bytes."""
    if message is None:
        return 0
    if isinstance(message, (bytes, bytearray)):
        return len(message)
    return len(message.encode("utf-8", errors="surrogatepass"))


def check_size(
    message: Union[str, bytes, None],
    max_message_bytes: int = DEFAULT_MAX_MESSAGE_BYTES,
) -> ValidationErrorSet:
    """Return a single GENERAL error if the message exceeds the limit."""
    errors = ValidationErrorSet()
    if message is None:
        return errors

    # A str never has fewer UTF-8 bytes than characters
    size = len(message)
    if size <= max_message_bytes:
        size = message_size(message)

    if size > max_message_bytes:
        errors.add(
            GENERAL,
            f"Invalid message size: {size} bytes exceeds maximum of {max_message_bytes} bytes",
        )
    return errors


def read_text(message: Union[str, bytes, None]) -> tuple[Optional[str], ValidationErrorSet]:
    """Turn raw input into text, reporting empty or non UTF-8 input."""
    errors = ValidationErrorSet()

    if isinstance(message, (bytes, bytearray)):
        try:
            message = bytes(message).decode("utf-8")
        except UnicodeDecodeError as e:
            errors.add(GENERAL, f"Message is not valid UTF-8: {e.reason} at byte {e.start}")
            return None, errors

    if message is None or not message.strip():
        errors.add(GENERAL, "Message is empty")
        return None, errors

    return message, errors


def validate_segments(
    raw_segments: list[str],
    grammar: Mapping[str, SegmentRule] = SEGMENT_GRAMMAR,
) -> ValidationErrorSet:
    """Validate already split segments.

    Args:
        raw_segments: Segment strings without terminators
        grammar: Segment grammar table

    Returns:
        Every pattern, sequencing and control-count finding
    """
    errors = ValidationErrorSet()

    if not raw_segments:
        errors.add(GENERAL, "Message contains no segments")
        return errors

    tags = [segment_tag(raw) for raw in raw_segments]
    conforming = [False] * len(raw_segments)

    for index, (raw, tag) in enumerate(zip(raw_segments, tags)):
        rule = grammar.get(tag) if tag else None
        if rule is None:
            # Unknown segments are tolerated for forward compatibility
            continue
        if rule.matches(raw):
            conforming[index] = True
        else:
            errors.add(tag, f"Invalid segment format: {raw}")

    _check_envelope(tags, errors)
    _check_mandatory_segments(raw_segments, errors)
    _check_line_groups(tags, grammar, errors)
    _check_control_counts(raw_segments, tags, conforming, errors)

    logger.debug(
        f"EDIFACT validation completed with {len(errors.categories)} error categories"
    )
    return errors


def validate_message(
    message: Union[str, bytes, None],
    max_message_bytes: int = DEFAULT_MAX_MESSAGE_BYTES,
    grammar: Mapping[str, SegmentRule] = SEGMENT_GRAMMAR,
) -> ValidationErrorSet:
    """Validate a complete EDIFACT message.

    Args:
        message: Raw message text or UTF-8 bytes
        max_message_bytes: Size limit checked before anything else
        grammar: Segment grammar table

    Returns:
        ValidationErrorSet, empty if the message is valid

    Example:
        >>> errors = validate_message("UNH+1+ORDERS:D:01B:UN'BGM+220+PO1+9'")
        >>> errors.get("SEQUENCE")[0]
        'Message must end with UNT segment'
    """
    errors = check_size(message, max_message_bytes)
    if errors:
        return errors

    text, errors = read_text(message)
    if errors:
        return errors

    return validate_segments(split_segments(text), grammar)


def _check_envelope(tags: list[Optional[str]], errors: ValidationErrorSet) -> None:
    if tags[0] != "UNH":
        errors.add(SEQUENCE, "Message must start with UNH segment")
    if tags[-1] != "UNT":
        errors.add(SEQUENCE, "Message must end with UNT segment")

    for tag in ("UNH", "UNT"):
        if tags.count(tag) > 1:
            errors.add(SEQUENCE, f"Message must contain exactly one {tag} segment")


def _check_mandatory_segments(raw_segments: list[str], errors: ValidationErrorSet) -> None:
    for prefix, message in MANDATORY_SEGMENTS:
        if not any(raw.startswith(prefix) for raw in raw_segments):
            errors.add(SEQUENCE, message)


def _check_line_groups(
    tags: list[Optional[str]],
    grammar: Mapping[str, SegmentRule],
    errors: ValidationErrorSet,
) -> None:
    """Each LIN must be followed by QTY then MOA (unknown tags skipped)."""
    registered = [tag for tag in tags if tag in grammar]
    line_count = 0

    for index, tag in enumerate(registered):
        previous = registered[index - 1] if index > 0 else None
        if tag == "LIN":
            line_count += 1
            if registered[index + 1:index + 3] != ["QTY", "MOA"]:
                errors.add(
                    SEQUENCE,
                    f"LIN segment #{line_count} must be followed by QTY and MOA segments",
                )
        elif tag == "QTY" and previous != "LIN":
            errors.add(SEQUENCE, "QTY segment outside a LIN group")
        elif tag == "MOA" and (previous != "QTY" or index < 2 or registered[index - 2] != "LIN"):
            errors.add(SEQUENCE, "MOA segment outside a LIN group")


def _check_control_counts(
    raw_segments: list[str],
    tags: list[Optional[str]],
    conforming: list[bool],
    errors: ValidationErrorSet,
) -> None:
    """UNT segment count/reference and CNT line count."""
    if tags[-1] == "UNT" and conforming[-1]:
        trailer = Segment.from_raw(raw_segments[-1])
        declared = int(trailer.component(0))
        # Accept the 7 + 3n count written by the encoder (UNH excluded) as
        # well as the full count that includes UNH
        if declared not in (len(raw_segments) - 1, len(raw_segments)):
            errors.add(
                "UNT",
                f"Segment count mismatch: UNT declares {declared}, message has {len(raw_segments)}",
            )

        if tags[0] == "UNH" and conforming[0]:
            # Compare escaped forms, both sides went through the same sanitizer
            header_ref = Segment.from_raw(raw_segments[0]).elements[0]
            trailer_ref = trailer.elements[1]
            if header_ref != trailer_ref:
                errors.add(
                    "UNT",
                    f"Message reference mismatch: UNH has '{header_ref}', UNT has '{trailer_ref}'",
                )

    line_items = tags.count("LIN")
    for raw, tag, ok in zip(raw_segments, tags, conforming):
        if tag == "CNT" and ok:
            declared = int(Segment.from_raw(raw).component(0, 1))
            if declared != line_items:
                errors.add(
                    "CNT",
                    f"Line item count mismatch: CNT declares {declared}, message has {line_items} LIN segments",
                )
