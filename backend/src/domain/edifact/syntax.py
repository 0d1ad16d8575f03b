"""UN/EDIFACT service characters, field sanitizing and tokenizing.

Outbound values are escaped with the release character so that a value
can never terminate a segment or open a new element. Inbound text is split
with the same rules, so an escaped separator stays inside its value.
"""

import re
from typing import Any


SEGMENT_TERMINATOR = "'"
ELEMENT_SEPARATOR = "+"
COMPONENT_SEPARATOR = ":"
RELEASE_CHARACTER = "?"

SERVICE_CHARACTERS = (
    RELEASE_CHARACTER,  # must be escaped first
    SEGMENT_TERMINATOR,
    ELEMENT_SEPARATOR,
    COMPONENT_SEPARATOR,
)

CONTROL_CHAR_PATTERN = re.compile(r"[\x00-\x1F\x7F]")
RELEASED_CHAR_PATTERN = re.compile(r"\?(.)", re.DOTALL)

# One token is a released pair, the separator itself, or a run of plain text
_TOKEN_PATTERNS = {
    SEGMENT_TERMINATOR: re.compile(r"\?.?|'|[^?']+", re.DOTALL),
    ELEMENT_SEPARATOR: re.compile(r"\?.?|\+|[^?+]+", re.DOTALL),
    COMPONENT_SEPARATOR: re.compile(r"\?.?|:|[^?:]+", re.DOTALL),
}


def sanitize(value: Any) -> str:
    """Make a value safe to place inside a data element.

    Control characters are dropped and every service character is
    preceded by the release character.

    Example:
        >>> sanitize("PO'1+2:3?")
        "PO?'1?+2?:3??"
    """
    if value is None:
        return ""

    text = CONTROL_CHAR_PATTERN.sub("", str(value))
    for char in SERVICE_CHARACTERS:
        text = text.replace(char, RELEASE_CHARACTER + char)
    return text


def unescape(value: str) -> str:
    """Reverse sanitize(): drop release characters, keep what they protect."""
    return RELEASED_CHAR_PATTERN.sub(r"\1", value)


def _split_released(text: str, separator: str) -> list[str]:
    parts = []
    current = []
    for match in _TOKEN_PATTERNS[separator].finditer(text):
        token = match.group()
        if token == separator:
            parts.append("".join(current))
            current = []
        else:
            current.append(token)
    parts.append("".join(current))
    return parts


def split_segments(text: str) -> list[str]:
    """Split message text into raw segments (terminators removed).

    Whitespace before a segment tag and line breaks after a segment are
    ignored and empty segments dropped, so both single-line and indented
    one-segment-per-line messages are accepted. Spaces before a terminator
    belong to the last data value and are kept.
    """
    segments = []
    for raw in _split_released(text, SEGMENT_TERMINATOR):
        raw = raw.lstrip().rstrip("\r\n")
        if raw:
            segments.append(raw)
    return segments


def split_elements(segment: str) -> list[str]:
    """Split one raw segment into tag and data elements (still escaped)."""
    return _split_released(segment, ELEMENT_SEPARATOR)


def split_components(element: str) -> list[str]:
    """Split one data element into its components (still escaped)."""
    return _split_released(element, COMPONENT_SEPARATOR)
