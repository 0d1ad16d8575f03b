"""eCl@ss classification code checks.

An eCl@ss commodity class code is 8 digits made of four 2-digit levels:
segment, main group, group and commodity class. The leading two digits
also identify the classification release the code belongs to.
"""

import re
from dataclasses import dataclass
from typing import Optional


ECLASS_CODE_PATTERN = re.compile(r"[0-9]{8}")
# Hyphenated display form, e.g. 27-01-01-01
ECLASS_DISPLAY_PATTERN = re.compile(r"([0-9]{2})-([0-9]{2})-([0-9]{2})-([0-9]{2})")

MIN_SUPPORTED_VERSION = 10
MAX_SUPPORTED_VERSION = 12


@dataclass(frozen=True)
class EclassCode:
    """Parsed eCl@ss code split into its hierarchy levels."""
    segment: str
    main_group: str
    group: str
    commodity_class: str

    @property
    def code(self) -> str:
        return f"{self.segment}{self.main_group}{self.group}{self.commodity_class}"

    @property
    def display(self) -> str:
        return f"{self.segment}-{self.main_group}-{self.group}-{self.commodity_class}"

    @property
    def version(self) -> int:
        return int(self.segment)

    @property
    def is_supported_version(self) -> bool:
        return MIN_SUPPORTED_VERSION <= self.version <= MAX_SUPPORTED_VERSION


def parse_eclass_code(value: str) -> Optional[EclassCode]:
    """Parse an eCl@ss code in plain (8 digits) or hyphenated form.

    Args:
        value: "27010101" or "27-01-01-01"

    Returns:
        EclassCode, or None if the value matches neither form
    """
    if not isinstance(value, str):
        return None

    if ECLASS_CODE_PATTERN.fullmatch(value):
        return EclassCode(value[0:2], value[2:4], value[4:6], value[6:8])

    match = ECLASS_DISPLAY_PATTERN.fullmatch(value)
    if match:
        return EclassCode(*match.groups())

    return None


def validate_eclass_code(value: str) -> bool:
    """Validate an 8-digit eCl@ss code and its classification version.

    Only the plain 8-digit form is accepted. The version (first two digits)
    must be between 10 and 12 inclusive.

    Example:
        >>> validate_eclass_code("10012345")
        True
        >>> validate_eclass_code("09012345")
        False
        >>> validate_eclass_code("1A012345")
        False
    """
    if not isinstance(value, str) or not ECLASS_CODE_PATTERN.fullmatch(value):
        return False

    return MIN_SUPPORTED_VERSION <= int(value[:2]) <= MAX_SUPPORTED_VERSION
