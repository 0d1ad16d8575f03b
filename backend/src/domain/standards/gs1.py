"""GS1 identifier checks (GTIN-14, GLN, SSCC).

Validators in this module never raise: malformed input is reported as
invalid so that callers can run them over untrusted catalog data.
"""

import logging
import re
from typing import Iterable, Optional, Sequence

logger = logging.getLogger(__name__)


GTIN_PATTERN = re.compile(r"[0-9]{14}")
GLN_PATTERN = re.compile(r"[0-9]{13}")
SSCC_PATTERN = re.compile(r"[0-9]{18}")
_PAYLOAD_PATTERN = re.compile(r"[0-9]{13}")

# Longest GS1 key handled here is the SSCC (17 digits + check digit)
MAX_GS1_PAYLOAD_DIGITS = 17


def _mod10_check_digit(digits: str, weights: Sequence[int]) -> int:
    total = sum(
        int(digit) * weights[position % len(weights)]
        for position, digit in enumerate(digits)
    )
    return (10 - (total % 10)) % 10


def compute_gtin_check_digit(payload: str) -> Optional[int]:
    """Compute the mod-10 check digit for the first 13 digits of a GTIN-14.

    Digits are weighted 1, 3, 1, 3, ... starting with weight 1 at position 0.

    Args:
        payload: The 13 leading digits

    Returns:
        Check digit 0-9, or None if payload is not 13 digits

    Example:
        >>> compute_gtin_check_digit("4012345678901")
        0
    """
    if not isinstance(payload, str) or not _PAYLOAD_PATTERN.fullmatch(payload):
        return None

    return _mod10_check_digit(payload, (1, 3))


def compute_gs1_check_digit(payload: str) -> Optional[int]:
    """Compute the GS1 mod-10 check digit for a GLN or SSCC payload.

    Weights alternate 3, 1, 3, ... counted from the rightmost payload digit,
    so the result does not depend on the key length.

    Args:
        payload: All digits of the key except the check digit

    Returns:
        Check digit 0-9, or None if payload is not 1-17 digits

    Example:
        >>> compute_gs1_check_digit("400638133393")
        1
    """
    if not isinstance(payload, str) or not payload.isascii() or not payload.isdigit():
        return None
    if len(payload) > MAX_GS1_PAYLOAD_DIGITS:
        return None

    return _mod10_check_digit(payload[::-1], (3, 1))


def validate_gtin(gtin: str) -> bool:
    """Validate a 14-digit GTIN against its GS1 check digit.

    Args:
        gtin: Candidate GTIN-14 string

    Returns:
        True if the string is 14 digits and the last digit matches the checksum

    Example:
        >>> validate_gtin("40123456789010")
        True
        >>> validate_gtin("40123456789012")
        False
        >>> validate_gtin("4012345678901")
        False
    """
    if not isinstance(gtin, str) or not GTIN_PATTERN.fullmatch(gtin):
        return False

    return compute_gtin_check_digit(gtin[:13]) == int(gtin[13])


def _validate_gs1_key(value: str, pattern: re.Pattern) -> bool:
    if not isinstance(value, str) or not pattern.fullmatch(value):
        return False

    return compute_gs1_check_digit(value[:-1]) == int(value[-1])


def validate_gln(gln: str) -> bool:
    """Validate a 13-digit Global Location Number.

    Example:
        >>> validate_gln("4006381333931")
        True
    """
    return _validate_gs1_key(gln, GLN_PATTERN)


def validate_sscc(sscc: str) -> bool:
    """Validate an 18-digit Serial Shipping Container Code."""
    return _validate_gs1_key(sscc, SSCC_PATTERN)


def validate_gtin_bulk(gtins: Iterable[str]) -> dict[str, bool]:
    """Validate many GTINs at once.

    Duplicate inputs collapse into one entry.

    Args:
        gtins: GTIN strings to check

    Returns:
        Mapping of each input GTIN to its validation result
    """
    results = {gtin: validate_gtin(gtin) for gtin in gtins}
    logger.debug(
        f"Bulk GTIN validation: {sum(results.values())}/{len(results)} valid"
    )
    return results
