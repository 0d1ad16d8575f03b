"""Trade standards checks (GS1 GTIN/GLN/SSCC, eCl@ss) gating product transmission."""

from .gs1 import (
    compute_gs1_check_digit,
    compute_gtin_check_digit,
    validate_gln,
    validate_gtin,
    validate_gtin_bulk,
    validate_sscc,
)
from .eclass import (
    EclassCode,
    parse_eclass_code,
    validate_eclass_code,
    MIN_SUPPORTED_VERSION,
    MAX_SUPPORTED_VERSION,
)

__all__ = [
    "compute_gs1_check_digit",
    "compute_gtin_check_digit",
    "validate_gln",
    "validate_gtin",
    "validate_gtin_bulk",
    "validate_sscc",
    "EclassCode",
    "parse_eclass_code",
    "validate_eclass_code",
    "MIN_SUPPORTED_VERSION",
    "MAX_SUPPORTED_VERSION",
]
