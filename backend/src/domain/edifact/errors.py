"""Error taxonomy for EDIFACT ORDERS conversion.

Encoding raises MissingFieldError / InvalidFieldError. Decoding reports its
failures as DecodeResult values tagged with a DecodeErrorKind; the matching
exception classes are raised only when a caller asks for it via
DecodeResult.unwrap().
"""

from enum import Enum
from typing import Optional

from .models import ValidationErrorSet


class DecodeErrorKind(str, Enum):
    """Reasons a decode can fail"""
    OVERSIZED_INPUT = "OVERSIZED_INPUT"
    STRUCTURAL_VIOLATION = "STRUCTURAL_VIOLATION"
    SEMANTIC_EXTRACTION = "SEMANTIC_EXTRACTION"


class EdifactError(Exception):
    """Base class for all codec errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class MissingFieldError(EdifactError):
    """A required order field is absent or empty at encode time."""

    def __init__(self, field: str, missing_fields: Optional[list[str]] = None):
        self.field = field
        self.missing_fields = missing_fields or [field]
        super().__init__(
            "Missing required fields for EDIFACT conversion: "
            + ", ".join(self.missing_fields)
        )


class InvalidFieldError(EdifactError):
    """An order field is present but cannot be transmitted."""

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"Invalid value for {field}: {reason}")


class OversizedInputError(EdifactError):
    """Inbound message exceeds the configured size limit."""

    def __init__(self, size_bytes: int, max_bytes: int):
        self.size_bytes = size_bytes
        self.max_bytes = max_bytes
        super().__init__(
            f"EDIFACT message exceeds maximum size of {max_bytes} bytes (got {size_bytes} bytes)"
        )


class StructuralViolationError(EdifactError):
    """Inbound message failed segment pattern or sequencing checks."""

    def __init__(self, errors: ValidationErrorSet):
        self.errors = errors
        super().__init__(f"EDIFACT message validation failed: {errors.to_dict()}")


class SemanticExtractionError(EdifactError):
    """A well-formed segment carried a value that could not be converted."""

    def __init__(self, segment: str, reason: str):
        self.segment = segment
        self.reason = reason
        super().__init__(f"Cannot extract order from {segment} segment: {reason}")
