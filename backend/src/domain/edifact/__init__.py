"""EDIFACT domain module.

Converts purchase orders to and from UN/EDIFACT D.01B ORDERS messages and
validates inbound messages before they are parsed.
"""

from .models import (
    GENERAL,
    SEQUENCE,
    EdifactMessage,
    Order,
    OrderItem,
    Segment,
    ValidationErrorSet,
)
from .errors import (
    DecodeErrorKind,
    EdifactError,
    InvalidFieldError,
    MissingFieldError,
    OversizedInputError,
    SemanticExtractionError,
    StructuralViolationError,
)
from .grammar import SEGMENT_GRAMMAR, SegmentRule
from .port import DecodeError, DecodeResult, OrderMessageCodecPort
from .encoder import build_message, encode_order
from .decoder import decode_order
from .validator import DEFAULT_MAX_MESSAGE_BYTES, validate_message
from .codec import EdifactOrdersCodec

__all__ = [
    "GENERAL",
    "SEQUENCE",
    "EdifactMessage",
    "Order",
    "OrderItem",
    "Segment",
    "ValidationErrorSet",
    "DecodeErrorKind",
    "EdifactError",
    "InvalidFieldError",
    "MissingFieldError",
    "OversizedInputError",
    "SemanticExtractionError",
    "StructuralViolationError",
    "SEGMENT_GRAMMAR",
    "SegmentRule",
    "DecodeError",
    "DecodeResult",
    "OrderMessageCodecPort",
    "build_message",
    "encode_order",
    "decode_order",
    "DEFAULT_MAX_MESSAGE_BYTES",
    "validate_message",
    "EdifactOrdersCodec",
]
