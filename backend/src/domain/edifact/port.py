"""Order message codec port and its result types.

The port decouples callers (order service, inbound gateway) from the
concrete message format. EdifactOrdersCodec is the only implementation.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional, Union

from .errors import (
    DecodeErrorKind,
    EdifactError,
    OversizedInputError,
    SemanticExtractionError,
    StructuralViolationError,
)
from .models import Order, ValidationErrorSet


@dataclass
class DecodeError:
    """Why a decode failed.

    Attributes:
        kind: Failure category callers branch on
        message: Human-readable summary
        errors: Validation findings (size and structural failures)
        segment: Offending segment tag (semantic failures)
        size_bytes: Measured input size (oversized input)
        max_bytes: Configured limit (oversized input)
    """
    kind: DecodeErrorKind
    message: str
    errors: ValidationErrorSet = field(default_factory=ValidationErrorSet)
    segment: Optional[str] = None
    size_bytes: Optional[int] = None
    max_bytes: Optional[int] = None

    def to_exception(self) -> EdifactError:
        if self.kind == DecodeErrorKind.OVERSIZED_INPUT:
            return OversizedInputError(self.size_bytes or 0, self.max_bytes or 0)
        if self.kind == DecodeErrorKind.STRUCTURAL_VIOLATION:
            return StructuralViolationError(self.errors)
        return SemanticExtractionError(self.segment or "UNKNOWN", self.message)


@dataclass
class DecodeResult:
    """Outcome of decoding one message.

    Exactly one of order / error is set. A failed decode never carries a
    partially populated order.
    """
    success: bool
    order: Optional[Order] = None
    error: Optional[DecodeError] = None

    @classmethod
    def ok(cls, order: Order) -> "DecodeResult":
        return cls(success=True, order=order)

    @classmethod
    def failed(cls, error: DecodeError) -> "DecodeResult":
        return cls(success=False, error=error)

    @property
    def kind(self) -> Optional[DecodeErrorKind]:
        return self.error.kind if self.error else None

    def unwrap(self) -> Order:
        """Return the decoded order or raise the typed error."""
        if self.success and self.order is not None:
            return self.order
        raise self.error.to_exception()


class OrderMessageCodecPort(ABC):
    """Port interface for order message codecs."""

    @property
    @abstractmethod
    def message_type(self) -> str:
        """Message type identifier, e.g. ORDERS:D:01B:UN."""
        pass

    @abstractmethod
    def encode(self, order: Order) -> str:
        """Serialize an order into message text.

        Raises:
            MissingFieldError: If a required order field is absent
            InvalidFieldError: If an item value cannot be transmitted
        """
        pass

    @abstractmethod
    def decode(self, message: Union[str, bytes]) -> DecodeResult:
        """Parse message text into a new Order. Never raises for bad input."""
        pass

    @abstractmethod
    def validate(self, message: Union[str, bytes]) -> ValidationErrorSet:
        """Check message structure and return every finding."""
        pass
