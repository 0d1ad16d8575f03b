"""EdifactOrdersCodec - EDIFACT D.01B ORDERS implementation of the codec port."""

import logging
from typing import Mapping, Optional, Union

from .decoder import decode_order
from .encoder import build_message, encode_order
from .grammar import DEFAULT_ASSOCIATION_CODE, MESSAGE_IDENTIFIER, SEGMENT_GRAMMAR, SegmentRule
from .models import EdifactMessage, Order, ValidationErrorSet
from .port import DecodeResult, OrderMessageCodecPort
from .validator import DEFAULT_MAX_MESSAGE_BYTES, validate_message

logger = logging.getLogger(__name__)


class EdifactOrdersCodec(OrderMessageCodecPort):
    """Converts orders to and from EDIFACT ORDERS messages.

    Instances hold only immutable configuration, so one codec can serve
    concurrent requests.

    Example:
        codec = EdifactOrdersCodec(max_message_bytes=512 * 1024)
        text = codec.encode(order)
        result = codec.decode(text)
        assert result.success and result.order.order_number == order.order_number
    """

    def __init__(
        self,
        grammar: Mapping[str, SegmentRule] = SEGMENT_GRAMMAR,
        max_message_bytes: int = DEFAULT_MAX_MESSAGE_BYTES,
        association_code: str = DEFAULT_ASSOCIATION_CODE,
    ):
        """Initialize codec.

        Args:
            grammar: Segment grammar table
            max_message_bytes: Inbound size limit in bytes
            association_code: Code appended to the UNH message identifier
        """
        if max_message_bytes <= 0:
            raise ValueError("max_message_bytes must be positive")
        self._grammar = grammar
        self._max_message_bytes = max_message_bytes
        self._association_code = association_code

    @property
    def message_type(self) -> str:
        return MESSAGE_IDENTIFIER

    @property
    def max_message_bytes(self) -> int:
        return self._max_message_bytes

    def build(self, order: Order, message_reference: Optional[str] = None) -> EdifactMessage:
        """Build the segment list without rendering it."""
        return build_message(order, message_reference, self._association_code, self._grammar)

    def encode(self, order: Order, message_reference: Optional[str] = None) -> str:
        return encode_order(order, message_reference, self._association_code, self._grammar)

    def decode(self, message: Union[str, bytes]) -> DecodeResult:
        result = decode_order(message, self._max_message_bytes, self._grammar)
        if not result.success:
            logger.debug(f"EDIFACT decode rejected: {result.kind.value} ({result.error.message})")
        return result

    def validate(self, message: Union[str, bytes]) -> ValidationErrorSet:
        return validate_message(message, self._max_message_bytes, self._grammar)
