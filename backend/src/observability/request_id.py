"""Request ID management for request correlation.

Every gateway request gets an ID that is attached to its log lines and
echoed in the X-Request-ID response header.
"""

import uuid
from contextvars import ContextVar
from typing import Optional

# Context variable for request_id (async-safe)
request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)

REQUEST_ID_HEADER = "X-Request-ID"
MAX_REQUEST_ID_LENGTH = 128


def generate_request_id() -> str:
    """Generate a new unique request ID.

    Returns:
        str: UUID v4 request ID
    """
    return str(uuid.uuid4())


def get_request_id() -> str:
    """Current request ID or "no-request-id" outside a request."""
    return request_id_var.get() or "no-request-id"


def set_request_id(request_id: str) -> None:
    request_id_var.set(request_id)


def accept_request_id(header_value: Optional[str]) -> str:
    """Reuse a caller supplied request ID if it is printable and short.

    Args:
        header_value: Raw X-Request-ID header value, if any

    Returns:
        str: The caller's ID, or a freshly generated one
    """
    if (
        header_value
        and len(header_value) <= MAX_REQUEST_ID_LENGTH
        and header_value.isprintable()
    ):
        return header_value
    return generate_request_id()
