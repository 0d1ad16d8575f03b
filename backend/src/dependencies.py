"""FastAPI dependencies shared by the gateway routers."""

from functools import lru_cache

from fastapi import Depends, HTTPException, Request, status

from config import Settings, get_settings
from domain.edifact import EdifactOrdersCodec


@lru_cache()
def get_codec() -> EdifactOrdersCodec:
    """Process-wide codec built from settings.

    The codec holds only immutable configuration, so one instance is shared
    by all requests. Call get_codec.cache_clear() after changing settings.
    """
    settings = get_settings()
    return EdifactOrdersCodec(
        max_message_bytes=settings.EDIFACT_MAX_MESSAGE_BYTES,
        association_code=settings.EDIFACT_ASSOCIATION_CODE,
    )


async def read_message_body(
    request: Request,
    settings: Settings = Depends(get_settings),
) -> bytes:
    """Read a raw message body, enforcing the transport ceiling.

    Raises:
        HTTPException: 413 if the body exceeds GATEWAY_MAX_PAYLOAD_BYTES
    """
    limit = settings.GATEWAY_MAX_PAYLOAD_BYTES

    declared = request.headers.get("content-length")
    if declared and declared.isdigit() and int(declared) > limit:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"Payload exceeds maximum of {limit} bytes",
        )

    body = bytearray()
    async for chunk in request.stream():
        body.extend(chunk)
        if len(body) > limit:
            raise HTTPException(
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                detail=f"Payload exceeds maximum of {limit} bytes",
            )
    return bytes(body)
