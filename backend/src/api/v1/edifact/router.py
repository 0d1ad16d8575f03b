"""EDIFACT gateway router: order encode/decode/validate and product identifier checks.

Handlers are plain def functions; FastAPI runs them in its threadpool,
which suits the CPU-bound codec.
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from dependencies import get_codec, read_message_body
from domain.edifact import DecodeErrorKind, EdifactError, EdifactOrdersCodec
from domain.standards import (
    compute_gs1_check_digit,
    compute_gtin_check_digit,
    parse_eclass_code,
    validate_eclass_code,
    validate_gln,
    validate_gtin,
    validate_gtin_bulk,
    validate_sscc,
)
from observability.metrics import (
    edifact_message_bytes,
    edifact_messages_total,
    record_standards_check,
)
from schemas.edifact import (
    BulkGtinRequest,
    BulkGtinResponse,
    DecodeErrorResponse,
    EclassCheckResponse,
    EncodeResponse,
    Gs1KeyCheckResponse,
    GtinCheckResponse,
    OrderSchema,
    ValidationReportResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/edifact", tags=["edifact"])

# Decode failures a sender can fix by resending a well-formed message
_BAD_REQUEST_KINDS = (DecodeErrorKind.OVERSIZED_INPUT, DecodeErrorKind.STRUCTURAL_VIOLATION)


def _gs1_key_response(value: str, valid: bool, length: int) -> Gs1KeyCheckResponse:
    # Expected check digit is only reported for keys of the right length
    return Gs1KeyCheckResponse(
        value=value,
        valid=valid,
        check_digit=compute_gs1_check_digit(value[:-1]) if len(value) == length else None,
    )


@router.post("/orders/encode", response_model=EncodeResponse)
def encode_order(
    order: OrderSchema,
    codec: EdifactOrdersCodec = Depends(get_codec),
):
    """Convert an order into an EDIFACT ORDERS message.

    Missing or invalid order fields propagate as EdifactError and are
    turned into a 400 response by the application's exception handler.

    Returns:
        Message text with its reference and segment count
    """
    try:
        message = codec.build(order.to_domain())
    except EdifactError as e:
        edifact_messages_total.labels(direction="encode", outcome=type(e).__name__).inc()
        raise

    text = message.render()
    edifact_messages_total.labels(direction="encode", outcome="success").inc()
    edifact_message_bytes.labels(direction="encode").observe(len(text.encode("utf-8")))
    logger.info(
        f"Encoded order {order.order_number} as EDIFACT message {message.reference}",
        extra={"message_reference": message.reference, "direction": "encode"},
    )

    return EncodeResponse(
        message_type=codec.message_type,
        message_reference=message.reference,
        segment_count=len(message),
        message=text,
    )


@router.post(
    "/orders/decode",
    response_model=OrderSchema,
    responses={
        400: {"model": DecodeErrorResponse, "description": "Oversized or malformed message"},
        413: {"description": "Payload exceeds the gateway ceiling"},
        422: {"model": DecodeErrorResponse, "description": "Segment values could not be converted"},
    },
)
def decode_order(
    body: bytes = Depends(read_message_body),
    codec: EdifactOrdersCodec = Depends(get_codec),
):
    """Parse a raw EDIFACT ORDERS message (text/plain body) into an order.

    Returns:
        The decoded order; 400 for oversized or structurally invalid
        messages, 422 when segment values cannot be converted
    """
    edifact_message_bytes.labels(direction="decode").observe(len(body))
    result = codec.decode(body)

    if not result.success:
        error = result.error
        edifact_messages_total.labels(direction="decode", outcome=error.kind.value).inc()
        status_code = (
            status.HTTP_400_BAD_REQUEST
            if error.kind in _BAD_REQUEST_KINDS
            else status.HTTP_422_UNPROCESSABLE_ENTITY
        )
        content = DecodeErrorResponse(
            error=error.kind.value.lower(),
            message=error.message,
            errors=error.errors.to_dict(),
            segment=error.segment,
        )
        return JSONResponse(status_code=status_code, content=content.model_dump())

    edifact_messages_total.labels(direction="decode", outcome="success").inc()
    return OrderSchema.from_domain(result.order)


@router.post("/orders/validate", response_model=ValidationReportResponse)
def validate_order_message(
    body: bytes = Depends(read_message_body),
    codec: EdifactOrdersCodec = Depends(get_codec),
):
    """Report every structural finding of a raw message without decoding it."""
    errors = codec.validate(body)
    edifact_messages_total.labels(
        direction="validate",
        outcome="success" if errors.is_valid else "invalid",
    ).inc()
    return ValidationReportResponse(valid=errors.is_valid, errors=errors.to_dict())


@router.get("/standards/gtin/{gtin}", response_model=GtinCheckResponse)
def check_gtin(gtin: str):
    """Validate a GTIN-14 check digit."""
    valid = validate_gtin(gtin)
    record_standards_check("gtin", valid)
    return GtinCheckResponse(
        gtin=gtin,
        valid=valid,
        check_digit=compute_gtin_check_digit(gtin[:13]) if len(gtin) == 14 else None,
    )


@router.post("/standards/gtin/bulk", response_model=BulkGtinResponse)
def check_gtins(request: BulkGtinRequest):
    """Validate a batch of GTINs."""
    results = validate_gtin_bulk(request.gtins)
    for valid in results.values():
        record_standards_check("gtin", valid)

    valid_count = sum(1 for valid in results.values() if valid)
    return BulkGtinResponse(
        results=results,
        valid_count=valid_count,
        invalid_count=len(results) - valid_count,
    )


@router.get("/standards/gln/{gln}", response_model=Gs1KeyCheckResponse)
def check_gln(gln: str):
    """Validate a 13-digit GLN check digit."""
    valid = validate_gln(gln)
    record_standards_check("gln", valid)
    return _gs1_key_response(gln, valid, 13)


@router.get("/standards/sscc/{sscc}", response_model=Gs1KeyCheckResponse)
def check_sscc(sscc: str):
    """Validate an 18-digit SSCC check digit."""
    valid = validate_sscc(sscc)
    record_standards_check("sscc", valid)
    return _gs1_key_response(sscc, valid, 18)


@router.get("/standards/eclass/{code}", response_model=EclassCheckResponse)
def check_eclass(code: str):
    """Validate an eCl@ss code; hyphenated input is parsed but reported invalid."""
    valid = validate_eclass_code(code)
    record_standards_check("eclass", valid)

    parsed = parse_eclass_code(code)
    return EclassCheckResponse(
        code=code,
        valid=valid,
        version=parsed.version if parsed else None,
        display=parsed.display if parsed else None,
    )
