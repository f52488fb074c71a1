"""Delivery row decoders: cargo, order, route and the record assembler."""

from .cargo import decode_cargo
from .order import OrderDecodeResult, OrderStage, decode_order, parse_order
from .record import (
    INVALID_MARKER,
    RowDecodeResult,
    RowFailure,
    decode_row,
    decode_row_verbose,
    format_record,
    validate,
)
from .route import decode_route

__all__ = [
    "decode_cargo",
    "decode_order",
    "parse_order",
    "OrderDecodeResult",
    "OrderStage",
    "decode_route",
    "decode_row",
    "decode_row_verbose",
    "RowDecodeResult",
    "RowFailure",
    "validate",
    "format_record",
    "INVALID_MARKER",
]
