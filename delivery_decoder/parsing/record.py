from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from ..models.delivery_record import DeliveryRecord
from ..models.raw_row import RawRow, RowShapeError
from .cargo import decode_cargo
from .order import OrderStage, parse_order
from .route import decode_route

"""Record assembler, validator and formatter.

decode_row() runs the three field decoders over one RawRow and assembles a
DeliveryRecord. Cargo and order are required; the route decoder never fails.
Nothing here raises for bad data: failures are returned as RowFailure (see
decode_row_verbose) or None (decode_row).
"""

__all__ = [
    "ROW_SHAPE_ERROR",
    "INCOMPLETE_ROW",
    "CARGO_DECODE_ERROR",
    "ORDER_DECODE_ERROR",
    "INVALID_MARKER",
    "RowFailure",
    "RowDecodeResult",
    "decode_row",
    "decode_row_verbose",
    "validate",
    "format_record",
    "format_number",
]

logger = logging.getLogger(__name__)

# error_type (UPPER_SNAKE)
ROW_SHAPE_ERROR = "ROW_SHAPE_ERROR"
INCOMPLETE_ROW = "INCOMPLETE_ROW"
CARGO_DECODE_ERROR = "CARGO_DECODE_ERROR"
ORDER_DECODE_ERROR = "ORDER_DECODE_ERROR"

INVALID_MARKER = "❌ Данные невалидны"

_CELL_NAMES = ("route", "cargo", "order", "company")


@dataclass(frozen=True)
class RowFailure:
    """Why a row produced no record."""
    error_type: str
    message: str
    cell: str | None = None
    stage: OrderStage | None = None  # order cell only


@dataclass(frozen=True)
class RowDecodeResult:
    record: DeliveryRecord | None = None
    failure: RowFailure | None = None

    @property
    def ok(self) -> bool:
        return self.record is not None


def _coerce_row(row: RawRow | Sequence[Any]) -> RawRow:
    if isinstance(row, RawRow):
        return row
    return RawRow.from_values(row)


def decode_row_verbose(row: RawRow | Sequence[Any]) -> RowDecodeResult:
    """Decode one row into a DeliveryRecord or a diagnosed RowFailure."""
    try:
        raw = _coerce_row(row)
    except RowShapeError as e:
        logger.warning("row shape error: %s", e)
        return RowDecodeResult(failure=RowFailure(ROW_SHAPE_ERROR, str(e)))

    missing = [name for name, cell in zip(_CELL_NAMES, raw.cells) if cell is None]
    if missing:
        logger.warning("row has empty cells: %s", ", ".join(missing))
        return RowDecodeResult(
            failure=RowFailure(INCOMPLETE_ROW, f"empty cells: {', '.join(missing)}")
        )
    # 全セル存在確認済み (or "" は型の絞り込みのみ)
    route_cell, cargo_cell, order_cell, company = (c or "" for c in raw.cells)

    cargo = decode_cargo(cargo_cell)
    if cargo is None:
        logger.warning("failed to decode cargo cell: %s", cargo_cell)
        return RowDecodeResult(
            failure=RowFailure(CARGO_DECODE_ERROR, "cargo cell does not match format", cell=cargo_cell)
        )

    order_result = parse_order(order_cell)
    if order_result.fragment is None:
        stage = order_result.failed_stage
        stage_label = stage.value if stage is not None else "unknown"
        logger.warning("failed to decode order cell (stage=%s): %s", stage_label, order_cell)
        return RowDecodeResult(
            failure=RowFailure(
                ORDER_DECODE_ERROR,
                f"order cell does not match format at stage '{stage_label}'",
                cell=order_cell,
                stage=stage,
            )
        )

    record = DeliveryRecord(
        route=decode_route(route_cell),
        cargo=cargo,
        order=order_result.fragment,
        company=company,
        raw_row=raw,
    )
    return RowDecodeResult(record=record)


def decode_row(row: RawRow | Sequence[Any]) -> DeliveryRecord | None:
    """Decode one row; None when cargo or order cannot be decoded."""
    return decode_row_verbose(row).record


def validate(record: DeliveryRecord | None) -> bool:
    """Business-rule check, independent of how the record was built."""
    if record is None or record.cargo is None or record.order is None:
        return False
    if not record.cargo.volume > 0 or not record.cargo.weight > 0:
        return False
    if not record.order.order_number or not record.order.customer_name:
        return False
    return True


def format_number(value: float | int) -> str:
    """Render a number like the notification templates: 3.32, 1.01, 2."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_record(record: DeliveryRecord | None) -> str:
    """Multi-line summary for notifications, or INVALID_MARKER.

    The field order and labels are consumed by downstream templates.
    """
    if record is None or record.cargo is None or record.order is None or not validate(record):
        return INVALID_MARKER
    route, cargo, order = record.route, record.cargo, record.order
    return (
        f"📦 **Заказ №{order.order_number}**\n"
        f"👤 **Клиент**: {order.customer_name}\n"
        f"📅 **Дата заказа**: {order.order_date} {order.order_time}\n"
        f"🚚 **Доставка**: {order.delivery_date} {order.delivery_time}\n"
        f"📏 **Груз**: {format_number(cargo.volume)} куб.м, {format_number(cargo.weight)} кг, "
        f"{format_number(cargo.length)} м\n"
        f"📍 **Маршрут**: {route.date} {route.region} {route.time}"
    )
