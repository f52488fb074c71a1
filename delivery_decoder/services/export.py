from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import pandas as pd

from ..models.delivery_record import DeliveryRecord

"""Export of accepted delivery records.

Records are flattened into the storage layout used by the delivery table
(snake_case columns, ISO dates, status "pending") and written as CSV, XLSX or
JSON Lines into the configured output directory.
"""

__all__ = [
    "EXPORT_COLUMNS",
    "OUTPUT_FORMATS",
    "ExportError",
    "to_iso_date",
    "to_short_time",
    "record_to_storage_dict",
    "records_to_frame",
    "write_records",
]

logger = logging.getLogger(__name__)

OUTPUT_FORMATS = ("csv", "xlsx", "jsonl")
TIMESTAMP_FMT = "%Y%m%d-%H%M%S"
DEFAULT_STATUS = "pending"

EXPORT_COLUMNS = [
    "order_number",
    "customer_name",
    "order_date",
    "order_time",
    "delivery_date",
    "delivery_time",
    "delivery_id",
    "cargo_volume",
    "cargo_weight",
    "cargo_length",
    "cargo_additional_info",
    "route_date",
    "route_region",
    "route_time",
    "route_type",
    "route_number",
    "company",
    "status",
]


class ExportError(Exception):
    pass


def to_iso_date(date_str: str) -> str:
    """``DD.MM.YYYY`` -> ``YYYY-MM-DD``.

    Raises:
        ValueError: If the string does not have three dot-separated parts
    """
    parts = date_str.split(".")
    if len(parts) != 3 or not all(parts):
        raise ValueError(f"invalid date format: {date_str!r}")
    day, month, year = parts
    return f"{year}-{month.zfill(2)}-{day.zfill(2)}"


def to_short_time(time_str: str) -> str:
    """``HH:MM:SS`` -> ``HH:MM``."""
    return time_str[:5]


def record_to_storage_dict(record: DeliveryRecord) -> dict[str, Any]:
    """Flatten a decoded record into one storage row."""
    if record.cargo is None or record.order is None:
        raise ExportError("record without cargo/order cannot be exported")
    order, cargo, route = record.order, record.cargo, record.route
    return {
        "order_number": order.order_number,
        "customer_name": order.customer_name,
        "order_date": to_iso_date(order.order_date),
        "order_time": order.order_time,
        "delivery_date": to_iso_date(order.delivery_date),
        "delivery_time": order.delivery_time,
        "delivery_id": order.delivery_id,
        "cargo_volume": cargo.volume,
        "cargo_weight": cargo.weight,
        "cargo_length": cargo.length,
        "cargo_additional_info": cargo.additional_info.strip(),
        "route_date": route.date,
        "route_region": route.region,
        "route_time": route.time,
        "route_type": route.type,
        "route_number": route.number,
        "company": record.company,
        "status": DEFAULT_STATUS,
    }


def records_to_frame(records: Sequence[DeliveryRecord]) -> pd.DataFrame:
    rows = [record_to_storage_dict(r) for r in records]
    return pd.DataFrame(rows, columns=EXPORT_COLUMNS)


def write_records(records: Sequence[DeliveryRecord], directory: Path, fmt: str = "csv") -> Path:
    """Write records to ``<directory>/records-YYYYMMDD-HHMMSS.<fmt>`` (UTC stamp)."""
    if fmt not in OUTPUT_FORMATS:
        raise ExportError(f"unsupported output format: {fmt} (expected one of {OUTPUT_FORMATS})")
    directory.mkdir(parents=True, exist_ok=True)
    stamp = datetime.now(UTC).strftime(TIMESTAMP_FMT)
    path = directory / f"records-{stamp}.{fmt}"
    df = records_to_frame(records)
    if fmt == "csv":
        # Excel で開いてもキリル文字が化けないよう BOM 付き
        df.to_csv(path, index=False, encoding="utf-8-sig")
    elif fmt == "xlsx":
        df.to_excel(path, index=False, engine="openpyxl")
    else:
        df.to_json(path, orient="records", lines=True, force_ascii=False)
    logger.debug("exported %d records to %s", len(df), path)
    return path
