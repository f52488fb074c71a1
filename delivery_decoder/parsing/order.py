from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum

from ..models.fragments import OrderFragment

"""Order / customer / delivery cell decoder.

The order cell multiplexes three blocks into one period-delimited string::

    13908.Заказано.01\\.09\\.2025 00:00:00.Кулушов Марат Шайлообаевич........01\\.09\\.2025 01:30:00..202
    └───────────── anchor ──────────────┘ └──────── name ────────┘└pad─┘└──── delivery block ────┘

Periods may arrive escaped as ``\\.``; they are normalized first. Decoding then
runs three sub-parsers in order, each starting where the previous one stopped:

1. anchor:         ``<order no>.Заказано.<DD>.<MM>.<YYYY> <HH:MM:SS>``
2. customer name:  ``.<Cyrillic letters and spaces>`` up to a run of 8+ periods
3. delivery block: ``<DD>.<MM>.<YYYY> <HH:MM:SS>..<delivery id>``

All three must match; the failing stage is reported in OrderDecodeResult.
"""

__all__ = [
    "ORDERED_KEYWORD",
    "MIN_PADDING_RUN",
    "OrderStage",
    "OrderDecodeResult",
    "AnchorMatch",
    "NameMatch",
    "DeliveryBlockMatch",
    "normalize_order_cell",
    "match_anchor",
    "match_customer_name",
    "match_delivery_block",
    "parse_order",
    "decode_order",
]

logger = logging.getLogger(__name__)

ORDERED_KEYWORD = "Заказано"
MIN_PADDING_RUN = 8

_DATE = r"([0-9]{2})\.([0-9]{2})\.([0-9]{4})"
_TIME = r"([0-9]{2}:[0-9]{2}:[0-9]{2})"

ANCHOR_PATTERN = re.compile(rf"([0-9]+)\.{ORDERED_KEYWORD}\.{_DATE}\s+{_TIME}")
# 非貪欲: 名前の直後に来る最初の 8+ ピリオド列で止める
NAME_PATTERN = re.compile(rf"\.([А-Яа-яЁё\s]+?)\.{{{MIN_PADDING_RUN},}}")
DELIVERY_PATTERN = re.compile(rf"{_DATE}\s+{_TIME}\.\.([0-9]+)")


class OrderStage(Enum):
    """Sub-parser of the order cell; used to report where decoding stopped."""
    ANCHOR = "anchor"
    CUSTOMER_NAME = "customer_name"
    DELIVERY_BLOCK = "delivery_block"


@dataclass(frozen=True)
class AnchorMatch:
    order_number: str
    order_date: str
    order_time: str
    end: int


@dataclass(frozen=True)
class NameMatch:
    customer_name: str  # trimmed
    end: int  # position right after the padding run


@dataclass(frozen=True)
class DeliveryBlockMatch:
    delivery_date: str
    delivery_time: str
    delivery_id: str
    end: int


@dataclass(frozen=True)
class OrderDecodeResult:
    """Outcome of parse_order: a fragment, or the stage that failed."""
    fragment: OrderFragment | None = None
    failed_stage: OrderStage | None = None

    @property
    def ok(self) -> bool:
        return self.fragment is not None


def normalize_order_cell(cell: str) -> str:
    """Replace every escaped period ``\\.`` with a bare period."""
    return cell.replace("\\.", ".")


def match_anchor(text: str) -> AnchorMatch | None:
    """Find the order number + status keyword + order date/time anywhere in text."""
    m = ANCHOR_PATTERN.search(text)
    if m is None:
        return None
    number, day, month, year, time = m.groups()
    return AnchorMatch(
        order_number=number,
        order_date=f"{day}.{month}.{year}",
        order_time=time,
        end=m.end(),
    )


def match_customer_name(text: str, pos: int = 0) -> NameMatch | None:
    """Match ``.<name>`` terminated by the padding run, starting exactly at pos."""
    m = NAME_PATTERN.match(text, pos)
    if m is None:
        return None
    return NameMatch(customer_name=m.group(1).strip(), end=m.end())


def match_delivery_block(text: str, pos: int = 0) -> DeliveryBlockMatch | None:
    """Match ``<DD>.<MM>.<YYYY> <HH:MM:SS>..<id>`` starting exactly at pos."""
    m = DELIVERY_PATTERN.match(text, pos)
    if m is None:
        return None
    day, month, year, time, delivery_id = m.groups()
    return DeliveryBlockMatch(
        delivery_date=f"{day}.{month}.{year}",
        delivery_time=time,
        delivery_id=delivery_id,
        end=m.end(),
    )


def parse_order(cell: str) -> OrderDecodeResult:
    """Decode an order cell, reporting which stage failed on mismatch."""
    text = normalize_order_cell(cell)

    anchor = match_anchor(text)
    if anchor is None:
        logger.debug("order anchor mismatch cell=%r", cell)
        return OrderDecodeResult(failed_stage=OrderStage.ANCHOR)

    name = match_customer_name(text, anchor.end)
    if name is None:
        logger.debug("order customer name mismatch cell=%r", cell)
        return OrderDecodeResult(failed_stage=OrderStage.CUSTOMER_NAME)

    delivery = match_delivery_block(text, name.end)
    if delivery is None:
        logger.debug("order delivery block mismatch cell=%r", cell)
        return OrderDecodeResult(failed_stage=OrderStage.DELIVERY_BLOCK)

    return OrderDecodeResult(
        fragment=OrderFragment(
            order_number=anchor.order_number,
            order_date=anchor.order_date,
            order_time=anchor.order_time,
            customer_name=name.customer_name,
            delivery_date=delivery.delivery_date,
            delivery_time=delivery.delivery_time,
            delivery_id=delivery.delivery_id,
        )
    )


def decode_order(cell: str) -> OrderFragment | None:
    """Decode an order cell; None unless all three stages match."""
    return parse_order(cell).fragment
