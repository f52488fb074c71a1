from __future__ import annotations

from dataclasses import dataclass

"""Decoded fragments of a delivery row.

Each fragment is the output of one field decoder (cargo, order, route)
before the assembler combines them into a DeliveryRecord.
"""

__all__ = [
    "CargoFragment",
    "OrderFragment",
    "RouteFragment",
]


@dataclass(frozen=True)
class CargoFragment:
    """Cargo metrics from ``<volume> куб.м/<weight> кг/<length> м/<info>``."""
    volume: float  # куб.м
    weight: int  # кг
    length: float  # м
    additional_info: str  # 末尾トークン (未トリム)


@dataclass(frozen=True)
class OrderFragment:
    """Order, customer and delivery data from the compound order cell.

    Dates are ``DD.MM.YYYY`` and times ``HH:MM:SS``, exactly as in the cell.
    """
    order_number: str
    order_date: str
    order_time: str
    customer_name: str
    delivery_date: str
    delivery_time: str
    delivery_id: str


@dataclass(frozen=True)
class RouteFragment:
    """Route identifier parts ``<date>_<region>_<time>_<type>[_<number>]``.

    A degraded fragment holds the raw identifier in ``date`` and empty
    strings elsewhere.
    """
    date: str
    region: str
    time: str
    type: str
    number: str | None = None

    @property
    def is_degraded(self) -> bool:
        return not (self.region or self.time or self.type) and self.number is None
