from __future__ import annotations

from dataclasses import dataclass

from .fragments import CargoFragment, OrderFragment, RouteFragment
from .raw_row import RawRow

"""DeliveryRecord model: the assembled output of one decoded row."""

__all__ = [
    "DeliveryRecord",
]


@dataclass(frozen=True)
class DeliveryRecord:
    """Fully assembled delivery record.

    ``cargo`` and ``order`` are always set by the decoder. They are optional in
    the type so that validation can be re-run on records built elsewhere.
    """
    route: RouteFragment
    cargo: CargoFragment | None
    order: OrderFragment | None
    company: str
    raw_row: RawRow  # 元の行 (トレース用)
