from __future__ import annotations

from ..models.fragments import RouteFragment

"""Route identifier decoder.

Format: ``<DD.MM.YY>_<region>_<time>_<type>[_<number>]``
e.g. ``01.09.25_77_00ч_ВИП_19``
"""

__all__ = [
    "ROUTE_SEPARATOR",
    "MIN_ROUTE_PARTS",
    "decode_route",
]

ROUTE_SEPARATOR = "_"
MIN_ROUTE_PARTS = 4


def decode_route(cell: str) -> RouteFragment:
    """Split a route identifier into its positional parts.

    Never fails. With fewer than four parts the whole identifier is kept in
    ``date`` and every other field is empty (``number`` is None).
    """
    parts = cell.split(ROUTE_SEPARATOR)
    if len(parts) < MIN_ROUTE_PARTS:
        # NOTE: 部分不足時は例外にせず date に原文を格納 (下流の検証は route に依存しない)
        return RouteFragment(date=cell, region="", time="", type="", number=None)
    number = parts[4] if len(parts) > 4 and parts[4] else None
    return RouteFragment(
        date=parts[0],
        region=parts[1],
        time=parts[2],
        type=parts[3],
        number=number,
    )
