from __future__ import annotations

import logging
import re

from ..models.fragments import CargoFragment

"""Cargo cell decoder.

Format: ``<volume> куб.м/<weight> кг/<length> м/<info>``
e.g. ``3.32 куб.м/871 кг/1.010 м/Нет``
"""

__all__ = [
    "CARGO_PATTERN",
    "decode_cargo",
]

logger = logging.getLogger(__name__)

# 数値と単位の間の空白は任意。末尾トークンは次の '/' まで
CARGO_PATTERN = re.compile(
    r"([0-9]+\.?[0-9]*)\s*куб\.м/"
    r"([0-9]+)\s*кг/"
    r"([0-9]+\.?[0-9]*)\s*м/"
    r"([^/]+)"
)


def decode_cargo(cell: str) -> CargoFragment | None:
    """Decode a cargo cell.

    Returns None when the cell does not have the expected shape; never raises
    for malformed input. The trailing info token is returned untrimmed.
    """
    match = CARGO_PATTERN.search(cell)
    if match is None:
        logger.debug("cargo pattern mismatch cell=%r", cell)
        return None
    volume, weight, length, info = match.groups()
    return CargoFragment(
        volume=float(volume),
        weight=int(weight),
        length=float(length),
        additional_info=info,
    )
