from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

"""RawRow model for the delivery record decoder.

A RawRow is one spreadsheet row as delivered by the ingestion layer:
exactly four cells in the order route / cargo / order / company.

Cells are ``str | None``. ``None`` is the explicit "absent" variant; the
conversion from untyped spreadsheet values happens once, here, so the
decoders only ever see text.
"""

__all__ = [
    "Cell",
    "RawRow",
    "RowShapeError",
    "ROW_WIDTH",
    "to_cell",
]

ROW_WIDTH = 4

Cell = str | None


class RowShapeError(ValueError):
    """Raised when a row does not carry the four expected cells."""


def to_cell(value: Any) -> Cell:
    """Convert a raw spreadsheet value into a Cell.

    - None / NaN / NaT -> None
    - whitespace-only strings -> None
    - other strings are kept verbatim (no trimming)
    - integral floats render without ``.0`` (Excel stores ints as floats)
    """
    if value is None:
        return None
    if isinstance(value, str):
        return value if value.strip() else None
    if isinstance(value, float):
        if math.isnan(value):
            return None
        if value.is_integer():
            return str(int(value))
        return repr(value)
    # pandas.NaT / numpy.nan 等: 自分自身と等しくない値は欠損扱い
    try:
        if value != value:
            return None
    except (TypeError, ValueError):  # pragma: no cover (array-like cells)
        pass
    text = str(value)
    return text if text.strip() else None


@dataclass(frozen=True)
class RawRow:
    """Ordered four-cell row: ``[route, cargo, order, company]``."""
    route: Cell
    cargo: Cell
    order: Cell
    company: Cell

    @classmethod
    def from_values(cls, values: Sequence[Any]) -> RawRow:
        """Build a RawRow from any sequence of spreadsheet values.

        Only the first four values are used; extra trailing columns are ignored.

        Raises:
            RowShapeError: If fewer than four values are given
        """
        if isinstance(values, str | bytes):
            raise RowShapeError("row must be a sequence of cells, not a single string")
        if len(values) < ROW_WIDTH:
            raise RowShapeError(f"row must contain {ROW_WIDTH} cells, got {len(values)}")
        route, cargo, order, company = (to_cell(v) for v in list(values)[:ROW_WIDTH])
        return cls(route=route, cargo=cargo, order=order, company=company)

    @property
    def cells(self) -> tuple[Cell, Cell, Cell, Cell]:
        return (self.route, self.cargo, self.order, self.company)

    @property
    def is_complete(self) -> bool:
        """True when every cell is present."""
        return all(c is not None for c in self.cells)
