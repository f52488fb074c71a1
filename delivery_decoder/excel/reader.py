from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import pandas as pd

from ..models.raw_row import ROW_WIDTH, RawRow, to_cell

"""Excel reader: workbook sheet -> RawRows.

The delivery export has no header semantics of its own: every row carries the
four cells route / cargo / order / company in columns A-D. Leading title or
header rows are skipped by count (``header_rows``), rows with an empty route
cell are skipped as blank.
"""

__all__ = [
    "SheetNotFoundError",
    "read_excel_file",
    "extract_raw_rows",
]

logger = logging.getLogger(__name__)


class SheetNotFoundError(Exception):
    """Raised when the configured sheet does not exist in the workbook."""


def read_excel_file(path: Path, sheet_name: str | None = None) -> tuple[str, pd.DataFrame]:
    """Read one sheet of an Excel file without header inference.

    Parameters
    ----------
    path: Excel file path
    sheet_name: sheet to read (None = first sheet)

    Returns the resolved sheet name and the raw DataFrame. Cell values are kept
    as objects and pandas' default NA strings ("NA", "null", ...) are not
    converted, so text such as a company name "NA" survives.
    """
    xls = pd.ExcelFile(path)
    names = [str(n) for n in xls.sheet_names]
    if not names:
        raise SheetNotFoundError(f"workbook '{path.name}' has no sheets")
    if sheet_name is None:
        target = names[0]
    elif sheet_name in names:
        target = sheet_name
    else:
        raise SheetNotFoundError(f"sheet '{sheet_name}' not found in '{path.name}' (sheets: {names})")
    df = xls.parse(target, header=None, dtype=object, keep_default_na=False)
    return target, df


def _row_values(raw: pd.Series) -> list[Any]:
    values = raw.tolist()[:ROW_WIDTH]
    # 列数不足は欠損セルで埋める (デコード時 INCOMPLETE_ROW)
    values.extend([None] * (ROW_WIDTH - len(values)))
    return values


def extract_raw_rows(df: pd.DataFrame, header_rows: int = 0) -> list[tuple[int, RawRow]]:
    """Turn a raw sheet DataFrame into ``(row_number, RawRow)`` pairs.

    ``row_number`` is the 1-based spreadsheet row. Rows whose first cell is
    empty are treated as blank and skipped.
    """
    rows: list[tuple[int, RawRow]] = []
    for position in range(header_rows, df.shape[0]):
        raw = RawRow.from_values(_row_values(df.iloc[position]))
        if raw.route is None:
            logger.debug("row %d has no route identifier, skipped", position + 1)
            continue
        rows.append((position + 1, raw))
    return rows
