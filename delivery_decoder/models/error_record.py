from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

"""ErrorRecord model for the JSON Lines error log.

One ErrorRecord describes one row that could not be turned into an accepted
DeliveryRecord, or one file that could not be read at all (row=-1).

The key set is fixed; see ``ERROR_LOG_KEYS``.
"""

__all__ = [
    "ErrorRecord",
    "ERROR_LOG_KEYS",
    "FILE_LEVEL_ROW",
]

FILE_LEVEL_ROW = -1

ERROR_LOG_KEYS = ("timestamp", "file", "sheet", "row", "error_type", "message", "cell")


@dataclass(frozen=True)
class ErrorRecord:
    """Structured error record for JSON Lines logging.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        file: Excel filename being processed
        sheet: Sheet name within the file
        row: Spreadsheet row number (1-based). -1 for file-level errors
        error_type: Error classification in UPPER_SNAKE_CASE format
        message: Human readable description
        cell: Offending cell content, if a single cell is to blame
    """
    timestamp: str  # ISO8601 UTC
    file: str
    sheet: str
    row: int  # 行番号。不明な場合 -1 許容
    error_type: str  # UPPER_SNAKE
    message: str
    cell: str | None = None

    @staticmethod
    def create(
        file: str,
        sheet: str,
        row: int,
        error_type: str,
        message: str,
        cell: str | None = None,
    ) -> ErrorRecord:
        """Create a new ErrorRecord stamped with the current UTC time."""
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return ErrorRecord(
            timestamp=ts,
            file=file,
            sheet=sheet,
            row=row,
            error_type=error_type,
            message=message,
            cell=cell,
        )

    def to_json_line(self) -> str:
        """Serialize to one JSON Lines entry (Cyrillic kept readable)."""
        return json.dumps(asdict(self), ensure_ascii=False)
