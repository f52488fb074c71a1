from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path

from .processing_result import RowOutcome

"""ExcelFile domain model and FileStatus enum.

The ExcelFile represents the processing context for a single workbook,
tracking its status from pending to success/failed and the per-row outcomes
of the decoded sheet.
"""


class FileStatus(Enum):
    """Status enum for ExcelFile processing lifecycle.

    State transitions: pending → processing → (success | failed)

    - SUCCESS: the sheet was read and every row was attempted (rows may
      still have failed individually)
    - FAILED: the workbook or the configured sheet could not be read
    """
    PENDING = "pending"
    PROCESSING = "processing"
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class ExcelFile:
    """Processing context for a single Excel file."""
    path: Path
    name: str
    sheet_name: str | None = None
    outcomes: list[RowOutcome] = field(default_factory=list)
    start_time: datetime | None = None
    end_time: datetime | None = None
    status: FileStatus = FileStatus.PENDING
    error: str | None = None  # Failure reason summary

    @property
    def total_rows(self) -> int:
        return len(self.outcomes)

    @property
    def decoded_rows(self) -> int:
        return sum(1 for o in self.outcomes if o.success)

    @property
    def failed_rows(self) -> int:
        return self.total_rows - self.decoded_rows
