from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from .delivery_record import DeliveryRecord
from .raw_row import RawRow

"""Processing result models for batch decoding.

RowOutcome is the per-row result that batch callers tally; FileStat and
ProcessingResult aggregate them for the SUMMARY line and the batch report.
"""

__all__ = [
    "RowOutcome",
    "FileStat",
    "ProcessingResult",
]


@dataclass(frozen=True)
class RowOutcome:
    """Result of decoding + validating one spreadsheet row.

    Exactly one of ``record`` / ``error_type`` is set.
    """
    row_number: int  # 1-based spreadsheet row
    raw_row: RawRow
    record: DeliveryRecord | None = None
    error_type: str | None = None  # UPPER_SNAKE (see parsing.record)
    message: str | None = None
    cell: str | None = None  # offending cell content, if any

    @property
    def success(self) -> bool:
        return self.record is not None and self.error_type is None


@dataclass(frozen=True)
class FileStat:
    """Per-file processing statistics."""
    file_name: str
    status: str  # success/failed
    total_rows: int
    decoded_rows: int
    failed_rows: int
    elapsed_seconds: float


@dataclass(frozen=True)
class ProcessingResult:
    """Aggregated results for one batch run (all files in the source directory)."""
    success_files: int
    failed_files: int
    total_rows: int  # 試行行数
    decoded_rows: int  # 検証済みレコード数
    failed_rows: int  # デコード失敗 + 検証失敗
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    throughput_rows_per_sec: float
    file_stats: list[FileStat] | None = None
    outcomes: list[RowOutcome] = field(default_factory=list)
    output_path: str | None = None  # 出力ファイル (export 有効時)

    @property
    def records(self) -> list[DeliveryRecord]:
        return [o.record for o in self.outcomes if o.success and o.record is not None]
