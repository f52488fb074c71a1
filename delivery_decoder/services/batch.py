from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import UTC, datetime
from pathlib import Path

from ..config.loader import DecodeConfig
from ..excel.reader import SheetNotFoundError, extract_raw_rows, read_excel_file
from ..logging.error_log import ErrorLogBuffer
from ..models.error_record import FILE_LEVEL_ROW, ErrorRecord
from ..models.excel_file import ExcelFile, FileStatus
from ..models.processing_result import FileStat, ProcessingResult, RowOutcome
from ..models.raw_row import RawRow
from ..parsing.record import decode_row_verbose, validate
from .export import write_records
from .progress import FileRowIndicator, ProgressTracker
from .summary import VALIDATION_FAILED_TEXT

"""Batch decoding service.

Coordinates a whole run: scans the source directory for workbooks, decodes
every row of the configured sheet, validates the records, tallies per-row
outcomes and records every failure in the error log. One bad row never stops
the batch; one unreadable file never stops the run.
"""

logger = logging.getLogger(__name__)

VALIDATION_ERROR = "VALIDATION_ERROR"
UNEXPECTED_ERROR = "UNEXPECTED_ERROR"
SHEET_NOT_FOUND = "SHEET_NOT_FOUND"
FILE_READ_ERROR = "FILE_READ_ERROR"
FILE_LEVEL_SHEET = "<FILE_LEVEL>"


class ProcessingError(Exception):
    """Fatal error that prevents the batch from running at all."""


def scan_excel_files(directory: Path) -> list[Path]:
    """Scan directory for .xlsx files (non-recursive), sorted by name.

    Raises:
        ProcessingError: If directory doesn't exist or can't be read
    """
    if not directory.exists():
        raise ProcessingError(f"Directory not found: {directory}")

    if not directory.is_dir():
        raise ProcessingError(f"Path is not a directory: {directory}")

    try:
        return sorted(p for p in directory.iterdir() if p.is_file() and p.suffix == ".xlsx")
    except OSError as e:
        raise ProcessingError(f"Error reading directory {directory}: {e}") from e


def decode_rows(
    rows: Iterable[tuple[int, RawRow]],
    *,
    file_name: str,
    sheet_name: str,
    error_log: ErrorLogBuffer | None = None,
) -> list[RowOutcome]:
    """Decode and validate rows, returning one RowOutcome per row.

    Failures (decode, validation or unexpected) are appended to error_log.
    """
    outcomes: list[RowOutcome] = []
    for row_number, raw in rows:
        outcome = _decode_one(row_number, raw)
        outcomes.append(outcome)
        if not outcome.success and error_log is not None:
            error_log.append(
                ErrorRecord.create(
                    file=file_name,
                    sheet=sheet_name,
                    row=row_number,
                    error_type=outcome.error_type or UNEXPECTED_ERROR,
                    message=outcome.message or "",
                    cell=outcome.cell,
                )
            )
    return outcomes


def _decode_one(row_number: int, raw: RawRow) -> RowOutcome:
    try:
        result = decode_row_verbose(raw)
    except Exception as e:
        logger.exception("row %d: unexpected decode failure", row_number)
        return RowOutcome(row_number, raw, error_type=UNEXPECTED_ERROR, message=f"Ошибка парсинга: {e}")

    if result.failure is not None:
        return RowOutcome(
            row_number,
            raw,
            error_type=result.failure.error_type,
            message=result.failure.message,
            cell=result.failure.cell,
        )
    if not validate(result.record):
        logger.warning("row %d: decoded record failed validation", row_number)
        return RowOutcome(row_number, raw, error_type=VALIDATION_ERROR, message=VALIDATION_FAILED_TEXT)
    return RowOutcome(row_number, raw, record=result.record)


def process_file(file_path: Path, config: DecodeConfig, error_log: ErrorLogBuffer) -> ExcelFile:
    """Decode every row of the configured sheet of one workbook."""
    start_time = datetime.now(UTC)
    try:
        sheet_name, df = read_excel_file(file_path, config.sheet_name)
    except SheetNotFoundError as e:
        return _failed_file(file_path, start_time, SHEET_NOT_FOUND, str(e), error_log)
    except Exception as e:
        return _failed_file(file_path, start_time, FILE_READ_ERROR, str(e), error_log)

    rows = extract_raw_rows(df, header_rows=config.header_rows)
    outcomes = decode_rows(rows, file_name=file_path.name, sheet_name=sheet_name, error_log=error_log)
    logger.debug(
        "file=%s sheet=%s rows=%d decoded=%d",
        file_path.name,
        sheet_name,
        len(outcomes),
        sum(1 for o in outcomes if o.success),
    )
    return ExcelFile(
        path=file_path,
        name=file_path.name,
        sheet_name=sheet_name,
        outcomes=outcomes,
        start_time=start_time,
        end_time=datetime.now(UTC),
        status=FileStatus.SUCCESS,
    )


def _failed_file(
    file_path: Path,
    start_time: datetime,
    error_type: str,
    message: str,
    error_log: ErrorLogBuffer,
) -> ExcelFile:
    logger.error("file=%s %s: %s", file_path.name, error_type, message)
    error_log.append(
        ErrorRecord.create(
            file=file_path.name,
            sheet=FILE_LEVEL_SHEET,
            row=FILE_LEVEL_ROW,
            error_type=error_type,
            message=message,
        )
    )
    return ExcelFile(
        path=file_path,
        name=file_path.name,
        start_time=start_time,
        end_time=datetime.now(UTC),
        status=FileStatus.FAILED,
        error=message,
    )


def process_all(config: DecodeConfig, error_log: ErrorLogBuffer | None = None) -> ProcessingResult:
    """Decode all workbooks in the configured source directory.

    Returns:
        ProcessingResult with aggregated counts, file stats and row outcomes

    Raises:
        ProcessingError: If the source directory cannot be scanned
    """
    start_time = datetime.now(UTC)
    if error_log is None:
        error_log = ErrorLogBuffer(Path(config.logs_directory))

    file_paths = scan_excel_files(Path(config.source_directory))

    file_stats: list[FileStat] = []
    outcomes: list[RowOutcome] = []
    success_count = 0
    failed_count = 0

    with ProgressTracker(len(file_paths), description="Decoding files") as progress:
        for file_path in file_paths:
            progress.start_file(file_path)
            excel_file = process_file(file_path, config, error_log)
            ok = excel_file.status == FileStatus.SUCCESS
            if ok:
                success_count += 1
            else:
                failed_count += 1
            outcomes.extend(excel_file.outcomes)

            FileRowIndicator(file_path.name).report(
                excel_file.decoded_rows, excel_file.total_rows, success=ok
            )
            progress.set_postfix(
                decoded=sum(1 for o in outcomes if o.success),
                failed=sum(1 for o in outcomes if not o.success),
            )
            progress.finish_file(success=ok)

            elapsed_file = 0.0
            if excel_file.start_time is not None and excel_file.end_time is not None:
                elapsed_file = (excel_file.end_time - excel_file.start_time).total_seconds()
            file_stats.append(
                FileStat(
                    file_name=file_path.name,
                    status=excel_file.status.value,
                    total_rows=excel_file.total_rows,
                    decoded_rows=excel_file.decoded_rows,
                    failed_rows=excel_file.failed_rows,
                    elapsed_seconds=elapsed_file,
                )
            )

    log_path = error_log.flush()
    if log_path is not None:
        logger.info("error log written: %s", log_path)

    records = [o.record for o in outcomes if o.success and o.record is not None]
    output_path: str | None = None
    if config.output_directory and records:
        written = write_records(records, Path(config.output_directory), config.output_format)
        output_path = str(written)
        logger.info("exported %d records to %s", len(records), written)

    end_time = datetime.now(UTC)
    elapsed_seconds = (end_time - start_time).total_seconds()
    total_rows = len(outcomes)
    decoded_rows = len(records)
    throughput = total_rows / elapsed_seconds if elapsed_seconds > 0 else 0.0

    return ProcessingResult(
        success_files=success_count,
        failed_files=failed_count,
        total_rows=total_rows,
        decoded_rows=decoded_rows,
        failed_rows=total_rows - decoded_rows,
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=elapsed_seconds,
        throughput_rows_per_sec=throughput,
        file_stats=file_stats,
        outcomes=outcomes,
        output_path=output_path,
    )
