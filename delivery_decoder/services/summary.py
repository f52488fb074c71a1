from __future__ import annotations

from collections.abc import Sequence

from ..models.processing_result import ProcessingResult, RowOutcome
from ..parsing.record import format_number

"""Summary line and batch report rendering.

render_summary_line() produces the machine-readable SUMMARY line printed at
the end of a CLI run; render_batch_report() produces the chat message that
lists decoded orders and failing rows.
"""

__all__ = [
    "render_summary_line",
    "render_batch_report",
    "VALIDATION_FAILED_TEXT",
]

# 失敗行のメッセージ (レポート用)
VALIDATION_FAILED_TEXT = "Данные не прошли валидацию"


def _compact(value: float) -> str:
    """Format seconds / rates without trailing zeros or scientific notation."""
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return str(value)


def render_summary_line(total_files: int, result: ProcessingResult) -> str:
    """Render the SUMMARY line.

    Format:
    SUMMARY files={total}/{total} success={success} failed={failed} rows={rows}
    decoded={decoded} invalid={invalid} elapsed_sec={elapsed} throughput_rps={throughput}

    Examples:
        >>> from datetime import datetime, timezone
        >>> start = datetime(2025, 9, 1, 10, 0, 0, tzinfo=timezone.utc)
        >>> end = datetime(2025, 9, 1, 10, 0, 2, tzinfo=timezone.utc)
        >>> result = ProcessingResult(
        ...     success_files=1, failed_files=0, total_rows=3, decoded_rows=2,
        ...     failed_rows=1, start_time=start, end_time=end,
        ...     elapsed_seconds=2.0, throughput_rows_per_sec=1.5
        ... )
        >>> render_summary_line(1, result)
        'SUMMARY files=1/1 success=1 failed=0 rows=3 decoded=2 invalid=1 elapsed_sec=2 throughput_rps=1.5'
    """
    return (
        f"SUMMARY files={total_files}/{total_files} "
        f"success={result.success_files} "
        f"failed={result.failed_files} "
        f"rows={result.total_rows} "
        f"decoded={result.decoded_rows} "
        f"invalid={result.failed_rows} "
        f"elapsed_sec={_compact(result.elapsed_seconds)} "
        f"throughput_rps={_compact(result.throughput_rows_per_sec)}"
    )


def render_batch_report(outcomes: Sequence[RowOutcome]) -> str:
    """Render the processing-results message sent back to the uploader."""
    successes = [o for o in outcomes if o.success and o.record is not None]
    failures = [o for o in outcomes if not o.success]

    text = "📊 **Результаты обработки Excel файла**\n\n"
    text += f"📁 **Всего строк**: {len(outcomes)}\n"
    text += f"✅ **Успешно обработано**: {len(successes)}\n"
    text += f"❌ **Ошибок**: {len(failures)}\n\n"

    if successes:
        text += "🎯 **Успешно обработанные заказы:**\n"
        for index, outcome in enumerate(successes, start=1):
            record = outcome.record
            if record is None or record.order is None or record.cargo is None:
                continue
            text += f"{index}. Заказ №{record.order.order_number}\n"
            text += f"   Клиент: {record.order.customer_name}\n"
            text += (
                f"   Груз: {format_number(record.cargo.volume)} куб.м, "
                f"{format_number(record.cargo.weight)} кг\n"
            )
            text += f"   Маршрут: {record.route.date} {record.route.region}\n\n"

    if failures:
        text += "⚠️ **Строки с ошибками:**\n"
        for index, outcome in enumerate(failures, start=1):
            text += f"{index}. {outcome.message or VALIDATION_FAILED_TEXT}\n"

    return text
