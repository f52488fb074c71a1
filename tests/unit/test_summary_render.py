from __future__ import annotations

from datetime import UTC, datetime

from conftest import SAMPLE_ROWS
from delivery_decoder.models.processing_result import ProcessingResult, RowOutcome
from delivery_decoder.models.raw_row import RawRow
from delivery_decoder.parsing.record import decode_row
from delivery_decoder.services.summary import (
    VALIDATION_FAILED_TEXT,
    render_batch_report,
    render_summary_line,
)


def _result(**overrides) -> ProcessingResult:
    values = dict(
        success_files=2,
        failed_files=1,
        total_rows=10,
        decoded_rows=8,
        failed_rows=2,
        start_time=datetime(2025, 9, 1, tzinfo=UTC),
        end_time=datetime(2025, 9, 1, 0, 0, 4, tzinfo=UTC),
        elapsed_seconds=4.0,
        throughput_rows_per_sec=2.5,
    )
    values.update(overrides)
    return ProcessingResult(**values)


def test_render_summary_line_basic():
    line = render_summary_line(3, _result())
    assert line == (
        "SUMMARY files=3/3 success=2 failed=1 rows=10 decoded=8 invalid=2 "
        "elapsed_sec=4 throughput_rps=2.5"
    )


def test_render_summary_line_zero_and_small_values():
    line = render_summary_line(
        0,
        _result(success_files=0, failed_files=0, total_rows=0, decoded_rows=0, failed_rows=0,
                elapsed_seconds=0.000123, throughput_rows_per_sec=0.0),
    )
    assert "files=0/0" in line
    assert "elapsed_sec=0.000123" in line
    assert line.endswith("throughput_rps=0")
    assert "e-" not in line


def _outcome(n: int, values: list[object], **kw) -> RowOutcome:
    raw = RawRow.from_values(values)
    return RowOutcome(n, raw, **kw)


def test_render_batch_report_lists_orders_and_failures():
    good = [_outcome(i + 2, row, record=decode_row(row)) for i, row in enumerate(SAMPLE_ROWS[:2])]
    bad = [
        _outcome(4, SAMPLE_ROWS[2], error_type="VALIDATION_ERROR", message=VALIDATION_FAILED_TEXT),
        _outcome(5, SAMPLE_ROWS[2], error_type="UNEXPECTED_ERROR", message="Ошибка парсинга: boom"),
    ]
    text = render_batch_report(good + bad)

    assert text.startswith("📊 **Результаты обработки Excel файла**\n\n")
    assert "📁 **Всего строк**: 4\n" in text
    assert "✅ **Успешно обработано**: 2\n" in text
    assert "❌ **Ошибок**: 2\n\n" in text
    assert (
        "1. Заказ №13908\n"
        "   Клиент: Кулушов Марат Шайлообаевич\n"
        "   Груз: 3.32 куб.м, 871 кг\n"
        "   Маршрут: 01.09.25 77\n\n"
    ) in text
    assert "2. Заказ №13909\n" in text
    assert "⚠️ **Строки с ошибками:**\n" in text
    assert f"1. {VALIDATION_FAILED_TEXT}\n" in text
    assert "2. Ошибка парсинга: boom\n" in text


def test_render_batch_report_without_rows():
    text = render_batch_report([])
    assert "📁 **Всего строк**: 0\n" in text
    assert "🎯" not in text
    assert "⚠️" not in text
