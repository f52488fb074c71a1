from __future__ import annotations

import re
from datetime import UTC, datetime

from delivery_decoder.models.processing_result import ProcessingResult
from delivery_decoder.services.summary import render_summary_line

"""SUMMARY 行フォーマット契約テスト."""

SUMMARY_PATTERN = re.compile(
    r"^SUMMARY\s+files=([0-9]+)/(\1)\s+success=([0-9]+)\s+failed=([0-9]+)\s+"
    r"rows=([0-9]+)\s+decoded=([0-9]+)\s+invalid=([0-9]+)\s+elapsed_sec=([0-9]+\.?[0-9]*)\s+"
    r"throughput_rps=([0-9]+\.?[0-9]*)$"
)


def test_summary_pattern_example_line():
    line = (
        "SUMMARY files=1/1 success=1 failed=0 rows=4 decoded=3 invalid=1 "
        "elapsed_sec=0.84 throughput_rps=4761.9"
    )
    m = SUMMARY_PATTERN.match(line)
    assert m, "SUMMARY line should match contract regex"


def test_rendered_line_matches_contract():
    result = ProcessingResult(
        success_files=3,
        failed_files=1,
        total_rows=1200,
        decoded_rows=1190,
        failed_rows=10,
        start_time=datetime(2025, 9, 1, tzinfo=UTC),
        end_time=datetime(2025, 9, 1, 0, 0, 1, tzinfo=UTC),
        elapsed_seconds=1.234567,
        throughput_rows_per_sec=971.98,
    )
    m = SUMMARY_PATTERN.match(render_summary_line(4, result))
    assert m
    assert m.group(6) == "1190"
    assert m.group(7) == "10"
    # decoded + invalid = rows
    assert int(m.group(6)) + int(m.group(7)) == int(m.group(5))
