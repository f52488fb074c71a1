from __future__ import annotations
import json
from pathlib import Path
from delivery_decoder.logging.error_log import ErrorRecord, ErrorLogBuffer
from delivery_decoder.models.error_record import ERROR_LOG_KEYS, FILE_LEVEL_ROW


def test_error_record_creation_and_json_line():
    rec = ErrorRecord.create(
        file="deliveries.xlsx",
        sheet="Лист1",
        row=10,
        error_type="CARGO_DECODE_ERROR",
        message="cargo cell does not match format",
        cell="3.32 куб.м/871/1.010 м/Нет",
    )
    line = rec.to_json_line()
    data = json.loads(line)
    assert data["file"] == "deliveries.xlsx"
    assert data["sheet"] == "Лист1"
    assert data["row"] == 10
    assert data["error_type"] == "CARGO_DECODE_ERROR"
    assert data["cell"] == "3.32 куб.м/871/1.010 м/Нет"
    assert "timestamp" in data and data["timestamp"].endswith("Z")
    assert set(data.keys()) == set(ERROR_LOG_KEYS)
    # キリル文字はエスケープしない
    assert "Лист1" in line


def test_error_record_cell_defaults_to_null():
    rec = ErrorRecord.create("f.xlsx", "<FILE_LEVEL>", FILE_LEVEL_ROW, "FILE_READ_ERROR", "broken")
    data = json.loads(rec.to_json_line())
    assert data["cell"] is None
    assert data["row"] == -1


def test_error_log_buffer_flush(temp_workdir: Path):
    buf = ErrorLogBuffer()
    buf.append(ErrorRecord.create("f1.xlsx", "S", 1, "INCOMPLETE_ROW", "empty cells: company"))
    buf.append(ErrorRecord.create("f1.xlsx", "S", 2, "ORDER_DECODE_ERROR", "bad order", cell="x"))
    path = buf.flush()
    assert path is not None and path.exists()
    assert path.parent == Path("logs")
    assert path.name.startswith("errors-") and path.suffix == ".log"
    # ファイル内容検証
    lines = path.read_text(encoding="utf-8").strip().splitlines()
    assert len(lines) == 2
    for raw in lines:
        obj = json.loads(raw)
        assert set(obj.keys()) == set(ERROR_LOG_KEYS)
    # flush 後バッファクリア
    assert len(buf) == 0


def test_error_log_buffer_empty_flush_creates_no_file(temp_workdir: Path):
    buf = ErrorLogBuffer(temp_workdir / "custom_logs")
    assert buf.flush() is None
    assert not (temp_workdir / "custom_logs").exists()


def test_error_log_buffer_appends_to_same_file(temp_workdir: Path):
    buf = ErrorLogBuffer(temp_workdir / "logs")
    buf.append(ErrorRecord.create("a.xlsx", "S", 1, "INCOMPLETE_ROW", "m"))
    first = buf.flush()
    buf.append(ErrorRecord.create("b.xlsx", "S", 2, "INCOMPLETE_ROW", "m"))
    second = buf.flush()
    assert first == second
    assert second is not None
    assert len(second.read_text(encoding="utf-8").splitlines()) == 2


def test_error_log_buffer_records_is_a_copy():
    buf = ErrorLogBuffer()
    buf.append(ErrorRecord.create("a.xlsx", "S", 1, "INCOMPLETE_ROW", "m"))
    records = buf.records
    records.clear()
    assert len(buf) == 1
