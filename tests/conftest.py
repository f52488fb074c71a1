# Shared pytest fixtures
from __future__ import annotations

import tempfile
from pathlib import Path

import pandas as pd
import pytest

from delivery_decoder.logging.init import reset_logging

ROUTE_CELL = "01.09.25_77_00ч_ВИП_19"
CARGO_CELL = "3.32 куб.м/871 кг/1.010 м/Нет"
ORDER_CELL = (
    "13908.Заказано.01\\.09\\.2025 00:00:00.Кулушов Марат Шайлообаевич"
    "........01\\.09\\.2025 01:30:00..202"
)
COMPANY_CELL = 'ООО "ГРУЗ СЕРВИС"'

SAMPLE_ROWS = [
    [ROUTE_CELL, CARGO_CELL, ORDER_CELL, COMPANY_CELL],
    [
        "02.09.25_78_12ч_СТАНДАРТ_25",
        "2.15 куб.м/450 кг/0.850 м/Да",
        "13909.Заказано.02\\.09\\.2025 12:00:00.Иванов Иван Иванович........02\\.09\\.2025 14:30:00..203",
        COMPANY_CELL,
    ],
    [
        "03.09.25_79_18ч_ЭКСПРЕСС_31",
        "1.85 куб.м/320 кг/0.750 м/Нет",
        "13910.Заказано.03\\.09\\.2025 18:00:00.Петров Петр Петрович........03\\.09\\.2025 20:00:00..204",
        COMPANY_CELL,
    ],
]

HEADER_ROW = ["Маршрут", "Груз", "Заказ", "Компания"]


def make_excel(path: Path, sheets: dict[str, list[list[object]]]) -> Path:
    """Write a real .xlsx with the given sheets (no header inference)."""
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        for sheet, rows in sheets.items():
            pd.DataFrame(rows).to_excel(writer, sheet_name=sheet, header=False, index=False)
    return path


@pytest.fixture(autouse=True)
def _reset_logging():
    # CLI テストの capsys ストリームに束縛されたハンドラを残さない
    yield
    reset_logging()


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        monkeypatch.delenv("DELIVERY_DECODER_CONFIG", raising=False)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """source_directory: ./data
sheet_name: null
header_rows: 1
output_format: csv
logs_directory: ./logs
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "decode.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def deliveries_xlsx(temp_workdir: Path) -> Path:
    """A workbook with one header row and three valid delivery rows."""
    return make_excel(temp_workdir / "data" / "deliveries.xlsx", {"Лист1": [HEADER_ROW, *SAMPLE_ROWS]})
