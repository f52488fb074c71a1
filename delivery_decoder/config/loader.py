from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

"""Config loader.

Responsibilities:
- Load YAML config (default ``config/decode.yml``)
- Validate against the packaged JSON schema (``schema.json`` next to this module)
- Apply defaults (header_rows=0, output_format=csv, logs_directory=./logs)
"""

__all__ = [
    "ConfigError",
    "DecodeConfig",
    "DEFAULT_CONFIG_PATH",
    "SCHEMA_PATH",
    "load_config",
]

SCHEMA_PATH = Path(__file__).parent / "schema.json"
DEFAULT_CONFIG_PATH = Path("config/decode.yml")


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class DecodeConfig:
    source_directory: str  # .xlsx を探すディレクトリ
    sheet_name: str | None = None  # None = 先頭シート
    header_rows: int = 0  # 先頭のスキップ行数
    output_directory: str | None = None  # None = エクスポートなし
    output_format: str = "csv"
    logs_directory: str = "./logs"


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: If the schema file is missing or invalid, or the config
            data violates it (missing keys, wrong types, unknown keys).
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")

    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def load_config(path: Path) -> DecodeConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping, got {type(data).__name__}")

    _validate_config_schema(data)

    return DecodeConfig(
        source_directory=data["source_directory"],
        sheet_name=data.get("sheet_name"),
        header_rows=data.get("header_rows", 0),
        output_directory=data.get("output_directory"),
        output_format=data.get("output_format", "csv"),
        logs_directory=data.get("logs_directory", "./logs"),
    )
