from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from delivery_decoder.config.loader import DEFAULT_CONFIG_PATH, ConfigError, DecodeConfig, load_config
from delivery_decoder.excel.reader import extract_raw_rows, read_excel_file
from delivery_decoder.logging.init import log_summary, setup_logging
from delivery_decoder.parsing.record import decode_row_verbose, format_record
from delivery_decoder.services.batch import ProcessingError, process_all, scan_excel_files
from delivery_decoder.services.summary import render_batch_report, render_summary_line

"""CLI entrypoint.

Flow:
- Load .env, resolve the config path (--config > DELIVERY_DECODER_CONFIG > config/decode.yml)
- Decode every .xlsx in source_directory
- Print the SUMMARY line (and the batch report with --report)
- Exit 0 when every row decoded, 2 when some rows/files failed, 1 on fatal errors
"""

EXIT_SUCCESS_ALL = 0
EXIT_PARTIAL_FAILURE = 2
EXIT_FATAL = 1

CONFIG_ENV_VAR = "DELIVERY_DECODER_CONFIG"
INSPECT_SAMPLE_ROWS = 3


def _load_env_file(path: Path, override: bool = False) -> None:
    """Load .env via python-dotenv; a broken file only produces a warning."""
    try:
        if path.exists():
            load_dotenv(dotenv_path=path, override=override)
    except (OSError, ValueError) as e:  # pragma: no cover
        print(f"WARNING: failed to load .env via python-dotenv: {e}")


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Decode delivery rows from Excel exports")
    p.add_argument("--config", type=Path, default=None, help=f"Config file (default: {DEFAULT_CONFIG_PATH})")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--inspect-data", action="store_true", help="Print the first decoded rows of each file then exit")
    p.add_argument("--report", action="store_true", help="Print the batch report after the run")
    return p.parse_args(argv)


def _resolve_config_path(args: argparse.Namespace) -> Path:
    if args.config is not None:
        return args.config
    env_path = os.getenv(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)
    return DEFAULT_CONFIG_PATH


def _inspect_data(cfg: DecodeConfig) -> int:
    try:
        excel_files = scan_excel_files(Path(cfg.source_directory))
    except ProcessingError as e:
        print(f"inspect: {e}")
        return EXIT_FATAL
    if not excel_files:
        print("inspect: no .xlsx files")
        return EXIT_SUCCESS_ALL
    for f in excel_files:
        print(f"FILE: {f.name}")
        try:
            sheet_name, df = read_excel_file(f, cfg.sheet_name)
        except Exception as e:  # pragma: no cover
            print(f"  read_error: {e}")
            continue
        rows = extract_raw_rows(df, header_rows=cfg.header_rows)
        print(f"  SHEET: {sheet_name} rows={len(rows)}")
        for row_number, raw in rows[:INSPECT_SAMPLE_ROWS]:
            result = decode_row_verbose(raw)
            if result.failure is not None:
                print(f"  ROW {row_number}: {result.failure.error_type} {result.failure.message}")
                continue
            print(f"  ROW {row_number}:")
            for line in format_record(result.record).splitlines():
                print(f"    {line}")
    return EXIT_SUCCESS_ALL


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # NOTE: 空リスト [] (テストからの呼び出し) で sys.argv が混入しないよう None のみ判定
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"))

    if args.debug:
        for h in logger.handlers:
            h.setLevel(logging.DEBUG)
        logger.setLevel(logging.DEBUG)
        logger.debug("debug mode enabled")

    config_path = _resolve_config_path(args)
    try:
        cfg = load_config(config_path)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    directory = Path(cfg.source_directory)
    if not directory.exists():
        logger.error(f"directory not found: {directory}")
        return EXIT_FATAL

    logger.info(f"Processing files from: {directory}")

    if args.inspect_data:
        return _inspect_data(cfg)

    try:
        result = process_all(cfg)
    except ProcessingError as e:
        logger.error(f"processing: {e}")
        return EXIT_FATAL

    if result.output_path:
        logger.info(f"output={result.output_path}")

    if args.report:
        print(render_batch_report(result.outcomes))

    total_files = result.success_files + result.failed_files
    summary_line = render_summary_line(total_files, result)
    # log_summary が "SUMMARY " を付与するので除去
    log_summary(summary_line[len("SUMMARY "):])

    if result.failed_files > 0 or result.failed_rows > 0:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
