from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

from tqdm import tqdm
from tqdm.std import tqdm as TqdmType

"""Progress display service with tqdm (TTY only).

- Single tqdm bar over files; disabled in non-TTY environments (CI, pipes)
- Per-file row tally printed as a short indicator line
"""

__all__ = [
    "ProgressTracker",
    "is_tty_enabled",
    "FileRowIndicator",
]


def is_tty_enabled() -> bool:
    """True if stdout is a TTY and progress should be displayed."""
    return sys.stdout.isatty()


class ProgressTracker:
    """Progress tracker using tqdm for file processing.

    In non-TTY environments the bar is disabled to avoid ANSI control
    sequence spam in logs.
    """

    def __init__(self, total_files: int, *, description: str = "Decoding files") -> None:
        self.total_files = total_files
        self.description = description
        self.current_file = 0

        self.enabled = is_tty_enabled()
        self.pbar: TqdmType[Any] | None
        if self.enabled:
            self.pbar = tqdm(
                total=total_files,
                desc=description,
                unit="file",
                disable=False,
                leave=True,
                position=0,
                ncols=80,
                ascii=True,
            )
        else:
            self.pbar = None

    def start_file(self, file_path: Path) -> None:
        self.current_file += 1

        if self.enabled and self.pbar is not None:
            self.pbar.set_description(f"{self.description} ({file_path.name})")

    def finish_file(self, success: bool = True) -> None:
        if self.enabled and self.pbar is not None:
            self.pbar.update(1)
            self.pbar.set_description(self.description)

    def set_postfix(self, **kwargs: Any) -> None:
        """Show running stats (decoded / failed rows) on the bar."""
        if self.enabled and self.pbar is not None:
            self.pbar.set_postfix(**kwargs)

    def close(self) -> None:
        if self.enabled and self.pbar is not None:
            self.pbar.close()
            self.pbar = None

    def __enter__(self) -> ProgressTracker:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()


class FileRowIndicator:
    """One-line per-file indicator: ``  <file>: <decoded>/<total> rows ✓``.

    Row decoding is fast, so no nested bar is used.
    """

    def __init__(self, file_name: str) -> None:
        self.file_name = file_name
        self.enabled = is_tty_enabled()

    def report(self, decoded: int, total: int, success: bool = True) -> None:
        if not self.enabled:
            return
        status = "✓" if success and decoded == total else "✗"
        print(f"  {self.file_name}: {decoded}/{total} rows {status}")
