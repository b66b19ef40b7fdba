from __future__ import annotations

import sys
from typing import Any

from tqdm import tqdm
from tqdm.std import tqdm as TqdmType

"""Row progress for sheet extraction (tqdm, TTY only).

One bar per extracted sheet. Rows are counted as kept (became a course
entry) or skipped (no group); the counts are shown as the bar postfix and
stay available after the bar is closed. Without a TTY only the counters run.
"""

__all__ = [
    "RowProgress",
    "is_tty_enabled",
]

# postfix 更新間隔 (行数)
POSTFIX_EVERY = 50


def is_tty_enabled() -> bool:
    return sys.stdout.isatty()


class RowProgress:
    """Counts kept / skipped rows of one sheet and drives a tqdm bar."""

    def __init__(self, total_rows: int, sheet_name: str) -> None:
        self.total_rows = total_rows
        self.sheet_name = sheet_name
        self.kept = 0
        self.skipped = 0

        self.pbar: TqdmType[Any] | None = None
        if is_tty_enabled():
            self.pbar = tqdm(
                total=total_rows,
                desc=f"Reading {sheet_name}",
                unit="row",
                leave=False,
                position=0,
                ncols=80,
                ascii=True,
            )

    @property
    def processed(self) -> int:
        return self.kept + self.skipped

    def row_kept(self) -> None:
        self.kept += 1
        self._tick()

    def row_skipped(self) -> None:
        self.skipped += 1
        self._tick()

    def _tick(self) -> None:
        if self.pbar is None:
            return
        self.pbar.update(1)
        if self.processed % POSTFIX_EVERY == 0:
            self.pbar.set_postfix(kept=self.kept, skipped=self.skipped)

    def close(self) -> None:
        if self.pbar is not None:
            self.pbar.set_postfix(kept=self.kept, skipped=self.skipped)
            self.pbar.close()
            self.pbar = None

    def __enter__(self) -> RowProgress:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
