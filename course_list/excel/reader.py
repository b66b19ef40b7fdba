from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pandas as pd

from ..errors import (
    FileAccessError,
    NoSheetLoadedError,
    SheetAccessError,
    SheetNotFoundError,
    UnsupportedFormatError,
)

"""Workbook reader over the xlsx and ods backends.

The backend (pandas engine) is chosen once from the file extension. Sheets are
read without a header row and with dtype=object so cells keep the type the
workbook stores (str / int / float / bool); empty cells become None.

Only truly empty cells are treated as missing: pandas' default NA strings
("NA", "null", ...) are kept as text since they can be real participant data.
"""

__all__ = [
    "CellValue",
    "SheetData",
    "WorkbookManager",
    "cell_to_text",
    "engine_for_path",
]

logger = logging.getLogger(__name__)

CellValue = Any  # str | int | float | bool | None

ENGINES_BY_SUFFIX: dict[str, str] = {
    ".xlsx": "openpyxl",
    ".xlsm": "openpyxl",
    ".xltx": "openpyxl",
    ".xltm": "openpyxl",
    ".ods": "odf",
}


@dataclass
class SheetData:
    sheet_name: str
    rows: list[list[CellValue]]

    def cell(self, row: list[CellValue], index: int) -> CellValue:
        """Return the cell at index, or None when the row is shorter."""
        if 0 <= index < len(row):
            return row[index]
        return None


def engine_for_path(path: Path) -> str:
    """Return the pandas engine for a workbook path based on its extension."""
    suffix = path.suffix.lower()
    if not suffix:
        raise UnsupportedFormatError(f"File has no extension: {path}")
    try:
        return ENGINES_BY_SUFFIX[suffix]
    except KeyError:
        raise UnsupportedFormatError(f"Unsupported file extension: {suffix}") from None


def cell_to_text(value: CellValue) -> str:
    """Render a cell the way spreadsheet applications display it.

    Integral floats lose their ".0" (IDs are often stored as 5.0).
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _normalize_cell(value: Any) -> CellValue:
    if isinstance(value, str):
        return value
    if pd.isna(value):
        return None
    return value


class WorkbookManager:
    """Holds at most one open workbook and hands out its sheets."""

    def __init__(self) -> None:
        self._excel: pd.ExcelFile | None = None
        self.path: Path | None = None

    def open(self, path: Path) -> None:
        engine = engine_for_path(path)
        self.close()
        logger.info(f"Opening workbook with {engine} (path: {path})")
        try:
            self._excel = pd.ExcelFile(path, engine=engine)
        except Exception as e:
            raise FileAccessError(f"Could not open workbook {path}: {e}") from e
        self.path = path

    @property
    def sheet_names(self) -> list[str] | None:
        if self._excel is None:
            return None
        return [str(name) for name in self._excel.sheet_names]

    def get_sheet(self, name: str) -> SheetData:
        if self._excel is None:
            raise NoSheetLoadedError("No workbook loaded")
        if name not in (self.sheet_names or []):
            raise SheetNotFoundError(f"Could not find sheet '{name}' in {self.path}")
        try:
            df = self._excel.parse(
                name,
                header=None,
                dtype=object,
                keep_default_na=False,
                na_values=[""],
            )
        except Exception as e:
            raise SheetAccessError(f"Could not read sheet '{name}': {e}") from e

        rows = [[_normalize_cell(v) for v in raw] for raw in df.itertuples(index=False, name=None)]
        logger.debug(f"sheet '{name}' rows={len(rows)} cols={df.shape[1]}")
        return SheetData(sheet_name=name, rows=rows)

    def close(self) -> None:
        if self._excel is not None:
            self._excel.close()
            self._excel = None
            self.path = None

    def __enter__(self) -> WorkbookManager:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
