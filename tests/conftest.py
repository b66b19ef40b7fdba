# Shared pytest fixtures
from __future__ import annotations

import logging
import tempfile
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pandas as pd
import pytest

from course_list.logging.init import LOGGER_NAME, reset_logging

# Registration sheet layout used throughout the tests (W = 22)
GROUP_COLUMN = 22
PRICE_COLUMN = GROUP_COLUMN + 8
SHEET_WIDTH = PRICE_COLUMN + 2


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "out").mkdir()
        monkeypatch.chdir(p)
        yield p


def _build_rows(entries: list[dict[str, Any]], header_offset: int = 30) -> list[list[Any]]:
    rows: list[list[Any]] = []
    for i in range(header_offset):
        header = [None] * SHEET_WIDTH
        header[0] = f"header {i}"
        rows.append(header)
    for entry in entries:
        row: list[Any] = [None] * SHEET_WIDTH
        row[0] = entry.get("id")
        row[2] = entry.get("name")
        row[7] = entry.get("phone")
        row[11] = entry.get("email")
        row[GROUP_COLUMN] = entry.get("group")
        row[PRICE_COLUMN] = entry.get("price")
        for col, value in entry.get("cells", {}).items():
            if col >= len(row):
                row.extend([None] * (col + 1 - len(row)))
            row[col] = value
        rows.append(row)
    return rows


@pytest.fixture()
def sheet_rows() -> Callable[..., list[list[Any]]]:
    """Builder for registration sheet rows (30 header rows + data rows).

    Entries are dicts with keys id, group, name, phone, email, price and an
    optional cells mapping {column_index: value} for auxiliary columns.
    """
    return _build_rows


@pytest.fixture()
def make_workbook(sheet_rows) -> Callable[..., Path]:
    def _make(path: Path, entries: list[dict[str, Any]], sheet: str = "Kurse", engine: str = "openpyxl") -> Path:
        rows = sheet_rows(entries)
        with pd.ExcelWriter(path, engine=engine) as writer:
            pd.DataFrame(rows).to_excel(writer, sheet_name=sheet, header=False, index=False)
            pd.DataFrame([["other"]]).to_excel(writer, sheet_name="Other", header=False, index=False)
        return path
    return _make


@pytest.fixture()
def sample_entries() -> list[dict[str, Any]]:
    return [
        {"id": 3, "group": "MathX", "name": "Bauer", "phone": "0301", "email": "b3@x.com", "price": 12.5},
        {"id": 9, "group": "Chem", "name": "Abel", "phone": "0302", "email": "abel@x.com", "price": 0},
        {"id": 4, "group": None, "name": "No Group", "phone": "", "email": ""},
        {"id": 1, "group": "MathX", "name": "Bauer", "phone": "0303", "email": "b1@x.com", "price": 7.5},
        {"id": 7, "group": 42, "name": "Numeric Group", "phone": "", "email": ""},
    ]


@pytest.fixture()
def sample_config_yaml() -> str:
    return """source:
  path: ./data/registrations.xlsx
  sheet: Kurse
  column: W
destination:
  path: ./out/course_list.csv
show_price: true
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "course_list.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture(autouse=True)
def _detach_app_logger():
    # stdout handler set up in one test must not write into the next test's capture
    yield
    reset_logging()
    app_logger = logging.getLogger(LOGGER_NAME)
    for handler in app_logger.handlers[:]:
        app_logger.removeHandler(handler)
    app_logger.setLevel(logging.NOTSET)
    app_logger.propagate = True
