from __future__ import annotations

from unittest.mock import patch

import pytest

from course_list.errors import NoSheetLoadedError, RecordParseError
from course_list.excel.reader import SheetData
from course_list.models.course_entry import Auxiliaries, Price
from course_list.models.options import (
    AuxiliaryColumn,
    AuxiliaryFields,
    ExtractOptions,
    SheetLayout,
    ShowPrice,
)
from course_list.services.extractor import (
    count_groups,
    extract_records,
    resolve_auxiliaries,
    sort_records,
)

GROUP_COLUMN = 22  # "W", as laid out by the sheet_rows fixture


def _sheet(rows) -> SheetData:
    return SheetData(sheet_name="Kurse", rows=rows)


def test_extract_single_row_normalizes_telephone(sheet_rows):
    rows = sheet_rows([
        {"id": "5", "group": "MathX", "name": "Jane Doe", "phone": "123\r\n456", "email": "jane@x.com"},
    ])

    records = extract_records(_sheet(rows), GROUP_COLUMN)

    assert len(records) == 1
    entry = records[0]
    assert entry.id == 5
    assert entry.group == "MathX"
    assert entry.name == "Jane Doe"
    assert entry.telephone == "123;456"
    assert entry.email == "jane@x.com"
    assert entry.extra == Price(None)


def test_header_rows_are_skipped(sheet_rows):
    rows = sheet_rows([])
    # a header row that would otherwise qualify
    rows[29][GROUP_COLUMN] = "Gruppe"
    rows[29][0] = "Kundennummer"

    assert extract_records(_sheet(rows), GROUP_COLUMN) == []


def test_rows_without_string_group_are_dropped(sheet_rows, sample_entries):
    records = extract_records(_sheet(sheet_rows(sample_entries)), GROUP_COLUMN)

    assert sorted(r.id for r in records) == [1, 3, 9]
    assert all(r.group for r in records)


def test_empty_string_group_is_dropped(sheet_rows):
    rows = sheet_rows([{"id": 1, "group": "", "name": "Empty"}])
    assert extract_records(_sheet(rows), GROUP_COLUMN) == []


def test_whitespace_group_is_kept(sheet_rows):
    rows = sheet_rows([{"id": 1, "group": "   ", "name": "Spaces"}])

    records = extract_records(_sheet(rows), GROUP_COLUMN)

    assert [(r.id, r.group) for r in records] == [(1, "   ")]


@pytest.mark.parametrize("raw, expected", [(5, 5), (5.0, 5), ("12", 12), (" 7 ", 7)])
def test_id_accepts_integer_like_values(sheet_rows, raw, expected):
    rows = sheet_rows([{"id": raw, "group": "G", "name": "N"}])
    assert extract_records(_sheet(rows), GROUP_COLUMN)[0].id == expected


@pytest.mark.parametrize("raw", ["abc", 5.5, None, True])
def test_invalid_id_fails_whole_extraction(sheet_rows, raw):
    rows = sheet_rows([
        {"id": 1, "group": "G", "name": "Valid"},
        {"id": raw, "group": "G", "name": "Broken"},
    ])

    with pytest.raises(RecordParseError) as e:
        extract_records(_sheet(rows), GROUP_COLUMN)

    assert e.value.row_number == 32
    assert e.value.column == "A"


def test_invalid_id_in_filtered_row_is_ignored(sheet_rows):
    rows = sheet_rows([
        {"id": "not a number", "group": None, "name": "Filtered"},
        {"id": 2, "group": "G", "name": "Kept"},
    ])
    assert [r.id for r in extract_records(_sheet(rows), GROUP_COLUMN)] == [2]


def test_price_read_relative_to_group_column(sheet_rows, sample_entries):
    options = ExtractOptions(extras=ShowPrice(enabled=True))

    records = {r.id: r for r in extract_records(_sheet(sheet_rows(sample_entries)), GROUP_COLUMN, options)}

    assert records[3].extra == Price(12.5)
    assert records[9].extra == Price(0.0)
    assert records[1].extra == Price(7.5)


def test_price_as_numeric_string(sheet_rows):
    rows = sheet_rows([{"id": 1, "group": "G", "name": "N", "price": "19.90"}])
    options = ExtractOptions(extras=ShowPrice(enabled=True))
    assert extract_records(_sheet(rows), GROUP_COLUMN, options)[0].extra == Price(19.9)


def test_invalid_price_fails_whole_extraction(sheet_rows):
    rows = sheet_rows([{"id": 1, "group": "G", "name": "N", "price": "free"}])
    options = ExtractOptions(extras=ShowPrice(enabled=True))

    with pytest.raises(RecordParseError) as e:
        extract_records(_sheet(rows), GROUP_COLUMN, options)
    assert e.value.column == "AE"


@pytest.mark.parametrize("raw", [None, "", "  "])
def test_empty_price_fails_whole_extraction(sheet_rows, raw):
    rows = sheet_rows([
        {"id": 1, "group": "G", "name": "Paid", "price": 20},
        {"id": 2, "group": "G", "name": "Blank balance", "price": raw},
    ])
    options = ExtractOptions(extras=ShowPrice(enabled=True))

    with pytest.raises(RecordParseError) as e:
        extract_records(_sheet(rows), GROUP_COLUMN, options)

    assert e.value.row_number == 32
    assert e.value.column == "AE"
    assert "price is not a number" in str(e.value)


def test_invalid_price_ignored_when_price_not_shown(sheet_rows):
    rows = sheet_rows([{"id": 1, "group": "G", "name": "N", "price": "free"}])
    records = extract_records(_sheet(rows), GROUP_COLUMN, ExtractOptions(extras=ShowPrice(enabled=False)))
    assert records[0].extra == Price(None)


def test_auxiliary_columns_copied_in_configured_order(sheet_rows):
    rows = sheet_rows([
        {"id": 1, "group": "G", "name": "N", "cells": {102: "vegetarian", 26: 3}},
        {"id": 2, "group": "G", "name": "M"},
    ])
    options = ExtractOptions(
        extras=AuxiliaryFields((AuxiliaryColumn("Diet", "CY"), AuxiliaryColumn("Level", "AA")))
    )

    records = extract_records(_sheet(rows), GROUP_COLUMN, options)

    assert records[0].extra == Auxiliaries((("Diet", "vegetarian"), ("Level", "3")))
    # short rows / empty cells read as ""
    assert records[1].extra == Auxiliaries((("Diet", ""), ("Level", "")))


def test_unresolvable_auxiliary_is_omitted(sheet_rows):
    rows = sheet_rows([{"id": 1, "group": "G", "name": "N", "cells": {26: "x"}}])
    options = ExtractOptions(
        extras=AuxiliaryFields((AuxiliaryColumn("Broken", ""), AuxiliaryColumn("Level", "AA")))
    )

    with patch("course_list.services.extractor.logger") as mock_logger:
        records = extract_records(_sheet(rows), GROUP_COLUMN, options)

    assert records[0].extra == Auxiliaries((("Level", "x"),))
    mock_logger.warning.assert_called_once()


def test_resolve_auxiliaries_without_warning():
    with patch("course_list.services.extractor.logger") as mock_logger:
        resolved = resolve_auxiliaries([AuxiliaryColumn("Broken", "123")], warn=False)
    assert resolved == []
    mock_logger.warning.assert_not_called()


def test_group_column_beyond_row_width(sheet_rows):
    rows = sheet_rows([{"id": 1, "group": "G", "name": "N"}])
    assert extract_records(_sheet(rows), 500) == []


def test_custom_layout(sheet_rows):
    rows = sheet_rows([{"id": 1, "group": "G", "name": "N"}], header_offset=2)
    options = ExtractOptions(layout=SheetLayout(header_offset=2))
    assert len(extract_records(_sheet(rows), GROUP_COLUMN, options)) == 1


def test_no_sheet_loaded():
    with pytest.raises(NoSheetLoadedError):
        extract_records(None, 0)


def test_extraction_is_idempotent(sheet_rows, sample_entries):
    sheet = _sheet(sheet_rows(sample_entries))
    first = extract_records(sheet, GROUP_COLUMN)
    second = extract_records(sheet, GROUP_COLUMN)
    assert sort_records(first) == sort_records(second)


def test_sort_and_count_groups(sheet_rows, sample_entries):
    records = sort_records(extract_records(_sheet(sheet_rows(sample_entries)), GROUP_COLUMN))

    assert [(r.name, r.id) for r in records] == [("Abel", 9), ("Bauer", 1), ("Bauer", 3)]
    assert count_groups(records) == 2
