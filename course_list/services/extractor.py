from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from ..errors import CourseListError, NoSheetLoadedError, RecordParseError
from ..excel.columns import column_to_index, index_to_column
from ..excel.reader import CellValue, SheetData, cell_to_text
from ..models.course_entry import Auxiliaries, CourseEntry, ExtraFields, Price
from ..models.options import (
    AuxiliaryColumn,
    AuxiliaryFields,
    ExtractOptions,
    ResolvedAuxiliary,
    ShowPrice,
)
from .progress import RowProgress

"""Record extraction: sheet rows -> CourseEntry list.

Single pass over the rows after the header offset:
1. rows whose group cell is not a non-empty string are dropped silently
2. id / name / telephone / email are read from fixed layout positions
3. extras are attached according to the configured mode (price or auxiliaries)

Any parse error aborts the whole extraction (no partial result), so
malformed entries are surfaced to the user instead of silently disappearing.
"""

__all__ = [
    "extract_records",
    "resolve_auxiliaries",
    "sort_records",
    "count_groups",
]

logger = logging.getLogger(__name__)


def resolve_auxiliaries(
    columns: Iterable[AuxiliaryColumn], *, warn: bool = True
) -> list[ResolvedAuxiliary]:
    """Resolve auxiliary column labels, dropping the ones that fail.

    Order of the configured columns is preserved. warn=False suppresses the
    WARN line for callers that resolve the same columns a second time.
    """
    resolved: list[ResolvedAuxiliary] = []
    for aux in columns:
        try:
            index = column_to_index(aux.column)
        except CourseListError as e:
            if warn:
                logger.warning(f"auxiliary '{aux.label}' omitted: {e}")
            continue
        resolved.append(ResolvedAuxiliary(label=aux.label, index=index))
    return resolved


def _is_group_value(value: CellValue) -> bool:
    return isinstance(value, str) and value != ""


def _parse_id(value: CellValue, row_number: int, column: int) -> int:
    label = index_to_column(column)
    if isinstance(value, bool) or value is None:
        raise RecordParseError(row_number, label, value, "customer id is not an integer")
    if isinstance(value, float):
        if not value.is_integer():
            raise RecordParseError(row_number, label, value, "customer id is not an integer")
        return int(value)
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        raise RecordParseError(row_number, label, value, "customer id is not an integer") from None


def _parse_price(value: CellValue, row_number: int, column: int) -> float:
    # 空セルもエラー (0 € として出力しない)
    label = index_to_column(column)
    if value is None or isinstance(value, bool):
        raise RecordParseError(row_number, label, value, "price is not a number")
    if isinstance(value, (int, float)):
        return float(value)
    try:
        return float(str(value).strip())
    except ValueError:
        raise RecordParseError(row_number, label, value, "price is not a number") from None


def _extra_fields(
    sheet: SheetData,
    row: list[CellValue],
    row_number: int,
    group_column: int,
    options: ExtractOptions,
    auxiliaries: Sequence[ResolvedAuxiliary],
) -> ExtraFields:
    extras = options.extras
    if isinstance(extras, ShowPrice):
        if not extras.enabled:
            return Price()
        price_column = group_column + options.layout.price_offset
        return Price(_parse_price(sheet.cell(row, price_column), row_number, price_column))
    return Auxiliaries(
        tuple((aux.label, cell_to_text(sheet.cell(row, aux.index))) for aux in auxiliaries)
    )


def extract_records(
    sheet: SheetData | None, group_column: int, options: ExtractOptions | None = None
) -> list[CourseEntry]:
    """Extract participant records from a sheet.

    Args:
        sheet: Sheet rows as returned by WorkbookManager.get_sheet
        group_column: zero-based index of the grouping column
        options: layout + extras mode (defaults: standard layout, no price)

    Returns:
        Records in sheet order (callers sort with sort_records)

    Raises:
        NoSheetLoadedError: sheet is None
        RecordParseError: a kept row has a malformed id or price
    """
    if sheet is None:
        raise NoSheetLoadedError("No worksheet loaded")
    options = options or ExtractOptions()
    layout = options.layout

    auxiliaries: list[ResolvedAuxiliary] = []
    if isinstance(options.extras, AuxiliaryFields):
        auxiliaries = resolve_auxiliaries(options.extras.columns)

    data_rows = sheet.rows[layout.header_offset:]
    records: list[CourseEntry] = []

    with RowProgress(len(data_rows), sheet.sheet_name) as progress:
        for offset, row in enumerate(data_rows):
            # spreadsheet row numbers are 1-based
            row_number = layout.header_offset + offset + 1

            group = sheet.cell(row, group_column)
            if not _is_group_value(group):
                progress.row_skipped()
                continue

            entry = CourseEntry(
                id=_parse_id(sheet.cell(row, layout.id_column), row_number, layout.id_column),
                group=group,
                name=cell_to_text(sheet.cell(row, layout.name_column)),
                telephone=cell_to_text(sheet.cell(row, layout.telephone_column)).replace("\r\n", ";"),
                email=cell_to_text(sheet.cell(row, layout.email_column)),
                extra=_extra_fields(sheet, row, row_number, group_column, options, auxiliaries),
            )
            records.append(entry)
            progress.row_kept()

    logger.debug(
        f"sheet '{sheet.sheet_name}' group_column={index_to_column(group_column)} "
        f"records={progress.kept} skipped_rows={progress.skipped}"
    )
    return records


def sort_records(records: Iterable[CourseEntry]) -> list[CourseEntry]:
    """Return records ordered by name, then id."""
    return sorted(records)


def count_groups(records: Iterable[CourseEntry]) -> int:
    return len({r.group for r in records})
