from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import pandas as pd
from xlsxwriter.exceptions import FileCreateError, XlsxWriterException

from ..errors import DestinationError, UnsupportedFormatError, WriteError
from ..models.course_entry import Auxiliaries, CourseEntry, Price
from ..models.options import ExportOptions

"""Export of sorted CourseEntry lists to CSV or xlsx.

The exporter does not sort; callers pass records already ordered with
sort_records. Header and data rows always have the same column count:
a missing price is written as 0 and a missing auxiliary value as "".

On any error the destination must be treated as unusable (it may be
partially written).
"""

__all__ = [
    "export_records",
    "build_frame",
    "resolve_format",
    "SHEET_NAME",
    "CURRENCY_FORMAT",
    "COLUMN_WIDTHS",
    "EXTRA_COLUMN_WIDTH",
]

logger = logging.getLogger(__name__)

SHEET_NAME = "Sheet1"
CURRENCY_FORMAT = "#,##0.00 €;-#,##0.00 €"
# ID, Group, Name, Phone, Email
COLUMN_WIDTHS: tuple[float, ...] = (5.0, 30.0, 20.0, 15.0, 30.0)
EXTRA_COLUMN_WIDTH = 35.0
# sheet values are plain text: no "=..." formulas, no auto hyperlinks
WORKBOOK_OPTIONS = {"strings_to_formulas": False, "strings_to_urls": False}

FORMATS_BY_SUFFIX = {
    ".csv": "csv",
    ".xlsx": "xlsx",
}


def resolve_format(destination: Path, options: ExportOptions) -> str:
    """Return "csv" or "xlsx" from the explicit option or the file extension."""
    if options.export_format is not None:
        fmt = options.export_format.lower()
        if fmt not in FORMATS_BY_SUFFIX.values():
            raise UnsupportedFormatError(f"Unsupported export format: {options.export_format}")
        return fmt
    suffix = destination.suffix.lower()
    if not suffix:
        raise UnsupportedFormatError(f"Destination has no extension: {destination}")
    try:
        return FORMATS_BY_SUFFIX[suffix]
    except KeyError:
        raise UnsupportedFormatError(f"Unsupported destination extension: {suffix}") from None


def _extra_values(entry: CourseEntry, options: ExportOptions) -> list[Any]:
    extra = entry.extra
    if options.show_price:
        price = extra.value if isinstance(extra, Price) else None
        return [price if price is not None else 0.0]
    # auxiliary values are stored in resolved column order
    values: list[Any] = [v for _, v in extra.values] if isinstance(extra, Auxiliaries) else []
    width = len(options.auxiliary_labels)
    return (values + [""] * width)[:width]


def build_frame(records: Sequence[CourseEntry], options: ExportOptions) -> pd.DataFrame:
    """Build the export table (one row per record, header = options.all_headers)."""
    rows = [
        [entry.id, entry.group, entry.name, entry.telephone, entry.email, *_extra_values(entry, options)]
        for entry in records
    ]
    return pd.DataFrame(rows, columns=options.all_headers)


def _write_csv(destination: Path, frame: pd.DataFrame) -> None:
    try:
        handle = destination.open("w", encoding="utf-8", newline="")
    except OSError as e:
        raise DestinationError(f"Could not create {destination}: {e}") from e
    with handle:
        try:
            frame.to_csv(handle, index=False, lineterminator="\n")
        except OSError as e:
            raise WriteError(f"Could not write {destination}: {e}") from e


def _write_xlsx(destination: Path, frame: pd.DataFrame, options: ExportOptions) -> None:
    try:
        writer = pd.ExcelWriter(destination, engine="xlsxwriter", engine_kwargs={"options": WORKBOOK_OPTIONS})
    except OSError as e:
        raise DestinationError(f"Could not create {destination}: {e}") from e
    try:
        # Use ONE writer context; header row is written by hand for its format.
        with writer:
            frame.to_excel(writer, sheet_name=SHEET_NAME, startrow=1, header=False, index=False)

            wb = writer.book
            ws = writer.sheets[SHEET_NAME]

            header_format = wb.add_format({"align": "center", "bottom": 2, "bold": True})
            id_format = wb.add_format({"align": "center"})
            currency_format = wb.add_format({"num_format": CURRENCY_FORMAT})

            ws.set_column(0, 0, COLUMN_WIDTHS[0], id_format)
            for idx, width in enumerate(COLUMN_WIDTHS[1:], start=1):
                ws.set_column(idx, idx, width)
            first_extra = len(COLUMN_WIDTHS)
            for idx in range(first_extra, first_extra + len(options.extra_headers)):
                ws.set_column(idx, idx, EXTRA_COLUMN_WIDTH, currency_format if options.show_price else None)

            for col, header in enumerate(frame.columns):
                ws.write_string(0, col, str(header), header_format)
    except FileCreateError as e:
        raise DestinationError(f"Could not create {destination}: {e}") from e
    except (XlsxWriterException, OSError) as e:
        raise WriteError(f"Could not write {destination}: {e}") from e


def export_records(
    destination: Path, records: Sequence[CourseEntry], options: ExportOptions | None = None
) -> None:
    """Write records to destination, overwriting any existing file.

    Raises:
        UnsupportedFormatError: destination format cannot be determined
        DestinationError: destination cannot be created
        WriteError: writing failed partway
    """
    options = options or ExportOptions()
    fmt = resolve_format(destination, options)
    frame = build_frame(records, options)

    logger.info(f"Writing course list to {destination} (format={fmt}, rows={len(frame)})")
    if fmt == "csv":
        _write_csv(destination, frame)
    else:
        _write_xlsx(destination, frame, options)
