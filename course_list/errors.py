from __future__ import annotations

from typing import Any

"""Error taxonomy for the course list generator.

All errors raised by the core derive from CourseListError so the CLI can
report them with a single except clause. Messages are meant to be shown to
the user as-is.
"""

__all__ = [
    "CourseListError",
    "InputValidationError",
    "InvalidColumnError",
    "FileAccessError",
    "UnsupportedFormatError",
    "SheetNotFoundError",
    "NoSheetLoadedError",
    "SheetAccessError",
    "RecordParseError",
    "DestinationError",
    "WriteError",
]


class CourseListError(Exception):
    """Base exception for course list generation errors."""


class InputValidationError(CourseListError):
    """Raised when a required input (path, sheet, column) is empty."""


class InvalidColumnError(CourseListError):
    """Raised when a column label cannot be converted to an index."""


class FileAccessError(CourseListError):
    """Raised when the source workbook cannot be opened or read."""


class UnsupportedFormatError(CourseListError):
    """Raised for unknown or missing file extensions."""


class SheetNotFoundError(CourseListError):
    pass


class NoSheetLoadedError(CourseListError):
    pass


class SheetAccessError(CourseListError):
    """Raised when the workbook backend fails while reading a sheet."""


class RecordParseError(CourseListError):
    """Raised when a typed field (id, price) of a data row cannot be parsed.

    Attributes:
        row_number: 1-based row number as shown by spreadsheet applications
        column: column label of the offending cell
        value: raw cell value
    """

    def __init__(self, row_number: int, column: str, value: Any, reason: str) -> None:
        self.row_number = row_number
        self.column = column
        self.value = value
        self.reason = reason
        super().__init__(f"row {row_number}, column {column}: {reason} (value={value!r})")


class DestinationError(CourseListError):
    """Raised when the output file cannot be created."""


class WriteError(CourseListError):
    """Raised when writing the output fails partway; the file is not usable."""
