from __future__ import annotations

from dataclasses import dataclass, field

"""Extraction / export option models.

The sheet layout constants describe one institutional registration sheet
(30 header rows, ID in A, name in C, phone in H, e-mail in L, balance 8
columns right of the group column). They are configurable and should be
confirmed against real sample data before being relied on for other sheets.
"""

__all__ = [
    "SheetLayout",
    "AuxiliaryColumn",
    "ResolvedAuxiliary",
    "ShowPrice",
    "AuxiliaryFields",
    "ExtrasMode",
    "ExtractOptions",
    "ExportOptions",
    "DEFAULT_HEADERS",
    "PRICE_HEADER",
]

DEFAULT_HEADERS: tuple[str, ...] = ("Customer-ID", "Group", "Name", "Phone", "Email")
PRICE_HEADER = "Balance"


@dataclass(frozen=True)
class SheetLayout:
    header_offset: int = 30  # rows skipped before data rows
    id_column: int = 0
    name_column: int = 2
    telephone_column: int = 7
    email_column: int = 11
    price_offset: int = 8  # price column = group column + offset


@dataclass(frozen=True)
class AuxiliaryColumn:
    """User configured extra column: header label + source column letter."""
    label: str
    column: str


@dataclass(frozen=True)
class ResolvedAuxiliary:
    label: str
    index: int


@dataclass(frozen=True)
class ShowPrice:
    enabled: bool = False


@dataclass(frozen=True)
class AuxiliaryFields:
    columns: tuple[AuxiliaryColumn, ...] = ()


ExtrasMode = ShowPrice | AuxiliaryFields


@dataclass(frozen=True)
class ExtractOptions:
    layout: SheetLayout = field(default_factory=SheetLayout)
    extras: ExtrasMode = field(default_factory=ShowPrice)


@dataclass(frozen=True)
class ExportOptions:
    """Options for the exporter.

    auxiliary_labels holds the already-resolved auxiliary labels so header
    and data rows always have the same column count.
    """
    show_price: bool = False
    auxiliary_labels: tuple[str, ...] = ()
    export_format: str | None = None  # "csv" | "xlsx"; None = from extension
    headers: tuple[str, ...] = DEFAULT_HEADERS
    price_header: str = PRICE_HEADER

    @property
    def extra_headers(self) -> tuple[str, ...]:
        if self.show_price:
            return (self.price_header,)
        return self.auxiliary_labels

    @property
    def all_headers(self) -> list[str]:
        return [*self.headers, *self.extra_headers]
