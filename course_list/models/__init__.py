"""Domain models for the course list generator.

This package contains the record type produced by extraction and the option
types consumed by extraction and export.
"""

from .course_entry import Auxiliaries, CourseEntry, ExtraFields, Price
from .generation_result import GenerationResult
from .options import (
    AuxiliaryColumn,
    AuxiliaryFields,
    ExportOptions,
    ExtractOptions,
    ResolvedAuxiliary,
    SheetLayout,
    ShowPrice,
)

__all__ = [
    # Records
    "CourseEntry",
    "ExtraFields",
    "Price",
    "Auxiliaries",
    # Options
    "SheetLayout",
    "AuxiliaryColumn",
    "ResolvedAuxiliary",
    "ShowPrice",
    "AuxiliaryFields",
    "ExtractOptions",
    "ExportOptions",
    # Results
    "GenerationResult",
]
