from __future__ import annotations

import logging
from datetime import UTC, datetime

from ..config.loader import CourseListConfig
from ..errors import InputValidationError
from ..excel.columns import column_to_index
from ..excel.reader import WorkbookManager
from ..models.generation_result import GenerationResult
from ..models.options import (
    DEFAULT_HEADERS,
    PRICE_HEADER,
    AuxiliaryColumn,
    AuxiliaryFields,
    ExportOptions,
    ExtractOptions,
    SheetLayout,
    ShowPrice,
)
from .exporter import export_records
from .extractor import count_groups, extract_records, resolve_auxiliaries, sort_records

logger = logging.getLogger(__name__)

"""Course list generation pipeline.

Coordinates one run: validate inputs, open workbook, read sheet, resolve the
grouping column, extract, sort, export. Strictly sequential and fail-fast:
export is never reached when extraction raised.
"""


def _validate_inputs(config: CourseListConfig) -> None:
    if config.source_path is None:
        raise InputValidationError("Path is not set")
    if not config.sheet_name.strip():
        raise InputValidationError("Sheet name is not set")
    if not config.group_column.strip():
        raise InputValidationError("Column is not set")
    if config.destination_path is None:
        raise InputValidationError("Destination path is not set")


def build_extract_options(config: CourseListConfig) -> ExtractOptions:
    """Convert loader config into domain extraction options."""
    layout = SheetLayout(**config.layout)
    if config.auxiliaries:
        extras = AuxiliaryFields(
            tuple(AuxiliaryColumn(label=a["label"], column=a["column"]) for a in config.auxiliaries)
        )
    else:
        extras = ShowPrice(enabled=config.show_price)
    return ExtractOptions(layout=layout, extras=extras)


def build_export_options(config: CourseListConfig, extract_options: ExtractOptions) -> ExportOptions:
    extras = extract_options.extras
    labels: tuple[str, ...] = ()
    if isinstance(extras, AuxiliaryFields):
        labels = tuple(aux.label for aux in resolve_auxiliaries(extras.columns, warn=False))
    return ExportOptions(
        show_price=isinstance(extras, ShowPrice) and extras.enabled,
        auxiliary_labels=labels,
        export_format=config.export_format,
        headers=tuple(config.headers) if config.headers else DEFAULT_HEADERS,
        price_header=config.price_header or PRICE_HEADER,
    )


def list_sheets(config: CourseListConfig) -> list[str]:
    """Return the sheet names of the configured source workbook."""
    if config.source_path is None:
        raise InputValidationError("Path is not set")
    with WorkbookManager() as workbook:
        workbook.open(config.source_path)
        return workbook.sheet_names or []


def generate_course_list(config: CourseListConfig) -> GenerationResult:
    """Run extraction and export for one configuration.

    Raises:
        CourseListError subclasses, unchanged, for every failure
    """
    start_time = datetime.now(UTC)
    _validate_inputs(config)
    source_path = config.source_path
    destination_path = config.destination_path

    group_column = column_to_index(config.group_column)
    extract_options = build_extract_options(config)
    export_options = build_export_options(config, extract_options)

    with WorkbookManager() as workbook:
        workbook.open(source_path)  # type: ignore[arg-type]
        sheet = workbook.get_sheet(config.sheet_name)

    records = extract_records(sheet, group_column, extract_options)
    records = sort_records(records)
    groups = count_groups(records)
    logger.info(f"Found {len(records)} participants in {groups} groups")

    export_records(destination_path, records, export_options)  # type: ignore[arg-type]

    end_time = datetime.now(UTC)
    return GenerationResult(
        participants=len(records),
        groups=groups,
        destination=destination_path,  # type: ignore[arg-type]
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=(end_time - start_time).total_seconds(),
    )
