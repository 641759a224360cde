"""Resolved mapping workbook writer service."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from openpyxl import Workbook
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from mongo_sql_mapping.field_resolution.mapping_models import MappingField

from .export_models import (
    FIELD_COLUMNS,
    FIELDS_SHEET_NAME,
    RESOLUTION_INFO_SHEET_NAME,
    ResolutionMetadata,
)


def write_mapping_workbook(
    fields: Sequence[MappingField],
    output_path: Path | str,
    metadata: ResolutionMetadata,
) -> Path:
    """Write resolved mapping columns and resolution metadata to an Excel workbook."""
    workbook = Workbook()
    sheet = workbook.active
    if sheet is None:
        raise RuntimeError("Workbook active sheet is not available.")
    assert isinstance(sheet, Worksheet)
    sheet.title = FIELDS_SHEET_NAME

    for column_index, name in enumerate(FIELD_COLUMNS, start=1):
        cell = sheet.cell(row=1, column=column_index, value=name)
        cell.style = "Headline 4"
    for row_index, field in enumerate(fields, start=2):
        sheet.cell(row=row_index, column=1, value=field.name)
        sheet.cell(row=row_index, column=2, value=field.sql_type.value)
        sheet.cell(row=row_index, column=3, value=field.external_name)
        sheet.cell(row=row_index, column=4, value="YES" if field.is_primary_key else "")
    _fit_column_widths(sheet, fields)
    sheet.freeze_panes = "A2"

    _write_resolution_info_sheet(workbook, metadata, len(fields))

    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    workbook.save(output)
    return output.resolve()


def _fit_column_widths(sheet: Worksheet, fields: Sequence[MappingField]) -> None:
    columns = (
        [FIELD_COLUMNS[0], *(field.name for field in fields)],
        [FIELD_COLUMNS[1], *(field.sql_type.value for field in fields)],
        [FIELD_COLUMNS[2], *(field.external_name for field in fields)],
        [FIELD_COLUMNS[3]],
    )
    for column_index, values in enumerate(columns, start=1):
        longest = max(len(value) for value in values)
        sheet.column_dimensions[get_column_letter(column_index)].width = max(
            12, min(longest + 4, 60)
        )


def _write_resolution_info_sheet(
    workbook: Workbook, metadata: ResolutionMetadata, field_count: int
) -> None:
    sheet = workbook.create_sheet(RESOLUTION_INFO_SHEET_NAME)
    entries = [
        ("collection", metadata.collection),
        ("database", metadata.database or ""),
        ("mode", "stream" if metadata.stream else "batch"),
        ("field_count", field_count),
        ("resolved_at", metadata.resolved_at.isoformat()),
    ]
    for row_index, (key, value) in enumerate(entries, start=1):
        sheet.cell(row=row_index, column=1, value=key)
        sheet.cell(row=row_index, column=2, value=value)
