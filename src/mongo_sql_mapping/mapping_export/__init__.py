"""Mapping export domain exports."""

from .export_models import (
    FIELD_COLUMNS,
    FIELDS_SHEET_NAME,
    RESOLUTION_INFO_SHEET_NAME,
    ResolutionMetadata,
)
from .mapping_workbook_writer import write_mapping_workbook

__all__ = [
    "FIELD_COLUMNS",
    "FIELDS_SHEET_NAME",
    "RESOLUTION_INFO_SHEET_NAME",
    "ResolutionMetadata",
    "write_mapping_workbook",
]
