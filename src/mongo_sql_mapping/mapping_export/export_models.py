"""Mapping export entities."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

FIELDS_SHEET_NAME = "Fields"
RESOLUTION_INFO_SHEET_NAME = "ResolutionInfo"

FIELD_COLUMNS: tuple[str, ...] = ("Name", "SQL Type", "External Name", "Primary Key")


@dataclass(frozen=True)
class ResolutionMetadata:
    """Metadata rendered into the ResolutionInfo sheet."""

    collection: str
    database: str | None
    stream: bool
    resolved_at: datetime
