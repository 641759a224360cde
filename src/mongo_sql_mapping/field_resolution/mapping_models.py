"""Field resolution entities."""

from __future__ import annotations

from dataclasses import dataclass

from mongo_sql_mapping.type_mapping.type_models import SqlType


@dataclass(frozen=True)
class MappingField:
    """Resolved mapping column handed to the SQL catalog."""

    name: str
    sql_type: SqlType
    external_name: str
    is_primary_key: bool = False
