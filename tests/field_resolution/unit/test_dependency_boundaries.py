"""Boundary tests for internal package dependencies."""

from __future__ import annotations

from pathlib import Path


def _package_root() -> Path:
    return Path(__file__).resolve().parents[3] / "src" / "mongo_sql_mapping"


def test_type_mapping_does_not_import_higher_layers_or_the_driver() -> None:
    forbidden_import_fragments = (
        "mongo_sql_mapping.configuration",
        "mongo_sql_mapping.schema_probing",
        "mongo_sql_mapping.field_resolution",
        "mongo_sql_mapping.mapping_export",
        "import pymongo",
        "from pymongo",
    )

    for module_path in (_package_root() / "type_mapping").glob("*.py"):
        text = module_path.read_text(encoding="utf-8")
        for fragment in forbidden_import_fragments:
            assert fragment not in text, f"Forbidden dependency in {module_path}: {fragment}"


def test_resolution_core_does_not_import_export_or_cli() -> None:
    forbidden_import_fragments = ("mongo_sql_mapping.mapping_export", "mongo_sql_mapping.cli")

    for package in ("configuration", "schema_probing", "field_resolution"):
        for module_path in (_package_root() / package).glob("*.py"):
            text = module_path.read_text(encoding="utf-8")
            for fragment in forbidden_import_fragments:
                assert fragment not in text, f"Forbidden dependency in {module_path}: {fragment}"
