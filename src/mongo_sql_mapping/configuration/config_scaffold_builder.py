"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "config.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Mapping configuration template for mongo-sql-mapping.
# Replace every <REQUIRED> placeholder before running resolve.
# Replace <OPTIONAL> placeholders only when your setup needs them, remove them otherwise.

connector:
  # Choose exactly one connection source (connectionString or dataConnectionRef).
  connectionString: "<REQUIRED>"
  # dataConnectionRef: "<OPTIONAL>"
  database: "<OPTIONAL>"
  # Resolve the change stream of the collection instead of its documents.
  streamMode: false
  # Source path of the primary key in batch mode (defaults to _id).
  idColumn: "<OPTIONAL>"

# Collection resolved when resolve is called without --collection.
collection: "<OPTIONAL>"

# Named connection strings referenced by connector.dataConnectionRef.
data_connections:
  # analytics: "<OPTIONAL>"

store:
  timeout_ms: 30000

# User-declared columns. Leave empty to map every discovered field.
fields:
  # - name: "<OPTIONAL>"
  #   type: "<OPTIONAL>"
  #   external_name: "<OPTIONAL>"
"""


def build_placeholder_configuration() -> str:
    """Build a YAML mapping configuration template with placeholders and inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the placeholder mapping configuration template to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Mapping configuration file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
