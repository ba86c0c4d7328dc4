"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "reconciler.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Configuration template for schema-reconciler.
# Replace every <REQUIRED> placeholder before running generate, compare or validate.
# Optional settings fall back to the defaults shown in the comments.

schema:
  # Provide either a Swagger/OpenAPI document path (JSON or YAML) or inline JSON text.
  path: "<REQUIRED>"
  # inline: "<OPTIONAL>"

comparison:
  # Endpoint schema compared against record types: request or response (default).
  direction: response
  # Tie-break when several record types overlap the schema equally:
  # first (default) keeps declaration order, tightest prefers fewer extra fields.
  root_selection: first

synthesis:
  # Prefix for generated declaration names, e.g. TypeUser.
  type_prefix: Type
"""


def build_placeholder_configuration() -> str:
    """Build a YAML configuration template with placeholders and inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the placeholder configuration template to the requested output path.

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
        raise FileExistsError(f"Configuration file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
