"""Configuration domain exports."""

from .config_scaffold_builder import (
    DEFAULT_CONFIG_FILENAME,
    build_placeholder_configuration,
    write_placeholder_configuration,
)
from .loader import ConfigurationError, configuration_for_schema, load_configuration
from .runtime_settings import (
    DIRECTIONS,
    ComparisonSettings,
    Configuration,
    SchemaSource,
    SynthesisSettings,
)

__all__ = [
    "ComparisonSettings",
    "Configuration",
    "DIRECTIONS",
    "SchemaSource",
    "SynthesisSettings",
    "ConfigurationError",
    "configuration_for_schema",
    "load_configuration",
    "DEFAULT_CONFIG_FILENAME",
    "build_placeholder_configuration",
    "write_placeholder_configuration",
]
