"""Configuration schema and loading system for cutting jobs.

Public API:
    - JobConfiguration: Root configuration model
    - SheetSizeConfig, PieceConfig, OutputConfig: Section models
    - load_config: Load configuration from a JSON file
    - load_config_from_dict: Load configuration from a dictionary
    - ConfigError: Exception for configuration errors
    - validate_config: Semantic checks returning a ValidationResult
    - config_to_sheet, config_to_piece_specs: Convert to domain objects

Example:
    >>> from pathlib import Path
    >>> from glassopt.application.config import load_config, ConfigError
    >>>
    >>> try:
    ...     config = load_config(Path("kitchen.json"))
    ...     print(f"Sheet: {config.sheet.width}x{config.sheet.height}")
    ... except ConfigError as e:
    ...     print(f"Error: {e}")
"""

from glassopt.application.config.adapter import (
    config_to_piece_specs,
    config_to_sheet,
    piece_config_to_spec,
)
from glassopt.application.config.loader import (
    ConfigError,
    load_config,
    load_config_from_dict,
)
from glassopt.application.config.schema import (
    SUPPORTED_VERSIONS,
    JobConfiguration,
    OutputConfig,
    PieceConfig,
    SheetSizeConfig,
)
from glassopt.application.config.validator import (
    ValidationError,
    ValidationResult,
    ValidationWarning,
    validate_config,
)

__all__ = [
    "SUPPORTED_VERSIONS",
    "ConfigError",
    "JobConfiguration",
    "OutputConfig",
    "PieceConfig",
    "SheetSizeConfig",
    "ValidationError",
    "ValidationResult",
    "ValidationWarning",
    "config_to_piece_specs",
    "config_to_sheet",
    "load_config",
    "load_config_from_dict",
    "piece_config_to_spec",
    "validate_config",
]
