"""Application layer - job configuration and orchestration."""

from .config import (
    ConfigError,
    JobConfiguration,
    config_to_piece_specs,
    config_to_sheet,
    load_config,
    load_config_from_dict,
    validate_config,
)

__all__ = [
    "ConfigError",
    "JobConfiguration",
    "config_to_piece_specs",
    "config_to_sheet",
    "load_config",
    "load_config_from_dict",
    "validate_config",
]
