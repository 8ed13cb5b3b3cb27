"""CLI command implementations for the glassopt application.

This package contains subcommands for the glassopt CLI, including:
- validate: Validate a job file
"""

from glassopt.cli.commands.validate import display_load_error, validate_command

__all__ = ["display_load_error", "validate_command"]
