"""``glassopt validate``: check a job file without planning it."""

from collections.abc import Iterable
from pathlib import Path
from typing import Annotated, Any

import typer

from glassopt.application.config import (
    ConfigError,
    ValidationResult,
    load_config,
    validate_config,
)


def _echo_issues(
    title: str,
    issues: Iterable[tuple[str, str, str | None]],
    err: bool = False,
) -> None:
    """Print a titled block of ``path: message`` lines with an optional note each."""
    typer.echo(f"{title}:", err=err)
    for path, message, note in issues:
        typer.echo(f"  {path}: {message}", err=err)
        if note:
            typer.echo(f"    {note}", err=err)
    typer.echo(err=err)


def _value_note(value: Any) -> str | None:
    return None if value is None else f"Value: {value!r}"


def display_load_error(error: ConfigError) -> None:
    """Report a job file that could not be loaded at all."""
    if error.error_type == "validation":
        _echo_issues(
            "Errors",
            (
                (d.get("path", "unknown"), d.get("message", ""), _value_note(d.get("value")))
                for d in error.details
            ),
            err=True,
        )
    else:
        typer.echo("Errors:", err=True)
        if error.error_type == "file_not_found":
            typer.echo(f"  File not found: {error.path}", err=True)
        elif error.error_type == "json_parse":
            typer.echo("  Invalid JSON syntax", err=True)
            for d in error.details:
                typer.echo(
                    f"    Line {d.get('line', '?')}, Column {d.get('column', '?')}: "
                    f"{d.get('message', '')}",
                    err=True,
                )
        else:
            typer.echo(f"  {error.message}", err=True)
        typer.echo(err=True)
    typer.echo("Validation failed.", err=True)


def _display_validation_result(result: ValidationResult) -> None:
    if result.errors:
        _echo_issues(
            "Errors",
            ((e.path, e.message, _value_note(e.value)) for e in result.errors),
            err=True,
        )
    if result.warnings:
        _echo_issues(
            "Warnings",
            (
                (w.path, w.message, w.suggestion and f"Suggestion: {w.suggestion}")
                for w in result.warnings
            ),
        )

    if not result.is_valid:
        typer.echo(
            f"Validation failed: {len(result.errors)} error(s), "
            f"{len(result.warnings)} warning(s)",
            err=True,
        )
    elif result.has_warnings:
        typer.echo(f"Validation passed with {len(result.warnings)} warning(s)")
    else:
        typer.echo("Validation passed. Job file is valid.")


def validate_command(
    config_file: Annotated[
        Path,
        typer.Argument(help="JSON job file to check"),
    ],
) -> None:
    """Check a job file for syntax, schema and consistency problems.

    Exits with 0 when the job is clean, 1 when it has errors and 2 when it
    only has warnings.
    """
    typer.echo(f"Validating {config_file}...")
    typer.echo()

    try:
        config = load_config(config_file)
    except ConfigError as e:
        display_load_error(e)
        raise typer.Exit(code=1)

    result = validate_config(config)
    _display_validation_result(result)
    raise typer.Exit(code=result.exit_code)
