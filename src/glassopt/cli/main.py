"""Typer CLI for cut optimization."""

import json
import logging
import re
from collections.abc import Collection
from dataclasses import dataclass, field
from pathlib import Path
from typing import Annotated

import typer

from glassopt.application.config import (
    ConfigError,
    config_to_piece_specs,
    config_to_sheet,
    load_config,
    validate_config,
)
from glassopt.cli.commands import display_load_error, validate_command
from glassopt.domain import PieceSpec
from glassopt.infrastructure import (
    CutDiagramRenderer,
    PackingResult,
    PackingService,
    SheetConfig,
)
from glassopt.infrastructure.exporters import (
    ExporterRegistry,
    ExportManager,
    result_to_dict,
)

logger = logging.getLogger(__name__)

_PIECE_PATTERN = re.compile(
    r"^\s*(?P<width>\d+(?:\.\d+)?)\s*[xX]\s*(?P<height>\d+(?:\.\d+)?)"
    r"(?:\s*[xX]\s*(?P<quantity>\d+))?\s*$"
)
_TEXT_FORMATS = ("summary", "ascii", "json")


@dataclass
class _Job:
    """Planning inputs gathered from a job file and command line options."""

    sheet: SheetConfig = field(default_factory=SheetConfig)
    specs: list[PieceSpec] = field(default_factory=list)
    formats: list[str] = field(default_factory=list)
    output_dir: Path | None = None
    project_name: str | None = None


def parse_piece_option(
    value: str, index: int, taken: Collection[str] = ()
) -> PieceSpec:
    """Parse a ``WxH`` or ``WxHxQTY`` piece option.

    Args:
        value: Option text, e.g. "1821x366x2".
        index: Position of the option, used to build the piece id.
        taken: Ids already in use; the generated id skips them.

    Returns:
        PieceSpec with the first free id of ``p{index + 1}``, ``p{index + 2}``, ...

    Raises:
        typer.BadParameter: If the text is not a valid piece.
    """
    match = _PIECE_PATTERN.match(value)
    if match is None:
        raise typer.BadParameter(
            f"Invalid piece '{value}'. Expected WIDTHxHEIGHT or WIDTHxHEIGHTxQUANTITY"
        )
    number = index + 1
    while f"p{number}" in taken:
        number += 1
    try:
        return PieceSpec(
            id=f"p{number}",
            width=float(match["width"]),
            height=float(match["height"]),
            quantity=int(match["quantity"] or 1),
        )
    except ValueError as e:
        raise typer.BadParameter(f"Invalid piece '{value}': {e}")


def _fail(*messages: str) -> typer.Exit:
    for message in messages:
        typer.echo(message, err=True)
    return typer.Exit(code=1)


def _resolve_formats(requested: str) -> list[str]:
    """Turn ``svg,pdf`` or ``all`` into registered format names."""
    known = ExporterRegistry.available_formats()
    if requested.strip().lower() == "all":
        return known

    names = [name.strip().lower() for name in requested.split(",")]
    names = [name for name in names if name]
    unknown = [name for name in names if not ExporterRegistry.is_registered(name)]
    if unknown:
        raise _fail(
            f"Unknown formats: {', '.join(unknown)}",
            f"Available formats: {', '.join(known)}",
        )
    return names


def _load_job(config_file: Path) -> _Job:
    try:
        config = load_config(config_file)
    except ConfigError as e:
        display_load_error(e)
        raise typer.Exit(code=1)

    checked = validate_config(config)
    if not checked.is_valid:
        typer.echo("Errors:", err=True)
        for error in checked.errors:
            typer.echo(f"  - {error.path}: {error.message}", err=True)
        raise typer.Exit(code=1)

    job = _Job(
        sheet=config_to_sheet(config),
        specs=config_to_piece_specs(config),
        formats=list(config.output.formats),
        output_dir=Path(config.output.output_dir) if config.output.output_dir else None,
        project_name=config.output.project_name,
    )
    logger.debug("Loaded %d cut list rows from %s", len(job.specs), config_file)
    return job


def _write_exports(job: _Job, result: PackingResult) -> None:
    manager = ExportManager(job.output_dir or Path.cwd())
    try:
        written = manager.export_all(job.formats, result, job.project_name or "glassopt")
    except OSError as e:
        raise _fail(f"Export error: {e}")

    typer.echo("\nExported files:")
    for name, path in written.items():
        typer.echo(f"  {name.upper()}: {path}")


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


app = typer.Typer(
    name="glassopt",
    help="Plan guillotine cuts of rectangular pieces from stock sheets.",
)

app.command(name="validate")(validate_command)


@app.command()
def optimize(
    config_file: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Path to JSON job file"),
    ] = None,
    sheet_width: Annotated[
        float | None,
        typer.Option("--sheet-width", "-W", help="Sheet width in mm (default 3600)"),
    ] = None,
    sheet_height: Annotated[
        float | None,
        typer.Option("--sheet-height", "-H", help="Sheet height in mm (default 2500)"),
    ] = None,
    pieces: Annotated[
        list[str] | None,
        typer.Option(
            "--piece",
            "-p",
            help="Piece as WIDTHxHEIGHT[xQUANTITY]; repeat for more pieces",
        ),
    ] = None,
    output_format: Annotated[
        str,
        typer.Option("--format", "-f", help="Console output: summary, ascii, json"),
    ] = "summary",
    output_formats: Annotated[
        str | None,
        typer.Option(
            "--output-formats",
            help="Files to export, comma separated (svg,pdf,dxf,json) or 'all'",
        ),
    ] = None,
    output_dir: Annotated[
        Path | None,
        typer.Option("--output-dir", help="Directory for exported files"),
    ] = None,
    project_name: Annotated[
        str | None,
        typer.Option("--project-name", help="Base name for exported files"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log packing progress"),
    ] = False,
) -> None:
    """Optimize a cut list onto stock sheets.

    Pieces come from a job file, from --piece options, or both. Options
    given on the command line win over the job file.

    Examples:
        glassopt optimize --piece 1821x366x2 --piece 1000x800
        glassopt optimize -c kitchen.json --output-formats svg,pdf
    """
    _configure_logging(verbose)

    if output_format not in _TEXT_FORMATS:
        raise _fail(
            f"Unknown format: {output_format}",
            f"Available formats: {', '.join(_TEXT_FORMATS)}",
        )

    job = _load_job(config_file) if config_file is not None else _Job()
    try:
        job.sheet = SheetConfig(
            width=job.sheet.width if sheet_width is None else sheet_width,
            height=job.sheet.height if sheet_height is None else sheet_height,
        )
    except ValueError as e:
        raise _fail(f"Error: {e}")

    taken = {spec.id for spec in job.specs}
    for value in pieces or []:
        spec = parse_piece_option(value, len(job.specs), taken)
        taken.add(spec.id)
        job.specs.append(spec)
    if not job.specs:
        raise _fail("Error: no pieces given. Use --config or --piece.")

    if output_formats is not None:
        job.formats = _resolve_formats(output_formats)
    job.output_dir = output_dir or job.output_dir
    job.project_name = project_name or job.project_name

    result = PackingService(job.sheet).optimize(job.specs)

    if output_format == "json":
        typer.echo(json.dumps(result_to_dict(result), indent=2))
    elif output_format == "ascii":
        typer.echo(CutDiagramRenderer().render_all_ascii(result))
    else:
        typer.echo(CutDiagramRenderer().render_summary(result))

    if result.rejected_count:
        typer.echo(
            f"Warning: {result.rejected_count} pieces could not be placed.", err=True
        )

    if job.formats:
        _write_exports(job, result)


@app.command(name="formats")
def list_formats() -> None:
    """List the registered export formats with extension and media type."""
    for name in ExporterRegistry.available_formats():
        exporter_class = ExporterRegistry.get(name)
        typer.echo(f"{name}\t.{exporter_class.file_extension}\t{exporter_class.media_type}")


if __name__ == "__main__":
    app()
