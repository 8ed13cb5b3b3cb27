"""Conversion from configuration models to domain objects."""

from glassopt.application.config.schema import JobConfiguration, PieceConfig
from glassopt.domain.value_objects import PieceSpec
from glassopt.infrastructure.bin_packing import SheetConfig


def config_to_sheet(config: JobConfiguration) -> SheetConfig:
    """Convert the sheet section to a SheetConfig."""
    return SheetConfig(width=config.sheet.width, height=config.sheet.height)


def piece_config_to_spec(piece: PieceConfig) -> PieceSpec:
    """Convert one cut list row to a PieceSpec."""
    return PieceSpec(
        id=piece.id,
        width=piece.width,
        height=piece.height,
        quantity=piece.quantity,
        label=piece.label,
        color=piece.color,
    )


def config_to_piece_specs(config: JobConfiguration) -> list[PieceSpec]:
    """Convert the cut list to PieceSpecs, preserving order."""
    return [piece_config_to_spec(piece) for piece in config.pieces]
