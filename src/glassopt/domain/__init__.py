"""Domain layer - geometry and piece value objects."""

from .geometry import Rect, fits_inside
from .value_objects import Piece, PieceSpec, Placement, expand_pieces

__all__ = [
    "Piece",
    "PieceSpec",
    "Placement",
    "Rect",
    "expand_pieces",
    "fits_inside",
]
