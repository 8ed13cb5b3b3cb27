"""Value objects for pieces and their placements on stock sheets.

All dataclasses are frozen; one packing result is read by every renderer
and exporter.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from glassopt.domain.geometry import Rect


@dataclass(frozen=True)
class PieceSpec:
    """A row of the cut list as entered by the operator.

    A spec with ``quantity > 1`` is never packed directly; it is expanded
    into independent unit pieces by :func:`expand_pieces`.

    Attributes:
        id: Unique identifier of the row.
        width: Piece width.
        height: Piece height.
        quantity: Number of identical pieces required.
        label: Optional display label.
        color: Optional display color (CSS color string).
    """

    id: str
    width: float
    height: float
    quantity: int = 1
    label: str | None = None
    color: str | None = None

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Piece id must not be empty")
        if self.width <= 0 or self.height <= 0:
            raise ValueError("Piece dimensions must be positive")
        if self.quantity < 1:
            raise ValueError("Piece quantity must be at least 1")


@dataclass(frozen=True)
class Piece:
    """A single unit piece to be placed on a sheet.

    ``id`` is the originating cut list row and ``instance`` the zero-based
    copy number within that row, so ``key`` is unique across an expanded
    cut list.

    Attributes:
        id: Identifier of the originating cut list row.
        width: Piece width.
        height: Piece height.
        instance: Copy number within the originating row.
        label: Optional display label.
        color: Optional display color.
    """

    id: str
    width: float
    height: float
    instance: int = 0
    label: str | None = None
    color: str | None = None

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Piece id must not be empty")
        if self.width <= 0 or self.height <= 0:
            raise ValueError("Piece dimensions must be positive")
        if self.instance < 0:
            raise ValueError("Piece instance must be non-negative")

    @property
    def key(self) -> tuple[str, int]:
        """Unique identity of this unit piece."""
        return (self.id, self.instance)

    @property
    def area(self) -> float:
        """Area of the piece."""
        return self.width * self.height

    @property
    def display_name(self) -> str:
        """Label if set, otherwise ``id`` with a copy suffix."""
        if self.label:
            return self.label
        return f"{self.id}/{self.instance + 1}"


@dataclass(frozen=True)
class Placement:
    """Where a piece landed on a specific sheet.

    Attributes:
        piece_id: Identifier of the originating cut list row.
        instance: Copy number of the placed piece.
        x: Left edge on the sheet.
        y: Top edge on the sheet.
        width: Placed width (pieces are never rotated).
        height: Placed height.
        label: Display label carried from the piece.
        color: Display color carried from the piece.
    """

    piece_id: str
    instance: int
    x: float
    y: float
    width: float
    height: float
    label: str | None = None
    color: str | None = None

    def __post_init__(self) -> None:
        if self.x < 0 or self.y < 0:
            raise ValueError("Position coordinates must be non-negative")

    @classmethod
    def of(cls, piece: Piece, x: float, y: float) -> Placement:
        """Create a placement of ``piece`` with its top-left corner at (x, y)."""
        return cls(
            piece_id=piece.id,
            instance=piece.instance,
            x=x,
            y=y,
            width=piece.width,
            height=piece.height,
            label=piece.label,
            color=piece.color,
        )

    @property
    def key(self) -> tuple[str, int]:
        """Identity of the placed piece."""
        return (self.piece_id, self.instance)

    @property
    def rect(self) -> Rect:
        """Rectangle occupied on the sheet."""
        return Rect(self.x, self.y, self.width, self.height)

    @property
    def area(self) -> float:
        """Area occupied on the sheet."""
        return self.width * self.height

    @property
    def right_edge(self) -> float:
        """X coordinate of the right edge."""
        return self.x + self.width

    @property
    def bottom_edge(self) -> float:
        """Y coordinate of the bottom edge."""
        return self.y + self.height


def expand_pieces(specs: Iterable[PieceSpec]) -> list[Piece]:
    """Expand cut list rows into unit pieces.

    Each row with quantity N becomes N pieces sharing the row id and
    numbered 0..N-1 through ``instance``. Output order follows input order,
    copies of a row kept together.

    Args:
        specs: Cut list rows.

    Returns:
        List of unit pieces.
    """
    expanded: list[Piece] = []
    for spec in specs:
        for instance in range(spec.quantity):
            expanded.append(
                Piece(
                    id=spec.id,
                    width=spec.width,
                    height=spec.height,
                    instance=instance,
                    label=spec.label,
                    color=spec.color,
                )
            )
    return expanded
