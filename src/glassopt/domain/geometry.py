"""Axis-aligned rectangle primitives used by the packing engine.

Coordinates have their origin at the sheet's top-left corner, with y growing
downwards. Units are whatever linear unit the caller uses (millimeters for
glass sheets).
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle.

    Attributes:
        x: Left edge.
        y: Top edge.
        width: Horizontal extent.
        height: Vertical extent.
    """

    x: float
    y: float
    width: float
    height: float

    @property
    def area(self) -> float:
        """Area of the rectangle."""
        return self.width * self.height

    @property
    def right(self) -> float:
        """X coordinate of the right edge."""
        return self.x + self.width

    @property
    def bottom(self) -> float:
        """Y coordinate of the bottom edge."""
        return self.y + self.height

    @property
    def is_degenerate(self) -> bool:
        """True if the rectangle has no area."""
        return self.width <= 0 or self.height <= 0

    def can_hold(self, width: float, height: float) -> bool:
        """Check whether a width x height piece fits without rotation."""
        return self.width >= width and self.height >= height

    def contains(self, other: Rect) -> bool:
        """Check whether ``other`` lies entirely inside this rectangle."""
        return (
            other.x >= self.x
            and other.y >= self.y
            and other.right <= self.right
            and other.bottom <= self.bottom
        )

    def intersection_area(self, other: Rect) -> float:
        """Area shared by this rectangle and ``other`` (0 when disjoint)."""
        overlap_w = min(self.right, other.right) - max(self.x, other.x)
        overlap_h = min(self.bottom, other.bottom) - max(self.y, other.y)
        if overlap_w <= 0 or overlap_h <= 0:
            return 0.0
        return overlap_w * overlap_h

    def overlaps(self, other: Rect) -> bool:
        """True if the two rectangles share a region of positive area.

        Rectangles that only touch along an edge do not overlap.
        """
        return self.intersection_area(other) > 0


def fits_inside(width: float, height: float, region: Rect) -> bool:
    """Return True if a width x height piece fits in ``region`` unrotated."""
    return region.can_hold(width, height)
