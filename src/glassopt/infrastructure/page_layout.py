"""Scaling of sheet layouts into printable page coordinates.

Page coordinates use millimeters with the origin at the page's top-left
corner, matching the sheet coordinate system. Exporters whose backend uses
a bottom-left origin (PDF) flip the y axis themselves.
"""

from __future__ import annotations

from dataclasses import dataclass

from glassopt.domain.geometry import Rect

# A4 landscape
A4_LANDSCAPE_WIDTH_MM = 297.0
A4_LANDSCAPE_HEIGHT_MM = 210.0
PAGE_MARGIN_MM = 10.0
HEADER_BAND_MM = 30.0


@dataclass(frozen=True)
class PageTransform:
    """Uniform scale plus offset from sheet units to page millimeters.

    Attributes:
        scale: Page millimeters per sheet unit.
        offset_x: Page x of the sheet's left edge.
        offset_y: Page y of the sheet's top edge.
    """

    scale: float
    offset_x: float
    offset_y: float

    def to_page(self, rect: Rect) -> Rect:
        """Map a rectangle in sheet coordinates to page coordinates."""
        return Rect(
            x=self.offset_x + rect.x * self.scale,
            y=self.offset_y + rect.y * self.scale,
            width=rect.width * self.scale,
            height=rect.height * self.scale,
        )


def fit_sheet_to_page(
    sheet_width: float,
    sheet_height: float,
    page_width: float = A4_LANDSCAPE_WIDTH_MM,
    page_height: float = A4_LANDSCAPE_HEIGHT_MM,
    margin: float = PAGE_MARGIN_MM,
    header: float = HEADER_BAND_MM,
) -> PageTransform:
    """Compute the transform that fits a sheet below the page header.

    The sheet is scaled to the available width, shrunk further if it would
    overflow the height left under the header band, and centred
    horizontally.

    Args:
        sheet_width: Sheet width in sheet units.
        sheet_height: Sheet height in sheet units.
        page_width: Page width in millimeters.
        page_height: Page height in millimeters.
        margin: Page margin in millimeters.
        header: Height reserved at the top for header text.

    Returns:
        PageTransform placing the sheet on the page.
    """
    max_width = page_width - 2 * margin
    max_height = page_height - header

    scale = max_width / sheet_width
    if sheet_height * scale > max_height:
        scale = max_height / sheet_height

    offset_x = (page_width - sheet_width * scale) / 2
    return PageTransform(scale=scale, offset_x=offset_x, offset_y=header)
