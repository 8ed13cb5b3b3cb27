"""DXF format exporter for cutting plans.

Generates 2D DXF files (R2010 format) with every sheet drawn side by side,
in sheet units (millimeters). DXF's y axis points up, so sheet coordinates
are mirrored vertically within each sheet.
"""

from __future__ import annotations

import logging
from io import StringIO
from pathlib import Path
from typing import TYPE_CHECKING, ClassVar, cast

import ezdxf

from glassopt.infrastructure.cut_diagram_renderer import dimension_label
from glassopt.infrastructure.exporters.base import ExporterRegistry

if TYPE_CHECKING:
    from ezdxf.document import Drawing
    from ezdxf.layouts import Modelspace

    from glassopt.domain.geometry import Rect
    from glassopt.infrastructure.bin_packing import PackingResult, SheetResult


logger = logging.getLogger(__name__)


LAYERS = {
    "SHEET": {"color": 7},  # White - sheet outlines
    "PIECES": {"color": 4},  # Cyan - piece outlines
    "OFFCUTS": {"color": 8},  # Gray - leftover regions
    "LABELS": {"color": 5},  # Blue - text labels
}


@ExporterRegistry.register("dxf")
class DxfExporter:
    """Exports cutting plans to DXF for CNC cutting tables.

    Attributes:
        format_name: "dxf"
        file_extension: "dxf"
        media_type: "application/dxf"
    """

    format_name: ClassVar[str] = "dxf"
    file_extension: ClassVar[str] = "dxf"
    media_type: ClassVar[str] = "application/dxf"

    def __init__(self, sheet_spacing: float = 200.0, include_offcuts: bool = True) -> None:
        """Initialize the DXF exporter.

        Args:
            sheet_spacing: Horizontal gap between consecutive sheets.
            include_offcuts: Whether to outline leftover regions.
        """
        if sheet_spacing < 0:
            raise ValueError("Sheet spacing must be non-negative")
        self.sheet_spacing = sheet_spacing
        self.include_offcuts = include_offcuts

    def export(self, result: PackingResult, path: Path) -> None:
        """Write all sheets to one DXF file."""
        doc = self._build_document(result)
        doc.saveas(path)
        logger.info("Exported DXF cutting plan to %s", path)

    def export_bytes(self, result: PackingResult) -> bytes:
        doc = self._build_document(result)
        stream = StringIO()
        doc.write(stream)
        return stream.getvalue().encode("utf-8")

    def _build_document(self, result: PackingResult) -> Drawing:
        doc = ezdxf.new("R2010")
        for name, props in LAYERS.items():
            doc.layers.add(name, color=cast(int, props["color"]))

        msp = doc.modelspace()
        origin_x = 0.0
        for sheet in result.sheets:
            self._draw_sheet(msp, sheet, origin_x)
            origin_x += sheet.width + self.sheet_spacing

        if not result.sheets:
            logger.warning("No sheets to export")
        return doc

    def _draw_sheet(self, msp: Modelspace, sheet: SheetResult, origin_x: float) -> None:
        """Draw a sheet outline, its pieces and offcuts."""
        self._draw_rect(msp, origin_x, 0.0, sheet.width, sheet.height, "SHEET")

        if self.include_offcuts:
            for region in sheet.offcuts:
                self._draw_region(msp, sheet, region, origin_x, "OFFCUTS")

        for placement in sheet.placements:
            x, y = self._draw_region(msp, sheet, placement.rect, origin_x, "PIECES")
            text = dimension_label(placement)
            if placement.label:
                text = f"{placement.label}\n{text}"
            text_height = max(5.0, min(50.0, min(placement.width, placement.height) * 0.08))
            msp.add_mtext(
                text,
                dxfattribs={
                    "layer": "LABELS",
                    "char_height": text_height,
                    "insert": (x + placement.width / 2, y + placement.height / 2),
                    "attachment_point": 5,  # MIDDLE_CENTER
                },
            )

    def _draw_region(
        self,
        msp: Modelspace,
        sheet: SheetResult,
        rect: Rect,
        origin_x: float,
        layer: str,
    ) -> tuple[float, float]:
        """Draw a sheet-space rectangle; returns its DXF bottom-left corner."""
        x = origin_x + rect.x
        y = sheet.height - rect.bottom
        self._draw_rect(msp, x, y, rect.width, rect.height, layer)
        return x, y

    def _draw_rect(
        self,
        msp: Modelspace,
        x: float,
        y: float,
        width: float,
        height: float,
        layer: str,
    ) -> None:
        points = [
            (x, y),
            (x + width, y),
            (x + width, y + height),
            (x, y + height),
        ]
        msp.add_lwpolyline(points, close=True, dxfattribs={"layer": layer})
