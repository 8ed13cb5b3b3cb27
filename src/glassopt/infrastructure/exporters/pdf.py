"""PDF exporter producing printable cutting plans.

One A4 landscape page per sheet: a header with the sheet number, sheet size,
usage and piece count, the sheet outline and every piece outlined with its
rounded ``WxH`` dimensions when the label fits inside it.
"""

from __future__ import annotations

import logging
from io import BytesIO
from pathlib import Path
from typing import TYPE_CHECKING, ClassVar

from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.units import mm
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas

from glassopt.infrastructure.cut_diagram_renderer import dimension_label
from glassopt.infrastructure.exporters.base import ExporterRegistry
from glassopt.infrastructure.page_layout import (
    A4_LANDSCAPE_HEIGHT_MM,
    A4_LANDSCAPE_WIDTH_MM,
    PAGE_MARGIN_MM,
    fit_sheet_to_page,
)

if TYPE_CHECKING:
    from glassopt.infrastructure.bin_packing import PackingResult, SheetResult


logger = logging.getLogger(__name__)

TITLE = "GlassOpt - Cutting plan"
LABEL_FONT = "Helvetica"
LABEL_FONT_SIZE = 8
# Smallest piece box (page mm) that gets a dimension label
MIN_LABEL_BOX_MM = (10.0, 5.0)


@ExporterRegistry.register("pdf")
class PdfExporter:
    """PDF exporter for cutting plans.

    Attributes:
        format_name: "pdf"
        file_extension: "pdf"
        media_type: "application/pdf"
    """

    format_name: ClassVar[str] = "pdf"
    file_extension: ClassVar[str] = "pdf"
    media_type: ClassVar[str] = "application/pdf"

    def __init__(self, title: str = TITLE) -> None:
        self.title = title

    def export(self, result: PackingResult, path: Path) -> None:
        """Write the cutting plan PDF to ``path``."""
        path.write_bytes(self.export_bytes(result))
        logger.info("Exported PDF cutting plan to %s", path)

    def export_bytes(self, result: PackingResult) -> bytes:
        """Render the cutting plan PDF in memory."""
        buffer = BytesIO()
        pdf = canvas.Canvas(buffer, pagesize=landscape(A4))
        pdf.setTitle(self.title)

        total = len(result.sheets)
        if total == 0:
            pdf.setFont("Helvetica", 12)
            pdf.drawString(
                PAGE_MARGIN_MM * mm,
                (A4_LANDSCAPE_HEIGHT_MM - 15) * mm,
                "No sheets to display",
            )
            pdf.showPage()

        for sheet in result.sheets:
            self._draw_sheet_page(pdf, sheet, total)
            pdf.showPage()

        pdf.save()
        return buffer.getvalue()

    def _draw_sheet_page(
        self, pdf: canvas.Canvas, sheet: SheetResult, total: int
    ) -> None:
        """Draw one sheet on the current page.

        Page layout is computed in top-left millimeters; reportlab's origin
        is bottom-left, so y values are flipped on output.
        """
        page_h = A4_LANDSCAPE_HEIGHT_MM

        pdf.setFont("Helvetica", 16)
        pdf.drawString(
            PAGE_MARGIN_MM * mm,
            (page_h - 15) * mm,
            f"{self.title} {sheet.sheet_index + 1}/{total}",
        )
        pdf.setFont("Helvetica", 10)
        pdf.drawString(
            PAGE_MARGIN_MM * mm,
            (page_h - 22) * mm,
            f"Sheet: {sheet.width:g}x{sheet.height:g}mm | "
            f"Usage: {sheet.usage * 100:.1f}% | "
            f"Pieces: {sheet.placed_count}",
        )

        transform = fit_sheet_to_page(
            sheet.width,
            sheet.height,
            page_width=A4_LANDSCAPE_WIDTH_MM,
            page_height=page_h,
        )

        pdf.setStrokeColorRGB(0, 0, 0)
        pdf.setLineWidth(0.5 * mm)
        outline_w = sheet.width * transform.scale
        outline_h = sheet.height * transform.scale
        pdf.rect(
            transform.offset_x * mm,
            (page_h - transform.offset_y - outline_h) * mm,
            outline_w * mm,
            outline_h * mm,
        )

        pdf.setLineWidth(0.2 * mm)
        pdf.setFont(LABEL_FONT, LABEL_FONT_SIZE)
        min_w, min_h = MIN_LABEL_BOX_MM
        for placement in sheet.placements:
            box = transform.to_page(placement.rect)
            bottom = page_h - box.bottom
            pdf.rect(box.x * mm, bottom * mm, box.width * mm, box.height * mm)

            if box.width > min_w and box.height > min_h:
                label = dimension_label(placement)
                text_width = stringWidth(label, LABEL_FONT, LABEL_FONT_SIZE) / mm
                if text_width < box.width:
                    pdf.drawString(
                        (box.x + box.width / 2 - text_width / 2) * mm,
                        (bottom + box.height / 2 - 1) * mm,
                        label,
                    )
