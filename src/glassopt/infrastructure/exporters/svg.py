"""SVG export: all sheets in one document, or one document per sheet."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, ClassVar

from glassopt.infrastructure.cut_diagram_renderer import CutDiagramRenderer
from glassopt.infrastructure.exporters.base import ExporterRegistry

if TYPE_CHECKING:
    from glassopt.infrastructure.bin_packing import PackingResult


logger = logging.getLogger(__name__)


@ExporterRegistry.register("svg")
class SvgExporter:
    """Cut diagrams rendered by CutDiagramRenderer and written as SVG."""

    format_name: ClassVar[str] = "svg"
    file_extension: ClassVar[str] = "svg"
    media_type: ClassVar[str] = "image/svg+xml"

    def __init__(
        self,
        scale: float = 0.2,
        show_dimensions: bool = True,
        show_labels: bool = True,
        show_offcuts: bool = True,
    ) -> None:
        self.renderer = CutDiagramRenderer(
            scale=scale,
            show_dimensions=show_dimensions,
            show_labels=show_labels,
            show_offcuts=show_offcuts,
        )

    def export(self, result: PackingResult, path: Path) -> None:
        """Write all sheets, stacked vertically, to a single SVG file."""
        path.write_text(self.export_string(result), encoding="utf-8")
        logger.info("Exported SVG cut diagrams to %s", path)

    def export_string(self, result: PackingResult) -> str:
        """Combined SVG for all sheets as a string."""
        return self.renderer.render_combined_svg(result)

    def export_bytes(self, result: PackingResult) -> bytes:
        return self.export_string(result).encode("utf-8")

    def export_individual_sheets(
        self, result: PackingResult, base_path: Path
    ) -> list[Path]:
        """Write ``{stem}_1.svg``, ``{stem}_2.svg``, ... next to ``base_path``."""
        paths: list[Path] = []
        for index, svg in enumerate(self.renderer.render_all_svg(result), start=1):
            sheet_path = base_path.parent / f"{base_path.stem}_{index}.svg"
            sheet_path.write_text(svg, encoding="utf-8")
            paths.append(sheet_path)
        return paths
