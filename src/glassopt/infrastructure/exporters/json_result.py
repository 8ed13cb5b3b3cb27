"""JSON exporter for packing results.

Produces a normalised document with a schema version, per-sheet placements
and statistics, offcuts and the pieces that were left out.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any, ClassVar

from glassopt.infrastructure.exporters.base import ExporterRegistry

if TYPE_CHECKING:
    from glassopt.domain.geometry import Rect
    from glassopt.domain.value_objects import Piece, Placement
    from glassopt.infrastructure.bin_packing import PackingResult, SheetResult


logger = logging.getLogger(__name__)


SCHEMA_VERSION = "1.0"


def _rect_to_dict(rect: Rect) -> dict[str, float]:
    return {"x": rect.x, "y": rect.y, "width": rect.width, "height": rect.height}


def _placement_to_dict(placement: Placement) -> dict[str, Any]:
    return {
        "id": placement.piece_id,
        "instance": placement.instance,
        "x": placement.x,
        "y": placement.y,
        "width": placement.width,
        "height": placement.height,
        "label": placement.label,
        "color": placement.color,
    }


def _piece_to_dict(piece: Piece) -> dict[str, Any]:
    return {
        "id": piece.id,
        "instance": piece.instance,
        "width": piece.width,
        "height": piece.height,
        "label": piece.label,
    }


def sheet_to_dict(sheet: SheetResult) -> dict[str, Any]:
    """Convert a sheet result to a JSON-ready dictionary."""
    return {
        "index": sheet.sheet_index,
        "width": sheet.width,
        "height": sheet.height,
        "usage": sheet.usage,
        "waste": sheet.waste,
        "placed_count": sheet.placed_count,
        "placements": [_placement_to_dict(p) for p in sheet.placements],
        "offcuts": [_rect_to_dict(r) for r in sheet.offcuts],
    }


def result_to_dict(result: PackingResult) -> dict[str, Any]:
    """Convert a packing result to a JSON-ready dictionary."""
    return {
        "schema_version": SCHEMA_VERSION,
        "status": result.status.value,
        "summary": {
            "total_sheets": result.total_sheets,
            "pieces_placed": result.total_pieces_placed,
            "pieces_rejected": result.rejected_count,
            "overall_usage": result.total_usage,
        },
        "sheets": [sheet_to_dict(s) for s in result.sheets],
        "oversized": [_piece_to_dict(p) for p in result.oversized],
        "unplaced": [_piece_to_dict(p) for p in result.unplaced],
    }


@ExporterRegistry.register("json")
class JsonResultExporter:
    """JSON exporter for packing results.

    Attributes:
        format_name: "json"
        file_extension: "json"
        media_type: "application/json"
    """

    format_name: ClassVar[str] = "json"
    file_extension: ClassVar[str] = "json"
    media_type: ClassVar[str] = "application/json"

    def __init__(self, indent: int | None = 2) -> None:
        self.indent = indent

    def export(self, result: PackingResult, path: Path) -> None:
        path.write_text(self.export_string(result), encoding="utf-8")
        logger.info("Exported JSON result to %s", path)

    def export_string(self, result: PackingResult) -> str:
        return json.dumps(result_to_dict(result), indent=self.indent)

    def export_bytes(self, result: PackingResult) -> bytes:
        return self.export_string(result).encode("utf-8")
