"""Infrastructure layer - packing engine, rendering and exporters."""

from .bin_packing import (
    MAX_SHEETS,
    GuillotinePacker,
    PackingResult,
    PackingService,
    PackingStatus,
    SheetConfig,
    SheetResult,
    SheetStats,
    compute_sheet_stats,
    pack_multiple_sheets,
    plan_sheets,
)
from .cut_diagram_renderer import CutDiagramRenderer
from .page_layout import PageTransform, fit_sheet_to_page
from .exporters import (
    Exporter,
    ExporterRegistry,
    ExportManager,
)

__all__ = [
    # Packing
    "MAX_SHEETS",
    "GuillotinePacker",
    "PackingResult",
    "PackingService",
    "PackingStatus",
    "SheetConfig",
    "SheetResult",
    "SheetStats",
    "compute_sheet_stats",
    "pack_multiple_sheets",
    "plan_sheets",
    # Rendering
    "CutDiagramRenderer",
    "PageTransform",
    "fit_sheet_to_page",
    # Exporter framework
    "Exporter",
    "ExporterRegistry",
    "ExportManager",
]
