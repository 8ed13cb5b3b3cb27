"""Document exporters for packing results.

Importing this package registers every built-in format with
ExporterRegistry:

    dxf   CAD drawing for cutting tables, sheets laid out side by side
    json  machine readable sheets, placements and statistics
    pdf   printable cutting plan, one A4 page per sheet
    svg   cut diagrams of all sheets stacked vertically

Example:
    files = ExportManager(Path("out")).export_all(["svg", "pdf"], result, "kitchen")
"""

from glassopt.infrastructure.exporters.base import (
    Exporter,
    ExporterRegistry,
    ExportManager,
)
from glassopt.infrastructure.exporters.dxf import DxfExporter
from glassopt.infrastructure.exporters.json_result import (
    JsonResultExporter,
    result_to_dict,
    sheet_to_dict,
)
from glassopt.infrastructure.exporters.pdf import PdfExporter
from glassopt.infrastructure.exporters.svg import SvgExporter

__all__ = [
    "DxfExporter",
    "Exporter",
    "ExportManager",
    "ExporterRegistry",
    "JsonResultExporter",
    "PdfExporter",
    "SvgExporter",
    "result_to_dict",
    "sheet_to_dict",
]
