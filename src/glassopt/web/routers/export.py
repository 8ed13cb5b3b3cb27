"""Export format endpoints."""

from fastapi import APIRouter
from fastapi.responses import Response

from glassopt.infrastructure.exporters import ExporterRegistry
from glassopt.web.exceptions import UnsupportedFormatError
from glassopt.web.routers.optimize import run_optimization
from glassopt.web.schemas.requests import ExportRequest
from glassopt.web.schemas.responses import ExportFormatsSchema

router = APIRouter(prefix="/export", tags=["export"])


@router.get("/formats", response_model=ExportFormatsSchema)
async def list_export_formats() -> ExportFormatsSchema:
    """List all available export formats."""
    return ExportFormatsSchema(formats=ExporterRegistry.available_formats())


@router.post("/{format_name}")
async def export_cutting_plan(format_name: str, request: ExportRequest) -> Response:
    """Optimize a cut list and export the plan in the requested format.

    Args:
        format_name: Registered exporter name (svg, pdf, dxf, json).
        request: Sheet dimensions, cut list and file base name.

    Returns:
        The exported document as an attachment.

    Raises:
        UnsupportedFormatError: If no exporter is registered for the format.
    """
    format_name = format_name.lower()
    if not ExporterRegistry.is_registered(format_name):
        raise UnsupportedFormatError(format_name, ExporterRegistry.available_formats())

    exporter = ExporterRegistry.create(format_name)
    result = run_optimization(request)
    filename = f"{request.project_name}.{exporter.file_extension}"

    return Response(
        content=exporter.export_bytes(result),
        media_type=exporter.media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
