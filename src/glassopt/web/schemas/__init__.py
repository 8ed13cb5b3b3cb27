"""Pydantic schemas for the REST API."""

from glassopt.web.schemas.common import PieceSchema, RectSchema, SheetSchema
from glassopt.web.schemas.requests import (
    ConfigValidateRequest,
    ExportRequest,
    OptimizeRequest,
)
from glassopt.web.schemas.responses import (
    ErrorResponseSchema,
    ExportFormatsSchema,
    OptimizeResponseSchema,
    PackingSummarySchema,
    PlacementSchema,
    RejectedPieceSchema,
    SheetResultSchema,
    ValidationResultSchema,
)

__all__ = [
    # Common
    "PieceSchema",
    "RectSchema",
    "SheetSchema",
    # Requests
    "ConfigValidateRequest",
    "ExportRequest",
    "OptimizeRequest",
    # Responses
    "ErrorResponseSchema",
    "ExportFormatsSchema",
    "OptimizeResponseSchema",
    "PackingSummarySchema",
    "PlacementSchema",
    "RejectedPieceSchema",
    "SheetResultSchema",
    "ValidationResultSchema",
]
