"""Pydantic response schemas for the REST API."""

from typing import Any

from pydantic import BaseModel, Field

from glassopt.web.schemas.common import RectSchema


class PlacementSchema(BaseModel):
    """Piece placed on a sheet."""

    id: str = Field(..., description="Originating cut list row")
    instance: int = Field(..., description="Copy number within the row")
    x: float = Field(..., description="Left edge in mm")
    y: float = Field(..., description="Top edge in mm")
    width: float = Field(..., description="Width in mm")
    height: float = Field(..., description="Height in mm")
    label: str | None = Field(default=None, description="Display label")
    color: str | None = Field(default=None, description="Display color")


class SheetResultSchema(BaseModel):
    """One packed sheet with its statistics."""

    index: int = Field(..., description="Zero-based sheet position")
    width: float = Field(..., description="Sheet width in mm")
    height: float = Field(..., description="Sheet height in mm")
    usage: float = Field(..., description="Fraction of the sheet covered (0-1)")
    waste: float = Field(..., description="Fraction of the sheet left over (0-1)")
    placed_count: int = Field(..., description="Number of pieces on the sheet")
    placements: list[PlacementSchema] = Field(default_factory=list)
    offcuts: list[RectSchema] = Field(
        default_factory=list, description="Free regions left after packing"
    )


class RejectedPieceSchema(BaseModel):
    """Piece that did not make it onto any sheet."""

    id: str
    instance: int
    width: float
    height: float
    label: str | None = None


class PackingSummarySchema(BaseModel):
    """Totals across all sheets."""

    total_sheets: int = Field(..., description="Number of sheets used")
    pieces_placed: int = Field(..., description="Pieces placed on sheets")
    pieces_rejected: int = Field(..., description="Oversized or unplaced pieces")
    overall_usage: float = Field(..., description="Covered fraction of all sheets")


class OptimizeResponseSchema(BaseModel):
    """Response for cut list optimization."""

    schema_version: str = Field(..., description="Result document version")
    status: str = Field(
        ..., description="How planning ended: complete, no_progress or sheet_limit"
    )
    summary: PackingSummarySchema
    sheets: list[SheetResultSchema] = Field(default_factory=list)
    oversized: list[RejectedPieceSchema] = Field(
        default_factory=list, description="Pieces larger than the sheet"
    )
    unplaced: list[RejectedPieceSchema] = Field(
        default_factory=list, description="Pieces left when planning stopped early"
    )


class ValidationResultSchema(BaseModel):
    """Response for job validation."""

    is_valid: bool = Field(..., description="Whether the job is valid")
    errors: list[dict[str, Any]] = Field(
        default_factory=list, description="Validation errors"
    )
    warnings: list[dict[str, Any]] = Field(
        default_factory=list, description="Validation warnings"
    )


class ExportFormatsSchema(BaseModel):
    """Response for available export formats."""

    formats: list[str] = Field(..., description="Available format names")


class ErrorResponseSchema(BaseModel):
    """Standard error response."""

    error: str = Field(..., description="Error message")
    error_type: str = Field(..., description="Error type identifier")
    details: list[dict[str, Any]] | dict[str, Any] | None = Field(
        default=None, description="Additional error details"
    )
