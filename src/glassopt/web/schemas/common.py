"""Shared Pydantic schemas for the REST API."""

from pydantic import BaseModel, Field


class SheetSchema(BaseModel):
    """Stock sheet dimensions."""

    width: float = Field(default=3600.0, gt=0, description="Sheet width in mm")
    height: float = Field(default=2500.0, gt=0, description="Sheet height in mm")


class PieceSchema(BaseModel):
    """Cut list row."""

    id: str = Field(..., min_length=1, description="Unique piece identifier")
    width: float = Field(..., gt=0, description="Piece width in mm")
    height: float = Field(..., gt=0, description="Piece height in mm")
    quantity: int = Field(default=1, ge=1, description="Number of pieces")
    label: str | None = Field(default=None, max_length=80, description="Display label")
    color: str | None = Field(default=None, description="CSS color for diagrams")


class RectSchema(BaseModel):
    """Axis-aligned rectangle on a sheet."""

    x: float = Field(..., description="Left edge in mm")
    y: float = Field(..., description="Top edge in mm")
    width: float = Field(..., description="Width in mm")
    height: float = Field(..., description="Height in mm")
