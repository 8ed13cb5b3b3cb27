"""Pydantic request schemas for the REST API."""

from typing import Any

from pydantic import BaseModel, Field, field_validator

from glassopt.web.schemas.common import PieceSchema, SheetSchema


class OptimizeRequest(BaseModel):
    """Request for optimizing a cut list."""

    sheet: SheetSchema = Field(
        default_factory=SheetSchema, description="Stock sheet dimensions"
    )
    pieces: list[PieceSchema] = Field(..., description="Cut list rows")

    @field_validator("pieces")
    @classmethod
    def validate_unique_ids(cls, v: list[PieceSchema]) -> list[PieceSchema]:
        """Reject cut lists that reuse a piece id."""
        seen: set[str] = set()
        for piece in v:
            if piece.id in seen:
                raise ValueError(f"Duplicate piece id '{piece.id}'")
            seen.add(piece.id)
        return v


class ExportRequest(OptimizeRequest):
    """Request for exporting a cutting plan to a specific format."""

    project_name: str = Field(
        default="glassopt",
        min_length=1,
        max_length=100,
        pattern=r"^[A-Za-z0-9._-]+$",
        description="Base name of the exported file; letters, digits, dot, dash, underscore",
    )


class ConfigValidateRequest(BaseModel):
    """Request for validating a job document."""

    config: dict[str, Any] = Field(..., description="Job configuration JSON")
