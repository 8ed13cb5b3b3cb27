"""Pydantic models for cutting job configuration files.

A job file describes the stock sheet, the cut list and optional output
settings:

    {
        "schema_version": "1.0",
        "sheet": {"width": 3600, "height": 2500},
        "pieces": [{"id": "door", "width": 1821, "height": 366, "quantity": 2}],
        "output": {"formats": ["svg", "pdf"], "project_name": "kitchen"}
    }
"""

from typing import Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
)

# Version 1.0: Initial schema with sheet, pieces and output
SUPPORTED_VERSIONS: frozenset[str] = frozenset({"1.0"})

ExportFormat = Literal["dxf", "json", "pdf", "svg"]


class SheetSizeConfig(BaseModel):
    """Stock sheet dimensions in millimeters.

    Attributes:
        width: Sheet width (default 3600).
        height: Sheet height (default 2500).
    """

    model_config = ConfigDict(extra="forbid")

    width: float = Field(default=3600.0, gt=0, description="Sheet width in mm")
    height: float = Field(default=2500.0, gt=0, description="Sheet height in mm")


class PieceConfig(BaseModel):
    """One cut list row.

    Attributes:
        id: Unique identifier of the row.
        width: Piece width in millimeters.
        height: Piece height in millimeters.
        quantity: Number of identical pieces.
        label: Optional display label.
        color: Optional display color for diagrams.
    """

    model_config = ConfigDict(extra="forbid")

    id: str = Field(..., min_length=1, description="Unique piece identifier")
    width: float = Field(..., gt=0, description="Piece width in mm")
    height: float = Field(..., gt=0, description="Piece height in mm")
    quantity: int = Field(default=1, ge=1, description="Number of pieces")
    label: str | None = Field(default=None, max_length=80)
    color: str | None = Field(default=None, description="CSS color for diagrams")


class OutputConfig(BaseModel):
    """Output settings for exported documents.

    Attributes:
        formats: Export formats to write.
        output_dir: Directory for exported files.
        project_name: Base name for exported files.
    """

    model_config = ConfigDict(extra="forbid")

    formats: list[ExportFormat] = Field(default_factory=list)
    output_dir: str | None = Field(default=None)
    project_name: str = Field(default="glassopt", min_length=1)


class JobConfiguration(BaseModel):
    """Root configuration model for a cutting job.

    Attributes:
        schema_version: Version string in format "major.minor" (e.g., "1.0")
        sheet: Stock sheet dimensions
        pieces: Cut list rows
        output: Output settings
    """

    model_config = ConfigDict(extra="forbid")

    schema_version: str = Field(default="1.0", pattern=r"^\d+\.\d+$")
    sheet: SheetSizeConfig = Field(default_factory=SheetSizeConfig)
    pieces: list[PieceConfig] = Field(default_factory=list)
    output: OutputConfig = Field(default_factory=OutputConfig)

    @field_validator("schema_version")
    @classmethod
    def validate_supported_version(cls, v: str) -> str:
        """Accept supported versions and newer minors of a supported major."""
        if v in SUPPORTED_VERSIONS:
            return v

        major_version = int(v.split(".")[0])
        supported_majors = {int(sv.split(".")[0]) for sv in SUPPORTED_VERSIONS}
        if major_version in supported_majors:
            return v

        raise ValueError(
            f"Unsupported schema version '{v}'. "
            f"Supported versions: {sorted(SUPPORTED_VERSIONS)}"
        )
