"""Whole-job checks that the schema cannot express.

The schema already rejects non-positive dimensions and quantities. What is
left is cross-field: repeated piece ids, rows that can never fit on the
sheet, and cut lists big enough to make planning slow.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from glassopt.application.config.schema import JobConfiguration

# Expanded piece counts above this make interactive planning sluggish
MAX_RECOMMENDED_PIECES = 500


@dataclass
class ValidationError:
    """Problem that makes the job unusable; ``path`` points into the job file."""

    path: str
    message: str
    value: Any = None


@dataclass
class ValidationWarning:
    """Problem the planner tolerates, with an optional fix."""

    path: str
    message: str
    suggestion: str | None = None


@dataclass
class ValidationResult:
    errors: list[ValidationError] = field(default_factory=list)
    warnings: list[ValidationWarning] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def has_warnings(self) -> bool:
        return bool(self.warnings)

    @property
    def exit_code(self) -> int:
        """1 with errors, 2 with only warnings, otherwise 0."""
        if self.errors:
            return 1
        return 2 if self.warnings else 0

    def add_error(self, path: str, message: str, value: Any = None) -> "ValidationResult":
        self.errors.append(ValidationError(path, message, value))
        return self

    def add_warning(
        self, path: str, message: str, suggestion: str | None = None
    ) -> "ValidationResult":
        self.warnings.append(ValidationWarning(path, message, suggestion))
        return self


def _check_duplicate_ids(config: JobConfiguration, result: ValidationResult) -> None:
    first_index: dict[str, int] = {}
    for index, piece in enumerate(config.pieces):
        earlier = first_index.setdefault(piece.id, index)
        if earlier != index:
            result.add_error(
                f"pieces[{index}].id",
                f"Duplicate piece id (first used by pieces[{earlier}])",
                piece.id,
            )


def _check_pieces_fit(config: JobConfiguration, result: ValidationResult) -> None:
    sheet = config.sheet
    for index, piece in enumerate(config.pieces):
        if piece.width <= sheet.width and piece.height <= sheet.height:
            continue
        fits_turned = piece.height <= sheet.width and piece.width <= sheet.height
        result.add_warning(
            f"pieces[{index}]",
            f"Piece {piece.width:g}x{piece.height:g} does not fit on the "
            f"{sheet.width:g}x{sheet.height:g} sheet and will be ignored",
            "Swap width and height; pieces are never rotated" if fits_turned else None,
        )


def _check_cut_list_size(config: JobConfiguration, result: ValidationResult) -> None:
    total = sum(piece.quantity for piece in config.pieces)
    if total > MAX_RECOMMENDED_PIECES:
        result.add_warning(
            "pieces",
            f"Cut list expands to {total} pieces; planning may be slow",
            f"Keep the cut list under {MAX_RECOMMENDED_PIECES} pieces",
        )


_CHECKS: tuple[Callable[[JobConfiguration, ValidationResult], None], ...] = (
    _check_duplicate_ids,
    _check_pieces_fit,
    _check_cut_list_size,
)


def validate_config(config: JobConfiguration) -> ValidationResult:
    """Run every whole-job check against a schema-valid job."""
    result = ValidationResult()
    for check in _CHECKS:
        check(config, result)
    return result
