"""Guillotine bin packing for cutting pieces out of fixed-size stock sheets.

This module provides the single-sheet packer, the per-sheet statistics and
the multi-sheet planning loop that feeds the leftovers of one sheet into a
fresh one until every piece is placed.

The packer keeps a list of free regions for its sheet. Each piece is put in
the region that leaves the least area over (Best Area Fit) and the region is
then split in two with a single guillotine cut. Pieces are never rotated and
free regions are never merged.

All result dataclasses are frozen (immutable) so they can be handed to
renderers and exporters as-is.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from glassopt.domain.geometry import Rect, fits_inside
from glassopt.domain.value_objects import Piece, PieceSpec, Placement, expand_pieces

logger = logging.getLogger(__name__)

# Upper bound on sheets produced by one planning run.
MAX_SHEETS = 100


@dataclass(frozen=True)
class SheetConfig:
    """Dimensions of the stock sheet.

    Attributes:
        width: Sheet width in millimeters (default 3600).
        height: Sheet height in millimeters (default 2500).
    """

    width: float = 3600.0
    height: float = 2500.0

    def __post_init__(self) -> None:
        if self.width <= 0:
            raise ValueError("Sheet width must be positive")
        if self.height <= 0:
            raise ValueError("Sheet height must be positive")

    @property
    def area(self) -> float:
        """Sheet area in square millimeters."""
        return self.width * self.height

    def accepts(self, piece: Piece) -> bool:
        """Check whether a piece fits on an empty sheet without rotation."""
        return piece.width <= self.width and piece.height <= self.height


@dataclass(frozen=True)
class SheetStats:
    """Utilization statistics of one sheet.

    Attributes:
        usage: Fraction of the sheet covered by pieces (0-1).
        waste: Fraction left uncovered, ``1 - usage``.
        placed_count: Number of pieces on the sheet.
        placed_area: Total area of the placed pieces.
    """

    usage: float
    waste: float
    placed_count: int
    placed_area: float


def compute_sheet_stats(
    placements: Sequence[Placement],
    width: float,
    height: float,
) -> SheetStats:
    """Derive usage, waste and piece count for a sheet.

    Args:
        placements: Pieces placed on the sheet.
        width: Sheet width.
        height: Sheet height.

    Returns:
        SheetStats for the sheet.
    """
    placed_area = sum(p.width * p.height for p in placements)
    usage = placed_area / (width * height)
    return SheetStats(
        usage=usage,
        waste=1 - usage,
        placed_count=len(placements),
        placed_area=placed_area,
    )


@dataclass(frozen=True)
class SheetResult:
    """Snapshot of one sheet once its packing pass is complete.

    Attributes:
        sheet_index: Zero-based position in the planning sequence.
        width: Sheet width.
        height: Sheet height.
        placements: Pieces placed on this sheet, in placement order.
        stats: Usage statistics derived from the placements.
        offcuts: Free regions left on the sheet after packing.
    """

    sheet_index: int
    width: float
    height: float
    placements: tuple[Placement, ...]
    stats: SheetStats
    offcuts: tuple[Rect, ...] = ()

    def __post_init__(self) -> None:
        if self.sheet_index < 0:
            raise ValueError("Sheet index must be non-negative")

    @property
    def usage(self) -> float:
        """Fraction of the sheet covered by pieces."""
        return self.stats.usage

    @property
    def waste(self) -> float:
        """Fraction of the sheet left uncovered."""
        return self.stats.waste

    @property
    def placed_count(self) -> int:
        """Number of pieces on the sheet."""
        return self.stats.placed_count

    @property
    def area(self) -> float:
        """Sheet area."""
        return self.width * self.height


class GuillotinePacker:
    """Packs pieces onto a single sheet using guillotine splits.

    A packer starts with one free region covering the whole sheet. It is
    filled by a single :meth:`pack` call and then discarded; a fresh packer
    is created for every sheet.

    Attributes:
        width: Sheet width.
        height: Sheet height.
        free_regions: Unused areas of the sheet.
        placements: Pieces placed so far.
    """

    def __init__(self, width: float, height: float) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("Sheet dimensions must be positive")
        self.width = width
        self.height = height
        self.free_regions: list[Rect] = [Rect(0.0, 0.0, width, height)]
        self.placements: list[Placement] = []

    def pack(self, pieces: Sequence[Piece]) -> list[Piece]:
        """Place as many pieces as possible on this sheet.

        Pieces are tried largest area first; equal areas keep their input
        order.

        Args:
            pieces: Unit pieces to place.

        Returns:
            Pieces that did not fit, in the order they were tried.
        """
        unplaced: list[Piece] = []
        for piece in sorted(pieces, key=lambda p: p.area, reverse=True):
            index = self._find_region(piece.width, piece.height)
            if index is None:
                unplaced.append(piece)
                continue

            region = self._take_region(index)
            placement = Placement.of(piece, region.x, region.y)
            self.placements.append(placement)
            self._split_free_region(region, placement.rect)

        return unplaced

    def stats(self) -> SheetStats:
        """Statistics for the pieces placed so far."""
        return compute_sheet_stats(self.placements, self.width, self.height)

    def to_result(self, sheet_index: int = 0) -> SheetResult:
        """Freeze the current state of the sheet into a SheetResult."""
        return SheetResult(
            sheet_index=sheet_index,
            width=self.width,
            height=self.height,
            placements=tuple(self.placements),
            stats=self.stats(),
            offcuts=tuple(self.free_regions),
        )

    def _find_region(self, width: float, height: float) -> int | None:
        """Find the index of the best free region for a piece (Best Area Fit).

        Among regions that can hold the piece unrotated, picks the one with
        the least leftover area, then the smallest short-side leftover.
        The first region wins a full tie.

        Returns:
            Index into ``free_regions``, or None if no region can hold it.
        """
        best_index: int | None = None
        best_area_fit = float("inf")
        best_short_side_fit = float("inf")
        piece_area = width * height

        for index, region in enumerate(self.free_regions):
            if not fits_inside(width, height, region):
                continue
            area_fit = region.area - piece_area
            short_side_fit = min(region.width - width, region.height - height)
            if area_fit < best_area_fit or (
                area_fit == best_area_fit and short_side_fit < best_short_side_fit
            ):
                best_index = index
                best_area_fit = area_fit
                best_short_side_fit = short_side_fit

        return best_index

    def _take_region(self, index: int) -> Rect:
        """Remove and return the free region at ``index``.

        Swaps the region with the last one and pops, so removal is O(1).
        """
        regions = self.free_regions
        region = regions[index]
        regions[index] = regions[-1]
        regions.pop()
        return region

    def _split_free_region(self, free_region: Rect, used: Rect) -> None:
        """Split a consumed free region around the rectangle placed in it.

        The larger leftover strip is kept whole: when the leftover to the
        right is wider than the leftover below is tall, the cut is vertical
        and the right part spans the full region height; otherwise the cut
        is horizontal and the bottom part spans the full region width.
        Zero-area parts are dropped.

        Args:
            free_region: Region the piece was placed in.
            used: Rectangle occupied by the piece, anchored at the region origin.
        """
        if used.width == free_region.width and used.height == free_region.height:
            return

        right_w = free_region.width - used.width
        bottom_h = free_region.height - used.height

        if right_w > bottom_h:
            # Vertical cut
            parts = (
                Rect(free_region.x + used.width, free_region.y, right_w, free_region.height),
                Rect(free_region.x, free_region.y + used.height, used.width, bottom_h),
            )
        else:
            # Horizontal cut
            parts = (
                Rect(free_region.x, free_region.y + used.height, free_region.width, bottom_h),
                Rect(free_region.x + used.width, free_region.y, right_w, used.height),
            )

        for part in parts:
            if not part.is_degenerate:
                self.free_regions.append(part)


class PackingStatus(str, Enum):
    """How a planning run ended."""

    COMPLETE = "complete"
    NO_PROGRESS = "no_progress"
    SHEET_LIMIT = "sheet_limit"


@dataclass(frozen=True)
class PackingResult:
    """Complete result of a multi-sheet planning run.

    Attributes:
        sheets: One result per sheet, in generation order.
        oversized: Pieces dropped because they exceed the sheet.
        unplaced: Pieces still pending when the run stopped early.
        status: Why the run ended.
    """

    sheets: tuple[SheetResult, ...]
    oversized: tuple[Piece, ...] = ()
    unplaced: tuple[Piece, ...] = ()
    status: PackingStatus = PackingStatus.COMPLETE

    @property
    def total_sheets(self) -> int:
        """Number of sheets produced."""
        return len(self.sheets)

    @property
    def total_pieces_placed(self) -> int:
        """Number of pieces placed across all sheets."""
        return sum(sheet.placed_count for sheet in self.sheets)

    @property
    def rejected_count(self) -> int:
        """Pieces that did not make it onto any sheet."""
        return len(self.oversized) + len(self.unplaced)

    @property
    def total_usage(self) -> float:
        """Fraction of all produced sheet area covered by pieces."""
        total_area = sum(sheet.area for sheet in self.sheets)
        if total_area == 0:
            return 0.0
        return sum(sheet.stats.placed_area for sheet in self.sheets) / total_area


def plan_sheets(
    sheet_width: float,
    sheet_height: float,
    pieces: Sequence[Piece],
    max_sheets: int = MAX_SHEETS,
) -> PackingResult:
    """Pack pieces onto as many sheets as needed.

    Pieces larger than the sheet are dropped up front. The rest are packed
    onto a fresh sheet, and whatever did not fit moves on to the next one.
    The run stops early if a fresh sheet takes no piece at all or after
    ``max_sheets`` sheets; both cases keep the sheets already produced.

    Args:
        sheet_width: Sheet width.
        sheet_height: Sheet height.
        pieces: Unit pieces (quantities already expanded).
        max_sheets: Upper bound on the number of sheets.

    Returns:
        PackingResult with the sheets and any pieces left out.
    """
    sheet = SheetConfig(width=sheet_width, height=sheet_height)

    oversized = [p for p in pieces if not sheet.accepts(p)]
    remaining = [p for p in pieces if sheet.accepts(p)]
    if oversized:
        logger.warning(
            "%d pieces are larger than the %sx%s sheet and will be ignored",
            len(oversized),
            sheet_width,
            sheet_height,
        )

    logger.debug("Packing %d pieces onto %sx%s sheets", len(remaining), sheet_width, sheet_height)

    sheets: list[SheetResult] = []
    status = PackingStatus.COMPLETE

    while remaining:
        if len(sheets) >= max_sheets:
            logger.error(
                "Reached the limit of %d sheets with %d pieces left",
                max_sheets,
                len(remaining),
            )
            status = PackingStatus.SHEET_LIMIT
            break

        packer = GuillotinePacker(sheet_width, sheet_height)
        unplaced = packer.pack(remaining)
        result = packer.to_result(sheet_index=len(sheets))
        sheets.append(result)

        logger.debug(
            "Sheet %d: %d pieces, %.1f%% used",
            result.sheet_index,
            result.placed_count,
            result.usage * 100,
        )

        if unplaced and len(unplaced) == len(remaining):
            logger.error(
                "No piece could be placed on an empty sheet; "
                "stopping with %d pieces unplaced",
                len(unplaced),
            )
            remaining = unplaced
            status = PackingStatus.NO_PROGRESS
            break

        remaining = unplaced

    return PackingResult(
        sheets=tuple(sheets),
        oversized=tuple(oversized),
        unplaced=tuple(remaining),
        status=status,
    )


def pack_multiple_sheets(
    sheet_width: float,
    sheet_height: float,
    pieces: Sequence[Piece],
) -> list[SheetResult]:
    """Pack pieces onto sheets and return the per-sheet results.

    Thin wrapper around :func:`plan_sheets` for callers that only need the
    sheets. Oversized pieces and early stops are reported through logging.
    """
    return list(plan_sheets(sheet_width, sheet_height, pieces).sheets)


class PackingService:
    """Runs cut list optimization for a sheet configuration.

    Expands cut list rows into unit pieces and plans the sheets for them.

    Attributes:
        sheet: Stock sheet configuration.
        max_sheets: Upper bound on the number of sheets per run.
    """

    def __init__(self, sheet: SheetConfig, max_sheets: int = MAX_SHEETS) -> None:
        self.sheet = sheet
        self.max_sheets = max_sheets

    def optimize(self, specs: Sequence[PieceSpec]) -> PackingResult:
        """Optimize a cut list.

        Args:
            specs: Cut list rows, quantities not yet expanded.

        Returns:
            PackingResult for the expanded pieces.
        """
        pieces = expand_pieces(specs)
        logger.info(
            "Optimizing %d pieces from %d cut list rows",
            len(pieces),
            len(specs),
        )
        return plan_sheets(
            self.sheet.width,
            self.sheet.height,
            pieces,
            max_sheets=self.max_sheets,
        )
