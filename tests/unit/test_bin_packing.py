"""Tests for the guillotine packer and multi-sheet planning.

Tests cover:
- Best Area Fit region selection and tie-breaking
- Guillotine split geometry and degenerate-region handling
- Placement ordering (largest area first, stable on ties)
- Multi-sheet planning: oversized filter, progress guard, sheet cap
- Per-sheet statistics and result aggregates
- Containment, non-overlap, conservation and determinism
"""

from __future__ import annotations

import logging
import random

import pytest

from glassopt.domain.geometry import Rect
from glassopt.domain.value_objects import Piece, PieceSpec, Placement
from glassopt.infrastructure.bin_packing import (
    MAX_SHEETS,
    GuillotinePacker,
    PackingResult,
    PackingService,
    PackingStatus,
    SheetConfig,
    SheetResult,
    compute_sheet_stats,
    pack_multiple_sheets,
    plan_sheets,
)

PACKING_LOGGER = "glassopt.infrastructure.bin_packing"


def make_pieces(*sizes: tuple[float, float]) -> list[Piece]:
    """Create unit pieces with ids p0, p1, ... in the given order."""
    return [Piece(id=f"p{i}", width=w, height=h) for i, (w, h) in enumerate(sizes)]


def random_pieces(seed: int, count: int) -> list[Piece]:
    rng = random.Random(seed)
    return [
        Piece(id=f"r{i}", width=rng.randint(50, 1200), height=rng.randint(50, 900))
        for i in range(count)
    ]


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def packer() -> GuillotinePacker:
    """Create an empty 1000x1000 packer."""
    return GuillotinePacker(1000, 1000)


# =============================================================================
# SheetConfig
# =============================================================================


class TestSheetConfig:
    """Tests for SheetConfig."""

    def test_defaults(self) -> None:
        sheet = SheetConfig()
        assert sheet.width == 3600
        assert sheet.height == 2500
        assert sheet.area == 9_000_000

    @pytest.mark.parametrize("width,height", [(0, 100), (100, 0), (-5, 100)])
    def test_rejects_non_positive(self, width: float, height: float) -> None:
        with pytest.raises(ValueError):
            SheetConfig(width=width, height=height)

    def test_accepts_is_unrotated(self) -> None:
        sheet = SheetConfig(width=1000, height=500)
        assert sheet.accepts(Piece(id="a", width=1000, height=500))
        assert not sheet.accepts(Piece(id="b", width=500, height=1000))


# =============================================================================
# Best Area Fit search
# =============================================================================


class TestFindRegion:
    """Tests for GuillotinePacker._find_region."""

    def test_initial_region_covers_sheet(self, packer: GuillotinePacker) -> None:
        assert packer.free_regions == [Rect(0, 0, 1000, 1000)]
        assert packer.placements == []

    def test_rejects_non_positive_sheet(self) -> None:
        with pytest.raises(ValueError):
            GuillotinePacker(0, 100)

    def test_picks_least_leftover_area(self, packer: GuillotinePacker) -> None:
        packer.free_regions = [
            Rect(0, 0, 500, 500),
            Rect(600, 0, 300, 300),
            Rect(0, 600, 400, 400),
        ]
        assert packer._find_region(300, 250) == 1

    def test_ties_broken_by_short_side_leftover(self, packer: GuillotinePacker) -> None:
        # Both leave 80000 over; the second leaves 0 on its short side
        packer.free_regions = [Rect(0, 0, 400, 300), Rect(0, 300, 600, 200)]
        assert packer._find_region(200, 200) == 1

    def test_full_tie_keeps_first_region(self, packer: GuillotinePacker) -> None:
        packer.free_regions = [Rect(0, 0, 400, 400), Rect(500, 0, 400, 400)]
        assert packer._find_region(100, 100) == 0

    def test_no_rotation(self, packer: GuillotinePacker) -> None:
        packer.free_regions = [Rect(0, 0, 1000, 200)]
        assert packer._find_region(200, 1000) is None

    def test_take_region_swaps_with_last(self, packer: GuillotinePacker) -> None:
        a, b, c = Rect(0, 0, 1, 1), Rect(1, 0, 1, 1), Rect(2, 0, 1, 1)
        packer.free_regions = [a, b, c]

        assert packer._take_region(0) == a
        assert packer.free_regions == [c, b]

        assert packer._take_region(1) == b
        assert packer.free_regions == [c]


# =============================================================================
# Guillotine split rule
# =============================================================================


class TestSplitRule:
    """Tests for the split performed after each placement."""

    def test_horizontal_split_when_bottom_strip_is_larger(
        self, packer: GuillotinePacker
    ) -> None:
        packer.pack(make_pieces((600, 400)))

        assert packer.free_regions == [
            Rect(0, 400, 1000, 600),  # full width bottom
            Rect(600, 0, 400, 400),  # right, as tall as the piece
        ]

    def test_vertical_split_when_right_strip_is_larger(
        self, packer: GuillotinePacker
    ) -> None:
        packer.pack(make_pieces((300, 900)))

        assert packer.free_regions == [
            Rect(300, 0, 700, 1000),  # full height right
            Rect(0, 900, 300, 100),  # bottom, as wide as the piece
        ]

    def test_equal_leftovers_split_horizontally(self, packer: GuillotinePacker) -> None:
        packer.pack(make_pieces((600, 600)))

        assert packer.free_regions == [
            Rect(0, 600, 1000, 400),
            Rect(600, 0, 400, 600),
        ]

    def test_exact_fit_leaves_no_regions(self, packer: GuillotinePacker) -> None:
        packer.pack(make_pieces((1000, 1000)))
        assert packer.free_regions == []

    def test_degenerate_parts_are_dropped(self, packer: GuillotinePacker) -> None:
        packer.pack(make_pieces((1000, 400)))
        assert packer.free_regions == [Rect(0, 400, 1000, 600)]

    def test_split_tiles_the_region(self, packer: GuillotinePacker) -> None:
        region = Rect(100, 200, 700, 500)
        used = Rect(100, 200, 250, 300)
        packer.free_regions = []
        packer._split_free_region(region, used)

        parts = packer.free_regions
        assert len(parts) == 2
        assert sum(p.area for p in parts) + used.area == region.area
        assert all(region.contains(p) for p in parts)
        assert not parts[0].overlaps(parts[1])
        assert not any(p.overlaps(used) for p in parts)


# =============================================================================
# Single-sheet packing
# =============================================================================


class TestGuillotinePacker:
    """Tests for GuillotinePacker.pack."""

    def test_largest_area_first_stable_on_ties(self, packer: GuillotinePacker) -> None:
        pieces = [
            Piece(id="first", width=100, height=100),
            Piece(id="big", width=500, height=500),
            Piece(id="second", width=100, height=100),
        ]
        unplaced = packer.pack(pieces)

        assert unplaced == []
        assert [p.piece_id for p in packer.placements] == ["big", "first", "second"]
        assert (packer.placements[0].x, packer.placements[0].y) == (0, 0)

    def test_returns_unplaced_in_processing_order(
        self, packer: GuillotinePacker
    ) -> None:
        pieces = make_pieces((900, 900), (800, 800), (950, 950))
        unplaced = packer.pack(pieces)

        assert [p.piece_id for p in packer.placements] == ["p2"]
        assert [p.id for p in unplaced] == ["p0", "p1"]

    def test_placements_keep_piece_dimensions(self, packer: GuillotinePacker) -> None:
        packer.pack([Piece(id="a", width=600, height=400, label="A", color="red")])
        placement = packer.placements[0]

        assert placement == Placement(
            piece_id="a", instance=0, x=0, y=0, width=600, height=400,
            label="A", color="red",
        )

    def test_to_result_snapshot(self, packer: GuillotinePacker) -> None:
        packer.pack(make_pieces((600, 400)))
        result = packer.to_result(sheet_index=3)

        assert result.sheet_index == 3
        assert result.placements == tuple(packer.placements)
        assert result.offcuts == tuple(packer.free_regions)
        assert result.usage == pytest.approx(0.24)

    def test_empty_input(self, packer: GuillotinePacker) -> None:
        assert packer.pack([]) == []
        assert packer.placements == []


# =============================================================================
# Statistics
# =============================================================================


class TestSheetStats:
    """Tests for compute_sheet_stats and result aggregates."""

    def test_stats(self) -> None:
        placements = [
            Placement(piece_id="a", instance=0, x=0, y=0, width=500, height=500),
            Placement(piece_id="b", instance=0, x=500, y=0, width=500, height=250),
        ]
        stats = compute_sheet_stats(placements, 1000, 1000)

        assert stats.placed_area == 375000
        assert stats.usage == pytest.approx(0.375)
        assert stats.waste == pytest.approx(0.625)
        assert stats.placed_count == 2

    def test_empty_sheet(self) -> None:
        stats = compute_sheet_stats([], 1000, 1000)
        assert stats.usage == 0
        assert stats.waste == 1
        assert stats.placed_count == 0

    def test_sheet_result_rejects_negative_index(self) -> None:
        with pytest.raises(ValueError):
            SheetResult(
                sheet_index=-1,
                width=1,
                height=1,
                placements=(),
                stats=compute_sheet_stats([], 1, 1),
            )

    def test_result_aggregates(self, small_result: PackingResult) -> None:
        assert small_result.total_sheets == 2
        assert small_result.total_pieces_placed == 3
        assert small_result.rejected_count == 0
        assert small_result.total_usage == pytest.approx(1_670_000 / 2_000_000)

    def test_empty_result_usage(self) -> None:
        assert PackingResult(sheets=()).total_usage == 0.0


# =============================================================================
# Multi-sheet planning: worked examples
# =============================================================================


class TestPlanSheetsExamples:
    """Worked examples for multi-sheet planning."""

    def test_single_piece(self) -> None:
        result = plan_sheets(1000, 1000, [Piece(id="1", width=600, height=400)])

        assert result.total_sheets == 1
        sheet = result.sheets[0]
        assert len(sheet.placements) == 1
        placement = sheet.placements[0]
        assert (placement.x, placement.y) == (0, 0)
        assert (placement.width, placement.height) == (600, 400)
        assert sheet.usage == pytest.approx(0.24)
        assert sheet.waste == pytest.approx(0.76)
        assert result.status is PackingStatus.COMPLETE

    def test_oversized_piece_is_ignored(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger=PACKING_LOGGER):
            result = plan_sheets(1000, 1000, [Piece(id="1", width=2000, height=500)])

        assert result.sheets == ()
        assert [p.id for p in result.oversized] == ["1"]
        assert result.status is PackingStatus.COMPLETE
        assert "1 pieces are larger than the 1000x1000 sheet" in caplog.text

    def test_one_large_piece_per_sheet(self) -> None:
        pieces = [Piece(id=str(i), width=900, height=900) for i in range(4)]
        result = plan_sheets(1000, 1000, pieces)

        assert result.total_sheets >= 3
        for sheet in result.sheets:
            assert sheet.placed_count == 1
            assert sheet.usage == pytest.approx(0.81)

    def test_empty_piece_list(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger=PACKING_LOGGER):
            result = plan_sheets(1000, 1000, [])

        assert result.sheets == ()
        assert result.rejected_count == 0
        assert caplog.records == []

    def test_rotated_fit_still_counts_as_oversized(self) -> None:
        result = plan_sheets(1000, 500, [Piece(id="1", width=500, height=1000)])
        assert result.sheets == ()
        assert len(result.oversized) == 1

    def test_sheet_indices_follow_generation_order(self) -> None:
        pieces = [Piece(id=str(i), width=900, height=900) for i in range(3)]
        result = plan_sheets(1000, 1000, pieces)
        assert [s.sheet_index for s in result.sheets] == [0, 1, 2]


# =============================================================================
# Multi-sheet planning: early stops
# =============================================================================


class TestPlanSheetsEarlyStops:
    """Tests for the progress guard and the sheet cap."""

    def test_progress_guard_stops_after_empty_sheet(
        self,
        monkeypatch: pytest.MonkeyPatch,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        monkeypatch.setattr(GuillotinePacker, "pack", lambda self, pieces: list(pieces))
        pieces = make_pieces((100, 100), (200, 200))

        with caplog.at_level(logging.ERROR, logger=PACKING_LOGGER):
            result = plan_sheets(1000, 1000, pieces)

        assert result.total_sheets == 1
        assert result.sheets[0].placements == ()
        assert result.status is PackingStatus.NO_PROGRESS
        assert list(result.unplaced) == pieces
        assert "stopping with 2 pieces unplaced" in caplog.text

    def test_sheet_cap_returns_partial_result(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        pieces = [Piece(id=str(i), width=900, height=900) for i in range(4)]

        with caplog.at_level(logging.ERROR, logger=PACKING_LOGGER):
            result = plan_sheets(1000, 1000, pieces, max_sheets=2)

        assert result.total_sheets == 2
        assert result.status is PackingStatus.SHEET_LIMIT
        assert [p.id for p in result.unplaced] == ["2", "3"]
        assert "Reached the limit of 2 sheets" in caplog.text

    def test_cap_not_hit_when_last_sheet_finishes(self) -> None:
        pieces = [Piece(id=str(i), width=900, height=900) for i in range(2)]
        result = plan_sheets(1000, 1000, pieces, max_sheets=2)

        assert result.total_sheets == 2
        assert result.status is PackingStatus.COMPLETE
        assert result.unplaced == ()

    def test_default_cap(self) -> None:
        pieces = [Piece(id="sq", width=900, height=900, instance=i) for i in range(101)]
        result = plan_sheets(1000, 1000, pieces)

        assert result.total_sheets == MAX_SHEETS
        assert len(result.unplaced) == 1
        assert result.status is PackingStatus.SHEET_LIMIT


# =============================================================================
# Properties over generated inputs
# =============================================================================


@pytest.mark.parametrize("seed", [1, 7, 42, 2024])
class TestPackingProperties:
    """Invariants that hold for any cut list."""

    sheet_w = 2000
    sheet_h = 1500

    def test_containment(self, seed: int) -> None:
        result = plan_sheets(self.sheet_w, self.sheet_h, random_pieces(seed, 40))
        sheet_rect = Rect(0, 0, self.sheet_w, self.sheet_h)

        for sheet in result.sheets:
            for placement in sheet.placements:
                assert sheet_rect.contains(placement.rect)

    def test_no_overlap(self, seed: int) -> None:
        result = plan_sheets(self.sheet_w, self.sheet_h, random_pieces(seed, 40))

        for sheet in result.sheets:
            rects = [p.rect for p in sheet.placements]
            for i, a in enumerate(rects):
                for b in rects[i + 1 :]:
                    assert not a.overlaps(b)

    def test_offcuts_do_not_overlap_pieces(self, seed: int) -> None:
        result = plan_sheets(self.sheet_w, self.sheet_h, random_pieces(seed, 40))

        for sheet in result.sheets:
            for offcut in sheet.offcuts:
                assert not any(offcut.overlaps(p.rect) for p in sheet.placements)

    def test_conservation(self, seed: int) -> None:
        pieces = random_pieces(seed, 40)
        pieces.append(Piece(id="huge", width=5000, height=100))
        result = plan_sheets(self.sheet_w, self.sheet_h, pieces)

        placed_keys = [p.key for s in result.sheets for p in s.placements]
        assert len(placed_keys) == len(set(placed_keys))
        assert result.total_pieces_placed + len(result.oversized) == len(pieces)
        assert result.unplaced == ()

    def test_stat_consistency(self, seed: int) -> None:
        result = plan_sheets(self.sheet_w, self.sheet_h, random_pieces(seed, 40))

        for sheet in result.sheets:
            placed_area = sum(p.area for p in sheet.placements)
            assert sheet.usage + sheet.waste == pytest.approx(1.0)
            assert sheet.usage == pytest.approx(placed_area / (self.sheet_w * self.sheet_h))
            assert sheet.placed_count == len(sheet.placements)

    def test_determinism(self, seed: int) -> None:
        first = plan_sheets(self.sheet_w, self.sheet_h, random_pieces(seed, 40))
        second = plan_sheets(self.sheet_w, self.sheet_h, random_pieces(seed, 40))
        assert first == second


# =============================================================================
# Wrappers
# =============================================================================


class TestWrappers:
    """Tests for pack_multiple_sheets and PackingService."""

    def test_pack_multiple_sheets_returns_sheets(self) -> None:
        pieces = [Piece(id=str(i), width=900, height=900) for i in range(3)]
        sheets = pack_multiple_sheets(1000, 1000, pieces)

        assert isinstance(sheets, list)
        assert len(sheets) == 3
        assert all(isinstance(s, SheetResult) for s in sheets)

    def test_pack_multiple_sheets_drops_oversized(self) -> None:
        assert pack_multiple_sheets(1000, 1000, make_pieces((2000, 500))) == []

    def test_service_expands_quantities(self, kitchen_specs: list[PieceSpec]) -> None:
        result = PackingService(SheetConfig()).optimize(kitchen_specs)

        assert result.total_pieces_placed == 10
        assert result.rejected_count == 0
        keys = {p.key for s in result.sheets for p in s.placements}
        assert ("door", 1) in keys
        assert ("splash", 3) in keys

    def test_service_respects_max_sheets(self) -> None:
        specs = [PieceSpec(id="sq", width=900, height=900, quantity=5)]
        result = PackingService(SheetConfig(1000, 1000), max_sheets=3).optimize(specs)

        assert result.total_sheets == 3
        assert len(result.unplaced) == 2
