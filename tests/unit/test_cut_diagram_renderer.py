"""Tests for CutDiagramRenderer SVG and ASCII output."""

from __future__ import annotations

import xml.etree.ElementTree as ET

import pytest

from glassopt.domain.value_objects import Piece
from glassopt.infrastructure.bin_packing import PackingResult, plan_sheets
from glassopt.infrastructure.cut_diagram_renderer import (
    CutDiagramRenderer,
    dimension_label,
)

SVG_NS = "{http://www.w3.org/2000/svg}"


@pytest.fixture
def renderer() -> CutDiagramRenderer:
    return CutDiagramRenderer()


@pytest.fixture
def door_result() -> PackingResult:
    """One 600x400 labelled piece on a 1000x1000 sheet."""
    piece = Piece(id="1", width=600, height=400, label="Door & Frame", color="#87CEEB")
    return plan_sheets(1000, 1000, [piece])


def test_dimension_label_rounds(door_result: PackingResult) -> None:
    placement = door_result.sheets[0].placements[0]
    assert dimension_label(placement) == "600x400"

    piece = Piece(id="2", width=600.4, height=399.6)
    odd = plan_sheets(1000, 1000, [piece]).sheets[0].placements[0]
    assert dimension_label(odd) == "600x400"


class TestRenderSvg:
    """Tests for single-sheet SVG output."""

    def test_is_well_formed(
        self, renderer: CutDiagramRenderer, door_result: PackingResult
    ) -> None:
        root = ET.fromstring(renderer.render_svg(door_result.sheets[0]))

        assert root.tag == f"{SVG_NS}svg"
        assert float(root.get("width")) == pytest.approx(200)
        assert float(root.get("height")) == pytest.approx(230)

    def test_header_text(
        self, renderer: CutDiagramRenderer, door_result: PackingResult
    ) -> None:
        svg = renderer.render_svg(door_result.sheets[0], total_sheets=3)
        assert "Sheet 1 of 3 - 1000 x 1000 mm - 24.0% used - 1 piece" in svg

    def test_label_is_escaped(
        self, renderer: CutDiagramRenderer, door_result: PackingResult
    ) -> None:
        svg = renderer.render_svg(door_result.sheets[0])
        assert "Door &amp; Frame" in svg

        texts = [t.text for t in ET.fromstring(svg).iter(f"{SVG_NS}text")]
        assert "Door & Frame" in texts
        assert "600x400" in texts

    def test_piece_color_is_used(
        self, renderer: CutDiagramRenderer, door_result: PackingResult
    ) -> None:
        svg = renderer.render_svg(door_result.sheets[0])
        assert 'fill="#87CEEB"' in svg

    def test_offcuts_shaded(
        self, renderer: CutDiagramRenderer, door_result: PackingResult
    ) -> None:
        sheet = door_result.sheets[0]
        root = ET.fromstring(renderer.render_svg(sheet))
        shaded = [
            r for r in root.iter(f"{SVG_NS}rect") if r.get("fill") == renderer.waste_fill
        ]
        assert len(shaded) == len(sheet.offcuts) == 2

    def test_offcuts_hidden(self, door_result: PackingResult) -> None:
        renderer = CutDiagramRenderer(show_offcuts=False)
        svg = renderer.render_svg(door_result.sheets[0])
        assert renderer.waste_fill not in svg

    def test_small_pieces_have_no_text(self, renderer: CutDiagramRenderer) -> None:
        result = plan_sheets(1000, 1000, [Piece(id="s", width=20, height=20, label="S")])
        root = ET.fromstring(renderer.render_svg(result.sheets[0]))
        texts = [t.text for t in root.iter(f"{SVG_NS}text")]
        assert len(texts) == 1
        assert texts[0].startswith("Sheet")

    def test_render_all_svg(
        self, renderer: CutDiagramRenderer, small_result: PackingResult
    ) -> None:
        svgs = renderer.render_all_svg(small_result)
        assert len(svgs) == 2
        assert "Sheet 2 of 2" in svgs[1]


class TestRenderCombinedSvg:
    """Tests for the stacked multi-sheet SVG."""

    def test_one_group_per_sheet(
        self, renderer: CutDiagramRenderer, small_result: PackingResult
    ) -> None:
        root = ET.fromstring(renderer.render_combined_svg(small_result))
        groups = [g for g in root if g.tag == f"{SVG_NS}g"]

        assert len(groups) == 2
        assert groups[0].get("transform") == "translate(0, 0)"

    def test_empty_result(self, renderer: CutDiagramRenderer) -> None:
        svg = renderer.render_combined_svg(PackingResult(sheets=()))
        assert "No sheets to display" in svg
        ET.fromstring(svg)


class TestRenderAscii:
    """Tests for terminal output."""

    def test_sheet_frame(
        self, renderer: CutDiagramRenderer, door_result: PackingResult
    ) -> None:
        lines = renderer.render_ascii(door_result.sheets[0], width=60).split("\n")

        assert lines[0] == "Sheet 1 of 1 - 24.0% used, 76.0% waste"
        assert lines[1] == "+" + "-" * 58 + "+"
        assert lines[-1] == lines[1]
        assert all(len(line) == 60 for line in lines[1:])

    def test_piece_text_drawn(
        self, renderer: CutDiagramRenderer, door_result: PackingResult
    ) -> None:
        text = renderer.render_ascii(door_result.sheets[0])
        assert "Door & Frame" in text
        assert "600x400" in text

    def test_all_sheets_with_summary(
        self, renderer: CutDiagramRenderer, small_result: PackingResult
    ) -> None:
        text = renderer.render_all_ascii(small_result)
        assert "Sheet 1 of 2" in text
        assert "Sheet 2 of 2" in text
        assert "SUMMARY: 2 sheets, 83.5% overall usage" in text

    def test_empty_result(self, renderer: CutDiagramRenderer) -> None:
        assert renderer.render_all_ascii(PackingResult(sheets=())) == "No sheets to display."


class TestRenderSummary:
    """Tests for the text summary."""

    def test_totals(
        self, renderer: CutDiagramRenderer, small_result: PackingResult
    ) -> None:
        summary = renderer.render_summary(small_result)

        assert "CUT OPTIMIZATION SUMMARY" in summary
        assert "Total Sheets: 2" in summary
        assert "Pieces Placed: 3" in summary
        assert "Overall Usage: 83.5%" in summary
        assert "Sheet 1: 2 pieces, 86.0% used, 14.0% waste" in summary
        assert "Sheet 2: 1 piece, 81.0% used, 19.0% waste" in summary
        assert "Ignored" not in summary

    def test_lists_ignored_pieces(self, renderer: CutDiagramRenderer) -> None:
        result = plan_sheets(1000, 1000, [Piece(id="w", width=2000, height=500)])
        summary = renderer.render_summary(result)

        assert "Total Sheets: 0" in summary
        assert "Ignored: 1 piece larger than the sheet" in summary
        assert "w/1: 2000 x 500" in summary

    def test_lists_unplaced_pieces(self, renderer: CutDiagramRenderer) -> None:
        pieces = [Piece(id=str(i), width=900, height=900) for i in range(3)]
        result = plan_sheets(1000, 1000, pieces, max_sheets=1)
        summary = renderer.render_summary(result)

        assert "Unplaced: 2 pieces could not be placed (sheet_limit)" in summary
