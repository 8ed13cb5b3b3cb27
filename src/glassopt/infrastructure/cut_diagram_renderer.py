"""SVG and text renderings of packed sheets.

Diagrams use sheet coordinates scaled by ``scale`` pixels per millimeter and
sit below a header band describing the sheet. Offcuts are shaded first so
pieces paint over them.
"""

from __future__ import annotations

from xml.sax.saxutils import escape, quoteattr

from glassopt.domain.geometry import Rect
from glassopt.domain.value_objects import Placement
from glassopt.infrastructure.bin_packing import PackingResult, SheetResult

SVG_NS = "http://www.w3.org/2000/svg"
HEADER_PX = 30
SHEET_GAP_PX = 20
# Below this font size piece text is unreadable and left out
MIN_FONT_PX = 6


def dimension_label(placement: Placement) -> str:
    """Rounded ``WxH`` label for a placed piece."""
    return f"{round(placement.width)}x{round(placement.height)}"


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'s' if count != 1 else ''}"


def _element(tag: str, text: str | None = None, **attrs: object) -> str:
    """Serialize one SVG element; ``font_size`` becomes ``font-size``."""
    rendered = " ".join(
        f"{name.replace('_', '-')}={quoteattr(str(value))}"
        for name, value in attrs.items()
    )
    if text is None:
        return f"<{tag} {rendered}/>"
    return f"<{tag} {rendered}>{escape(text)}</{tag}>"


def _document(width: float, height: float, body: list[str]) -> str:
    lines = [f'<svg width="{width}" height="{height}" xmlns="{SVG_NS}">']
    lines.append("  " + _element("rect", x=0, y=0, width=width, height=height, fill="white"))
    lines.extend(f"  {line}" for line in body)
    lines.append("</svg>")
    return "\n".join(lines)


class _TextCanvas:
    """Fixed-size character grid for terminal diagrams."""

    def __init__(self, columns: int, rows: int) -> None:
        self.columns = columns
        self.rows = rows
        self.cells = [[" "] * columns for _ in range(rows)]

    def _clamp(self, value: float, upper: int) -> int:
        return max(0, min(int(value), upper - 1))

    def box(self, left: float, top: float, right: float, bottom: float) -> tuple[int, int, int, int]:
        """Outline a box; returns the clamped cell bounds actually drawn."""
        x1, x2 = self._clamp(left, self.columns), self._clamp(right, self.columns)
        y1, y2 = self._clamp(top, self.rows), self._clamp(bottom, self.rows)

        for x in range(x1, x2 + 1):
            self.cells[y1][x] = self.cells[y2][x] = "-"
        for y in range(y1, y2 + 1):
            self.cells[y][x1] = self.cells[y][x2] = "|"
        for y in (y1, y2):
            for x in (x1, x2):
                self.cells[y][x] = "+"
        return x1, y1, x2, y2

    def write(self, row: int, column: int, text: str, limit: int) -> None:
        for offset, char in enumerate(text[: max(0, limit)]):
            self.cells[row][column + offset] = char

    def framed(self) -> list[str]:
        edge = "+" + "-" * self.columns + "+"
        return [edge, *("|" + "".join(row) + "|" for row in self.cells), edge]


class CutDiagramRenderer:
    """Renders packing results as SVG, ASCII art or a text summary.

    Attributes:
        scale: SVG pixels per sheet millimeter.
        piece_fill: Fill for pieces that carry no color of their own.
        piece_stroke: Piece outline color.
        waste_fill: Fill for offcut regions.
        text_color: Color of header and piece text.
        show_dimensions: Draw ``WxH`` inside pieces.
        show_labels: Draw piece labels inside pieces.
        show_offcuts: Shade offcut regions.
    """

    def __init__(
        self,
        scale: float = 0.2,
        piece_fill: str = "#CFFAFE",
        piece_stroke: str = "#0891B2",
        waste_fill: str = "#E5E7EB",
        text_color: str = "#164E63",
        show_dimensions: bool = True,
        show_labels: bool = True,
        show_offcuts: bool = True,
    ) -> None:
        self.scale = scale
        self.piece_fill = piece_fill
        self.piece_stroke = piece_stroke
        self.waste_fill = waste_fill
        self.text_color = text_color
        self.show_dimensions = show_dimensions
        self.show_labels = show_labels
        self.show_offcuts = show_offcuts

    # -- SVG ---------------------------------------------------------------

    def _sheet_size_px(self, sheet: SheetResult) -> tuple[float, float]:
        return sheet.width * self.scale, sheet.height * self.scale + HEADER_PX

    def render_svg(self, sheet: SheetResult, total_sheets: int = 1) -> str:
        """SVG document for one sheet."""
        width, height = self._sheet_size_px(sheet)
        return _document(width, height, self._sheet_elements(sheet, total_sheets))

    def render_all_svg(self, result: PackingResult) -> list[str]:
        """One SVG document per sheet, in sheet order."""
        return [self.render_svg(sheet, result.total_sheets) for sheet in result.sheets]

    def render_combined_svg(self, result: PackingResult) -> str:
        """Single SVG document with every sheet stacked top to bottom."""
        if not result.sheets:
            return _document(
                160, 50, [_element("text", "No sheets to display", x=10, y=30)]
            )

        body: list[str] = []
        y_offset = 0.0
        for sheet in result.sheets:
            body.append(f'<g transform="translate(0, {y_offset:g})">')
            body.extend(f"  {line}" for line in self._sheet_elements(sheet, result.total_sheets))
            body.append("</g>")
            y_offset += self._sheet_size_px(sheet)[1] + SHEET_GAP_PX

        width = max(self._sheet_size_px(sheet)[0] for sheet in result.sheets)
        return _document(width, y_offset, body)

    def _sheet_elements(self, sheet: SheetResult, total_sheets: int) -> list[str]:
        width, _ = self._sheet_size_px(sheet)
        header = (
            f"Sheet {sheet.sheet_index + 1} of {total_sheets} - "
            f"{sheet.width:g} x {sheet.height:g} mm - "
            f"{sheet.usage * 100:.1f}% used - {_plural(sheet.placed_count, 'piece')}"
        )

        elements = [
            _element("rect", x=0, y=0, width=width, height=HEADER_PX, fill="#E2E8F0"),
            _element(
                "text",
                header,
                x=10,
                y=HEADER_PX - 8,
                font_family="Arial, sans-serif",
                font_size=14,
                fill=self.text_color,
            ),
            _element(
                "rect",
                x=0,
                y=HEADER_PX,
                width=width,
                height=sheet.height * self.scale,
                fill="#F8FAFC",
                stroke="#94A3B8",
                stroke_width=2,
            ),
        ]

        if self.show_offcuts:
            for region in sheet.offcuts:
                x, y, w, h = self._to_px(region)
                elements.append(
                    _element("rect", x=x, y=y, width=w, height=h, fill=self.waste_fill)
                )

        for placement in sheet.placements:
            elements.extend(self._piece_elements(placement))
        return elements

    def _to_px(self, rect: Rect) -> tuple[float, float, float, float]:
        return (
            rect.x * self.scale,
            HEADER_PX + rect.y * self.scale,
            rect.width * self.scale,
            rect.height * self.scale,
        )

    def _piece_elements(self, placement: Placement) -> list[str]:
        x, y, w, h = self._to_px(placement.rect)
        elements = [
            _element(
                "rect",
                x=x,
                y=y,
                width=w,
                height=h,
                fill=placement.color or self.piece_fill,
                stroke=self.piece_stroke,
            )
        ]

        font_size = min(12, min(w, h) * 0.2)
        if font_size < MIN_FONT_PX:
            return elements

        lines: list[tuple[str, float]] = []
        if self.show_labels and placement.label:
            lines.append((placement.label, font_size))
        if self.show_dimensions:
            lines.append((dimension_label(placement), font_size * 0.8))

        # Center the text block vertically
        block = sum(size for _, size in lines)
        baseline = y + h / 2 - block / 2
        for text, size in lines:
            baseline += size
            elements.append(
                _element(
                    "text",
                    text,
                    x=x + w / 2,
                    y=baseline,
                    text_anchor="middle",
                    font_family="Arial, sans-serif",
                    font_size=size,
                    fill=self.text_color,
                )
            )
        return elements

    # -- Text --------------------------------------------------------------

    def render_ascii(
        self,
        sheet: SheetResult,
        width: int = 80,
        total_sheets: int = 1,
    ) -> str:
        """Terminal drawing of one sheet, ``width`` characters wide."""
        columns = width - 2
        # Terminal cells are about twice as tall as they are wide
        rows = max(10, int(columns * sheet.height / sheet.width * 0.5))
        canvas = _TextCanvas(columns, rows)
        sx = columns / sheet.width
        sy = rows / sheet.height

        for placement in sheet.placements:
            x1, y1, x2, y2 = canvas.box(
                placement.x * sx,
                placement.y * sy,
                placement.right_edge * sx,
                placement.bottom_edge * sy,
            )
            texts = [dimension_label(placement)]
            if placement.label:
                texts.insert(0, placement.label)
            for row, text in enumerate(texts, start=y1 + 1):
                if row >= y2:
                    break
                canvas.write(row, x1 + 1, text, x2 - x1 - 1)

        header = (
            f"Sheet {sheet.sheet_index + 1} of {total_sheets} - "
            f"{sheet.usage * 100:.1f}% used, {sheet.waste * 100:.1f}% waste"
        )
        return "\n".join([header, *canvas.framed()])

    def render_all_ascii(self, result: PackingResult, width: int = 80) -> str:
        """Terminal drawings of every sheet followed by a one-line total."""
        if not result.sheets:
            return "No sheets to display."

        blocks = [
            self.render_ascii(sheet, width, result.total_sheets) + "\n"
            for sheet in result.sheets
        ]
        blocks.append("=" * width)
        blocks.append(
            f"SUMMARY: {_plural(result.total_sheets, 'sheet')}, "
            f"{result.total_usage * 100:.1f}% overall usage"
        )
        return "\n".join(blocks)

    def render_summary(self, result: PackingResult) -> str:
        """Plain text report of sheet usage and rejected pieces."""
        lines = [
            "CUT OPTIMIZATION SUMMARY",
            "=" * 40,
            f"Total Sheets: {result.total_sheets}",
            f"Pieces Placed: {result.total_pieces_placed}",
            f"Overall Usage: {result.total_usage * 100:.1f}%",
        ]

        if result.sheets:
            lines += ["", "Per-Sheet Details:"]
            lines += [
                f"  Sheet {sheet.sheet_index + 1}: "
                f"{_plural(sheet.placed_count, 'piece')}, "
                f"{sheet.usage * 100:.1f}% used, "
                f"{sheet.waste * 100:.1f}% waste"
                for sheet in result.sheets
            ]

        if result.oversized:
            lines += [
                "",
                f"Ignored: {_plural(len(result.oversized), 'piece')} larger than the sheet",
            ]
            lines += [
                f"  {piece.display_name}: {piece.width:g} x {piece.height:g}"
                for piece in result.oversized
            ]

        if result.unplaced:
            lines += [
                "",
                f"Unplaced: {_plural(len(result.unplaced), 'piece')} "
                f"could not be placed ({result.status.value})",
            ]

        return "\n".join(lines)
