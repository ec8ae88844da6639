"""Unit tests for the ASCII compositor."""

import pytest

from boxtree.models import Direction, Shape, ShapeKind
from boxtree.renderer import (
    ARROW_CHARS,
    BOX_CHARS,
    CAP_CHARS,
    AsciiCompositor,
    render_shapes,
    row_glyphs,
)
from boxtree.tracer import RenderTrace


class TestCharacterSets:
    """Tests for the glyph tables."""

    def test_box_chars(self):
        """Test box drawing characters."""
        assert BOX_CHARS["corner"] == "+"
        assert BOX_CHARS["horizontal"] == "-"
        assert BOX_CHARS["vertical"] == "|"

    def test_arrow_chars_cover_directions(self):
        """Test every direction has an arrow and a cap glyph."""
        for direction in Direction:
            assert direction in ARROW_CHARS
            assert direction in CAP_CHARS
        assert ARROW_CHARS[Direction.DOWN] == "V"


class TestRowGlyphs:
    """Tests for the characters a single shape contributes."""

    def test_box_rows(self):
        """Test border and body rows of a box."""
        shape = Shape(0, 0, 5, 3, text=(" A",))
        assert row_glyphs(shape, 0) == "+---+"
        assert row_glyphs(shape, 1) == "| A |"
        assert row_glyphs(shape, 2) == "+---+"

    def test_text_cropped_to_box(self):
        """Test text longer than the interior is cut."""
        shape = Shape(0, 0, 5, 3, text=(" abcdef",))
        assert row_glyphs(shape, 1) == "| ab|"

    def test_missing_text_rows_blank(self):
        """Test body rows without text are blank inside."""
        shape = Shape(0, 0, 5, 4, text=(" A",))
        assert row_glyphs(shape, 2) == "|   |"

    def test_horizontal_cap(self):
        """Test a left cap puts its glyph on the left end."""
        shape = Shape(0, 0, 4, 1, kind=ShapeKind.CAP, direction=Direction.LEFT)
        assert row_glyphs(shape, 0) == "----"

    def test_left_arrow(self):
        """Test a left arrow points from its left end."""
        shape = Shape(0, 0, 4, 1, kind=ShapeKind.ARROW, direction=Direction.LEFT)
        assert row_glyphs(shape, 0) == "<---"


class TestAsciiCompositor:
    """Tests for compositing overlapping shapes."""

    def test_empty(self):
        """Test no shapes renders nothing."""
        assert render_shapes([]) == ""

    def test_single_box(self):
        """Test a single box renders with a trailing newline per line."""
        assert render_shapes([Shape(0, 0, 5, 3, text=(" A",))]) == (
            "+---+\n| A |\n+---+\n"
        )

    def test_width_one_box(self):
        """Test a one column box degrades to a vertical line."""
        assert render_shapes([Shape(0, 0, 1, 3)]) == "+\n|\n+\n"

    def test_lines_padded_to_width(self):
        """Test every line is padded to the rightmost shape edge."""
        text = render_shapes([Shape(0, 0, 3, 1), Shape(0, 1, 5, 1)])
        assert text == "+-+  \n+---+\n"

    def test_leading_gap_is_spaces(self):
        """Test columns before the first shape are spaces."""
        assert render_shapes([Shape(2, 0, 3, 1)]) == "  +-+\n"

    def test_blank_rows_kept(self):
        """Test rows no shape covers are still emitted."""
        assert render_shapes([Shape(0, 2, 3, 1)]) == "   \n   \n+-+\n"

    @pytest.mark.parametrize(
        "direction,expected",
        [
            (Direction.RIGHT, "--->\n"),
            (Direction.LEFT, "<---\n"),
        ],
    )
    def test_horizontal_arrows(self, direction, expected):
        """Test horizontal arrows draw their head at the pointed end."""
        shape = Shape(0, 0, 4, 1, kind=ShapeKind.ARROW, direction=direction)
        assert render_shapes([shape]) == expected

    @pytest.mark.parametrize(
        "direction,expected",
        [
            (Direction.DOWN, "|\n|\nV\n"),
            (Direction.UP, "^\n|\n|\n"),
        ],
    )
    def test_vertical_arrows(self, direction, expected):
        """Test vertical arrows draw their head at the pointed end."""
        shape = Shape(0, 0, 1, 3, kind=ShapeKind.ARROW, direction=direction)
        assert render_shapes([shape]) == expected

    def test_next_shape_truncates(self):
        """Test a shape is cut where a non-enclosed shape starts."""
        assert render_shapes([Shape(0, 0, 5, 1), Shape(3, 0, 5, 1)]) == "+--+---+\n"

    def test_narrow_shape_crops_wider(self):
        """Test a wider shape at the same column is cropped on the left."""
        assert render_shapes([Shape(0, 0, 2, 1), Shape(0, 0, 5, 1)]) == "++--+\n"

    def test_input_order_irrelevant(self):
        """Test shapes are composited in position order."""
        shapes = [Shape(3, 0, 5, 1), Shape(0, 0, 5, 1)]
        assert render_shapes(shapes) == render_shapes(list(reversed(shapes)))

    def test_enclosed_shape_drawn_inside(self):
        """Test an enclosed shape is drawn and the outer one resumes after it."""
        outer = Shape(0, 0, 7, 3, text=(" abcde",))
        inner = Shape(3, 1, 1, 1, on_top=True)
        lines = render_shapes([outer, inner]).split("\n")
        assert lines[1] == "| a+cd|"

    def test_on_top_outer_cut_by_plain_inner(self):
        """Test an on-top shape is cut off by an enclosed shape that is not on top."""
        outer = Shape(0, 0, 7, 3, text=(" abcde",), on_top=True)
        inner = Shape(3, 1, 1, 1)
        lines = render_shapes([outer, inner]).split("\n")
        assert lines[1] == "| a+   "

    def test_on_top_outer_nests_on_top_inner(self):
        """Test an on-top shape still nests an enclosed on-top shape."""
        outer = Shape(0, 0, 7, 3, text=(" abcde",), on_top=True)
        inner = Shape(3, 1, 1, 1, on_top=True)
        lines = render_shapes([outer, inner]).split("\n")
        assert lines[1] == "| a+cd|"

    def test_cut_shape_leaves_next_pending(self):
        """Test the shape that cuts another is returned for drawing next."""
        outer = Shape(0, 0, 7, 3, text=(" abcde",), on_top=True)
        inner = Shape(3, 1, 1, 1)
        result = AsciiCompositor()._draw_shape(outer, [inner], 1, 0)
        assert result.drawn_text == "| a"
        assert result.next_cursor == 3
        assert result.remaining_shapes == [inner]

    def test_stem_crosses_connector(self):
        """Test a stem shows as a junction where it meets a connector."""
        line = Shape(0, 1, 7, 1)
        stem = Shape(3, 0, 1, 2, on_top=True)
        assert render_shapes([line, stem]) == "   +   \n+--+--+\n"

    def test_render_line_unpadded(self):
        """Test render_line stops at the last shape on that line."""
        shapes = [Shape(0, 0, 3, 1), Shape(0, 1, 5, 1)]
        assert AsciiCompositor().render_line(shapes, 0) == "+-+"


class TestCompositorTrace:
    """Tests for placement recording."""

    def test_no_trace_by_default(self):
        """Test the compositor does not trace unless asked."""
        assert AsciiCompositor().trace is None

    def test_placements_recorded(self):
        """Test every drawn run is recorded with its kind."""
        trace = RenderTrace()
        arrow = Shape(4, 0, 1, 1, kind=ShapeKind.ARROW, direction=Direction.DOWN)
        AsciiCompositor(trace=trace).render([Shape(0, 0, 3, 1), arrow])
        assert [(p.x, p.y, p.text, p.kind) for p in trace.placements] == [
            (0, 0, "+-+", "box"),
            (4, 0, "V", "arrow"),
        ]

    def test_split_runs_recorded_separately(self):
        """Test an outer shape interrupted by an inner one records two runs."""
        trace = RenderTrace()
        outer = Shape(0, 0, 7, 3, text=(" abcde",))
        inner = Shape(3, 1, 1, 1, on_top=True)
        AsciiCompositor(trace=trace).render_line([outer, inner], 1)
        assert [p.text for p in trace.placements] == ["| a", "+", "cd|"]
