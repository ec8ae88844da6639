"""
ASCII compositor.

Renders an arbitrary list of possibly overlapping shapes into text, one
output line at a time. The compositor knows nothing about trees: it only
sees rectangles with a kind, optional text, a direction and an ``on_top``
flag.

Overlap rule: on each line, shapes are painted left to right. A shape is cut
off where the next shape begins. The exception is a next shape enclosed in
it, when either the outer shape is not on top or the enclosed one is: that
shape is drawn inside the outer one, which then resumes after it. An on-top
shape is still cut off by an enclosed shape that is not on top.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence

from .models import Direction, Shape, ShapeKind
from .tracer import RenderTrace

BOX_CHARS = {
    "corner": "+",
    "horizontal": "-",
    "vertical": "|",
}

ARROW_CHARS = {
    Direction.UP: "^",
    Direction.DOWN: "V",
    Direction.LEFT: "<",
    Direction.RIGHT: ">",
}

CAP_CHARS = {
    Direction.UP: "|",
    Direction.DOWN: "|",
    Direction.LEFT: "-",
    Direction.RIGHT: "-",
}


@dataclass
class DrawResult:
    """Outcome of drawing one shape on one line."""

    next_cursor: int
    remaining_shapes: List[Shape]
    drawn_text: str


def _edge_glyphs(shape: Shape, top: bool) -> str:
    """Characters for the top or bottom border row of ``shape``."""
    width = shape.width
    fill = BOX_CHARS["horizontal"]

    if shape.kind is ShapeKind.BOX or shape.direction is None:
        left = right = BOX_CHARS["corner"]
    else:
        glyphs = ARROW_CHARS if shape.kind is ShapeKind.ARROW else CAP_CHARS
        glyph = glyphs[shape.direction]
        if shape.direction.is_vertical:
            pointed = shape.height == 1 or (shape.direction is Direction.UP) == top
            left = right = glyph if pointed else BOX_CHARS["vertical"]
        else:
            left = glyph if shape.direction is Direction.LEFT else fill
            right = glyph if shape.direction is Direction.RIGHT else fill

    if width == 1:
        # A single cell shows whichever end carries a glyph
        return right if shape.direction is Direction.RIGHT else left
    return left + fill * (width - 2) + right


def _body_glyphs(shape: Shape, row: int) -> str:
    """Characters for an interior row of ``shape``."""
    side = BOX_CHARS["vertical"]
    if shape.width == 1:
        return side
    index = row - shape.y - 1
    text = shape.text[index] if 0 <= index < len(shape.text) else ""
    inner = shape.width - 2
    return side + text.ljust(inner)[:inner] + side


def row_glyphs(shape: Shape, row: int) -> str:
    """
    The full-width string ``shape`` contributes to line ``row``.

    >>> row_glyphs(Shape(0, 0, 5, 3, text=(" A",)), 1)
    '| A |'
    """
    if row == shape.y:
        return _edge_glyphs(shape, top=True)
    if row == shape.bottom - 1:
        return _edge_glyphs(shape, top=False)
    return _body_glyphs(shape, row)


def _sort_key(shape: Shape):
    return (shape.x, shape.width, -shape.height)


class AsciiCompositor:
    """
    Composites shapes into monospace text.

    Attributes:
        trace: Optional trace that records every drawn run of characters.
    """

    def __init__(self, trace: Optional[RenderTrace] = None):
        self.trace = trace

    def render(self, shapes: Sequence[Shape]) -> str:
        """
        Render ``shapes`` to text.

        Every line from 0 to the lowest shape bottom is produced, padded to
        the rightmost shape edge, and followed by a newline.
        """
        if not shapes:
            return ""
        width = max(shape.right for shape in shapes)
        height = max(shape.bottom for shape in shapes)
        lines = [self.render_line(shapes, row).ljust(width) for row in range(height)]
        return "".join(line + "\n" for line in lines)

    def render_line(self, shapes: Sequence[Shape], row: int) -> str:
        """Render a single line of the diagram, without padding."""
        pending = sorted((s for s in shapes if s.spans_row(row)), key=_sort_key)
        cursor = 0
        parts: List[str] = []
        while pending:
            result = self._draw_shape(pending[0], pending[1:], row, cursor)
            parts.append(result.drawn_text)
            cursor = result.next_cursor
            pending = result.remaining_shapes
        return "".join(parts)

    def _draw_shape(
        self, shape: Shape, rest: List[Shape], row: int, cursor: int
    ) -> DrawResult:
        """
        Draw ``shape`` from ``cursor`` onward, handling the shapes after it.

        Enclosed shapes are drawn in place; the first shape that cannot be
        nested truncates ``shape`` and is left in ``remaining_shapes``.
        """
        right = shape.right
        drawn: List[str] = []
        if shape.x > cursor:
            drawn.append(" " * (shape.x - cursor))
            cursor = shape.x
        glyphs = row_glyphs(shape, row)

        while cursor < right:
            # Wider shapes starting no further right get cropped once this one is done
            index = 0
            while (
                index < len(rest)
                and rest[index].x <= shape.x
                and rest[index].right > right
            ):
                index += 1

            nested: Optional[Shape] = None
            stop = right
            if index < len(rest) and rest[index].x < right:
                following = rest[index]
                enclosed = following.right <= right
                if enclosed and (not shape.on_top or following.on_top):
                    nested = following
                stop = following.x

            if stop > cursor:
                segment = glyphs[cursor - shape.x : stop - shape.x]
                self._record(row, cursor, segment, shape)
                drawn.append(segment)
                cursor = stop

            if nested is None:
                break
            inner = self._draw_shape(
                nested, rest[:index] + rest[index + 1 :], row, cursor
            )
            drawn.append(inner.drawn_text)
            cursor = inner.next_cursor
            rest = inner.remaining_shapes

        return DrawResult(
            next_cursor=cursor, remaining_shapes=rest, drawn_text="".join(drawn)
        )

    def _record(self, row: int, x: int, text: str, shape: Shape) -> None:
        if self.trace is not None and text:
            self.trace.add_placement(x, row, text, shape.kind.value, repr(shape))


def render_shapes(shapes: Sequence[Shape]) -> str:
    """Render ``shapes`` with a default compositor."""
    return AsciiCompositor().render(shapes)
