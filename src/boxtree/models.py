"""
Data models for tree diagram generation.

This module contains the immutable records that flow through the layout
pipeline. Every stage derives new records from the previous stage's output
with ``dataclasses.replace`` instead of mutating them, so a row list handed
to one stage is never changed behind the back of another.

Classes:
    Direction: Direction an arrow or line cap points.
    ShapeKind: Kind of renderable primitive.
    Shape: A renderable rectangle with optional text.
    Symbol: A symbolic label token.
    TreeNode: One tree node during layout.
    LayoutConfig: Tunable layout parameters.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple


class Direction(Enum):
    """Direction used to pick arrow and line cap glyphs."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def is_vertical(self) -> bool:
        return self in (Direction.UP, Direction.DOWN)


class ShapeKind(Enum):
    """Kind of a renderable shape."""

    BOX = "box"
    ARROW = "arrow"
    CAP = "cap"


@dataclass(frozen=True)
class Shape:
    """
    A renderable primitive.

    Coordinates are character cells; ``y`` grows downward and ``(x, y)`` is
    the top-left corner.

    Attributes:
        x: Left column.
        y: Top row.
        width: Width in columns (at least 1).
        height: Height in rows (at least 1).
        kind: Box, arrow glyph or line cap.
        text: Wrapped text, one string per body row.
        direction: Glyph direction for arrows and caps.
        on_top: Whether the shape may be drawn inside a shape enclosing it.
    """

    x: int
    y: int
    width: int
    height: int
    kind: ShapeKind = ShapeKind.BOX
    text: Tuple[str, ...] = ()
    direction: Optional[Direction] = None
    on_top: bool = False

    @property
    def right(self) -> int:
        """Column just past the right edge."""
        return self.x + self.width

    @property
    def bottom(self) -> int:
        """Row just past the bottom edge."""
        return self.y + self.height

    def spans_row(self, row: int) -> bool:
        return self.y <= row < self.bottom

    def intersects(self, other: "Shape") -> bool:
        """Whether the two rectangles share at least one cell."""
        return (
            self.x < other.right
            and other.x < self.right
            and self.y < other.bottom
            and other.y < self.bottom
        )


class Symbol(str):
    """
    A symbolic label token.

    Symbols are displayed with dashes replaced by spaces, so
    ``Symbol("load-config")`` shows up as ``load config``.
    """

    def display(self) -> str:
        return self.replace("-", " ")

    def __repr__(self) -> str:
        return f"Symbol({str.__repr__(self)})"


@dataclass(frozen=True)
class TreeNode:
    """
    One node of the tree during layout.

    Fields are filled in incrementally by the pipeline stages: the normalizer
    sets ``id``, ``text`` and ``children``; the row builder adds parent/child
    links, wrapped text and size; the spacer sets ``x``; connector geometry
    sets the ``line_*`` span and level; the packer sets ``y`` and
    ``line_ypos``; propagation sets ``parent_line_y``.
    """

    id: int
    text: str = ""
    children: Tuple["TreeNode", ...] = ()
    parent_id: Optional[int] = None
    child_ids: Tuple[int, ...] = ()
    leaf: bool = True
    wrapped_text: Tuple[str, ...] = ()
    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0

    # Connector fields, only set for non-leaf nodes
    line_left: Optional[int] = None
    line_right: Optional[int] = None
    line_y: Optional[int] = None
    line_ypos: Optional[int] = None

    parent_line_y: Optional[int] = None

    @property
    def center(self) -> int:
        """Column where this node's stems attach."""
        return self.x + self.width // 2

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    @property
    def line_span(self) -> int:
        """Width of the horizontal connector below this node."""
        if self.line_left is None or self.line_right is None:
            return 0
        return self.line_right - self.line_left + 1


Row = Tuple[TreeNode, ...]


@dataclass(frozen=True)
class LayoutConfig:
    """
    Tunable layout parameters.

    Attributes:
        wrap_threshold: Characters of label text per box line before wrapping.
        node_padding: Horizontal space between neighbouring boxes.
        row_padding: Vertical space between rows when packing is disabled.
        line_width: Thickness of connector lines.
        line_padding: Space kept between a connector and its neighbours.
        pack: Whether to pack boxes and connectors upward into free space.
        arrows: Whether to draw an arrow where a connector enters a child.
    """

    wrap_threshold: int = 10
    node_padding: int = 1
    row_padding: int = 8
    line_width: int = 1
    line_padding: int = 1
    pack: bool = True
    arrows: bool = False

    def __post_init__(self):
        if self.wrap_threshold < 1:
            raise ValueError("wrap_threshold must be at least 1")
        if self.line_width < 1:
            raise ValueError("line_width must be at least 1")
        for name in ("node_padding", "row_padding", "line_padding"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must not be negative")


@dataclass
class LayoutResult:
    """Result of a full layout run."""

    rows: List[Row] = field(default_factory=list)
    shapes: List[Shape] = field(default_factory=list)
    total_width: int = 0
