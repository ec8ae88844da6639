"""
Shape emission for laid-out trees.

Converts finished rows into the flat shape list consumed by the compositor.
Stems overlap the border rows they join and are drawn on top, so their
``+`` ends show up as junctions on box borders and connectors.
"""

from typing import List, Optional, Sequence

from .models import Direction, LayoutConfig, Row, Shape, ShapeKind, TreeNode


class ShapeEmitter:
    """Turns positioned nodes into boxes, connectors and stems."""

    def __init__(self, config: Optional[LayoutConfig] = None):
        self.config = config or LayoutConfig()

    def emit(self, rows: Sequence[Row]) -> List[Shape]:
        shapes: List[Shape] = []
        for row in rows:
            for node in row:
                shapes.extend(self.node_shapes(node))
        return shapes

    def node_shapes(self, node: TreeNode) -> List[Shape]:
        """Shapes for a single node, box first."""
        shapes = [
            Shape(
                x=int(node.x),
                y=int(node.y),
                width=int(node.width),
                height=int(node.height),
                text=tuple(node.wrapped_text),
            )
        ]

        stem_x = int(node.center) - self.config.line_width // 2

        if node.parent_line_y is not None:
            top = int(node.parent_line_y)
            shapes.append(self._stem(stem_x, top, int(node.y)))
            if self.config.arrows:
                shapes.append(
                    Shape(
                        x=stem_x,
                        y=int(node.y),
                        width=self.config.line_width,
                        height=1,
                        kind=ShapeKind.ARROW,
                        direction=Direction.DOWN,
                        on_top=True,
                    )
                )

        if not node.leaf:
            line_ypos = int(node.line_ypos)
            shapes.append(
                Shape(
                    x=int(node.line_left),
                    y=line_ypos,
                    width=int(node.line_span),
                    height=self.config.line_width,
                )
            )
            shapes.append(self._stem(stem_x, int(node.bottom) - 1, line_ypos))

        return shapes

    def _stem(self, x: int, top: int, bottom: int) -> Shape:
        """Vertical stem covering rows ``top`` through ``bottom`` inclusive."""
        return Shape(
            x=x,
            y=top,
            width=self.config.line_width,
            height=bottom - top + 1,
            on_top=True,
        )


def emit_shapes(
    rows: Sequence[Row], config: Optional[LayoutConfig] = None
) -> List[Shape]:
    """Convenience wrapper around ``ShapeEmitter.emit``."""
    return ShapeEmitter(config).emit(rows)
