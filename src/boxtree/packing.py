"""
Vertical placement of boxes and connectors.

The packer walks the rows top to bottom with one ``Scan`` shared by the
whole tree. Each row's boxes drop to the lowest free row under their span,
then the row's connectors do the same in level order, so later rows settle
into whatever vertical space earlier rows left unused.

With packing disabled, rows are stacked at fixed offsets instead and
connectors sit at their level below the tallest box of their row.
"""

from dataclasses import replace
from typing import Dict, List, Optional, Sequence

from .models import LayoutConfig, Row
from .scan import Scan


class VerticalPacker:
    """Assigns ``y`` and ``line_ypos`` to every node."""

    def __init__(self, config: Optional[LayoutConfig] = None):
        self.config = config or LayoutConfig()

    def pack(self, rows: Sequence[Row]) -> List[Row]:
        """
        Place rows, packed or stacked depending on ``config.pack``.

        Args:
            rows: Rows with connector spans and levels planned.

        Returns:
            New rows with vertical positions and ``parent_line_y`` set.
        """
        if self.config.pack:
            placed = self._pack(rows)
        else:
            placed = self._stack(rows)
        return propagate_parent_lines(placed)

    def _pack(self, rows: Sequence[Row]) -> List[Row]:
        line_width = self.config.line_width
        padding = self.config.line_padding
        scan = Scan()

        packed: List[Row] = []
        for row in rows:
            boxes = []
            for node in row:
                y = scan.lowest_free_y(node.x, node.width)
                scan.add(node.x, y + node.height + padding, node.width)
                boxes.append(replace(node, y=y))

            line_ypos: Dict[int, int] = {}
            connected = [node for node in boxes if not node.leaf]
            for node in sorted(connected, key=lambda n: n.line_y):
                ypos = scan.lowest_free_y(node.line_left, node.line_span)
                scan.add(node.line_left, ypos + line_width + padding, node.line_span)
                line_ypos[node.id] = ypos

            packed.append(
                tuple(
                    node if node.leaf else replace(node, line_ypos=line_ypos[node.id])
                    for node in boxes
                )
            )
        return packed

    def _stack(self, rows: Sequence[Row]) -> List[Row]:
        line_width = self.config.line_width
        padding = self.config.line_padding
        step = line_width + padding

        stacked: List[Row] = []
        top = 0
        for row in rows:
            bottom = top + max((node.height for node in row), default=0)
            levels = [node.line_y for node in row if not node.leaf]
            lines_base = bottom + padding

            stacked.append(
                tuple(
                    replace(node, y=top)
                    if node.leaf
                    else replace(node, y=top, line_ypos=lines_base + node.line_y * step)
                    for node in row
                )
            )

            needed = padding + (max(levels, default=-1) + 1) * step
            top = bottom + max(self.config.row_padding, needed)
        return stacked


def propagate_parent_lines(rows: Sequence[Row]) -> List[Row]:
    """Copy each parent's ``line_ypos`` onto its children as ``parent_line_y``."""
    propagated: List[Row] = []
    line_ypos: Dict[int, int] = {}
    for row in rows:
        propagated.append(
            tuple(replace(node, parent_line_y=line_ypos.get(node.parent_id)) for node in row)
        )
        for node in row:
            if not node.leaf:
                line_ypos[node.id] = node.line_ypos
    return propagated


def pack_rows(
    rows: Sequence[Row], config: Optional[LayoutConfig] = None
) -> List[Row]:
    """Convenience wrapper around ``VerticalPacker.pack``."""
    return VerticalPacker(config).pack(rows)
