"""
Connector geometry.

Every non-leaf node gets a horizontal connector directly below it, reaching
from its own center across all of its children's centers. Connectors whose
spans would collide within a row are assigned increasing levels, giving the
staircase of offsets the vertical packer stacks from.
"""

from dataclasses import replace
from typing import Dict, List, Optional, Sequence

from .models import LayoutConfig, Row


class ConnectorPlanner:
    """
    Computes connector spans and levels for positioned rows.

    A span that starts before the current group's right edge plus
    ``line_padding`` goes one level below the previous span, so a run of
    colliding spans climbs 0, 1, 2, ... rather than alternating between two
    levels. Two spans in the same run therefore never share a level. The
    vertical packer uses the level only as an ordering and places every
    connector in free space, so lines never collide whatever the levels are.
    """

    def __init__(self, config: Optional[LayoutConfig] = None):
        self.config = config or LayoutConfig()

    def plan(self, rows: Sequence[Row]) -> List[Row]:
        """
        Set ``line_left``, ``line_right`` and ``line_y`` on non-leaf nodes.

        Args:
            rows: Rows with ``x`` assigned.

        Returns:
            New rows; leaves are returned unchanged.
        """
        planned: List[Row] = []
        for i, row in enumerate(rows):
            below = rows[i + 1] if i + 1 < len(rows) else ()
            row = self._spans(row, below)
            planned.append(self._levels(row))
        return planned

    def _spans(self, row: Row, below: Row) -> Row:
        half = self.config.line_width // 2
        centers: Dict[int, int] = {node.id: node.center for node in below}
        spanned = []
        for node in row:
            if node.leaf:
                spanned.append(node)
                continue
            points = [node.center] + [centers[c] for c in node.child_ids]
            spanned.append(
                replace(node, line_left=min(points) - half, line_right=max(points) + half)
            )
        return tuple(spanned)

    def _levels(self, row: Row) -> Row:
        padding = self.config.line_padding
        group_right = None
        level = 0
        leveled = []
        for node in row:
            if node.leaf:
                leveled.append(node)
                continue
            if group_right is not None and node.line_left < group_right + padding:
                level += 1
            else:
                level = 0
            group_right = (
                node.line_right if group_right is None else max(group_right, node.line_right)
            )
            leveled.append(replace(node, line_y=level))
        return tuple(leveled)


def plan_connectors(
    rows: Sequence[Row], config: Optional[LayoutConfig] = None
) -> List[Row]:
    """Convenience wrapper around ``ConnectorPlanner.plan``."""
    return ConnectorPlanner(config).plan(rows)
