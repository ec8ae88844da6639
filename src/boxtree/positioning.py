"""
Horizontal position calculation for tree rows.

The widest row (the anchor) is laid out first, left to right from column
zero. Every other row is then positioned outward from it: rows above are
centered over their children, rows below are centered under their parents.
Positions never push a row wider than the anchor, so the anchor's width is
the width of the whole diagram.
"""

from dataclasses import replace
from typing import Dict, List, Optional, Sequence

from .models import LayoutConfig, Row, TreeNode


def row_width(row: Sequence[TreeNode], padding: int) -> int:
    """Total width of ``row`` with ``padding`` between neighbours."""
    if not row:
        return 0
    return sum(node.width for node in row) + padding * (len(row) - 1)


def find_anchor(rows: Sequence[Row], padding: int) -> int:
    """Index of the widest row; ties go to the first."""
    best = 0
    best_width = -1
    for i, row in enumerate(rows):
        width = row_width(row, padding)
        if width > best_width:
            best = i
            best_width = width
    return best


class RowSpacer:
    """
    Assigns the x coordinate of every node.

    Attributes:
        config: Layout parameters; ``node_padding`` is the gap between boxes.
        total_width: Width of the anchor row after ``space`` has run.
    """

    def __init__(self, config: Optional[LayoutConfig] = None):
        self.config = config or LayoutConfig()
        self.total_width = 0

    def space(self, rows: Sequence[Row]) -> List[Row]:
        """
        Position all rows.

        Args:
            rows: Rows from the row builder.

        Returns:
            New rows with ``x`` set on every node.
        """
        if not rows:
            return []

        padding = self.config.node_padding
        anchor = find_anchor(rows, padding)
        self.total_width = row_width(rows[anchor], padding)

        spaced: List[Optional[Row]] = [None] * len(rows)
        spaced[anchor] = self._pack_left(rows[anchor])

        for i in range(anchor - 1, -1, -1):
            spaced[i] = self._center_over_children(rows[i], spaced[i + 1])

        for i in range(anchor + 1, len(rows)):
            spaced[i] = self._center_under_parents(rows[i], spaced[i - 1])

        return spaced

    def _pack_left(self, row: Row) -> Row:
        cursor = 0
        placed = []
        for node in row:
            placed.append(replace(node, x=cursor))
            cursor += node.width + self.config.node_padding
        return tuple(placed)

    def _place(self, row: Row, ideals: Sequence[Optional[int]]) -> Row:
        """
        Place nodes at their ideal x, clamped to the cursor and the anchor width.

        A node without an ideal position goes at the cursor. The left clamp
        is applied before the right clamp.
        """
        padding = self.config.node_padding
        remaining = row_width(row, padding)
        cursor = 0
        placed = []
        for node, ideal in zip(row, ideals):
            x = cursor if ideal is None else ideal
            x = max(x, cursor)
            x = min(x, self.total_width - remaining)
            placed.append(replace(node, x=x))
            cursor = x + node.width + padding
            remaining -= node.width + padding
        return tuple(placed)

    def _center_over_children(self, row: Row, below: Row) -> Row:
        centers: Dict[int, int] = {node.id: node.center for node in below}
        ideals: List[Optional[int]] = []
        for node in row:
            child_centers = [centers[c] for c in node.child_ids if c in centers]
            if not child_centers:
                ideals.append(None)
                continue
            mid = (child_centers[0] + child_centers[-1]) // 2
            ideals.append(mid - node.width // 2)
        return self._place(row, ideals)

    def _center_under_parents(self, row: Row, above: Row) -> Row:
        padding = self.config.node_padding
        parents: Dict[int, TreeNode] = {node.id: node for node in above}
        widths: Dict[int, int] = {node.id: node.width for node in row}

        ideals: List[Optional[int]] = []
        for node in row:
            parent = parents.get(node.parent_id)
            if parent is None:
                ideals.append(None)
                continue
            siblings = parent.child_ids
            if siblings and node.id == siblings[0]:
                # Center the whole sibling group, not just this node
                group = [widths[s] for s in siblings if s in widths]
                group_width = sum(group) + padding * (len(group) - 1)
                ideals.append(parent.center - group_width // 2)
            else:
                ideals.append(parent.center - node.width // 2)
        return self._place(row, ideals)


def space_rows(
    rows: Sequence[Row], config: Optional[LayoutConfig] = None
) -> List[Row]:
    """Convenience wrapper around ``RowSpacer.space``."""
    return RowSpacer(config).space(rows)
