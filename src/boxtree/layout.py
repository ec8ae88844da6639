"""
Row building using networkx.

Uses networkx for:
- Graph representation of the normalized tree
- Breadth-first layering into rows

Each node is sized here: labels are wrapped at the configured threshold and
the box width and height follow from the wrapped text.
"""

from typing import List, Optional, Sequence, Tuple

import networkx as nx

from .graph import tree_to_digraph
from .models import LayoutConfig, Row, TreeNode

# Border plus one column of interior padding on each side
BOX_CHROME_WIDTH = 4
# Top and bottom border
BOX_CHROME_HEIGHT = 2


def wrap_text(text: str, threshold: int) -> Tuple[str, ...]:
    """
    Greedily wrap ``text`` into lines of at most ``threshold`` characters.

    Line breaks in ``text`` always start a new line, and any other whitespace
    character is shown as a space. Each piece then breaks at the last
    whitespace at or before the threshold; when the window has no whitespace
    the line is hard-broken at the threshold. Every returned line starts with
    a single space of left padding.

    >>> wrap_text("hello big world", 10)
    (' hello big', ' world')
    """
    lines: List[str] = []
    for piece in text.splitlines() or [""]:
        rest = "".join(" " if ch.isspace() else ch for ch in piece)
        while len(rest) > threshold:
            cut = -1
            for i in range(threshold, 0, -1):
                if rest[i] == " ":
                    cut = i
                    break
            if cut == -1:
                lines.append(rest[:threshold])
                rest = rest[threshold:]
            else:
                lines.append(rest[:cut])
                rest = rest[cut + 1 :]
        lines.append(rest)
    return tuple(" " + line for line in lines)


def box_size(text: str, wrapped: Sequence[str], threshold: int) -> Tuple[int, int]:
    """Return ``(width, height)`` of the box holding ``text``."""
    width = min(len(text), threshold) + BOX_CHROME_WIDTH
    height = len(wrapped) + BOX_CHROME_HEIGHT
    return width, height


class RowBuilder:
    """
    Flattens normalized trees into rows of sized nodes.

    Row 0 holds the roots, row k every node at depth k. Order within a row
    is the input's left-to-right order.
    """

    def __init__(self, config: Optional[LayoutConfig] = None):
        self.config = config or LayoutConfig()
        self.graph: Optional[nx.DiGraph] = None

    def build(self, roots: Sequence[TreeNode]) -> List[Row]:
        """
        Build rows for the given normalized roots.

        Args:
            roots: Root nodes from ``normalize_tree``.

        Returns:
            List of rows, top to bottom.
        """
        self.graph = tree_to_digraph(roots)
        threshold = self.config.wrap_threshold

        rows: List[Row] = []
        layers = nx.bfs_layers(self.graph, [root.id for root in roots])
        for layer in layers:
            row = []
            for node_id in layer:
                node: TreeNode = self.graph.nodes[node_id]["node"]
                parents = list(self.graph.predecessors(node_id))
                wrapped = wrap_text(node.text, threshold)
                width, height = box_size(node.text, wrapped, threshold)
                row.append(
                    TreeNode(
                        id=node.id,
                        text=node.text,
                        parent_id=parents[0] if parents else None,
                        child_ids=tuple(self.graph.successors(node_id)),
                        leaf=self.graph.out_degree(node_id) == 0,
                        wrapped_text=wrapped,
                        width=width,
                        height=height,
                    )
                )
            rows.append(tuple(row))

        return rows


def build_rows(
    roots: Sequence[TreeNode], config: Optional[LayoutConfig] = None
) -> List[Row]:
    """Convenience wrapper around ``RowBuilder.build``."""
    return RowBuilder(config).build(roots)
