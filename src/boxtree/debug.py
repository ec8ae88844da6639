"""
Debug utilities for boxtree.

Key Components:
- visual_diff: Compare two ASCII diagrams line by line
- ShapeInspector: Query a shape list (bounds, hit testing, overlaps)

Usage:
    >>> from boxtree.debug import ShapeInspector, visual_diff
    >>> shapes = TreeDiagramGenerator().layout([("A", ("B",))])
    >>> ShapeInspector(shapes).overlapping_boxes()
    []
"""

from itertools import combinations
from typing import List, Optional, Sequence, Tuple

from .models import Shape


def visual_diff(expected: str, actual: str, context_lines: int = 2) -> str:
    """
    Show where two ASCII diagrams differ.

    Differing lines are printed as an ``E`` / ``A`` pair with a caret marker
    under the differing columns; up to ``context_lines`` matching lines are
    shown around each difference.

    Args:
        expected: The expected ASCII output
        actual: The actual ASCII output
        context_lines: Number of matching lines to show around differences

    Returns:
        A formatted report
    """
    exp_lines = expected.split("\n")
    act_lines = actual.split("\n")
    total = max(len(exp_lines), len(act_lines))

    def line_at(lines: List[str], i: int) -> str:
        return lines[i] if i < len(lines) else ""

    differing = [
        i for i in range(total) if line_at(exp_lines, i) != line_at(act_lines, i)
    ]

    output = ["=" * 60, "VISUAL DIFF", "=" * 60]
    if not differing:
        output.append("No differences found.")
        return "\n".join(output)

    output.append(f"Found {len(differing)} differing line(s)")
    output.append("")

    shown = set()
    for i in differing:
        shown.update(range(max(0, i - context_lines), min(total, i + context_lines + 1)))

    previous = -2
    for i in sorted(shown):
        if i > previous + 1:
            output.append("...")
        exp_line = line_at(exp_lines, i)
        act_line = line_at(act_lines, i)
        if exp_line == act_line:
            output.append(f"{i:3d}:   {act_line}")
        else:
            output.append(f"{i:3d}: E |{exp_line}|")
            output.append(f"     A |{act_line}|")
            width = max(len(exp_line), len(act_line))
            columns = [
                j
                for j in range(width)
                if exp_line[j : j + 1] != act_line[j : j + 1]
            ]
            marker = "".join("^" if j in columns else " " for j in range(width))
            output.append(f"        {marker}".rstrip())
            output.append(
                f"     Diff at col(s): {columns[:5]}"
                f"{'...' if len(columns) > 5 else ''}"
            )
        previous = i

    return "\n".join(output)


class ShapeInspector:
    """
    Utilities for inspecting a shape list.

    Boxes are the shapes that carry text; connectors and stems carry none.
    """

    def __init__(self, shapes: Sequence[Shape]):
        self._shapes = list(shapes)

    @property
    def boxes(self) -> List[Shape]:
        return [s for s in self._shapes if s.text]

    @property
    def lines(self) -> List[Shape]:
        return [s for s in self._shapes if not s.text]

    def bounding_box(self) -> Optional[Tuple[int, int, int, int]]:
        """Return ``(x, y, right, bottom)`` covering every shape."""
        if not self._shapes:
            return None
        return (
            min(s.x for s in self._shapes),
            min(s.y for s in self._shapes),
            max(s.right for s in self._shapes),
            max(s.bottom for s in self._shapes),
        )

    def shapes_at(self, x: int, y: int) -> List[Shape]:
        """All shapes covering the cell ``(x, y)``."""
        return [
            s for s in self._shapes if s.x <= x < s.right and s.spans_row(y)
        ]

    def box_with_text(self, label: str) -> Optional[Shape]:
        """First box whose wrapped text contains ``label``."""
        for box in self.boxes:
            if label in " ".join(line.strip() for line in box.text):
                return box
        return None

    def overlapping_boxes(self) -> List[Tuple[Shape, Shape]]:
        """Every pair of boxes sharing at least one cell."""
        return [(a, b) for a, b in combinations(self.boxes, 2) if a.intersects(b)]
