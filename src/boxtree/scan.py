"""
Scan-line height profile used for vertical packing.

A ``Scan`` is a step function over columns: each step ``(x, height)`` says
that from column ``x`` up to the next step, the lowest unoccupied row is
``height``. The last step extends to the right forever.
"""

from bisect import bisect_right
from typing import List, Tuple


class Scan:
    """
    Run-length encoded height profile.

    Example:
        >>> scan = Scan()
        >>> scan.add(2, 5, 3)
        >>> scan.steps
        [(0, 0), (2, 5), (5, 0)]
        >>> scan.lowest_free_y(0, 3)
        5
    """

    def __init__(self, floor: int = 0):
        self._xs: List[int] = [0]
        self._heights: List[int] = [floor]

    @property
    def steps(self) -> List[Tuple[int, int]]:
        """The ``(x_boundary, height)`` pairs, strictly increasing in x."""
        return list(zip(self._xs, self._heights))

    def _index_at(self, x: int) -> int:
        # Columns left of the first boundary belong to the first step
        return max(bisect_right(self._xs, x) - 1, 0)

    def height_at(self, x: int) -> int:
        """Lowest free row at column ``x``."""
        return self._heights[self._index_at(x)]

    def lowest_free_y(self, x: int, width: int) -> int:
        """
        Lowest row at which a shape spanning ``[x, x + width)`` fits.

        This is the maximum height anywhere in the span.
        """
        i = self._index_at(x)
        lowest = self._heights[i]
        end = x + width
        i += 1
        while i < len(self._xs) and self._xs[i] < end:
            lowest = max(lowest, self._heights[i])
            i += 1
        return lowest

    def add(self, x: int, y: int, width: int) -> None:
        """
        Set the height to ``y`` over ``[x, x + width)``.

        Steps left of ``x`` are untouched; from ``x + width`` on the profile
        keeps the height it had before.
        """
        if width <= 0:
            return
        end = x + width
        resume = self.height_at(end)

        xs: List[int] = []
        heights: List[int] = []
        for step_x, height in zip(self._xs, self._heights):
            if step_x < x:
                xs.append(step_x)
                heights.append(height)
        xs.append(x)
        heights.append(y)
        xs.append(end)
        heights.append(resume)
        for step_x, height in zip(self._xs, self._heights):
            if step_x > end:
                xs.append(step_x)
                heights.append(height)

        # Drop breakpoints that do not change the height
        self._xs = [xs[0]]
        self._heights = [heights[0]]
        for step_x, height in zip(xs[1:], heights[1:]):
            if height != self._heights[-1]:
                self._xs.append(step_x)
                self._heights.append(height)

    def __repr__(self) -> str:
        return f"Scan({self.steps!r})"
