"""Row-aware reading order for comic panels."""

from __future__ import annotations

from typing import Iterable, List, Union

from .config import ReadingDirection
from .panel import Panel


class ReadingOrderSorter:
    """Sort panels row by row, top to bottom.

    Panels are grouped into rows by vertical overlap, rows are read top to
    bottom and panels inside a row follow the reading direction.
    """

    def __init__(
        self,
        direction: Union[ReadingDirection, str] = ReadingDirection.LEFT_TO_RIGHT,
        row_threshold: float = 0.5,
    ):
        """Initialize sorter.

        Args:
            direction: Horizontal reading direction inside a row
            row_threshold: Minimum vertical overlap, as a fraction of the
                shorter panel's height, for two panels to share a row
        """
        self.direction = ReadingDirection(direction)
        self.row_threshold = row_threshold

    def sort(self, panels: Iterable[Panel]) -> List[Panel]:
        """Return a new list of panels with ``order`` set to 0..n-1."""
        panels = list(panels)
        if not panels:
            return []
        if len(panels) == 1:
            return [panels[0].with_order(0)]

        rows = self._group_rows(sorted(panels, key=lambda p: p.y))
        rows.sort(key=lambda row: min(p.y for p in row))

        result: List[Panel] = []
        for row in rows:
            row_sorted = sorted(row, key=lambda p: p.x, reverse=self.direction.is_rtl)
            for panel in row_sorted:
                result.append(panel.with_order(len(result)))
        return result

    def _group_rows(self, by_y: List[Panel]) -> List[List[Panel]]:
        # Each row is matched against its first (topmost) panel only, not
        # against every member, so grouping is not transitive.
        used = [False] * len(by_y)
        rows: List[List[Panel]] = []
        for i, anchor in enumerate(by_y):
            if used[i]:
                continue
            used[i] = True
            row = [anchor]
            for j in range(i + 1, len(by_y)):
                if not used[j] and self.same_row(anchor, by_y[j]):
                    used[j] = True
                    row.append(by_y[j])
            rows.append(row)
        return rows

    def same_row(self, a: Panel, b: Panel) -> bool:
        """Check whether two panels overlap vertically enough to share a row."""
        overlap = min(a.bottom, b.bottom) - max(a.y, b.y)
        if overlap <= 0:
            return False
        return overlap >= self.row_threshold * min(a.height, b.height)


def sort_reading_order(
    panels: Iterable[Panel],
    direction: Union[ReadingDirection, str] = ReadingDirection.LEFT_TO_RIGHT,
    row_threshold: float = 0.5,
) -> List[Panel]:
    """Shortcut for ``ReadingOrderSorter(direction, row_threshold).sort(panels)``."""
    return ReadingOrderSorter(direction, row_threshold).sort(panels)
