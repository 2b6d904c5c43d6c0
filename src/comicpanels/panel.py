"""Panel geometry primitive.

A panel is an immutable axis-aligned rectangle in pixel space with a
reading-order index. Every transformation returns a new instance.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class Panel:
    """A single rectangular comic frame.

    Coordinates are integer pixels with the origin at the image top-left.
    The rectangle covers columns ``[x, x + width)`` and rows ``[y, y + height)``.
    """

    x: int
    y: int
    width: int
    height: int
    order: int = 0    # Reading sequence index, reassigned by the sorter

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    @property
    def center_x(self) -> float:
        return self.x + self.width / 2

    @property
    def center_y(self) -> float:
        return self.y + self.height / 2

    @property
    def area(self) -> int:
        return self.width * self.height

    @property
    def aspect_ratio(self) -> Optional[float]:
        """Width over height, or None for a zero-height panel."""
        if self.height == 0:
            return None
        return self.width / self.height

    def contains_point(self, px: int, py: int) -> bool:
        """Check whether a pixel lies inside the panel.

        The right and bottom edges are exclusive.
        """
        return self.x <= px < self.right and self.y <= py < self.bottom

    def overlaps(self, other: Panel) -> bool:
        """Check for a strictly positive overlap on both axes.

        Panels that only share an edge do not overlap.
        """
        return (
            min(self.right, other.right) > max(self.x, other.x)
            and min(self.bottom, other.bottom) > max(self.y, other.y)
        )

    def intersection(self, other: Panel) -> Optional[Panel]:
        """Return the overlapping sub-rectangle, or None if there is none."""
        if not self.overlaps(other):
            return None
        x0 = max(self.x, other.x)
        y0 = max(self.y, other.y)
        x1 = min(self.right, other.right)
        y1 = min(self.bottom, other.bottom)
        return Panel(x0, y0, x1 - x0, y1 - y0)

    def expand(self, margin: int) -> Panel:
        """Grow the panel by ``margin`` pixels on every side.

        No clamping is done here; the result may have negative coordinates.
        """
        return replace(
            self,
            x=self.x - margin,
            y=self.y - margin,
            width=self.width + 2 * margin,
            height=self.height + 2 * margin,
        )

    def clamp(self, max_width: int, max_height: int) -> Panel:
        """Clip the panel to the ``max_width`` x ``max_height`` canvas.

        Args:
            max_width: Canvas width in pixels
            max_height: Canvas height in pixels

        Returns:
            A panel fully inside the canvas. A panel lying entirely outside
            the canvas collapses to zero width and/or height.
        """
        x0 = min(max(self.x, 0), max_width)
        y0 = min(max(self.y, 0), max_height)
        x1 = min(max(self.right, 0), max_width)
        y1 = min(max(self.bottom, 0), max_height)
        return replace(self, x=x0, y=y0, width=max(0, x1 - x0), height=max(0, y1 - y0))

    def with_order(self, order: int) -> Panel:
        return replace(self, order=order)

    def to_xyxy(self) -> Tuple[int, int, int, int]:
        """Return ``(x1, y1, x2, y2)`` corner coordinates."""
        return (self.x, self.y, self.right, self.bottom)

    def to_dict(self) -> Dict[str, int]:
        """Convert to dictionary for serialization."""
        return {
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "order": self.order,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Panel:
        """Create from dictionary."""
        return cls(
            x=int(data["x"]),
            y=int(data["y"]),
            width=int(data["width"]),
            height=int(data["height"]),
            order=int(data.get("order", 0)),
        )
