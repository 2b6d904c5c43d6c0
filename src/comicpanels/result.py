"""Outcome of a single page detection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence, Tuple

from .panel import Panel


@dataclass(frozen=True)
class PanelDetectionResult:
    """Panels found on one page, in reading order.

    A failed detection and a page without panels both have an empty panel
    list; callers tell them apart with ``success``.
    """

    panels: Tuple[Panel, ...] = ()
    image_width: int = 0
    image_height: int = 0
    success: bool = True
    error: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "panels", tuple(self.panels))
        if self.success and self.error is not None:
            raise ValueError("a successful result cannot carry an error")
        if not self.success and not self.error:
            raise ValueError("a failed result needs an error message")

    @classmethod
    def failed(cls, error: str) -> "PanelDetectionResult":
        return cls(panels=(), image_width=0, image_height=0, success=False, error=error)

    @classmethod
    def of(cls, panels: Sequence[Panel], image_width: int, image_height: int) -> "PanelDetectionResult":
        """Build a successful result."""
        return cls(panels=tuple(panels), image_width=image_width, image_height=image_height)

    @property
    def panel_count(self) -> int:
        return len(self.panels)

    @property
    def is_full_page(self) -> bool:
        """True when the page should be shown whole, without panel navigation."""
        return not self.panels

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "panels": [p.to_dict() for p in self.panels],
            "image_width": self.image_width,
            "image_height": self.image_height,
            "success": self.success,
            "error": self.error,
        }
