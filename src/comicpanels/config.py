"""Configuration dataclasses for comic panel detection.

Options are frozen so a single instance can be shared between threads
and used as a cache key.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, replace
from enum import Enum
from typing import Any, Dict


class ReadingDirection(str, Enum):
    """Horizontal reading direction inside a row of panels."""

    LEFT_TO_RIGHT = "ltr"    # Western comics
    RIGHT_TO_LEFT = "rtl"    # Manga

    @property
    def is_rtl(self) -> bool:
        return self is ReadingDirection.RIGHT_TO_LEFT


@dataclass(frozen=True)
class PanelDetectionOptions:
    """Parameters for the panel detection algorithm.

    Area fractions are relative to the total image pixel count so that the
    same options behave alike at any render resolution.
    """

    # Binarization
    threshold: int = 240                  # Luminance below this is foreground (0-255)
    invert: bool = False                  # Swap foreground/background polarity

    # Component filters
    min_panel_area_fraction: float = 0.01   # Smaller components are noise
    max_panel_area_fraction: float = 0.95   # Larger components are the page itself
    min_aspect_ratio: float = 0.1         # Bounding box width / height lower bound
    max_aspect_ratio: float = 10.0        # Bounding box width / height upper bound

    # Output geometry
    panel_margin: int = 5                 # Pixels added around each bounding box

    # Reading order
    reading_direction: ReadingDirection = ReadingDirection.LEFT_TO_RIGHT
    row_threshold: float = 0.5            # Vertical overlap (vs shorter panel) for same row

    debug: bool = field(default=False, compare=False)    # Log rejected components; not part of equality

    def __post_init__(self) -> None:
        # Accept the enum's string value, e.g. from a deserialized dict
        object.__setattr__(self, "reading_direction", ReadingDirection(self.reading_direction))

        if not 0 <= self.threshold <= 255:
            raise ValueError(f"threshold must be in [0, 255], got {self.threshold}")
        for name in ("min_panel_area_fraction", "max_panel_area_fraction"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be in [0, 1], got {value}")
        if self.min_panel_area_fraction > self.max_panel_area_fraction:
            raise ValueError("min_panel_area_fraction exceeds max_panel_area_fraction")
        if self.min_aspect_ratio < 0 or self.min_aspect_ratio > self.max_aspect_ratio:
            raise ValueError(
                f"invalid aspect ratio range [{self.min_aspect_ratio}, {self.max_aspect_ratio}]"
            )
        if self.row_threshold < 0:
            raise ValueError(f"row_threshold must be >= 0, got {self.row_threshold}")

    def replace(self, **changes: Any) -> "PanelDetectionOptions":
        """Return a copy with the given fields changed."""
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        data = asdict(self)
        data["reading_direction"] = self.reading_direction.value
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PanelDetectionOptions":
        """Create from dictionary, ignoring unknown keys."""
        return cls(**{k: v for k, v in data.items() if k in cls.__dataclass_fields__})


# Preset configurations for different comic styles
WESTERN = PanelDetectionOptions(reading_direction=ReadingDirection.LEFT_TO_RIGHT)
MANGA = PanelDetectionOptions(reading_direction=ReadingDirection.RIGHT_TO_LEFT)

PRESETS: Dict[str, PanelDetectionOptions] = {
    "western": WESTERN,
    "manga": MANGA,
}


def get_preset(name: str) -> PanelDetectionOptions:
    """Look up a preset by name (case-insensitive).

    Raises:
        KeyError: If no preset has that name
    """
    key = name.strip().lower()
    if key not in PRESETS:
        raise KeyError(f"Unknown preset {name!r}; available: {', '.join(sorted(PRESETS))}")
    return PRESETS[key]
