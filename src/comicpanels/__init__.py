"""comicpanels - comic page panel detection and reading order.

Segments a rasterized comic page into rectangular panels and orders them
for Western (left-to-right) or manga (right-to-left) reading.

Modules:
- panel: Panel geometry value type
- config: Detection options and presets
- detector: Connected-component panel detector
- reading_order: Row-aware reading order sorter
- cache / batch: Page result cache and parallel volume pre-analysis
"""

__version__ = "1.0.0"
__license__ = "MIT"

from .batch import detect_pages
from .cache import PanelCache, page_key
from .config import (
    MANGA,
    PRESETS,
    WESTERN,
    PanelDetectionOptions,
    ReadingDirection,
    get_preset,
)
from .detector import PanelDetector
from .image_utils import ImageDecodeError
from .panel import Panel
from .reading_order import ReadingOrderSorter, sort_reading_order
from .result import PanelDetectionResult

__all__ = [
    "Panel",
    "ReadingDirection",
    "PanelDetectionOptions",
    "WESTERN",
    "MANGA",
    "PRESETS",
    "get_preset",
    "PanelDetectionResult",
    "PanelDetector",
    "ReadingOrderSorter",
    "sort_reading_order",
    "PanelCache",
    "page_key",
    "detect_pages",
    "ImageDecodeError",
    "__version__",
]
