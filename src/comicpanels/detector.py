"""Panel detection engine.

Heuristic comic panel segmentation with OpenCV:
- Luminance thresholding into a foreground mask
- 4-connected component labeling with exact pixel counts
- Area and aspect ratio filtering
- Margin expansion, clamping and reading order sorting

The detector holds no mutable state, so one instance can serve any number
of threads at once.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

import cv2
from numpy.typing import NDArray

from .config import PanelDetectionOptions
from .image_utils import (
    BytesLike,
    ImageDecodeError,
    binarize,
    decode_image,
    ensure_rgb_uint8,
    rgb_to_luminance,
)
from .panel import Panel
from .reading_order import ReadingOrderSorter
from .result import PanelDetectionResult

log = logging.getLogger("Panels")


@dataclass(frozen=True)
class Component:
    """A connected foreground region."""
    x: int
    y: int
    width: int
    height: int
    pixel_count: int    # Foreground pixels in the region, not the bbox area

    def to_panel(self) -> Panel:
        return Panel(self.x, self.y, self.width, self.height)


def find_components(mask: NDArray) -> List[Component]:
    """Label 4-connected foreground regions of a binary mask.

    Args:
        mask: uint8 mask, nonzero = foreground

    Returns:
        One Component per region, in label order
    """
    n_labels, _, stats, _ = cv2.connectedComponentsWithStats(mask, connectivity=4)
    components = []
    # Label 0 is the background
    for label in range(1, n_labels):
        x, y, w, h, area = (int(v) for v in stats[label, :5])
        components.append(Component(x, y, w, h, area))
    return components


class PanelDetector:
    """Comic panel detector based on connected components.

    Ink and artwork darker than the threshold form foreground regions; the
    white gutters between panels separate them.
    """

    def __init__(self, options: Optional[PanelDetectionOptions] = None):
        """Initialize detector with options.

        Args:
            options: Detection parameters. Uses defaults if None.
        """
        self.options = options or PanelDetectionOptions()

    def detect(self, image_bytes: BytesLike) -> PanelDetectionResult:
        """Detect panels in compressed page bytes (PNG, JPEG, ...).

        Never raises: decode errors give a failed result.
        """
        try:
            rgb = decode_image(image_bytes)
        except ImageDecodeError as e:
            log.warning(f"[Panels] {e}")
            return PanelDetectionResult.failed(str(e))
        except Exception as e:
            log.exception("[Panels] unexpected error while decoding page")
            return PanelDetectionResult.failed(f"Detection error: {e}")
        return self.detect_from_image(rgb)

    def detect_from_image(self, image) -> PanelDetectionResult:
        """Detect panels in a decoded raster.

        Args:
            image: Array-like of shape (H, W), (H, W, 3) RGB or (H, W, 4) RGBA.
                Float rasters in [0, 1] are scaled to 8-bit.

        Returns:
            Result with panels sorted by reading order. Malformed rasters
            give a failed result instead of raising.
        """
        try:
            rgb = ensure_rgb_uint8(image)
            h, w = rgb.shape[:2]
            self._log_params(w, h)

            mask = binarize(rgb_to_luminance(rgb), self.options.threshold, self.options.invert)
            components = find_components(mask)
            log.debug(f"[Panels] {len(components)} connected components")

            kept = self._filter_components(components, w, h)
            log.debug(f"[Panels] after filters -> {len(kept)} components")

            panels = self._materialize(kept, w, h)
            sorter = ReadingOrderSorter(self.options.reading_direction, self.options.row_threshold)
            panels = sorter.sort(panels)
            log.debug(f"[Panels] final result: {len(panels)} panels")

            return PanelDetectionResult.of(panels, w, h)
        except ValueError as e:
            log.warning(f"[Panels] malformed raster: {e}")
            return PanelDetectionResult.failed(f"Detection error: {e}")
        except Exception as e:
            log.exception("[Panels] detection failed")
            return PanelDetectionResult.failed(f"Detection error: {e}")

    def _log_params(self, w: int, h: int) -> None:
        o = self.options
        log.debug(
            f"[Panels] image={w}x{h} threshold={o.threshold} invert={o.invert} "
            f"area=[{o.min_panel_area_fraction}, {o.max_panel_area_fraction}] "
            f"aspect=[{o.min_aspect_ratio}, {o.max_aspect_ratio}] "
            f"margin={o.panel_margin} direction={o.reading_direction.value}"
        )

    def _filter_components(self, components: List[Component], w: int, h: int) -> List[Component]:
        """Drop noise specks, full-page blobs and thin strips."""
        o = self.options
        total = float(w * h)
        keep = []
        for comp in components:
            area_frac = comp.pixel_count / total
            if area_frac < o.min_panel_area_fraction:
                if o.debug:
                    log.debug(f"[filter] noise {comp} ({area_frac:.4f})")
                continue
            if area_frac > o.max_panel_area_fraction:
                if o.debug:
                    log.debug(f"[filter] full page {comp} ({area_frac:.4f})")
                continue
            aspect = comp.width / comp.height
            if aspect < o.min_aspect_ratio or aspect > o.max_aspect_ratio:
                if o.debug:
                    log.debug(f"[filter] aspect {comp} ({aspect:.2f})")
                continue
            keep.append(comp)
        return keep

    def _materialize(self, components: List[Component], w: int, h: int) -> List[Panel]:
        panels = []
        for comp in components:
            panel = comp.to_panel().expand(self.options.panel_margin).clamp(w, h)
            if panel.width > 0 and panel.height > 0:
                panels.append(panel)
            elif self.options.debug:
                log.debug(f"[filter] empty after margin {comp}")
        return panels
