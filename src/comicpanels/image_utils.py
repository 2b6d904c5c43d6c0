"""Image conversion utilities for panel detection.

Decoding of compressed page bytes, raster normalization and binarization.
Rasters are NumPy arrays in RGB channel order.
"""

from __future__ import annotations

from typing import Union

import cv2
import numpy as np
from numpy.typing import NDArray

BytesLike = Union[bytes, bytearray, memoryview]


class ImageDecodeError(ValueError):
    """Raised when page bytes cannot be decoded into a raster."""


def decode_image(data: BytesLike) -> NDArray:
    """Decode compressed image bytes (PNG, JPEG, WebP, ...) into RGB.

    Args:
        data: Encoded image bytes

    Returns:
        uint8 array of shape (height, width, 3) in RGB order

    Raises:
        ImageDecodeError: If the bytes are empty or not a supported image
    """
    if len(data) == 0:
        raise ImageDecodeError("Failed to decode image: empty input")

    buf = np.frombuffer(data, dtype=np.uint8)
    bgr = cv2.imdecode(buf, cv2.IMREAD_COLOR)
    if bgr is None:
        raise ImageDecodeError("Failed to decode image: unrecognized or corrupt data")
    return cv2.cvtColor(bgr, cv2.COLOR_BGR2RGB)


def ensure_rgb_uint8(img) -> NDArray:
    """Normalize any supported raster to a contiguous RGB uint8 array.

    Accepts HxW grayscale, HxWx1, HxWx3 RGB and HxWx4 RGBA input. Float
    rasters whose values all lie in [0, 1] are scaled to [0, 255]; other
    non-uint8 rasters are clipped to [0, 255].

    Raises:
        ValueError: For any other shape or an empty raster
    """
    img = np.asarray(img)
    if img.ndim not in (2, 3):
        raise ValueError(f"expected a 2-D or 3-D raster, got shape {img.shape}")
    if img.shape[0] == 0 or img.shape[1] == 0:
        raise ValueError(f"raster has zero width or height: shape {img.shape}")

    if np.issubdtype(img.dtype, np.floating) and np.nanmax(img) <= 1.0:
        img = np.rint(img * 255)
    if img.dtype != np.uint8:
        img = np.clip(img, 0, 255).astype(np.uint8)
    if img.ndim == 3 and img.shape[2] == 1:
        img = img[:, :, 0]
    if img.ndim == 2:
        # grayscale -> RGB
        img = np.stack([img] * 3, axis=-1)
    if img.shape[2] == 4:
        # drop alpha
        img = img[:, :, :3]
    if img.shape[2] != 3:
        raise ValueError(f"unsupported channel count {img.shape[2]}")
    return np.ascontiguousarray(img)


def rgb_to_luminance(rgb: NDArray) -> NDArray:
    """Convert RGB to luminance with BT.601 weights (0.299, 0.587, 0.114).

    Args:
        rgb: RGB uint8 array of shape (H, W, 3)

    Returns:
        uint8 array of shape (H, W)
    """
    return cv2.cvtColor(rgb, cv2.COLOR_RGB2GRAY)


def binarize(luma: NDArray, threshold: int, invert: bool = False) -> NDArray:
    """Split pixels into foreground (255) and background (0).

    Pixels darker than ``threshold`` are foreground unless ``invert`` is set.
    """
    mask = luma < threshold
    if invert:
        mask = ~mask
    return mask.astype(np.uint8) * 255
