"""Shared fixtures: synthetic comic pages built with NumPy."""

import cv2
import numpy as np
import pytest


def draw_page(width, height, rects=(), background=255, ink=0):
    """Build an RGB page with filled rectangles.

    ``rects`` holds inclusive ``(x1, y1, x2, y2)`` corners.
    """
    img = np.full((height, width, 3), background, dtype=np.uint8)
    for x1, y1, x2, y2 in rects:
        img[y1:y2 + 1, x1:x2 + 1] = ink
    return img


def encode_png(rgb):
    ok, buf = cv2.imencode(".png", cv2.cvtColor(rgb, cv2.COLOR_RGB2BGR))
    assert ok
    return buf.tobytes()


@pytest.fixture
def page():
    return draw_page


@pytest.fixture
def png():
    return encode_png


@pytest.fixture
def two_panel_page():
    """400x200 page with a left and a right square panel."""
    return draw_page(400, 200, [(20, 20, 180, 180), (220, 20, 380, 180)])


@pytest.fixture
def grid_page():
    """400x400 page with a 2x2 grid of square panels."""
    return draw_page(400, 400, [
        (20, 20, 180, 180),
        (220, 20, 380, 180),
        (20, 220, 180, 380),
        (220, 220, 380, 380),
    ])
