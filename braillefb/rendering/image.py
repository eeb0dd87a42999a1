#!/usr/bin/env python3
# braillefb/rendering/image.py
"""
Image -> Braille framebuffer.
Thresholds Rec. 601 luminance into on/off dots, two pixel columns and four
pixel rows per output character.
"""

from __future__ import annotations

import logging
from typing import Optional
import numpy as np
from PIL import Image

from braillefb.framebuffer import CELL_WIDTH, Framebuffer

__all__ = ["image_to_pixels", "render_image"]

log = logging.getLogger(__name__)


def _check_threshold(threshold: float) -> float:
    t = float(threshold)
    if not 0.0 <= t <= 1.0:
        raise ValueError(f"threshold must be within [0, 1], got {threshold}")
    return t


def _resize_to_width(img: Image.Image, width: int) -> Image.Image:
    if img.width == width:
        return img
    ratio = width / float(img.width)
    height = max(1, int(img.height * ratio))
    return img.resize((width, height), Image.LANCZOS)


def image_to_pixels(
    img: Image.Image,
    width: Optional[int] = None,
    threshold: float = 0.5,
    invert: bool = False,
) -> np.ndarray:
    """
    Return a (H, W) bool array where True means the dot is set.

    width: target pixel columns; keeps the aspect ratio. None keeps the size.
    threshold compares darkness; darker than threshold sets the dot.
    invert lights the bright pixels instead.
    """
    threshold = _check_threshold(threshold)
    if width is not None:
        if width < 1:
            raise ValueError(f"width must be positive, got {width}")
        img = _resize_to_width(img.convert("RGB"), int(width))
    else:
        img = img.convert("RGB")

    arr = np.asarray(img, dtype=np.uint8)
    gray = (0.299 * arr[..., 0] + 0.587 * arr[..., 1] + 0.114 * arr[..., 2]).astype(np.float32) / 255.0
    if invert:
        return gray >= threshold
    return gray < threshold


def render_image(
    img: Image.Image,
    width_chars: Optional[int] = None,
    threshold: float = 0.5,
    invert: bool = False,
) -> Framebuffer:
    """Threshold an image into a Framebuffer, width_chars Braille cells wide."""
    width = width_chars * CELL_WIDTH if width_chars is not None else None
    pixels = image_to_pixels(img, width=width, threshold=threshold, invert=invert)
    log.debug("Rendering %dx%d pixels (threshold=%.2f invert=%s)",
              pixels.shape[1], pixels.shape[0], threshold, invert)
    return Framebuffer.from_array(pixels)
