#!/usr/bin/env python3
# braillefb/rendering/patterns.py
"""Built-in pixel grids for demos: the sample glyphs, a solid block and the Mandelbrot set."""

from __future__ import annotations

import numpy as np

__all__ = ["sample", "solid", "mandelbrot", "PATTERNS"]

# ⣇⠽
# ⡛⡼
_SAMPLE = (
    "#.##",
    "#..#",
    "#.##",
    "##..",
    "##.#",
    "##.#",
    "..##",
    "#.#.",
)


def sample() -> np.ndarray:
    return np.array([[c == "#" for c in row] for row in _SAMPLE], dtype=bool)


def solid(width: int = 128, height: int = 64, value: bool = True) -> np.ndarray:
    if width < 0 or height < 0:
        raise ValueError(f"dimensions must be non-negative, got {width}x{height}")
    return np.full((height, width), bool(value), dtype=bool)


def mandelbrot(
    width: int = 128,
    height: int = 96,
    max_iterations: int = 50,
    cutoff: int = 45,
) -> np.ndarray:
    """
    Escape-time Mandelbrot set as a (height, width) bool grid.

    The real axis spans [-2, 2]; the imaginary axis starts at -1.2 and spans
    the same range scaled by height / width. A dot is set when the last
    iteration reached before escaping is above `cutoff`.
    """
    if width < 2 or height < 2:
        raise ValueError(f"mandelbrot needs at least 2x2 pixels, got {width}x{height}")

    re_min, re_max = -2.0, 2.0
    im_min = -1.2
    im_max = im_min + (re_max - re_min) * height / width

    re = re_min + np.arange(width) * (re_max - re_min) / (width - 1)
    im = im_max - np.arange(height) * (im_max - im_min) / (height - 1)
    c = re[np.newaxis, :] + 1j * im[:, np.newaxis]

    z = c.copy()
    out = np.zeros(c.shape, dtype=np.int32)
    alive = np.ones(c.shape, dtype=bool)
    for i in range(max_iterations):
        out[alive] = i
        escaped = alive & (z.real * z.real + z.imag * z.imag > 4.0)
        alive &= ~escaped
        if not alive.any():
            break
        z[alive] = z[alive] * z[alive] + c[alive]
    return out > cutoff


PATTERNS = {
    "sample": sample,
    "solid": solid,
    "mandelbrot": mandelbrot,
}
