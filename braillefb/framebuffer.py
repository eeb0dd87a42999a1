#!/usr/bin/env python3
# braillefb/framebuffer.py
"""
Braille (2x4) framebuffer.
Wraps a row-major grid of on/off pixels and reads it back as Unicode Braille
patterns, one character per 2x4 block, with a line break after every row of
characters.

Usage:
    from braillefb.framebuffer import Framebuffer
    fb = Framebuffer([True, False, ...], width=4, height=4)
    fb.get(0)       # '⣇' or None when out of range
    fb[0, 1]        # '⠽', raises IndexError when out of range
    str(fb)         # '⣇⠽\\n'
"""

from __future__ import annotations

from typing import Any, Iterator, Optional, Sequence, Tuple
import numpy as np

__all__ = [
    "Framebuffer",
    "FramebufferSizeError",
    "braille_char",
    "to_char",
    "BRAILLE_OFFSET",
    "CELL_WIDTH",
    "CELL_HEIGHT",
    "DOT_BITS",
]

BRAILLE_OFFSET = 0x2800
CELL_WIDTH = 2
CELL_HEIGHT = 4

# Braille bit positions:
#  dots: 1 4
#        2 5
#        3 6
#        7 8
# Unicode = 0x2800 | bits
DOT_BITS = np.array([
    [0x01, 0x08],  # row 0: col 0 -> dot1, col 1 -> dot4
    [0x02, 0x10],  # row 1: col 0 -> dot2, col 1 -> dot5
    [0x04, 0x20],  # row 2: col 0 -> dot3, col 1 -> dot6
    [0x40, 0x80],  # row 3: col 0 -> dot7, col 1 -> dot8
], dtype=np.int64)


class FramebufferSizeError(ValueError):
    """Pixel buffer length does not match width * height."""


def _ceil_div(n: int, d: int) -> int:
    return -(-n // d)


def braille_char(bits: int) -> str:
    """Return the Braille pattern for a dot byte (0..255)."""
    if not 0 <= bits <= 0xFF:
        raise ValueError(f"dot bits out of range: {bits}")
    return chr(BRAILLE_OFFSET + bits)


def _block_bits(block: np.ndarray) -> int:
    # Blocks clipped at the grid edge are smaller than 4x2; missing dots stay off.
    h, w = block.shape
    return int((block * DOT_BITS[:h, :w]).sum())


def to_char(dots: Sequence[Any]) -> str:
    """
    Convert one 2x4 block into a Braille character.

    dots: eight values, row-major (left, right) pairs from top to bottom.
    """
    arr = np.asarray(dots, dtype=bool).reshape(-1)
    if arr.size != CELL_WIDTH * CELL_HEIGHT:
        raise ValueError(f"expected 8 dots, got {arr.size}")
    return braille_char(_block_bits(arr.reshape(CELL_HEIGHT, CELL_WIDTH)))


class Framebuffer:
    """
    Read-only Braille view over a boolean pixel grid.

    Access semantics:
    - get(index) takes a linear cell index and returns None when out of range.
    - fb[row, col] takes cell coordinates and raises IndexError when out of range.
    - iter(fb) yields every cell character row by row, each row followed by "\\n".

    Pixels are copied on construction, so the instance never changes.
    """

    __slots__ = ("_pixels", "_width", "_height", "_cell_cols", "_cell_rows")

    def __init__(self, pixels: Any, width: int, height: int):
        width = int(width)
        height = int(height)
        if width < 0 or height < 0:
            raise ValueError(f"dimensions must be non-negative, got {width}x{height}")

        arr = np.array(pixels, dtype=bool).reshape(-1)
        if arr.size != width * height:
            raise FramebufferSizeError(
                f"pixel buffer has {arr.size} values but width * height is {width * height}"
            )
        arr = arr.reshape(height, width)
        arr.flags.writeable = False

        self._pixels = arr
        self._width = width
        self._height = height
        self._cell_cols = _ceil_div(width, CELL_WIDTH)
        self._cell_rows = _ceil_div(height, CELL_HEIGHT)

    @classmethod
    def from_array(cls, array: Any) -> "Framebuffer":
        """Build from a 2-D array-like shaped (height, width)."""
        arr = np.asarray(array, dtype=bool)
        if arr.ndim != 2:
            raise ValueError(f"expected a 2-D array, got {arr.ndim} dimension(s)")
        height, width = arr.shape
        return cls(arr, width, height)

    # --- Dimensions
    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def cell_cols(self) -> int:
        """Braille characters per text row (line breaks excluded)."""
        return self._cell_cols

    @property
    def cell_rows(self) -> int:
        return self._cell_rows

    @property
    def cell_count(self) -> int:
        return self._cell_cols * self._cell_rows

    @property
    def pixels(self) -> np.ndarray:
        """Read-only (height, width) view of the pixels."""
        return self._pixels

    def is_empty(self) -> bool:
        return self._pixels.size == 0

    # --- Cell access
    def _bits_at(self, row: int, col: int) -> int:
        y = row * CELL_HEIGHT
        x = col * CELL_WIDTH
        return _block_bits(self._pixels[y:y + CELL_HEIGHT, x:x + CELL_WIDTH])

    def _check_cell(self, row: int, col: int) -> None:
        if not (0 <= row < self._cell_rows and 0 <= col < self._cell_cols):
            raise IndexError(
                f"cell ({row}, {col}) out of range for {self._cell_rows}x{self._cell_cols} cells"
            )

    def cell(self, row: int, col: int) -> int:
        """Return the dot byte (0..255) of a cell."""
        self._check_cell(row, col)
        return self._bits_at(row, col)

    def get(self, index: int) -> Optional[str]:
        """Return the character of the cell at a linear index, or None."""
        if not 0 <= index < self.cell_count:
            return None
        row, col = divmod(index, self._cell_cols)
        return braille_char(self._bits_at(row, col))

    def __getitem__(self, key: Tuple[int, int]) -> str:
        try:
            row, col = key
        except (TypeError, ValueError):
            raise TypeError(f"framebuffer indices must be (row, col) pairs, not {key!r}") from None
        if not (isinstance(row, (int, np.integer)) and isinstance(col, (int, np.integer))):
            raise TypeError(f"framebuffer indices must be integers, not {key!r}")
        return braille_char(self.cell(int(row), int(col)))

    # --- Text rendering
    def lines(self) -> Iterator[str]:
        """Yield each row of Braille characters, without line breaks."""
        for row in range(self._cell_rows):
            yield "".join(braille_char(self._bits_at(row, col)) for col in range(self._cell_cols))

    def __iter__(self) -> Iterator[str]:
        for row in range(self._cell_rows):
            for col in range(self._cell_cols):
                yield braille_char(self._bits_at(row, col))
            yield "\n"

    def __len__(self) -> int:
        # Includes one line break per row.
        return self._cell_rows * (self._cell_cols + 1)

    def __str__(self) -> str:
        return "".join(self)

    def __repr__(self) -> str:
        return f"Framebuffer(width={self._width}, height={self._height})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Framebuffer):
            return NotImplemented
        return self._pixels.shape == other._pixels.shape and bool(np.array_equal(self._pixels, other._pixels))

    __hash__ = None  # type: ignore[assignment]
