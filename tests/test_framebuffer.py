import numpy as np
import pytest

from braillefb.framebuffer import (
    Framebuffer,
    FramebufferSizeError,
    braille_char,
    to_char,
)


def grid(*rows):
    """Flatten '#'/'.' rows into a pixel list."""
    return [c == "#" for row in rows for c in row.split()]


T, F = True, False
EXAMPLE = [T, F, T, T, T, F, F, T, T, F, T, T, T, T, F, F]

SAMPLE_4X8 = grid(
    "# . # #",
    "# . . #",
    "# . # #",
    "# # . .",
    "# # . #",
    "# # . #",
    ". . # #",
    "# . # .",
)


def test_worked_example():
    f = Framebuffer(EXAMPLE, 4, 4)

    assert f.get(0) == "⣇"
    assert f.get(1) == "⠽"
    assert f.get(2) is None
    assert f[0, 1] == "⠽"
    assert str(f) == "⣇⠽\n"
    assert "".join(iter(f)) == "⣇⠽\n"


def test_single_chars():
    f = Framebuffer(grid("# .", "# #", ". .", ". ."), 2, 4)
    assert f.get(0) == "⠓"
    assert f.get(1) is None
    assert str(f) == "⠓\n"

    f = Framebuffer(grid("# .", "# .", "# .", "# #"), 2, 4)
    assert f.get(0) == "⣇"


def test_multiple_rows():
    f = Framebuffer(SAMPLE_4X8, 4, 8)

    assert [f.get(i) for i in range(4)] == ["⣇", "⠽", "⡛", "⡼"]
    assert f[1, 0] == "⡛"
    assert f[1, 1] == "⡼"
    assert str(f) == "⣇⠽\n⡛⡼\n"
    assert list(f.lines()) == ["⣇⠽", "⡛⡼"]


def test_partial_cells_are_padded_with_off_dots():
    f = Framebuffer(grid(
        "# . #",
        "# . .",
        "# . #",
        ". . .",
        "# # #",
    ), 3, 5)

    assert (f.cell_cols, f.cell_rows) == (2, 2)
    assert [f.get(i) for i in range(4)] == ["⠇", "⠅", "⠉", "⠁"]
    assert str(f) == "⠇⠅\n⠉⠁\n"


@pytest.mark.parametrize("width,height,cols,rows,length", [
    (2, 4, 1, 1, 2),
    (4, 8, 2, 2, 6),
    (3, 5, 2, 2, 6),
    (3, 11, 2, 3, 9),
    (128, 64, 64, 16, 1040),
])
def test_dimensions_and_length(width, height, cols, rows, length):
    f = Framebuffer([False] * (width * height), width, height)

    assert f.cell_cols == cols
    assert f.cell_rows == rows
    assert f.cell_count == cols * rows
    assert len(f) == length
    assert len(str(f)) == length


def test_blank_grid_maps_to_empty_pattern():
    f = Framebuffer([False] * (6 * 8), 6, 8)
    assert all(f.get(i) == "⠀" for i in range(f.cell_count))


def test_full_cell_maps_to_all_dots():
    f = Framebuffer([True] * 8, 2, 4)
    assert f.get(0) == "⣿"
    assert f.cell(0, 0) == 0xFF


def test_each_dot_sets_its_bit():
    expected = {
        (0, 0): 0x01, (1, 0): 0x02, (2, 0): 0x04, (3, 0): 0x40,
        (0, 1): 0x08, (1, 1): 0x10, (2, 1): 0x20, (3, 1): 0x80,
    }
    for (row, col), bit in expected.items():
        pixels = np.zeros((4, 2), dtype=bool)
        pixels[row, col] = True
        assert Framebuffer.from_array(pixels).cell(0, 0) == bit


def test_get_out_of_range_returns_none():
    f = Framebuffer(SAMPLE_4X8, 4, 8)
    assert f.get(4) is None
    assert f.get(100) is None
    assert f.get(-1) is None


def test_get_stays_in_braille_block_and_is_repeatable():
    rng = np.random.default_rng(7)
    pixels = rng.random((13, 9)) > 0.5
    f = Framebuffer.from_array(pixels)

    for i in range(f.cell_count):
        ch = f.get(i)
        assert 0x2800 <= ord(ch) <= 0x28FF
        assert f.get(i) == ch


def test_index_out_of_range_raises():
    f = Framebuffer(SAMPLE_4X8, 4, 8)
    with pytest.raises(IndexError):
        f[2, 0]
    with pytest.raises(IndexError):
        f[0, 2]
    with pytest.raises(IndexError):
        f[-1, 0]
    with pytest.raises(IndexError):
        f.cell(0, -1)


def test_index_requires_row_col_pair():
    f = Framebuffer(SAMPLE_4X8, 4, 8)
    with pytest.raises(TypeError):
        f[0]
    with pytest.raises(TypeError):
        f["a", 0]


def test_size_mismatch_is_rejected():
    with pytest.raises(FramebufferSizeError):
        Framebuffer([True] * 15, 4, 4)
    with pytest.raises(FramebufferSizeError):
        Framebuffer([True] * 17, 4, 4)
    with pytest.raises(ValueError):
        Framebuffer([], -1, 0)


def test_iteration_is_restartable():
    f = Framebuffer(SAMPLE_4X8, 4, 8)
    assert list(f) == list(f)
    it = iter(f)
    assert next(it) == "⣇"
    assert "".join(f) == "⣇⠽\n⡛⡼\n"


def test_pixels_are_copied_and_read_only():
    source = np.array(EXAMPLE, dtype=bool)
    f = Framebuffer(source, 4, 4)
    source[:] = False

    assert str(f) == "⣇⠽\n"
    with pytest.raises(ValueError):
        f.pixels[0, 0] = False


def test_accepts_truthy_values():
    f = Framebuffer([1 if p else 0 for p in EXAMPLE], 4, 4)
    assert str(f) == "⣇⠽\n"


def test_from_array():
    f = Framebuffer.from_array(np.array(SAMPLE_4X8).reshape(8, 4))
    assert (f.width, f.height) == (4, 8)
    assert f == Framebuffer(SAMPLE_4X8, 4, 8)
    with pytest.raises(ValueError):
        Framebuffer.from_array([True, False])


def test_empty_framebuffer():
    f = Framebuffer([], 0, 0)
    assert f.is_empty()
    assert len(f) == 0
    assert str(f) == ""
    assert f.get(0) is None


def test_to_char():
    assert to_char([T, F, T, T, T, F, F, T]) == "⢗"
    assert to_char([F] * 8) == "⠀"
    with pytest.raises(ValueError):
        to_char([T] * 7)


def test_braille_char_bounds():
    assert braille_char(0) == "⠀"
    assert braille_char(255) == "⣿"
    with pytest.raises(ValueError):
        braille_char(256)
    with pytest.raises(ValueError):
        braille_char(-1)
