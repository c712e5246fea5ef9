"""Tests for the pixel buffer renderer."""

import numpy as np
import pytest

from lifegrid.core.errors import OutOfBounds
from lifegrid.core.grid import Grid
from lifegrid.frontends.window_buffer import ALIVE_COLOR, HIGHLIGHT_COLOR, WindowBuffer, draw_grid


class TestWindowBuffer:
    """Test cases for WindowBuffer."""

    def test_initialization(self):
        window_buffer = WindowBuffer(4, 3)
        assert window_buffer.buffer.shape == (12,)
        assert window_buffer.buffer.dtype == np.uint32
        assert not window_buffer.buffer.any()

    def test_set_pixel_is_row_major(self):
        window_buffer = WindowBuffer(4, 3)
        window_buffer.set_pixel(1, 2, 0x123456)

        assert window_buffer.buffer[2 * 4 + 1] == 0x123456
        assert window_buffer.as_2d()[2, 1] == 0x123456

    @pytest.mark.parametrize("x,y", [(4, 0), (0, 3), (-1, 0), (3, 3)])
    def test_set_pixel_out_of_bounds(self, x, y):
        window_buffer = WindowBuffer(4, 3)
        with pytest.raises(OutOfBounds):
            window_buffer.set_pixel(x, y, 0xFFFFFF)

    def test_last_pixel(self):
        window_buffer = WindowBuffer(4, 3)
        window_buffer.set_pixel(3, 2, 0xABCDEF)
        assert window_buffer.buffer[-1] == 0xABCDEF

    def test_clear(self):
        window_buffer = WindowBuffer(2, 2)
        window_buffer.set_pixel(0, 0, 0xFF)
        window_buffer.clear()
        assert not window_buffer.buffer.any()


class TestDrawGrid:
    """Test cases for draw_grid."""

    def test_draws_live_cells(self):
        grid = Grid(4, 3)
        grid.birth(0, 0)
        grid.birth(3, 2)
        window_buffer = WindowBuffer(4, 3)
        window_buffer.set_pixel(1, 1, 0x00FF00)

        draw_grid(grid, window_buffer)

        pixels = window_buffer.as_2d()
        assert pixels[0, 0] == ALIVE_COLOR
        assert pixels[2, 3] == ALIVE_COLOR
        assert pixels[1, 1] == 0
        assert np.count_nonzero(pixels) == 2

    def test_highlighted_cells_drawn_on_top(self):
        grid = Grid(4, 3)
        grid.birth(0, 0)
        window_buffer = WindowBuffer(4, 3)

        draw_grid(grid, window_buffer, highlighted={(0, 0), (2, 1)})

        pixels = window_buffer.as_2d()
        assert pixels[0, 0] == HIGHLIGHT_COLOR
        assert pixels[1, 2] == HIGHLIGHT_COLOR

    def test_random_colors(self):
        grid = Grid(5, 5, rng=2)
        grid.seed_random(0.5)
        first = WindowBuffer(5, 5)
        second = WindowBuffer(5, 5)

        draw_grid(grid, first, random_color=True, rng=7)
        draw_grid(grid, second, random_color=True, rng=7)

        assert np.array_equal(first.buffer, second.buffer)
        dead = ~grid.cells.T
        assert not first.as_2d()[dead].any()
        assert (first.buffer <= 0xFFFFFF).all()

    def test_size_mismatch(self):
        with pytest.raises(ValueError):
            draw_grid(Grid(4, 4), WindowBuffer(4, 3))
