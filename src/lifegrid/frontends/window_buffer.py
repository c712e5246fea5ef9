"""Pixel buffer rendering for a grid."""

from typing import Iterable, Tuple

import numpy as np

from ..core.errors import OutOfBounds
from ..core.grid import Grid, RandomSource

ALIVE_COLOR = 0xFF0000
HIGHLIGHT_COLOR = 0xFFFFFF


class WindowBuffer:
    """Flat row-major buffer of 0x00RRGGBB pixels, one per cell."""

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self.buffer = np.zeros(width * height, dtype=np.uint32)

    def set_pixel(self, x: int, y: int, color: int) -> None:
        """Set one pixel.

        Raises:
            OutOfBounds: If the coordinates are outside the buffer
        """
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise OutOfBounds(x, y, self.width, self.height)
        self.buffer[y * self.width + x] = color

    def clear(self) -> None:
        """Set every pixel to black."""
        self.buffer.fill(0)

    def as_2d(self) -> np.ndarray:
        """View of the buffer shaped (height, width)."""
        return self.buffer.reshape(self.height, self.width)


def draw_grid(
    grid: Grid,
    window_buffer: WindowBuffer,
    highlighted: Iterable[Tuple[int, int]] = (),
    random_color: bool = False,
    rng: RandomSource = None,
) -> None:
    """Paint the grid's live cells into a buffer.

    Args:
        grid: Grid to draw
        window_buffer: Target buffer, same size as the grid
        highlighted: Cells painted white on top, e.g. pending toggles
        random_color: Paint each live cell a random color instead of red
        rng: Generator or seed for random colors

    Raises:
        ValueError: If the buffer and grid sizes differ
    """
    if (window_buffer.width, window_buffer.height) != grid.shape:
        raise ValueError(
            f"Buffer size {window_buffer.width}x{window_buffer.height} doesn't match grid {grid.shape}"
        )

    window_buffer.clear()
    pixels = window_buffer.as_2d()
    alive = grid.cells.T

    if random_color:
        colors = np.random.default_rng(rng).integers(
            0, 0xFFFFFF, size=alive.shape, dtype=np.uint32, endpoint=True
        )
        pixels[alive] = colors[alive]
    else:
        pixels[alive] = ALIVE_COLOR

    for x, y in highlighted:
        window_buffer.set_pixel(x, y, HIGHLIGHT_COLOR)
