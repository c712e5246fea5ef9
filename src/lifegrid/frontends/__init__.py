"""Frontend interfaces for the grid engine."""

from .cli import CLIGameOfLife
from .window_buffer import WindowBuffer, draw_grid

__all__ = ["CLIGameOfLife", "WindowBuffer", "draw_grid"]
