"""Conway's Game of Life on a wrap-around grid with incrementally maintained neighbour counts."""

__version__ = "0.1.0"

from .core.errors import GridError, InvalidDimensions, MalformedPattern, OutOfBounds
from .core.grid import Cell, Grid
from .core.game import GameOfLife
from .core.patterns import Pattern, PatternLibrary

__all__ = [
    "Cell",
    "Grid",
    "GameOfLife",
    "Pattern",
    "PatternLibrary",
    "GridError",
    "InvalidDimensions",
    "MalformedPattern",
    "OutOfBounds",
]
