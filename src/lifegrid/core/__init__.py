"""Core grid engine logic."""

from .errors import GridError, InvalidDimensions, MalformedPattern, OutOfBounds
from .grid import Cell, Grid
from .game import GameOfLife
from .patterns import Pattern, PatternLibrary
from .pattern_format import format_pattern, parse_pattern

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
    "format_pattern",
    "parse_pattern",
]
