"""Error types raised by the grid engine."""


class GridError(Exception):
    """Base class for all grid engine errors."""


class InvalidDimensions(GridError, ValueError):
    """Raised when a grid is constructed with a non-positive dimension."""

    def __init__(self, width: object, height: object) -> None:
        self.width = width
        self.height = height
        super().__init__(f"Grid dimensions must be positive integers, got {width}x{height}")


class OutOfBounds(GridError, IndexError):
    """Raised when a coordinate falls outside the grid."""

    def __init__(self, x: int, y: int, width: int, height: int) -> None:
        self.x = x
        self.y = y
        self.width = width
        self.height = height
        super().__init__(f"Coordinates ({x}, {y}) out of bounds for {width}x{height} grid")


class MalformedPattern(GridError, ValueError):
    """Raised when pattern text cannot be parsed or does not fit the grid."""
