"""Common Conway's Game of Life patterns and pattern management."""

from typing import Dict, List, Optional, Tuple

import numpy as np

from .errors import OutOfBounds
from .grid import Grid
from .pattern_format import format_pattern, parse_pattern


class Pattern:
    """Represents a Game of Life pattern."""

    def __init__(self, name: str, cells: List[Tuple[int, int]], description: str = "") -> None:
        """Initialize a pattern.

        Args:
            name: Pattern name
            cells: List of (x, y) coordinates for living cells
            description: Optional description
        """
        self.name = name
        self.cells = cells
        self.description = description

    def apply_to_grid(
        self, grid: Grid, offset_x: int = 0, offset_y: int = 0, clear: bool = True
    ) -> None:
        """Apply this pattern to a grid.

        Cells that run past an edge wrap around to the opposite side.

        Args:
            grid: Target grid
            offset_x: Horizontal offset, inside the grid
            offset_y: Vertical offset, inside the grid
            clear: Whether to clear the grid first

        Raises:
            OutOfBounds: If the offset lies outside the grid
        """
        if not grid.contains(offset_x, offset_y):
            raise OutOfBounds(offset_x, offset_y, grid.width, grid.height)

        if clear:
            grid.clear()
        for x, y in self.cells:
            grid.birth((x + offset_x) % grid.width, (y + offset_y) % grid.height)

    def get_bounding_box(self) -> Tuple[int, int, int, int]:
        """Get bounding box of the pattern.

        Returns:
            Tuple of (min_x, min_y, max_x, max_y)
        """
        if not self.cells:
            return (0, 0, 0, 0)

        xs, ys = zip(*self.cells)
        return (min(xs), min(ys), max(xs), max(ys))

    def get_size(self) -> Tuple[int, int]:
        """Get pattern size.

        Returns:
            Tuple of (width, height)
        """
        min_x, min_y, max_x, max_y = self.get_bounding_box()
        return (max_x - min_x + 1, max_y - min_y + 1)

    def normalize(self) -> "Pattern":
        """Return a new pattern with coordinates normalized to start at (0, 0)."""
        if not self.cells:
            return Pattern(self.name, [], self.description)

        min_x, min_y, _, _ = self.get_bounding_box()
        normalized_cells = [(x - min_x, y - min_y) for x, y in self.cells]

        return Pattern(self.name, normalized_cells, self.description)

    def to_text(self) -> str:
        """Render the normalized pattern as seed text covering its bounding box."""
        if not self.cells:
            return ""

        width, height = self.get_size()
        live = set(self.normalize().cells)
        rows = [[(x, y) in live for x in range(width)] for y in range(height)]
        return format_pattern(rows)

    @classmethod
    def from_text(cls, name: str, text: str, description: str = "") -> "Pattern":
        """Create a pattern from seed text.

        Raises:
            MalformedPattern: If the text is malformed
        """
        rows = parse_pattern(text)
        cells = [(x, y) for y, row in enumerate(rows) for x, alive in enumerate(row) if alive]
        return cls(name, cells, description)

    @classmethod
    def from_grid(cls, grid: Grid, name: str, description: str = "") -> "Pattern":
        """Create pattern from current grid state.

        Args:
            grid: Source grid
            name: Pattern name
            description: Optional description

        Returns:
            New Pattern instance
        """
        xs, ys = np.nonzero(grid.cells)
        cells = [(int(x), int(y)) for x, y in zip(xs, ys)]
        return cls(name, cells, description)

    def __repr__(self) -> str:
        return f"Pattern({self.name!r}, {len(self.cells)} cells)"


class PatternLibrary:
    """Manages a collection of patterns."""

    CATEGORIES: Dict[str, List[str]] = {
        "Still Life": ["Block", "Beehive", "Loaf"],
        "Oscillators": ["Blinker", "Toad", "Beacon", "Pulsar"],
        "Spaceships": ["Glider", "Lightweight Spaceship"],
        "Methuselahs": ["R-pentomino", "Diehard", "Acorn"],
    }

    def __init__(self) -> None:
        self._patterns: Dict[str, Pattern] = {}
        self._load_builtin_patterns()

    def _load_builtin_patterns(self) -> None:
        """Load built-in common patterns."""
        # Still life patterns
        self.add_pattern(Pattern("Block", [(0, 0), (0, 1), (1, 0), (1, 1)], "2x2 still life block"))
        self.add_pattern(
            Pattern.from_text(
                "Beehive",
                """
                - # # -
                # - - #
                - # # -
                """,
                "Beehive still life",
            )
        )
        self.add_pattern(
            Pattern.from_text(
                "Loaf",
                """
                - # # -
                # - - #
                - # - #
                - - # -
                """,
                "Loaf still life",
            )
        )

        # Oscillators
        self.add_pattern(Pattern("Blinker", [(0, 1), (1, 1), (2, 1)], "Period-2 oscillator"))
        self.add_pattern(
            Pattern("Toad", [(1, 0), (2, 0), (3, 0), (0, 1), (1, 1), (2, 1)], "Period-2 oscillator")
        )
        self.add_pattern(
            Pattern("Beacon", [(0, 0), (1, 0), (0, 1), (3, 2), (2, 3), (3, 3)], "Period-2 oscillator")
        )
        self.add_pattern(
            Pattern.from_text(
                "Pulsar",
                """
                - - # # # - - - # # # - -
                - - - - - - - - - - - - -
                # - - - - # - # - - - - #
                # - - - - # - # - - - - #
                # - - - - # - # - - - - #
                - - # # # - - - # # # - -
                - - - - - - - - - - - - -
                - - # # # - - - # # # - -
                # - - - - # - # - - - - #
                # - - - - # - # - - - - #
                # - - - - # - # - - - - #
                - - - - - - - - - - - - -
                - - # # # - - - # # # - -
                """,
                "Period-3 oscillator",
            )
        )

        # Spaceships
        self.add_pattern(
            Pattern.from_text(
                "Glider",
                """
                - - # - -
                # - # - -
                - # # - -
                """,
                "Smallest spaceship, period-4",
            )
        )
        self.add_pattern(
            Pattern(
                "Lightweight Spaceship",
                [(0, 0), (3, 0), (4, 1), (0, 2), (4, 2), (1, 3), (2, 3), (3, 3), (4, 3)],
                "LWSS - Period-4 spaceship",
            )
        )

        # Methuselahs
        self.add_pattern(
            Pattern(
                "R-pentomino",
                [(1, 0), (2, 0), (0, 1), (1, 1), (1, 2)],
                "Famous methuselah that stabilizes after 1103 generations",
            )
        )
        self.add_pattern(
            Pattern(
                "Diehard",
                [(6, 0), (0, 1), (1, 1), (1, 2), (5, 2), (6, 2), (7, 2)],
                "Dies after exactly 130 generations",
            )
        )
        self.add_pattern(
            Pattern(
                "Acorn",
                [(1, 0), (3, 1), (0, 2), (1, 2), (4, 2), (5, 2), (6, 2)],
                "Takes 5206 generations to stabilize",
            )
        )

    def add_pattern(self, pattern: Pattern) -> None:
        """Add a pattern to the library, replacing any with the same name."""
        self._patterns[pattern.name] = pattern

    def get_pattern(self, name: str) -> Optional[Pattern]:
        """Get a pattern by name.

        Returns:
            Pattern instance or None if not found
        """
        return self._patterns.get(name)

    def list_patterns(self) -> List[str]:
        """Get list of all pattern names."""
        return list(self._patterns.keys())

    def get_patterns_by_category(self) -> Dict[str, List[str]]:
        """Get patterns organized by category.

        Patterns outside the built-in categories are listed under "Custom".
        Empty categories are omitted.
        """
        categories = {cat: list(names) for cat, names in self.CATEGORIES.items()}
        categories["Custom"] = []

        builtin = {name for names in self.CATEGORIES.values() for name in names}
        for name in self._patterns:
            if name not in builtin:
                categories["Custom"].append(name)

        return {cat: names for cat, names in categories.items() if names}
