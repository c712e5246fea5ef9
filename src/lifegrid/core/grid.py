"""Grid engine for Conway's Game of Life on a torus."""

import copy
import logging
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple, Union

import numpy as np
import torch
import torch.nn.functional as F

from .errors import InvalidDimensions, MalformedPattern, OutOfBounds
from .pattern_format import format_pattern, parse_pattern

logger = logging.getLogger(__name__)

RandomSource = Union[np.random.Generator, int, None]

# Moore neighbourhood offsets as (dx, dy)
NEIGHBOUR_OFFSETS: Tuple[Tuple[int, int], ...] = (
    (-1, -1), (0, -1), (1, -1),
    (-1, 0),           (1, 0),
    (-1, 1),  (0, 1),  (1, 1),
)

_OFFSET_DX = np.array([dx for dx, _ in NEIGHBOUR_OFFSETS], dtype=np.intp)
_OFFSET_DY = np.array([dy for _, dy in NEIGHBOUR_OFFSETS], dtype=np.intp)


@dataclass(frozen=True)
class Cell:
    """Snapshot of a single cell."""

    alive: bool
    live_neighbour_count: int


class Grid:
    """A fixed-size toroidal grid of cells with cached neighbour counts.

    Every cell keeps the number of live cells among its 8 wrapped neighbours.
    The counts are updated by ``birth`` and ``kill`` as cells change, so
    ``step`` only touches the neighbourhoods of cells that actually change.

    Storage is two numpy arrays indexed ``[x, y]``: alive flags and neighbour
    counts. Nothing outside the grid holds a reference to either.
    """

    def __init__(self, width: int, height: int, rng: RandomSource = None) -> None:
        """Initialize an empty grid.

        Args:
            width: Number of columns (at least 1)
            height: Number of rows (at least 1)
            rng: numpy Generator or integer seed used by ``seed_random``

        Raises:
            InvalidDimensions: If either dimension is not a positive integer
        """
        if not _is_positive_int(width) or not _is_positive_int(height):
            raise InvalidDimensions(width, height)

        self._width = int(width)
        self._height = int(height)
        self._rng = np.random.default_rng(rng)
        self._alive = np.zeros((self._width, self._height), dtype=bool)
        self._counts = np.zeros((self._width, self._height), dtype=np.int8)
        self._previous_alive = np.zeros((self._width, self._height), dtype=bool)

        # Moore kernel for whole-grid recounts
        self._kernel = (
            torch.tensor([[1, 1, 1], [1, 0, 1], [1, 1, 1]], dtype=torch.float32).unsqueeze(0).unsqueeze(0)
        )

    @property
    def width(self) -> int:
        """Number of columns."""
        return self._width

    @property
    def height(self) -> int:
        """Number of rows."""
        return self._height

    @property
    def shape(self) -> Tuple[int, int]:
        """Get grid dimensions as (width, height)."""
        return (self._width, self._height)

    @property
    def cells(self) -> np.ndarray:
        """Copy of the alive flags, indexed [x, y]."""
        return self._alive.copy()

    @property
    def neighbour_counts(self) -> np.ndarray:
        """Copy of the cached neighbour counts, indexed [x, y]."""
        return self._counts.copy()

    @property
    def population(self) -> int:
        """Get the number of living cells."""
        return int(np.count_nonzero(self._alive))

    def contains(self, x: int, y: int) -> bool:
        """Whether (x, y) is an integer coordinate inside the grid."""
        if not (_is_index(x) and _is_index(y)):
            return False
        return 0 <= x < self._width and 0 <= y < self._height

    def _check_bounds(self, x: int, y: int) -> None:
        if not self.contains(x, y):
            raise OutOfBounds(x, y, self._width, self._height)

    def _wrapped_neighbours(self, x: int, y: int) -> Tuple[np.ndarray, np.ndarray]:
        return (x + _OFFSET_DX) % self._width, (y + _OFFSET_DY) % self._height

    # Queries

    def is_alive(self, x: int, y: int) -> bool:
        """Get the state of a cell.

        Raises:
            OutOfBounds: If the coordinates are outside the grid
        """
        self._check_bounds(x, y)
        return bool(self._alive[x, y])

    def live_neighbour_count(self, x: int, y: int) -> int:
        """Get the cached number of live neighbours of a cell.

        Raises:
            OutOfBounds: If the coordinates are outside the grid
        """
        self._check_bounds(x, y)
        return int(self._counts[x, y])

    def cell(self, x: int, y: int) -> Cell:
        """Get a snapshot of a cell.

        Raises:
            OutOfBounds: If the coordinates are outside the grid
        """
        self._check_bounds(x, y)
        return Cell(bool(self._alive[x, y]), int(self._counts[x, y]))

    # Mutation primitives

    def birth(self, x: int, y: int) -> None:
        """Bring a cell to life. Does nothing if it is already alive.

        Raises:
            OutOfBounds: If the coordinates are outside the grid
        """
        self._check_bounds(x, y)
        self._birth(x, y)

    def kill(self, x: int, y: int) -> None:
        """Kill a cell. Does nothing if it is already dead.

        Raises:
            OutOfBounds: If the coordinates are outside the grid
        """
        self._check_bounds(x, y)
        self._kill(x, y)

    def toggle(self, x: int, y: int) -> bool:
        """Toggle the state of a cell.

        Args:
            x: Column coordinate
            y: Row coordinate

        Returns:
            New state of the cell

        Raises:
            OutOfBounds: If the coordinates are outside the grid
        """
        self._check_bounds(x, y)
        if self._alive[x, y]:
            self._kill(x, y)
            return False
        self._birth(x, y)
        return True

    def _birth(self, x: int, y: int) -> None:
        if self._alive[x, y]:
            return
        self._alive[x, y] = True
        # add.at accumulates repeated indices, which occur on grids narrower than 3
        np.add.at(self._counts, self._wrapped_neighbours(x, y), 1)

    def _kill(self, x: int, y: int) -> None:
        if not self._alive[x, y]:
            return
        self._alive[x, y] = False
        np.add.at(self._counts, self._wrapped_neighbours(x, y), -1)

    def clear(self) -> None:
        """Clear all cells (set all to dead)."""
        self._alive.fill(False)
        self._counts.fill(0)

    # Seeding

    def seed_from_pattern(self, text: str) -> None:
        """Overlay pattern text at the origin, birthing every ``#`` cell.

        The whole pattern is validated before any cell changes, so a rejected
        pattern leaves the grid untouched.

        Args:
            text: Pattern text (see ``lifegrid.core.pattern_format``)

        Raises:
            MalformedPattern: If the text is malformed or larger than the grid
        """
        rows = parse_pattern(text)
        if len(rows) > self._height:
            raise MalformedPattern(
                f"Pattern has {len(rows)} rows but grid height is {self._height}"
            )
        if rows and len(rows[0]) > self._width:
            raise MalformedPattern(
                f"Pattern has {len(rows[0])} columns but grid width is {self._width}"
            )

        for y, row in enumerate(rows):
            for x, alive in enumerate(row):
                if alive:
                    self._birth(x, y)

        logger.debug("Seeded %dx%d pattern, population now %d",
                     len(rows[0]) if rows else 0, len(rows), self.population)

    def seed_random(self, probability: float = 0.5, rng: RandomSource = None) -> None:
        """Randomly birth cells.

        Each cell is born independently with the given probability. Cells that
        are already alive stay alive.

        Args:
            probability: Chance each cell will be born (0.0 to 1.0)
            rng: Generator or seed to use instead of the grid's own generator

        Raises:
            ValueError: If probability is outside [0, 1]
        """
        if not 0.0 <= probability <= 1.0:
            raise ValueError(f"Probability must be between 0.0 and 1.0, got {probability}")

        generator = self._rng if rng is None else np.random.default_rng(rng)
        mask = generator.random((self._width, self._height)) < probability
        for x, y in zip(*np.nonzero(mask)):
            self._birth(int(x), int(y))

        logger.debug("Random seed (p=%.3f), population now %d", probability, self.population)

    # Generation advance

    def step(self) -> int:
        """Advance the grid by one generation.

        Births and deaths are decided from this generation's flags and counts
        before any cell is touched, then applied through the birth/kill
        primitives so the counts are ready for the next call.

        Returns:
            Number of cells that changed state
        """
        counts = self._counts
        dying = self._alive & ((counts < 2) | (counts > 3))
        born = ~self._alive & (counts == 3)

        for x, y in zip(*np.nonzero(dying)):
            self._kill(int(x), int(y))
        for x, y in zip(*np.nonzero(born)):
            self._birth(int(x), int(y))

        changed = int(np.count_nonzero(dying)) + int(np.count_nonzero(born))
        logger.debug("Step: %d changed, population %d", changed, self.population)
        return changed

    # Reference counting

    def count_neighbours(self, x: int, y: int) -> int:
        """Count living neighbours of a cell by scanning its neighbourhood.

        Unlike ``live_neighbour_count`` this ignores the cached count.

        Returns:
            Number of live neighbour positions (0-8)
        """
        self._check_bounds(x, y)
        count = 0
        for dx, dy in NEIGHBOUR_OFFSETS:
            nx = (x + dx) % self._width
            ny = (y + dy) % self._height
            count += int(self._alive[nx, ny])
        return count

    def count_all_neighbours(self) -> np.ndarray:
        """Recount neighbours for all cells with a wrapped convolution.

        Returns:
            int8 array of neighbour counts indexed [x, y]
        """
        # Torch expects (batch, channel, height, width)
        alive = np.ascontiguousarray(self._alive.T, dtype=np.float32)
        grid_input = torch.from_numpy(alive).reshape(1, 1, self._height, self._width)

        padded = F.pad(grid_input, (1, 1, 1, 1), mode="circular")
        neighbours = F.conv2d(padded, self._kernel)

        return np.rint(neighbours[0, 0].numpy()).astype(np.int8).T

    def check_invariant(self) -> bool:
        """Whether every cached count matches a full recount."""
        return bool(np.array_equal(self._counts, self.count_all_neighbours()))

    # Snapshots and serialization

    def copy(self) -> "Grid":
        """Return an independent copy of this grid."""
        return copy.deepcopy(self)

    def save_state(self) -> None:
        """Remember the current alive flags for ``get_changed_cells``."""
        self._previous_alive[:] = self._alive

    def get_changed_cells(self) -> Iterator[Tuple[int, int]]:
        """Get coordinates of cells that changed since last save_state().

        Yields:
            Tuples of (x, y) coordinates for changed cells
        """
        changed = self._alive != self._previous_alive
        for x, y in zip(*np.nonzero(changed)):
            yield (int(x), int(y))

    def to_list(self) -> List[List[bool]]:
        """Convert alive flags to a nested list indexed [x][y]."""
        return self._alive.tolist()

    def from_list(self, data: List[List[bool]]) -> None:
        """Replace all alive flags and recount every neighbourhood.

        Args:
            data: Nested list indexed [x][y]

        Raises:
            ValueError: If data dimensions don't match the grid
        """
        arr = np.array(data, dtype=bool)
        if arr.shape != self.shape:
            raise ValueError(f"Data shape {arr.shape} doesn't match grid {self.shape}")

        self._alive[:] = arr
        self._counts[:] = self.count_all_neighbours()

    def get_bounding_box(self) -> Optional[Tuple[int, int, int, int]]:
        """Get bounding box of living cells.

        Returns:
            Tuple of (min_x, min_y, max_x, max_y) or None if no living cells
        """
        xs, ys = np.nonzero(self._alive)
        if len(xs) == 0:
            return None

        return (int(xs.min()), int(ys.min()), int(xs.max()), int(ys.max()))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return (
            self.shape == other.shape
            and np.array_equal(self._alive, other._alive)
            and np.array_equal(self._counts, other._counts)
        )

    def __repr__(self) -> str:
        return f"Grid({self._width}, {self._height}, population={self.population})"

    def __str__(self) -> str:
        """Render as pattern text, rows top to bottom."""
        return format_pattern(self._alive.T.tolist())


def _is_index(value: object) -> bool:
    return isinstance(value, (int, np.integer)) and not isinstance(value, bool)


def _is_positive_int(value: object) -> bool:
    return _is_index(value) and value >= 1
