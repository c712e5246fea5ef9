"""Conway's Game of Life simulation driver."""

import logging
from collections import deque
from typing import Deque, Dict, List, Tuple

import numpy as np

from .grid import Grid

logger = logging.getLogger(__name__)


class GameOfLife:
    """Conway's Game of Life simulation driver.

    Advances a ``Grid`` one generation at a time and keeps track of the
    generation number, recent population counts, how many cells each step
    flipped and repeated states.

    The rules themselves live in ``Grid.step``:
    - Live cell with 2-3 neighbours survives
    - Dead cell with exactly 3 neighbours becomes alive
    - All other cells die or stay dead
    """

    def __init__(self, grid: Grid, history_size: int = 100, max_tracked_states: int = 1000) -> None:
        """Initialize the game with a grid.

        Args:
            grid: The cellular grid to simulate
            history_size: Number of recent population and changed-cell counts to keep
            max_tracked_states: Number of recent states remembered for cycle detection
        """
        self.grid = grid
        self._generation = 0
        self._population_history: Deque[int] = deque(maxlen=history_size)
        self._changed_history: Deque[int] = deque(maxlen=history_size)
        self._last_changed = 0
        self._total_changes = 0
        self._max_tracked_states = max_tracked_states
        self._state_history: Deque[Tuple[bytes, int]] = deque()
        self._seen_states: Dict[bytes, int] = {}
        self._cycle_detected = False
        self._cycle_length = 0
        self._cycle_start_generation = 0

        self._update_population_history()

    @property
    def generation(self) -> int:
        """Current generation number."""
        return self._generation

    @property
    def population(self) -> int:
        """Current number of living cells."""
        return self.grid.population

    @property
    def population_history(self) -> List[int]:
        """History of population counts."""
        return list(self._population_history)

    @property
    def changed_cells(self) -> int:
        """Number of cells that flipped in the most recent step."""
        return self._last_changed

    @property
    def total_changes(self) -> int:
        """Cells flipped across every step since construction or reset."""
        return self._total_changes

    @property
    def cycle_detected(self) -> bool:
        """Whether a cycle has been detected."""
        return self._cycle_detected

    @property
    def cycle_length(self) -> int:
        """Length of detected cycle (0 if no cycle)."""
        return self._cycle_length

    @property
    def cycle_start_generation(self) -> int:
        """Generation where cycle started (0 if no cycle)."""
        return self._cycle_start_generation

    def step(self) -> int:
        """Advance the simulation by one generation.

        Returns:
            Number of cells that changed state
        """
        self.grid.save_state()
        self._check_for_cycles()

        changed = self.grid.step()

        self._generation += 1
        self._last_changed = changed
        self._total_changes += changed
        self._changed_history.append(changed)
        self._update_population_history()
        return changed

    def run(self, generations: int) -> None:
        """Advance the simulation by a fixed number of generations."""
        for _ in range(generations):
            self.step()

    def _update_population_history(self) -> None:
        self._population_history.append(self.population)

    def _check_for_cycles(self) -> None:
        """Check if the current state has been seen before."""
        if self._cycle_detected:
            return

        current_state = self.grid.cells.tobytes()

        if current_state in self._seen_states:
            first_occurrence = self._seen_states[current_state]
            self._cycle_detected = True
            self._cycle_length = self._generation - first_occurrence
            self._cycle_start_generation = first_occurrence
            logger.debug(
                "Cycle of length %d detected at generation %d", self._cycle_length, self._generation
            )
            return

        self._seen_states[current_state] = self._generation
        self._state_history.append((current_state, self._generation))

        # Forget the oldest state once the window is full
        if len(self._state_history) > self._max_tracked_states:
            old_state, old_generation = self._state_history.popleft()
            if self._seen_states.get(old_state) == old_generation:
                del self._seen_states[old_state]

    def reset(self, clear_grid: bool = True) -> None:
        """Reset the simulation.

        Args:
            clear_grid: Whether to clear the grid as well
        """
        if clear_grid:
            self.grid.clear()

        self._generation = 0
        self._population_history.clear()
        self._changed_history.clear()
        self._last_changed = 0
        self._total_changes = 0
        self.clear_cycle_detection()

        self._update_population_history()

    def clear_cycle_detection(self) -> None:
        """Forget remembered states.

        Call this after editing the grid by hand, since earlier states no
        longer describe where the simulation is heading.
        """
        self._cycle_detected = False
        self._cycle_length = 0
        self._cycle_start_generation = 0
        self._seen_states.clear()
        self._state_history.clear()

    def run_until_stable(self, max_generations: int = 10000) -> Tuple[int, str]:
        """Step until the grid dies out, stops changing or repeats a state.

        Args:
            max_generations: Maximum generations to run

        Returns:
            Tuple of (final_generation, reason) where reason is one of:
            'extinction', 'still', 'cycle', 'max_generations'
        """
        for _ in range(max_generations):
            changed = self.step()

            if self.population == 0:
                return self._generation, "extinction"

            # No cell flipped, so every later generation is identical
            if changed == 0:
                return self._generation, "still"

            if self._cycle_detected:
                return self._generation, "cycle"

        return self._generation, "max_generations"

    def get_statistics(self) -> Dict:
        """Snapshot of the counters tracked by the driver."""
        changes = np.fromiter(self._changed_history, dtype=np.int64)
        return {
            "generation": self._generation,
            "population": self.population,
            "population_history": list(self._population_history),
            "changed_cells": self._last_changed,
            "total_changes": self._total_changes,
            "mean_changed_cells": float(changes.mean()) if changes.size else 0.0,
            "cycle_detected": self._cycle_detected,
            "cycle_length": self._cycle_length,
            "cycle_start_generation": self._cycle_start_generation,
            "bounding_box": self.grid.get_bounding_box(),
        }
