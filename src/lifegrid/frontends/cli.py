"""Command-line interface for Conway's Game of Life."""

import argparse
import logging
import sys
import time
from typing import List, Optional, TextIO

from ..core.errors import GridError
from ..core.game import GameOfLife
from ..core.grid import Grid

logger = logging.getLogger(__name__)

CLEAR_SCREEN = "\x1b[2J\x1b[H"


class CLIGameOfLife:
    """Runs a simulation in the terminal, redrawing the grid every generation."""

    def __init__(self, out: Optional[TextIO] = None, clear_screen: bool = True) -> None:
        """Initialize CLI interface.

        Args:
            out: Stream frames are written to (defaults to stdout)
            clear_screen: Clear the terminal before each frame
        """
        self.out = out if out is not None else sys.stdout
        self.clear_screen = clear_screen

    def create_grid(
        self,
        width: int,
        height: int,
        seed_text: Optional[str] = None,
        population_rate: float = 0.5,
        random_seed: Optional[int] = None,
    ) -> Grid:
        """Create and seed a grid.

        Args:
            width: Grid width
            height: Grid height
            seed_text: Pattern text; random seeding is used when None
            population_rate: Probability of each cell being born when random
            random_seed: Seed for reproducible random population

        Returns:
            The seeded grid
        """
        grid = Grid(width, height, rng=random_seed)
        if seed_text is not None:
            grid.seed_from_pattern(seed_text)
        else:
            grid.seed_random(population_rate)

        logger.debug("Created %dx%d grid with %d live cells", width, height, grid.population)
        return grid

    def run_simulation(self, grid: Grid, max_generations: int = 0, delay_ms: float = 50.0) -> GameOfLife:
        """Draw and advance the grid until the generation limit.

        Args:
            grid: Seeded grid
            max_generations: Generations to run (0 runs until interrupted)
            delay_ms: Desired time per frame in milliseconds

        Returns:
            The game after the last generation
        """
        game = GameOfLife(grid)
        desired = delay_ms / 1000.0

        while True:
            self._draw(game)
            if max_generations and game.generation >= max_generations:
                return game

            before = time.perf_counter()
            game.step()
            elapsed = time.perf_counter() - before

            if elapsed < desired:
                time.sleep(desired - elapsed)
            elif desired > 0:
                logger.warning(
                    "simulation too slow: %.1fms (desired: %.1fms)", elapsed * 1000, delay_ms
                )

    def _draw(self, game: GameOfLife) -> None:
        if self.clear_screen:
            self.out.write(CLEAR_SCREEN)
        self.out.write(self.format_frame(game))
        self.out.write("\n")
        self.out.flush()

    @staticmethod
    def format_frame(game: GameOfLife) -> str:
        """Format the grid and a status line."""
        return (
            f"{game.grid}\nGeneration: {game.generation}  Population: {game.population}"
            f"  Changed: {game.changed_cells}"
        )


def load_seed_file(path: str) -> str:
    """Read pattern text from a file."""
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser.

    Returns:
        Configured argument parser
    """
    parser = argparse.ArgumentParser(
        description="Conway's Game of Life on a wrap-around grid",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                          # Random 40x30 grid, runs until Ctrl-C
  %(prog)s -s glider.txt -g 100     # Seed from a pattern file for 100 generations
  %(prog)s -p 0.3 --random-seed 42  # Reproducible random population

Pattern files hold rows of space-separated tokens, '#' alive and '-' dead:
  - # -
  - # -
  - # -
        """,
    )

    parser.add_argument("-W", "--width", type=int, default=40, help="Grid width (default: 40)")
    parser.add_argument("-H", "--height", type=int, default=30, help="Grid height (default: 30)")
    parser.add_argument("-s", "--seed", metavar="FILE", help="Seed the grid from a pattern file")
    parser.add_argument(
        "-p",
        "--population",
        type=float,
        default=0.5,
        help="Random population probability when no seed file is given (default: 0.5)",
    )
    parser.add_argument("--random-seed", type=int, help="Random seed for reproducible populations")
    parser.add_argument(
        "-g",
        "--generations",
        type=int,
        default=0,
        help="Number of generations to run, 0 runs until interrupted (default: 0)",
    )
    parser.add_argument(
        "-d",
        "--delay",
        type=float,
        default=50.0,
        help="Desired time per generation in milliseconds (default: 50)",
    )
    parser.add_argument("--no-clear", action="store_true", help="Don't clear the terminal between frames")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    return parser


def validate_args(args: argparse.Namespace) -> bool:
    """Validate command-line arguments.

    Args:
        args: Parsed arguments

    Returns:
        True if arguments are valid
    """
    errors = []

    if args.width <= 0:
        errors.append("Width must be positive")

    if args.height <= 0:
        errors.append("Height must be positive")

    if not 0.0 <= args.population <= 1.0:
        errors.append("Population rate must be between 0.0 and 1.0")

    if args.generations < 0:
        errors.append("Generations must be non-negative")

    if args.delay < 0:
        errors.append("Delay must be non-negative")

    if errors:
        print("Error: Invalid arguments:")
        for error in errors:
            print(f"  - {error}")
        return False

    return True


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI interface.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if not validate_args(args):
        return 1

    cli = CLIGameOfLife(clear_screen=not args.no_clear)

    try:
        seed_text = load_seed_file(args.seed) if args.seed else None
        grid = cli.create_grid(
            args.width,
            args.height,
            seed_text=seed_text,
            population_rate=args.population,
            random_seed=args.random_seed,
        )
        cli.run_simulation(grid, max_generations=args.generations, delay_ms=args.delay)
        return 0

    except KeyboardInterrupt:
        print("\nSimulation interrupted by user")
        return 1
    except (GridError, OSError, UnicodeDecodeError) as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
