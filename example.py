#!/usr/bin/env python3
"""
Example usage of the lifegrid package.
"""

from lifegrid import Grid, GameOfLife, PatternLibrary


def main():
    """Demonstrate programmatic usage of the lifegrid package."""
    grid = Grid(20, 20)
    game = GameOfLife(grid)

    library = PatternLibrary()
    glider = library.get_pattern("Glider")

    if glider:
        glider.apply_to_grid(grid, offset_x=8, offset_y=8)

        print("Initial state:")
        print(grid)
        print(f"Population: {game.population}")
        print()

        for _ in range(10):
            game.step()
            print(f"Generation {game.generation}:")
            print(grid)
            print(f"Population: {game.population}")

            if game.cycle_detected:
                print(f"Cycle detected! Length: {game.cycle_length}")
                break

            print()

    # The same grid can be seeded straight from pattern text
    grid.clear()
    grid.seed_from_pattern(
        """
        - - # - -
        # - # - -
        - # # - -
        """
    )
    print(f"Seeded from text, neighbours of (1, 1): {grid.live_neighbour_count(1, 1)}")

    stats = game.get_statistics()
    print("Final statistics:")
    for key, value in stats.items():
        print(f"  {key}: {value}")


if __name__ == "__main__":
    main()
