#!/usr/bin/env python3
"""
Example usage of the lifegame package.
"""

import time

import numpy as np

from lifegame import GameOfLife, LifeLoop, PatternLibrary, PatternTooLarge


def main():
    """Demonstrate programmatic usage of the lifegame package."""
    game = GameOfLife.create(20, 20, rng=np.random.default_rng(2024))

    # Centre a glider
    library = PatternLibrary()
    library.get_pattern("Glider").apply_to(game)

    print("Initial state:")
    print(game.grid)
    print(f"Population: {game.population}")
    print()

    for _ in range(4):
        game.step()
    print(f"Generation {game.generation}:")
    print(game.grid)
    print()

    # Patterns larger than the grid are refused without touching it
    tiny = GameOfLife.create(8, 8)
    try:
        library.get_pattern("Pulsar").apply_to(tiny)
    except PatternTooLarge as e:
        print(f"Refused: {e}")
    print()

    # Random seeding and the timed loop
    game.seed_random(12)
    loop = LifeLoop(game, interval=0.1)
    loop.start()
    time.sleep(1.0)
    loop.stop()
    loop.join()

    print(f"After ~1s of looping: generation {game.generation}, population {game.population}")
    print(game.grid)


if __name__ == "__main__":
    main()
