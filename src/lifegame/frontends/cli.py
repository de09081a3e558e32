"""Command-line interface for the Game of Life engine."""

import argparse
import logging
import sys
import time
from typing import Any, Dict, List, Optional, Tuple

from ..core.config import (
    DEFAULT_HEIGHT,
    DEFAULT_INTERVAL,
    DEFAULT_LIVE_PERCENT,
    DEFAULT_WIDTH,
    SimulationConfig,
)
from ..core.errors import LifeGameError, PatternError
from ..core.game import GameOfLife
from ..core.grid import Grid
from ..core.loop import LifeLoop
from ..core.patterns import PatternLibrary
from ..logging_config import setup_logging


class CLIGameOfLife:
    """Command-line interface for running Game of Life simulations."""

    def __init__(self):
        """Initialize CLI interface."""
        self.pattern_library = PatternLibrary()

    def build_game(self, config: SimulationConfig, verbose: bool = False) -> GameOfLife:
        """Create an engine and seed it from config.

        A named sample pattern is centred on an otherwise empty grid;
        without one the grid is seeded randomly.

        Raises:
            InvalidDimension: If the grid size is invalid
            PatternError: If no pattern has the configured name
            PatternTooLarge: If the pattern doesn't fit in the grid
        """
        game = GameOfLife.from_config(config)

        if verbose:
            print(f"Initializing {config.width}x{config.height} toroidal grid")

        if config.pattern:
            pattern = self.pattern_library.get_pattern(config.pattern)
            if pattern is None:
                available = ", ".join(self.pattern_library.list_patterns())
                raise PatternError(f"Pattern '{config.pattern}' not found (available: {available})")

            if verbose:
                print(f"Loading pattern '{config.pattern}' at the grid centre")
            pattern.apply_to(game)
            return game

        if verbose:
            print(f"Generating random population ({config.live_percent}% live)")
        game.seed_random(config.live_percent)
        return game

    def run_simulation(
        self, config: SimulationConfig, verbose: bool = False, show_grid: bool = False
    ) -> Tuple[int, Dict[str, Any]]:
        """Step a simulation config.generations times.

        Returns:
            Tuple of (final_generation, statistics)
        """
        game = self.build_game(config, verbose)
        initial_population = game.population

        if show_grid:
            print("\nInitial grid:")
            print(self._format_grid(game.grid))

        if verbose:
            print(f"\nRunning {config.generations} generations...")

        start_time = time.time()
        for _ in range(config.generations):
            game.step()
        duration = time.time() - start_time

        if show_grid:
            print(f"\nFinal grid (generation {game.generation}):")
            print(self._format_grid(game.grid))

        return game.generation, self._statistics(game, initial_population, duration)

    def run_loop(
        self,
        config: SimulationConfig,
        run_seconds: float,
        verbose: bool = False,
        show_grid: bool = False,
    ) -> Tuple[int, Dict[str, Any]]:
        """Drive a simulation with a LifeLoop for run_seconds of wall time.

        Returns:
            Tuple of (final_generation, statistics)
        """
        game = self.build_game(config, verbose)
        initial_population = game.population

        def report(stepped: GameOfLife) -> None:
            print(f"Generation {stepped.generation}: population {stepped.population}")

        loop = LifeLoop(game, interval=config.interval, on_step=report if verbose else None)

        start_time = time.time()
        loop.start()
        try:
            time.sleep(run_seconds)
        finally:
            loop.stop()
            loop.join()
        duration = time.time() - start_time

        if show_grid:
            print(f"\nFinal grid (generation {game.generation}):")
            print(self._format_grid(game.grid))

        return game.generation, self._statistics(game, initial_population, duration)

    def _statistics(self, game: GameOfLife, initial_population: int, duration: float) -> Dict[str, Any]:
        return {
            "generation": game.generation,
            "population": game.population,
            "initial_population": initial_population,
            "grid_size": game.grid.shape,
            "population_density": game.population / game.grid.size,
            "duration_seconds": duration,
            "generations_per_second": game.generation / duration if duration > 0 else 0,
        }

    def _format_grid(self, grid: Grid, max_size: int = 64) -> str:
        """Format grid for display, truncating if too large.

        Args:
            grid: Grid to format
            max_size: Maximum dimension to display

        Returns:
            Formatted grid string
        """
        if grid.width > max_size or grid.height > max_size:
            return f"Grid too large to display ({grid.width}x{grid.height})"

        return str(grid)

    def list_patterns(self) -> None:
        """List available sample patterns."""
        print("Available patterns:")
        for name in self.pattern_library.list_patterns():
            pattern = self.pattern_library.get_pattern(name)
            edge = pattern.edge_length
            print(f"  {name}: {edge}x{edge}, {pattern.population} cells")
            if pattern.description:
                print(f"    {pattern.description}")


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        description="Run Conway's Game of Life on a toroidal grid",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run 100 generations of a random 32x32 grid with 12% live cells
  lifegame-cli

  # Centre a glider on a 20x20 grid and show the result
  lifegame-cli -W 20 -H 20 --pattern Glider --show-grid

  # Reproducible random run
  lifegame-cli --percent 30 --seed 42 --generations 500

  # Step every 0.1s for 5 seconds, printing each generation
  lifegame-cli --run-seconds 5 --verbose

  # List available patterns
  lifegame-cli --list-patterns
        """,
    )

    # Grid configuration
    parser.add_argument(
        "-W", "--width", type=int, default=DEFAULT_WIDTH, help=f"Grid width (default: {DEFAULT_WIDTH})"
    )
    parser.add_argument(
        "-H", "--height", type=int, default=DEFAULT_HEIGHT, help=f"Grid height (default: {DEFAULT_HEIGHT})"
    )

    # Seeding
    parser.add_argument(
        "-p",
        "--percent",
        type=int,
        default=DEFAULT_LIVE_PERCENT,
        help=f"Initial random live-cell percentage 0-100 (default: {DEFAULT_LIVE_PERCENT})",
    )
    parser.add_argument("--pattern", type=str, help="Sample pattern to centre on the grid")
    parser.add_argument("--seed", type=int, help="Random seed for reproducible runs")

    # Running
    parser.add_argument(
        "-g", "--generations", type=int, default=100, help="Generations to step (default: 100)"
    )
    parser.add_argument(
        "--run-seconds",
        type=float,
        help="Run the timed loop for this many seconds instead of a fixed generation count",
    )
    parser.add_argument(
        "-i",
        "--interval",
        type=float,
        default=DEFAULT_INTERVAL,
        help=f"Seconds between loop steps (default: {DEFAULT_INTERVAL})",
    )

    # Output
    parser.add_argument("--show-grid", action="store_true", help="Show initial and final grid states")
    parser.add_argument("--list-patterns", action="store_true", help="List available patterns and exit")
    parser.add_argument("-v", "--verbose", action="store_true", help="Print progress information")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Engine log level (default: WARNING)",
    )
    parser.add_argument("--log-file", type=str, help="Also write engine logs to this file")

    return parser


def validate_args(args: argparse.Namespace) -> bool:
    """Validate command-line arguments.

    Returns:
        True if arguments are valid
    """
    errors: List[str] = []

    if args.width <= 0:
        errors.append("Width must be positive")

    if args.height <= 0:
        errors.append("Height must be positive")

    if not 0 <= args.percent <= 100:
        errors.append("Live percentage must be between 0 and 100")

    if args.generations < 0:
        errors.append("Generations must be non-negative")

    if args.interval < 0:
        errors.append("Interval must be non-negative")

    if args.run_seconds is not None and args.run_seconds < 0:
        errors.append("Run seconds must be non-negative")

    if errors:
        print("Error: Invalid arguments:")
        for error in errors:
            print(f"  - {error}")
        return False

    return True


def config_from_args(args: argparse.Namespace) -> SimulationConfig:
    """Map parsed arguments onto a SimulationConfig."""
    return SimulationConfig(
        width=args.width,
        height=args.height,
        live_percent=args.percent,
        interval=args.interval,
        pattern=args.pattern,
        seed=args.seed,
        generations=args.generations,
    )


def print_results(final_generation: int, stats: Dict[str, Any], verbose: bool) -> None:
    """Print simulation results."""
    print(f"Finished at generation {final_generation}")
    print(f"Population: {stats['initial_population']} -> {stats['population']}")

    if verbose:
        width, height = stats["grid_size"]
        print(f"Grid: {width}x{height}")
        print(f"Density: {stats['population_density']:.2%}")
        print(f"Duration: {stats['duration_seconds']:.3f}s ({stats['generations_per_second']:.1f} gen/s)")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI interface.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    setup_logging(getattr(logging, args.log_level), args.log_file)

    cli = CLIGameOfLife()

    if args.list_patterns:
        cli.list_patterns()
        return 0

    if not validate_args(args):
        return 1

    config = config_from_args(args)

    try:
        if args.run_seconds is not None:
            final_generation, stats = cli.run_loop(config, args.run_seconds, args.verbose, args.show_grid)
        else:
            final_generation, stats = cli.run_simulation(config, args.verbose, args.show_grid)
    except KeyboardInterrupt:
        print("\nSimulation interrupted by user")
        return 1
    except LifeGameError as e:
        print(f"Error: {e}")
        return 1

    print_results(final_generation, stats, args.verbose)
    return 0


if __name__ == "__main__":
    sys.exit(main())
