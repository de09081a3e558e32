"""Conway's Game of Life engine on a toroidal grid."""

import logging
import math
import threading
from typing import Iterator, Optional, Sequence, Tuple
import numpy as np

from .config import SimulationConfig
from .errors import PatternError, PatternShapeError, PatternTooLarge
from .grid import CellState, Grid

logger = logging.getLogger(__name__)


class GameOfLife:
    """Conway's Game of Life simulation engine.

    Implements the classic B3/S23 rules:
    - Live cell with 2-3 neighbors survives
    - Dead cell with exactly 3 neighbors becomes alive
    - All other cells die or stay dead

    All mutating operations are serialized by an internal re-entrant lock,
    so the engine can be driven by a LifeLoop thread while other threads
    seed, reset or read snapshots.
    """

    def __init__(self, grid: Grid, rng: Optional[np.random.Generator] = None) -> None:
        """Initialize the game with a grid.

        Args:
            grid: The cellular grid to simulate
            rng: Random source for seed_random (defaults to a fresh Generator)
        """
        self._grid = grid
        self._rng = rng if rng is not None else np.random.default_rng()
        self._generation = 0
        self._lock = threading.RLock()

    @classmethod
    def create(cls, width: int, height: int, rng: Optional[np.random.Generator] = None) -> "GameOfLife":
        """Create an engine over a new all-dead grid.

        Raises:
            InvalidDimension: If width or height is not positive
        """
        return cls(Grid(width, height), rng=rng)

    @classmethod
    def from_config(cls, config: SimulationConfig) -> "GameOfLife":
        """Create an engine sized by config, seeding its RNG when config.seed is set."""
        return cls.create(config.width, config.height, rng=np.random.default_rng(config.seed))

    @property
    def grid(self) -> Grid:
        """The underlying grid."""
        return self._grid

    @property
    def lock(self) -> threading.RLock:
        """Lock serializing every mutation of the grid."""
        return self._lock

    @property
    def width(self) -> int:
        return self._grid.width

    @property
    def height(self) -> int:
        return self._grid.height

    @property
    def generation(self) -> int:
        """Number of steps since the last reset or seeding."""
        return self._generation

    @property
    def population(self) -> int:
        """Current number of living cells."""
        with self._lock:
            return self._grid.population

    @property
    def cells(self) -> np.ndarray:
        """Snapshot copy of the flat cell buffer in ``x + y * width`` order."""
        with self._lock:
            return self._grid.cells.copy()

    def get_cell_state(self, x: int, y: int) -> CellState:
        """State of the cell at (x, y); coordinates wrap around the torus."""
        return self._grid.get_cell(x, y)

    def set_cell(self, x: int, y: int, state: CellState) -> None:
        """Set a single cell, e.g. when hand-seeding a configuration."""
        with self._lock:
            self._grid.set_cell(x, y, state)

    def get_changed_cells(self) -> Iterator[Tuple[int, int]]:
        """Coordinates of cells changed by the last step.

        Empty when no step has run since the last reset, seeding or set_cell.
        """
        with self._lock:
            changed = list(self._grid.get_changed_cells())
        return iter(changed)

    def step(self) -> None:
        """Advance the simulation by one generation."""
        with self._lock:
            self._grid.replace_cells(self._next_generation())
            self._generation += 1

            if logger.isEnabledFor(logging.DEBUG):
                logger.debug(f"Generation {self._generation}: population {self._grid.population}")

    def _next_generation(self) -> np.ndarray:
        """Compute the next generation into a fresh buffer without touching the grid."""
        cells = self._grid.cells
        neighbor_counts = self._grid.count_all_neighbors()

        # Birth: dead cell with exactly 3 neighbors
        birth_mask = (cells == CellState.DEAD) & (neighbor_counts == 3)

        # Survival: live cell with 2 or 3 neighbors
        survive_mask = (cells == CellState.ALIVE) & ((neighbor_counts == 2) | (neighbor_counts == 3))

        return (birth_mask | survive_mask).astype(np.int8)

    def reset(self) -> None:
        """Kill every cell and restart the generation count."""
        with self._lock:
            self._grid.clear()
            self._generation = 0

        logger.info("Grid reset")

    def seed_random(self, live_probability_percent: int) -> None:
        """Randomly populate the whole grid.

        Each cell independently draws a uniform integer in [0, 100) from
        the engine's random source and is alive if the draw is below
        live_probability_percent.

        Args:
            live_probability_percent: Chance each cell will be alive (0 to 100)

        Raises:
            ValueError: If the percentage is not an integer in [0, 100]
        """
        if (
            not isinstance(live_probability_percent, (int, np.integer))
            or isinstance(live_probability_percent, bool)
            or not 0 <= live_probability_percent <= 100
        ):
            raise ValueError(
                f"Live probability must be an integer percentage in [0, 100], got {live_probability_percent!r}"
            )

        with self._lock:
            draws = self._rng.integers(0, 100, size=self._grid.size)
            self._grid.load(draws < live_probability_percent)
            self._generation = 0

        logger.info(f"Seeded grid randomly at {live_probability_percent}%: population {self.population}")

    def seed_pattern(self, pattern: Sequence[CellState], edge_length: Optional[int] = None) -> None:
        """Place a square pattern at the centre of the grid.

        The pattern is a flat sequence listed bottom row first, so it is
        flipped vertically on placement: pattern index i lands on column
        ``i % edge + offset_x`` and row ``height - (i // edge + offset_y)``,
        where the offsets are ``width // 2 - edge // 2`` and
        ``height // 2 - edge // 2``. When that row equals ``height`` (only
        possible if ``height // 2 == edge // 2``) it wraps to row 0.
        Cells outside the pattern keep their state.

        Args:
            pattern: Cell states, edge_length * edge_length of them
            edge_length: Side of the square (defaults to round(sqrt(len(pattern))))

        Raises:
            PatternShapeError: If the pattern is not a square of edge_length
            PatternTooLarge: If edge_length exceeds the grid width or height
            PatternError: If a value is not a valid cell state
        """
        values = []
        for value in pattern:
            if not _is_integral(value) or value not in (CellState.DEAD, CellState.ALIVE):
                raise PatternError(f"Pattern contains an invalid cell state: {value!r}")
            values.append(CellState(int(value)))

        if edge_length is None:
            edge_length = int(round(math.sqrt(len(values))))
        elif not _is_integral(edge_length) or isinstance(edge_length, bool):
            raise PatternShapeError(f"Edge length must be an integer, got {edge_length!r}")
        else:
            edge_length = int(edge_length)

        if edge_length < 1 or len(values) != edge_length * edge_length:
            raise PatternShapeError(
                f"Pattern of {len(values)} cells is not a square with edge length {edge_length}"
            )

        width, height = self._grid.shape
        if edge_length > width or edge_length > height:
            logger.error(f"Not enough cells for a {edge_length}x{edge_length} pattern on a {width}x{height} grid")
            raise PatternTooLarge(edge_length, width, height)

        offset_x = width // 2 - edge_length // 2
        offset_y = height // 2 - edge_length // 2

        source = np.arange(len(values))
        dest_x = source % edge_length + offset_x
        # Pattern rows count from the bottom, grid rows from the top
        dest_y = (height - (source // edge_length + offset_y)) % height

        with self._lock:
            self._grid.write_cells(dest_x + dest_y * width, values)
            self._generation = 0

        logger.info(f"Placed {edge_length}x{edge_length} pattern at offset ({offset_x}, {offset_y})")


def _is_integral(value: object) -> bool:
    return isinstance(value, (int, np.integer))
