"""Toroidal cell buffer for the Game of Life."""

from enum import IntEnum
from typing import Iterable, Iterator, Tuple
import numpy as np
import torch
import torch.nn.functional as F

from .errors import InvalidDimension


class CellState(IntEnum):
    """Binary state of a single cell."""

    DEAD = 0
    ALIVE = 1


class Grid:
    """Fixed-size 2D grid of cells with toroidal (wraparound) edges.

    Cells live in a flat numpy buffer of length ``width * height`` indexed
    as ``x + y * width``. The buffer is never resized; a new generation is
    installed by replacing the whole buffer with :meth:`replace_cells`.
    """

    def __init__(self, width: int, height: int) -> None:
        """Initialize a new grid with every cell dead.

        Args:
            width: Number of columns
            height: Number of rows

        Raises:
            InvalidDimension: If width or height is not a positive integer
        """
        if not _is_positive_int(width) or not _is_positive_int(height):
            raise InvalidDimension(width, height)

        self._width = int(width)
        self._height = int(height)
        self._cells = np.zeros(self._width * self._height, dtype=np.int8)
        self._previous_cells = np.zeros_like(self._cells)
        # False once the buffer is written outside replace_cells
        self._changes_tracked = False

        # Reused input tensor and neighbor kernel for the convolution
        self._torch_input = torch.zeros(1, 1, self._height, self._width, dtype=torch.float32)
        self._torch_kernel = (
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
    def size(self) -> int:
        """Total number of cells."""
        return self._cells.size

    @property
    def cells(self) -> np.ndarray:
        """Get the current flat cell buffer (read-only view)."""
        view = self._cells.view()
        view.flags.writeable = False
        return view

    @property
    def previous_cells(self) -> np.ndarray:
        """Get the buffer replaced by the last call to replace_cells (read-only view)."""
        view = self._previous_cells.view()
        view.flags.writeable = False
        return view

    @property
    def population(self) -> int:
        """Get the number of living cells."""
        return int(np.count_nonzero(self._cells))

    def index(self, x: int, y: int) -> int:
        """Flat buffer index of (x, y), wrapping coordinates around the torus."""
        return (x % self._width) + (y % self._height) * self._width

    def get_cell(self, x: int, y: int) -> CellState:
        """Get the state of a cell.

        Coordinates outside the grid wrap around.

        Args:
            x: Column coordinate
            y: Row coordinate

        Returns:
            State of the cell
        """
        return CellState(int(self._cells[self.index(x, y)]))

    def set_cell(self, x: int, y: int, state: CellState) -> None:
        """Set the state of a cell, wrapping coordinates around the torus.

        Args:
            x: Column coordinate
            y: Row coordinate
            state: New cell state (a CellState or anything truthy/falsy)
        """
        self._cells[self.index(x, y)] = CellState.ALIVE if state else CellState.DEAD
        self._changes_tracked = False

    def fill(self, state: CellState) -> None:
        """Set every cell to the given state."""
        self._cells.fill(int(state))
        self._changes_tracked = False

    def clear(self) -> None:
        """Clear all cells (set all to dead)."""
        self.fill(CellState.DEAD)

    def load(self, values: np.ndarray) -> None:
        """Overwrite the whole buffer with values.

        Raises:
            ValueError: If the value count doesn't match the grid size
        """
        values = np.asarray(values, dtype=np.int8).reshape(-1)
        if values.size != self.size:
            raise ValueError(f"Expected {self.size} cells, got {values.size}")
        self._cells[:] = values
        self._changes_tracked = False

    def write_cells(self, indices: Iterable[int], values: Iterable[int]) -> None:
        """Overwrite the cells at the given flat indices."""
        self._cells[np.asarray(list(indices), dtype=np.intp)] = np.asarray(list(values), dtype=np.int8)
        self._changes_tracked = False

    def replace_cells(self, next_cells: np.ndarray) -> None:
        """Install next_cells as the current generation.

        The current buffer becomes previous_cells. The swap is a single
        reference assignment, so readers see either the old or the new
        generation, never a mix.

        Raises:
            ValueError: If next_cells has the wrong size
        """
        if next_cells.shape != self._cells.shape:
            raise ValueError(f"Buffer shape {next_cells.shape} doesn't match grid {self._cells.shape}")
        self._previous_cells, self._cells = self._cells, next_cells.astype(np.int8, copy=False)
        self._changes_tracked = True

    def get_changed_cells(self) -> Iterator[Tuple[int, int]]:
        """Get coordinates of cells that changed in the last buffer replacement.

        Nothing is reported if the grid has been written directly (set_cell,
        fill, load, write_cells) since then, or was never replaced.

        Yields:
            Tuples of (x, y) coordinates for changed cells
        """
        if not self._changes_tracked:
            return
        for index in np.flatnonzero(self._cells != self._previous_cells):
            yield (int(index) % self._width, int(index) // self._width)

    def get_neighbors(self, x: int, y: int) -> int:
        """Count living neighbors of a cell.

        The 8 neighbor positions are the cross product of the wrapped
        columns {x-1, x, x+1} and rows {y-1, y, y+1} minus the centre
        position. On grids narrower than 3 cells some positions coincide
        and are counted once per position.

        Args:
            x: Column coordinate
            y: Row coordinate

        Returns:
            Number of living neighbors (0-8)
        """
        x %= self._width
        y %= self._height
        xl = (x - 1 + self._width) % self._width
        xr = (x + 1) % self._width
        yt = (y - 1 + self._height) % self._height
        yb = (y + 1) % self._height

        count = 0
        for row, ny in enumerate((yt, y, yb)):
            for col, nx in enumerate((xl, x, xr)):
                if row == 1 and col == 1:
                    continue
                count += int(self._cells[nx + ny * self._width])
        return count

    def count_all_neighbors(self) -> np.ndarray:
        """Count neighbors for all cells using a circular-padded convolution.

        Returns:
            Flat array with the neighbor count of each cell
        """
        # Row-major buffer reshapes to (height, width) for PyTorch
        self._torch_input[0, 0] = torch.from_numpy(
            self._cells.reshape(self._height, self._width).astype(np.float32)
        )
        padded = F.pad(self._torch_input, (1, 1, 1, 1), mode="circular")
        neighbors = F.conv2d(padded, self._torch_kernel)
        return neighbors[0, 0].numpy().astype(np.int8).reshape(-1)

    def __eq__(self, other: object) -> bool:
        """Check if two grids are equal."""
        if not isinstance(other, Grid):
            return False
        return self.shape == other.shape and np.array_equal(self._cells, other._cells)

    def __str__(self) -> str:
        """String representation showing living cells as '*' and dead as '.'."""
        rows = self._cells.reshape(self._height, self._width)
        return "\n".join("".join("*" if cell else "." for cell in row) for row in rows)


def _is_positive_int(value: object) -> bool:
    return isinstance(value, (int, np.integer)) and not isinstance(value, bool) and value > 0
