"""Tests for the Grid class."""

import numpy as np
import pytest
from lifegame.core.errors import InvalidDimension
from lifegame.core.grid import CellState, Grid


class TestGrid:
    """Test cases for the Grid class."""

    def test_initialization(self):
        """Test grid initialization."""
        grid = Grid(10, 20)
        assert grid.width == 10
        assert grid.height == 20
        assert grid.shape == (10, 20)
        assert grid.size == 200
        assert grid.population == 0
        assert len(grid.cells) == 200

    @pytest.mark.parametrize("width,height", [(0, 5), (5, 0), (-1, 5), (5, -3), (0, 0)])
    def test_invalid_dimensions(self, width, height):
        """Test that non-positive dimensions are rejected."""
        with pytest.raises(InvalidDimension):
            Grid(width, height)

    def test_non_integer_dimensions(self):
        """Test that non-integer dimensions are rejected."""
        with pytest.raises(InvalidDimension):
            Grid(2.5, 4)
        with pytest.raises(InvalidDimension):
            Grid(True, 4)

    def test_invalid_dimension_is_value_error(self):
        """Test InvalidDimension can be caught as ValueError."""
        with pytest.raises(ValueError):
            Grid(0, 1)

    def test_cell_operations(self):
        """Test basic cell get/set operations."""
        grid = Grid(5, 5)

        # Initially all cells should be dead
        assert grid.get_cell(0, 0) is CellState.DEAD
        assert grid.get_cell(2, 3) is CellState.DEAD

        grid.set_cell(1, 1, CellState.ALIVE)
        grid.set_cell(2, 3, True)

        assert grid.get_cell(1, 1) is CellState.ALIVE
        assert grid.get_cell(2, 3) is CellState.ALIVE
        assert not grid.get_cell(0, 0)

        grid.set_cell(1, 1, CellState.DEAD)
        assert grid.get_cell(1, 1) is CellState.DEAD

    def test_row_major_layout(self):
        """Test that the flat buffer is indexed x + y * width."""
        grid = Grid(4, 3)
        grid.set_cell(1, 2, CellState.ALIVE)

        assert grid.index(1, 2) == 9
        assert grid.cells[9] == 1
        assert grid.population == 1

    def test_wrap_coordinates(self):
        """Test coordinate wrapping on reads and writes."""
        grid = Grid(3, 3)

        grid.set_cell(-1, -1, CellState.ALIVE)  # Wraps to (2, 2)
        assert grid.get_cell(2, 2)

        grid.set_cell(3, 4, CellState.ALIVE)  # Wraps to (0, 1)
        assert grid.get_cell(0, 1)
        assert grid.get_cell(-3, -2)

    def test_cells_view_is_read_only(self):
        """Test the exposed buffer cannot be written through."""
        grid = Grid(3, 3)
        with pytest.raises(ValueError):
            grid.cells[0] = 1

    def test_clear_and_fill(self):
        """Test grid clearing and filling."""
        grid = Grid(5, 5)

        grid.fill(CellState.ALIVE)
        assert grid.population == 25

        grid.clear()
        assert grid.population == 0

    def test_load(self):
        """Test loading a whole buffer."""
        grid = Grid(2, 2)
        grid.load([1, 0, 0, 1])
        assert grid.get_cell(0, 0)
        assert grid.get_cell(1, 1)
        assert grid.population == 2

        with pytest.raises(ValueError):
            grid.load([1, 0, 1])

    def test_replace_cells_keeps_previous(self):
        """Test buffer replacement and change tracking."""
        grid = Grid(3, 3)
        grid.set_cell(1, 1, CellState.ALIVE)
        grid.set_cell(2, 2, CellState.ALIVE)
        before = grid.cells

        next_cells = np.zeros(9, dtype=np.int8)
        next_cells[grid.index(2, 2)] = 1
        next_cells[grid.index(0, 1)] = 1
        grid.replace_cells(next_cells)

        assert np.array_equal(grid.previous_cells, before)
        changed = list(grid.get_changed_cells())
        assert sorted(changed) == [(0, 1), (1, 1)]
        # Views taken before the swap still show the old generation
        assert before[grid.index(1, 1)] == 1

    def test_changed_cells_need_a_replacement(self):
        """Test direct writes clear the changes of the last replacement."""
        grid = Grid(3, 3)
        assert list(grid.get_changed_cells()) == []

        next_cells = np.zeros(9, dtype=np.int8)
        next_cells[grid.index(1, 1)] = 1
        grid.replace_cells(next_cells)
        assert list(grid.get_changed_cells()) == [(1, 1)]

        grid.set_cell(0, 0, CellState.ALIVE)
        assert list(grid.get_changed_cells()) == []

        grid.replace_cells(np.zeros(9, dtype=np.int8))
        assert sorted(grid.get_changed_cells()) == [(0, 0), (1, 1)]

        grid.clear()
        assert list(grid.get_changed_cells()) == []

    def test_replace_cells_wrong_size(self):
        """Test that replace_cells rejects a mismatched buffer."""
        grid = Grid(3, 3)
        with pytest.raises(ValueError):
            grid.replace_cells(np.zeros(8, dtype=np.int8))

    def test_get_neighbors(self):
        """Test neighbor counting for individual cells."""
        grid = Grid(5, 5)

        assert grid.get_neighbors(2, 2) == 0

        grid.set_cell(1, 1, CellState.ALIVE)
        grid.set_cell(1, 2, CellState.ALIVE)
        grid.set_cell(2, 1, CellState.ALIVE)

        assert grid.get_neighbors(0, 0) == 1  # Only (1,1) neighbor
        assert grid.get_neighbors(2, 2) == 3  # All three cells are neighbors
        assert grid.get_neighbors(1, 1) == 2  # Cell itself doesn't count
        assert grid.get_neighbors(3, 3) == 0

    def test_diagonal_wraparound(self):
        """Test that (0,0) sees (w-1, h-1) as a neighbor."""
        grid = Grid(6, 4)
        grid.set_cell(5, 3, CellState.ALIVE)

        assert grid.get_neighbors(0, 0) == 1
        assert grid.count_all_neighbors()[grid.index(0, 0)] == 1

    def test_count_all_neighbors(self):
        """Test vectorized neighbor counting."""
        grid = Grid(5, 5)

        # Vertical line
        grid.set_cell(2, 1, CellState.ALIVE)
        grid.set_cell(2, 2, CellState.ALIVE)
        grid.set_cell(2, 3, CellState.ALIVE)

        counts = grid.count_all_neighbors()

        assert counts[grid.index(2, 2)] == 2
        assert counts[grid.index(1, 2)] == 3
        assert counts[grid.index(3, 2)] == 3
        assert counts[grid.index(0, 0)] == 0

    @pytest.mark.parametrize("width,height", [(1, 1), (2, 1), (1, 3), (2, 2), (3, 5), (7, 4)])
    def test_vectorized_matches_per_cell_count(self, width, height):
        """Test both neighbor counters agree, including on tiny grids."""
        grid = Grid(width, height)
        rng = np.random.default_rng(7)
        grid.load(rng.integers(0, 2, size=width * height))

        counts = grid.count_all_neighbors()
        for y in range(height):
            for x in range(width):
                assert counts[grid.index(x, y)] == grid.get_neighbors(x, y)

    def test_single_cell_grid_counts_itself_eight_times(self):
        """Test that every wrapped position on a 1x1 grid is the cell itself."""
        grid = Grid(1, 1)
        grid.set_cell(0, 0, CellState.ALIVE)
        assert grid.get_neighbors(0, 0) == 8

    def test_equality(self):
        """Test grid equality comparison."""
        grid1 = Grid(3, 3)
        grid2 = Grid(3, 3)
        assert grid1 == grid2

        grid1.set_cell(1, 1, CellState.ALIVE)
        grid2.set_cell(1, 1, CellState.ALIVE)
        assert grid1 == grid2

        grid2.set_cell(2, 2, CellState.ALIVE)
        assert grid1 != grid2

        assert grid1 != Grid(4, 4)
        assert grid1 != "not a grid"

    def test_string_representation(self):
        """Test string representation."""
        grid = Grid(3, 2)
        assert str(grid) == "...\n..."

        grid.set_cell(0, 0, CellState.ALIVE)
        grid.set_cell(2, 1, CellState.ALIVE)
        assert str(grid) == "*..\n..*"
