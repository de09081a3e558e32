"""Square sample patterns for seeding the centre of a grid."""

import math
from typing import Dict, List, Optional, Sequence

from .game import GameOfLife
from .grid import CellState

ALIVE_CHARS = "#*O"


class SamplePattern:
    """A square Game of Life pattern.

    Cells are stored flat, bottom row first, which is the order
    GameOfLife.seed_pattern expects.
    """

    def __init__(self, name: str, cells: Sequence[CellState], description: str = "") -> None:
        """Initialize a pattern.

        Args:
            name: Pattern name
            cells: Flat square sequence of cell states, bottom row first
            description: Optional description
        """
        self.name = name
        self.cells = [CellState(cell) for cell in cells]
        self.description = description

    @classmethod
    def from_rows(cls, name: str, rows: Sequence[str], description: str = "") -> "SamplePattern":
        """Create a pattern from text rows written top to bottom.

        Rows are padded with dead cells to a square whose side is the
        larger of the row count and the longest row.

        Args:
            name: Pattern name
            rows: Text rows, '#', '*' or 'O' marking living cells
            description: Optional description

        Returns:
            New SamplePattern instance
        """
        edge = max([len(rows)] + [len(row) for row in rows])
        padded = list(rows) + [""] * (edge - len(rows))

        cells: List[CellState] = []
        for row in reversed(padded):
            row = row.ljust(edge, ".")
            cells.extend(CellState.ALIVE if char in ALIVE_CHARS else CellState.DEAD for char in row)

        return cls(name, cells, description)

    @property
    def edge_length(self) -> int:
        """Side of the square."""
        return int(round(math.sqrt(len(self.cells))))

    @property
    def population(self) -> int:
        """Number of living cells in the pattern."""
        return sum(1 for cell in self.cells if cell == CellState.ALIVE)

    def apply_to(self, game: GameOfLife) -> None:
        """Seed this pattern at the centre of the game's grid.

        Raises:
            PatternTooLarge: If the pattern doesn't fit in the grid
        """
        game.seed_pattern(self.cells, self.edge_length)

    def to_rows(self) -> List[str]:
        """Render the pattern as text rows, top to bottom."""
        edge = self.edge_length
        rows = [
            "".join("#" if cell == CellState.ALIVE else "." for cell in self.cells[start:start + edge])
            for start in range(0, len(self.cells), edge)
        ]
        return list(reversed(rows))


class PatternLibrary:
    """Manages a collection of sample patterns."""

    def __init__(self) -> None:
        self._patterns: Dict[str, SamplePattern] = {}
        self._load_builtin_patterns()

    def _load_builtin_patterns(self) -> None:
        """Load built-in common patterns."""
        # Still life
        self.add_pattern(SamplePattern.from_rows("Block", ["##", "##"], "2x2 still life block"))

        # Oscillators
        self.add_pattern(
            SamplePattern.from_rows("Blinker", ["...", "###", "..."], "Period-2 oscillator")
        )

        self.add_pattern(
            SamplePattern.from_rows("Toad", ["....", ".###", "###.", "...."], "Period-2 oscillator")
        )

        self.add_pattern(
            SamplePattern.from_rows("Beacon", ["##..", "##..", "..##", "..##"], "Period-2 oscillator")
        )

        self.add_pattern(
            SamplePattern.from_rows(
                "Pulsar",
                [
                    "..###...###..",
                    ".............",
                    "#....#.#....#",
                    "#....#.#....#",
                    "#....#.#....#",
                    "..###...###..",
                    ".............",
                    "..###...###..",
                    "#....#.#....#",
                    "#....#.#....#",
                    "#....#.#....#",
                    ".............",
                    "..###...###..",
                ],
                "Period-3 oscillator",
            )
        )

        # Spaceships
        self.add_pattern(
            SamplePattern.from_rows("Glider", [".#.", "..#", "###"], "Smallest spaceship, period-4")
        )

        # Methuselahs
        self.add_pattern(
            SamplePattern.from_rows(
                "R-pentomino",
                [".##", "##.", ".#."],
                "Famous methuselah that stabilizes after 1103 generations",
            )
        )

    def add_pattern(self, pattern: SamplePattern) -> None:
        """Add a pattern to the library, replacing any with the same name."""
        self._patterns[pattern.name] = pattern

    def get_pattern(self, name: str) -> Optional[SamplePattern]:
        """Get a pattern by name.

        Args:
            name: Pattern name

        Returns:
            SamplePattern instance or None if not found
        """
        return self._patterns.get(name)

    def list_patterns(self) -> List[str]:
        """Get list of all pattern names."""
        return list(self._patterns.keys())
