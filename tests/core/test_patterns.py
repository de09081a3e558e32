"""Tests for the SamplePattern and PatternLibrary classes."""

import pytest
from lifegame.core.errors import PatternTooLarge
from lifegame.core.game import GameOfLife
from lifegame.core.grid import CellState
from lifegame.core.patterns import PatternLibrary, SamplePattern

A = CellState.ALIVE
D = CellState.DEAD


class TestSamplePattern:
    """Test cases for the SamplePattern class."""

    def test_initialization(self):
        """Test pattern initialization."""
        pattern = SamplePattern("Dot", [0, 0, 0, 1], "One live cell")

        assert pattern.name == "Dot"
        assert pattern.cells == [D, D, D, A]
        assert pattern.description == "One live cell"
        assert pattern.edge_length == 2
        assert pattern.population == 1

    def test_from_rows_stores_bottom_row_first(self):
        """Test text rows are reversed into bottom-first order."""
        pattern = SamplePattern.from_rows("Corner", ["#..", "...", "..#"])

        # Bottom text row "..#" comes first
        assert pattern.cells == [D, D, A, D, D, D, A, D, D]

    def test_from_rows_pads_to_square(self):
        """Test ragged rows are padded with dead cells."""
        pattern = SamplePattern.from_rows("Ragged", ["###"])

        assert pattern.edge_length == 3
        assert pattern.population == 3
        assert pattern.to_rows() == ["###", "...", "..."]

    def test_from_rows_alive_characters(self):
        """Test every alive marker is recognised."""
        pattern = SamplePattern.from_rows("Markers", ["#*", "Ox"])
        assert pattern.population == 3

    def test_to_rows_round_trip(self):
        """Test rendering back to text keeps the top row on top."""
        rows = [".#.", "..#", "###"]
        pattern = SamplePattern.from_rows("Glider", rows)
        assert pattern.to_rows() == rows

    def test_apply_to_places_upright(self):
        """Test a pattern lands upright at the grid centre."""
        game = GameOfLife.create(9, 9)
        SamplePattern.from_rows("Glider", [".#.", "..#", "###"]).apply_to(game)

        # offset 4 - 1 = 3; top text row is source row 2 -> grid row 9 - 5 = 4
        assert str(game.grid).splitlines()[4:7] == ["....*....", ".....*...", "...***..."]

    def test_apply_to_too_large(self):
        """Test applying an oversized pattern raises and keeps the grid."""
        game = GameOfLife.create(2, 2)
        game.set_cell(0, 0, A)

        with pytest.raises(PatternTooLarge):
            SamplePattern.from_rows("Big", ["###", "###", "###"]).apply_to(game)

        assert game.population == 1


class TestPatternLibrary:
    """Test cases for the PatternLibrary class."""

    def test_builtin_patterns(self):
        """Test built-in patterns are present and square."""
        library = PatternLibrary()
        names = library.list_patterns()

        for name in ["Block", "Blinker", "Toad", "Beacon", "Pulsar", "Glider", "R-pentomino"]:
            assert name in names
            pattern = library.get_pattern(name)
            assert len(pattern.cells) == pattern.edge_length ** 2

    def test_builtin_populations(self):
        """Test built-in pattern cell counts."""
        library = PatternLibrary()
        assert library.get_pattern("Block").population == 4
        assert library.get_pattern("Blinker").population == 3
        assert library.get_pattern("Glider").population == 5
        assert library.get_pattern("Pulsar").population == 48
        assert library.get_pattern("Pulsar").edge_length == 13

    def test_get_missing_pattern(self):
        """Test unknown names return None."""
        assert PatternLibrary().get_pattern("Nope") is None

    def test_add_pattern(self):
        """Test adding a custom pattern."""
        library = PatternLibrary()
        library.add_pattern(SamplePattern("Custom", [1]))

        assert "Custom" in library.list_patterns()
        assert library.get_pattern("Custom").population == 1

    def test_block_stays_still_when_seeded(self):
        """Test the Block sample is a still life."""
        game = GameOfLife.create(8, 8)
        PatternLibrary().get_pattern("Block").apply_to(game)
        before = game.cells

        for _ in range(4):
            game.step()

        assert (game.cells == before).all()

    def test_pulsar_has_period_three(self):
        """Test the Pulsar sample returns after three steps."""
        game = GameOfLife.create(32, 32)
        PatternLibrary().get_pattern("Pulsar").apply_to(game)
        before = game.cells

        game.step()
        assert not (game.cells == before).all()
        game.step()
        game.step()
        assert (game.cells == before).all()
