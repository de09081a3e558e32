"""Core cellular automaton logic."""

from .grid import CellState, Grid
from .game import GameOfLife
from .loop import LifeLoop, LoopState
from .patterns import SamplePattern, PatternLibrary

__all__ = ["CellState", "Grid", "GameOfLife", "LifeLoop", "LoopState", "SamplePattern", "PatternLibrary"]
