"""Toroidal Conway's Game of Life engine."""

__version__ = "0.1.0"

from .core.errors import (
    InvalidDimension,
    LifeGameError,
    PatternError,
    PatternShapeError,
    PatternTooLarge,
)
from .core.grid import CellState, Grid
from .core.game import GameOfLife
from .core.loop import LifeLoop, LoopState
from .core.patterns import SamplePattern, PatternLibrary
from .core.config import SimulationConfig

__all__ = [
    "CellState",
    "Grid",
    "GameOfLife",
    "LifeLoop",
    "LoopState",
    "SamplePattern",
    "PatternLibrary",
    "SimulationConfig",
    "LifeGameError",
    "InvalidDimension",
    "PatternError",
    "PatternShapeError",
    "PatternTooLarge",
]
