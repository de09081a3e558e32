"""Simulation settings with the reference defaults."""

from dataclasses import dataclass
from typing import Optional

DEFAULT_WIDTH = 32
DEFAULT_HEIGHT = 32
DEFAULT_LIVE_PERCENT = 12
DEFAULT_INTERVAL = 0.1


@dataclass
class SimulationConfig:
    """Configuration for an engine and its loop driver."""
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    live_percent: int = DEFAULT_LIVE_PERCENT
    interval: float = DEFAULT_INTERVAL
    pattern: Optional[str] = None
    seed: Optional[int] = None
    generations: int = 100
