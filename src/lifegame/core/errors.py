"""Exceptions raised by the Game of Life engine."""


class LifeGameError(Exception):
    """Base class for all engine errors."""


class InvalidDimension(LifeGameError, ValueError):
    """Raised when a grid is constructed with a non-positive width or height."""

    def __init__(self, width: object, height: object) -> None:
        super().__init__(f"Grid dimensions must be positive integers, got {width}x{height}")
        self.width = width
        self.height = height


class PatternError(LifeGameError, ValueError):
    """Raised when a seed pattern cannot be placed on the grid."""


class PatternTooLarge(PatternError):
    """Raised when a pattern's edge length exceeds either grid dimension."""

    def __init__(self, edge_length: int, width: int, height: int) -> None:
        super().__init__(
            f"Pattern edge length {edge_length} does not fit in {width}x{height} grid"
        )
        self.edge_length = edge_length
        self.width = width
        self.height = height


class PatternShapeError(PatternError):
    """Raised when a pattern is not a square of the requested edge length."""
