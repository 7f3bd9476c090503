"""Spatial data structures for the arena.

Positions are real-valued and stored in (x, y) order, matching the text
record format and console output.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Position:
    """Immutable 2D point inside the arena."""
    x: float
    y: float

    def within_bounds(self, low: float, high: float) -> bool:
        """Check both coordinates lie in the inclusive range [low, high]."""
        return low <= self.x <= high and low <= self.y <= high

    def __str__(self) -> str:
        return f"({format_coordinate(self.x)},{format_coordinate(self.y)})"


def format_coordinate(value: float) -> str:
    """Render a coordinate compactly: integral values lose their ".0"."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))
