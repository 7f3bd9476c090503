"""Core data structures, events and infrastructure.

This package contains the pieces shared by every arena component:
- game_enums.py: Species enum and arena defaults
- data_structures.py: Position value object and coordinate formatting
- events.py: Immutable event dataclasses published on the event bus
- event_manager.py: Publisher-subscriber event bus
- config.py: YAML-backed arena configuration
"""

from .data_structures import Position, format_coordinate
from .game_enums import Species, SPECIES_NAMES, DEFAULT_MIN_COORD, DEFAULT_MAX_COORD

__all__ = [
    "Position",
    "format_coordinate",
    "Species",
    "SPECIES_NAMES",
    "DEFAULT_MIN_COORD",
    "DEFAULT_MAX_COORD",
]
