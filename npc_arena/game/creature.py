"""Creature model and factory.

A creature is a single record carrying a species tag; species-specific
behavior lives entirely in the matchup table (see ``matchup.py``).
"""

import math
from typing import Optional, Union

from ..core.data_structures import Position, format_coordinate
from ..core.game_enums import Species


class Creature:
    """One named creature placed in the arena.

    Name, species and position are read-only. Liveness only ever moves from
    alive to dead through ``mark_dead``.

    Examples:
        bob = Creature("Bob", Species.ORC, 10, 10)
        bob.mark_dead()
    """

    __slots__ = ("_name", "_species", "_position", "_alive")

    def __init__(self, name: str, species: Species, x: float, y: float):
        self._name = name
        self._species = species
        self._position = Position(float(x), float(y))
        self._alive = True

    @property
    def name(self) -> str:
        return self._name

    @property
    def species(self) -> Species:
        return self._species

    @property
    def position(self) -> Position:
        return self._position

    @property
    def x(self) -> float:
        return self._position.x

    @property
    def y(self) -> float:
        return self._position.y

    @property
    def alive(self) -> bool:
        return self._alive

    def mark_dead(self) -> None:
        """Mark the creature dead. Calling it again has no effect."""
        self._alive = False

    def to_record(self) -> str:
        """Render the creature as a ``species name x y`` text record."""
        return (
            f"{self._species.display_name} {self._name} "
            f"{format_coordinate(self.x)} {format_coordinate(self.y)}"
        )

    def describe(self) -> str:
        """One-line description for listings."""
        text = f"{self._species.display_name} {self._name} {self._position}"
        if not self._alive:
            text += " [dead]"
        return text

    def __repr__(self) -> str:
        state = "alive" if self._alive else "dead"
        return f"Creature({self._name!r}, {self._species.name}, {self.x}, {self.y}, {state})"


class CreatureFactory:
    """Builds creatures from explicit fields or text records."""

    @staticmethod
    def create(species: Union[Species, str], name: str, x: float, y: float) -> Optional[Creature]:
        """Create a creature, or return None for an unknown species or empty name.

        Args:
            species: Species enum or species name (case-insensitive)
            name: Unique creature name; must not contain whitespace
            x: Horizontal coordinate
            y: Vertical coordinate
        """
        if isinstance(species, str):
            try:
                species = Species.from_name(species)
            except ValueError:
                return None
        if not name or any(ch.isspace() for ch in name):
            return None
        return Creature(name, species, x, y)

    @staticmethod
    def from_record(line: str) -> Optional[Creature]:
        """Parse a ``species name x y`` record.

        Extra trailing fields are ignored. Returns None for malformed lines,
        unknown species or coordinates that are not finite numbers.
        """
        fields = line.split()
        if len(fields) < 4:
            return None
        species_name, name, raw_x, raw_y = fields[:4]
        try:
            x = float(raw_x)
            y = float(raw_y)
        except ValueError:
            return None
        # float() accepts "nan" and "inf", which no arena can contain
        if not (math.isfinite(x) and math.isfinite(y)):
            return None
        return CreatureFactory.create(species_name, name, x, y)
