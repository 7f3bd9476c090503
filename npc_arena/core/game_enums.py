"""Centralized arena enums and constants.

This module contains the core enums shared by the creature model, the
matchup table and the console, providing a single source of truth for
species names.
"""

from enum import Enum, auto


class Species(Enum):
    """Closed set of creature species that can populate the arena."""
    ORC = auto()
    BEAR = auto()
    SQUIRREL = auto()

    @property
    def display_name(self) -> str:
        """Canonical name used in records and console output."""
        return SPECIES_NAMES[self]

    @classmethod
    def from_name(cls, name: str) -> "Species":
        """Parse a species name, ignoring case.

        Args:
            name: Species name such as "Orc", "bear" or "SQUIRREL"

        Returns:
            The matching Species

        Raises:
            ValueError: If the name does not match any species
        """
        lookup = {display.lower(): species for species, display in SPECIES_NAMES.items()}
        try:
            return lookup[name.strip().lower()]
        except KeyError:
            raise ValueError(f"Unknown species: {name!r}") from None


SPECIES_NAMES = {
    Species.ORC: "Orc",
    Species.BEAR: "Bear",
    Species.SQUIRREL: "Squirrel",
}

# Arena bounds used when no configuration file overrides them
DEFAULT_MIN_COORD = 0.0
DEFAULT_MAX_COORD = 500.0
