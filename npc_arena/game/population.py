"""
Population store for the arena.

Keeps creatures in insertion order and enforces the invariants the combat
resolver relies on: every creature lies inside the arena bounds and no two
tracked creatures share a name.
"""
from typing import Callable, Iterable, Iterator, Optional

from ..core.config import ArenaConfig
from .creature import Creature


class Population:
    """Ordered, validated collection of creatures."""

    def __init__(self, config: Optional[ArenaConfig] = None):
        self.config = config or ArenaConfig()
        self._creatures: list[Creature] = []

    def __len__(self) -> int:
        return len(self._creatures)

    def __iter__(self) -> Iterator[Creature]:
        return iter(list(self._creatures))

    def __contains__(self, name: object) -> bool:
        return any(c.name == name for c in self._creatures)

    @property
    def creatures(self) -> list[Creature]:
        """Copy of the creature list in population order."""
        return list(self._creatures)

    def names(self) -> list[str]:
        return [c.name for c in self._creatures]

    def get(self, name: str) -> Optional[Creature]:
        """Find a creature by name."""
        for creature in self._creatures:
            if creature.name == name:
                return creature
        return None

    def can_add(self, creature: Optional[Creature]) -> bool:
        """Check a creature is inside the arena and its name is free."""
        if creature is None:
            return False
        if not self.config.contains(creature.x, creature.y):
            return False
        return creature.name not in self

    def add(self, creature: Optional[Creature]) -> bool:
        """Add a creature.

        Args:
            creature: Creature to add (None is rejected, so factory results
                can be passed straight through)

        Returns:
            True if added, False for out-of-bounds coordinates or a duplicate name
        """
        if not self.can_add(creature):
            return False
        self._creatures.append(creature)
        return True

    def replace(self, creatures: Iterable[Creature]) -> None:
        """Replace the whole population with already validated creatures."""
        self._creatures = list(creatures)

    def clear(self) -> int:
        """Remove every creature.

        Returns:
            Number of creatures removed
        """
        removed = len(self._creatures)
        self._creatures.clear()
        return removed

    def remove_where(self, predicate: Callable[[Creature], bool]) -> list[Creature]:
        """Remove creatures matching ``predicate``, keeping survivors in order.

        Returns:
            The removed creatures, in their former order
        """
        removed: list[Creature] = []
        kept: list[Creature] = []
        for creature in self._creatures:
            (removed if predicate(creature) else kept).append(creature)
        self._creatures = kept
        return removed

    def remove_dead(self) -> list[Creature]:
        """Sweep creatures that have been marked dead."""
        return self.remove_where(lambda c: not c.alive)

    def format_listing(self) -> str:
        """Multi-line listing as printed by the console ``list`` command."""
        lines = [f"--- NPCs ({len(self._creatures)}) ---"]
        lines.extend(c.describe() for c in self._creatures)
        return "\n".join(lines)
