"""
Species matchup rules.

The arena runs on a small food chain: orcs hunt bears and bears hunt
squirrels. Squirrels hunt nothing. The rules are a fixed lookup table keyed
on (attacker species, defender species), so every pair has a definite
outcome and the table can be checked exhaustively.

A single evaluation covers both directions of an encounter:

- ``defender_dies`` when the attacker's species dominates the defender's
- ``attacker_dies`` when the defender's species dominates the attacker's,
  i.e. the defender kills the attacker in reaction

Pairs without a dominance relation (same species, orc and squirrel) never
kill.
"""

from dataclasses import dataclass
from itertools import product

from ..core.game_enums import Species


@dataclass(frozen=True)
class MatchupOutcome:
    """Result of one attacker/defender evaluation."""
    defender_dies: bool = False
    attacker_dies: bool = False

    @property
    def any_death(self) -> bool:
        return self.defender_dies or self.attacker_dies


# Predator -> prey
DOMINANCE: frozenset[tuple[Species, Species]] = frozenset({
    (Species.ORC, Species.BEAR),
    (Species.BEAR, Species.SQUIRREL),
})


def dominates(predator: Species, prey: Species) -> bool:
    """Check whether ``predator`` kills ``prey`` whenever they meet."""
    return (predator, prey) in DOMINANCE


def _build_matchup_table() -> dict[tuple[Species, Species], MatchupOutcome]:
    return {
        (attacker, defender): MatchupOutcome(
            defender_dies=dominates(attacker, defender),
            attacker_dies=dominates(defender, attacker),
        )
        for attacker, defender in product(Species, repeat=2)
    }


MATCHUP_TABLE: dict[tuple[Species, Species], MatchupOutcome] = _build_matchup_table()


def resolve_matchup(attacker: Species, defender: Species) -> MatchupOutcome:
    """Look up the outcome of ``attacker`` engaging ``defender``.

    Args:
        attacker: Species of the attacking creature
        defender: Species of the defending creature

    Returns:
        The outcome for this ordered pair; total over all species pairs
    """
    return MATCHUP_TABLE[(attacker, defender)]
