"""Arena game logic: creatures, matchup rules, combat and the editor console."""

from .creature import Creature, CreatureFactory
from .matchup import MatchupOutcome, resolve_matchup
from .combat_resolver import CombatResolver, CombatRoundResult
from .population import Population

__all__ = [
    "Creature",
    "CreatureFactory",
    "MatchupOutcome",
    "resolve_matchup",
    "CombatResolver",
    "CombatRoundResult",
    "Population",
]
