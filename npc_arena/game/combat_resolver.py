"""
Combat resolution for simultaneous rounds.

A round evaluates every pair of creatures that were alive when it started and
stand within the attack range of each other. All creatures act as if still
alive for the whole round, so a creature that dies this round can still land
its own kills. Each victim is reported exactly once, credited to the first
pair (in population order) that killed it.
"""
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

import numpy as np

from ..core.events import CombatRoundEnded, CombatRoundStarted, CreatureDied, LogMessage
from .matchup import resolve_matchup

if TYPE_CHECKING:
    from ..core.event_manager import EventManager
    from .creature import Creature
    from .population import Population


@dataclass
class CombatRoundResult:
    """Summary of one combat round."""
    round_number: int
    attack_range: float
    participants: int = 0
    pairs_evaluated: int = 0
    deaths: list[CreatureDied] = field(default_factory=list)
    survivors: list[str] = field(default_factory=list)
    skipped: bool = False


class CombatResolver:
    """Runs combat rounds over a population and reports deaths on the event bus."""

    def __init__(self, event_manager: "EventManager"):
        self.event_manager = event_manager
        self.rounds_resolved = 0

    def _emit_log(self, message: str, level: str = "INFO") -> None:
        self.event_manager.publish_immediate(
            LogMessage(
                round_number=self.rounds_resolved,
                message=message,
                category="COMBAT",
                level=level,
                source="CombatResolver"
            ),
            source="CombatResolver"
        )

    def resolve_round(self, population: "Population", attack_range: float) -> CombatRoundResult:
        """
        Run one simultaneous combat round.

        Dead creatures are removed from ``population`` and one ``CreatureDied``
        event per victim is published after every death has been applied.

        Args:
            population: Creatures taking part; mutated in place
            attack_range: Maximum distance at which two creatures engage

        Returns:
            CombatRoundResult describing the round. A negative or NaN range, or fewer
            than two creatures make the round a no-op with ``skipped`` set.
        """
        creatures = population.creatures
        n = len(creatures)

        # No-op rounds publish nothing at all; a NaN range fails the comparison
        if not attack_range >= 0 or n < 2:
            return CombatRoundResult(
                round_number=self.rounds_resolved,
                attack_range=attack_range,
                survivors=population.names(),
                skipped=True,
            )

        self.rounds_resolved += 1
        result = CombatRoundResult(round_number=self.rounds_resolved, attack_range=attack_range)

        # Liveness snapshot; eligibility never looks at the mutating flags
        alive_at_start = np.array([c.alive for c in creatures], dtype=np.bool_)
        will_die = np.zeros(n, dtype=np.bool_)
        killer_of: list[Optional[str]] = [None] * n
        result.participants = int(alive_at_start.sum())

        self.event_manager.publish_immediate(
            CombatRoundStarted(
                round_number=result.round_number,
                attack_range=attack_range,
                participants=result.participants
            ),
            source="CombatResolver"
        )

        def record_death(victim: int, killer: int) -> None:
            will_die[victim] = True
            if killer_of[victim] is None:
                killer_of[victim] = creatures[killer].name
                dead = creatures[victim]
                result.deaths.append(
                    CreatureDied(
                        round_number=result.round_number,
                        killer=creatures[killer].name,
                        victim=dead.name,
                        x=dead.x,
                        y=dead.y
                    )
                )

        # argwhere yields (i, j) in row-major order: i ascending, then j ascending
        for i, j in np.argwhere(self._eligible_pairs(creatures, alive_at_start, attack_range)):
            i, j = int(i), int(j)
            result.pairs_evaluated += 1
            outcome = resolve_matchup(creatures[i].species, creatures[j].species)
            if not outcome.any_death:
                continue
            if outcome.defender_dies:
                record_death(j, i)
            if outcome.attacker_dies:
                record_death(i, j)

        for idx in np.flatnonzero(will_die):
            creature = creatures[idx]
            if creature.alive:
                creature.mark_dead()

        for event in result.deaths:
            self.event_manager.publish_immediate(event, source="CombatResolver")

        population.remove_dead()
        result.survivors = population.names()

        self.event_manager.publish_immediate(
            CombatRoundEnded(
                round_number=result.round_number,
                deaths=len(result.deaths),
                survivors=len(result.survivors)
            ),
            source="CombatResolver"
        )
        self._emit_log(
            f"Round {result.round_number}: range {attack_range}, "
            f"{result.pairs_evaluated} engagements, {len(result.deaths)} deaths"
        )
        return result

    @staticmethod
    def _eligible_pairs(
        creatures: list["Creature"],
        alive_at_start: np.ndarray,
        attack_range: float
    ) -> np.ndarray:
        """Upper-triangular mask of pairs that were alive at start and are in range."""
        positions = np.array([(c.x, c.y) for c in creatures], dtype=np.float64)
        deltas = positions[:, np.newaxis, :] - positions[np.newaxis, :, :]
        distance_sq = np.einsum("ijk,ijk->ij", deltas, deltas)

        in_range = distance_sq <= attack_range * attack_range
        both_alive = np.logical_and.outer(alive_at_start, alive_at_start)
        return np.triu(in_range & both_alive, k=1)
