#!/usr/bin/env python3

import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(__file__)))

from npc_arena.core.event_manager import EventManager
from npc_arena.core.events import EventType
from npc_arena.game.combat_resolver import CombatResolver
from npc_arena.game.creature import CreatureFactory
from npc_arena.game.death_loggers import ConsoleDeathLogger
from npc_arena.game.population import Population


def main():
    print("npc-arena - Demo Mode")
    print("Four creatures meet in one simultaneous round (range 10)")
    print("")

    event_manager = EventManager()
    event_manager.subscribe(EventType.CREATURE_DIED, ConsoleDeathLogger())

    population = Population()
    for record in ("Orc Bob 10 10", "Bear Pim 10 11", "Squirrel chuck 10 12", "Orc Bobby 9 10"):
        population.add(CreatureFactory.from_record(record))

    print(population.format_listing())
    print("")

    result = CombatResolver(event_manager).resolve_round(population, 10.0)

    print("")
    print(f"Round {result.round_number}: {result.pairs_evaluated} engagements, {len(result.deaths)} deaths")
    print(population.format_listing())
    print("\nThe round demonstrates:")
    print("  - Pim dies to Bob yet still kills chuck in the same round")
    print("  - Every victim is reported exactly once")
    print("  - Orcs never fight each other")


if __name__ == "__main__":
    main()
