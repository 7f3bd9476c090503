#!/usr/bin/env python3

import argparse

from npc_arena.core.config import ArenaConfigLoader
from npc_arena.core.event_manager import EventManager
from npc_arena.core.events import EventType
from npc_arena.game.combat_resolver import CombatResolver
from npc_arena.game.console import ArenaConsole
from npc_arena.game.death_loggers import ConsoleDeathLogger, FileDeathLogger
from npc_arena.game.log_manager import LogLevel, LogManager
from npc_arena.game.population import Population


def build_console(config_path=None) -> ArenaConsole:
    """Wire the population, event bus, death loggers and console together."""
    config = ArenaConfigLoader(config_path).load()

    event_manager = EventManager(enable_debug_logging=config.debug_events)
    log_manager = LogManager(event_manager)
    event_manager.set_debug_callback(log_manager.debug)
    if config.debug_events:
        log_manager.set_log_level(LogLevel.DEBUG)

    if config.echo_deaths:
        event_manager.subscribe(
            EventType.CREATURE_DIED, ConsoleDeathLogger(), subscriber_name="ConsoleDeathLogger"
        )
    event_manager.subscribe(
        EventType.CREATURE_DIED,
        FileDeathLogger(config.death_log_file),
        subscriber_name="FileDeathLogger"
    )

    population = Population(config)
    resolver = CombatResolver(event_manager)
    log_manager.system("Arena initialized")
    return ArenaConsole(population, resolver, event_manager, log_manager, config)


def main():
    parser = argparse.ArgumentParser(description="NPC arena editor")
    parser.add_argument("--config", help="Path to the arena YAML config")
    args = parser.parse_args()

    console = build_console(args.config)

    try:
        console.run()
    except KeyboardInterrupt:
        print("\n\nInterrupted by user")


if __name__ == "__main__":
    main()
