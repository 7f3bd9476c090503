"""
Basic test fixtures for the npc-arena test suite.

Provides event bus, population and resolver fixtures plus a recorder for
death events.
"""

import sys
import os
import pytest
from unittest.mock import Mock

# Add the project root to the Python path
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

from npc_arena.core.config import ArenaConfig
from npc_arena.core.event_manager import EventManager
from npc_arena.core.events import EventType
from npc_arena.game.combat_resolver import CombatResolver
from npc_arena.game.creature import CreatureFactory
from npc_arena.game.population import Population


class DeathRecorder:
    """Subscriber that keeps every death event it receives."""

    def __init__(self):
        self.events = []

    def __call__(self, event):
        self.events.append(event)

    def pairs(self):
        return [(e.killer, e.victim) for e in self.events]

    def victims(self):
        return [e.victim for e in self.events]


@pytest.fixture
def event_manager():
    """Create an event manager for testing."""
    return EventManager(enable_debug_logging=False)


@pytest.fixture
def death_recorder(event_manager):
    """Recorder subscribed to death events."""
    recorder = DeathRecorder()
    event_manager.subscribe(EventType.CREATURE_DIED, recorder)
    return recorder


@pytest.fixture
def arena_config():
    return ArenaConfig()


@pytest.fixture
def population(arena_config):
    """Create an empty population with default arena bounds."""
    return Population(arena_config)


@pytest.fixture
def resolver(event_manager):
    return CombatResolver(event_manager)


@pytest.fixture
def populate(population):
    """Add creatures from ``species name x y`` records, asserting each is accepted."""
    def _populate(*records):
        for record in records:
            creature = CreatureFactory.from_record(record)
            assert population.add(creature), f"rejected: {record}"
        return population
    return _populate


@pytest.fixture
def event_spy(event_manager):
    """Mock subscribed to every event type, in delivery order."""
    spy = Mock()
    for event_type in EventType:
        event_manager.subscribe(event_type, spy)
    return spy
