"""Arena events published on the event bus.

Event Design Principles:
- Events are immutable dataclasses
- Every event carries the combat round number it belongs to (0 outside combat)
- The event type is fixed per class and set after initialization
"""

from dataclasses import dataclass, field
from typing import Optional
from abc import ABC
from enum import Enum, auto


class EventType(Enum):
    """Types of arena events that components can subscribe to."""
    # Combat Events
    COMBAT_ROUND_STARTED = auto()
    COMBAT_ROUND_ENDED = auto()
    CREATURE_DIED = auto()

    # Population Events
    CREATURE_ADDED = auto()
    POPULATION_CLEARED = auto()
    POPULATION_LOADED = auto()
    POPULATION_SAVED = auto()

    # Logging Events
    LOG_MESSAGE = auto()
    DEBUG_MESSAGE = auto()


@dataclass(frozen=True)
class ArenaEvent(ABC):
    """Base class for all arena events."""
    round_number: int
    event_type: EventType = field(init=False)


@dataclass(frozen=True)
class CreatureDied(ArenaEvent):
    """Emitted once per victim when a combat round kills a creature.

    The position is the victim's position at the time of death.
    """
    killer: str
    victim: str
    x: float
    y: float

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.CREATURE_DIED)


@dataclass(frozen=True)
class CombatRoundStarted(ArenaEvent):
    """Emitted before a combat round evaluates any pair."""
    attack_range: float
    participants: int

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.COMBAT_ROUND_STARTED)


@dataclass(frozen=True)
class CombatRoundEnded(ArenaEvent):
    """Emitted after deaths were delivered and the dead were swept."""
    deaths: int
    survivors: int

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.COMBAT_ROUND_ENDED)


@dataclass(frozen=True)
class CreatureAdded(ArenaEvent):
    """Emitted when a creature joins the population."""
    name: str
    species_name: str
    x: float
    y: float

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.CREATURE_ADDED)


@dataclass(frozen=True)
class PopulationCleared(ArenaEvent):
    """Emitted when every creature is removed from the population."""
    removed: int

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.POPULATION_CLEARED)


@dataclass(frozen=True)
class PopulationLoaded(ArenaEvent):
    """Emitted after a record file replaced the population."""
    path: str
    loaded: int
    skipped: int

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.POPULATION_LOADED)


@dataclass(frozen=True)
class PopulationSaved(ArenaEvent):
    """Emitted after the population was written to a record file."""
    path: str
    saved: int

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.POPULATION_SAVED)


@dataclass(frozen=True)
class LogMessage(ArenaEvent):
    """Event emitted when a log message is created."""
    message: str
    category: str
    level: str
    source: str

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.LOG_MESSAGE)


@dataclass(frozen=True)
class DebugMessage(ArenaEvent):
    """Event emitted for debug-specific messages."""
    message: str
    source: str
    context: Optional[dict] = None

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.DEBUG_MESSAGE)
