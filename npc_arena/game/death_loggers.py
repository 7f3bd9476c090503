"""
Death event subscribers.

Both loggers are plain callables meant to be subscribed to
``EventType.CREATURE_DIED`` on the event manager.
"""
from pathlib import Path
from typing import Callable, Union

from ..core.data_structures import Position
from ..core.events import CreatureDied


def format_death(event: CreatureDied) -> str:
    """Human readable death record, e.g. ``Bob killed Pim at (10,11)``."""
    return f"{event.killer} killed {event.victim} at {Position(event.x, event.y)}"


class ConsoleDeathLogger:
    """Prints each death to the console."""

    def __init__(self, output: Callable[[str], None] = print):
        self.output = output

    def __call__(self, event: CreatureDied) -> None:
        self.output(f"[LOG] {format_death(event)}")


class FileDeathLogger:
    """Appends each death to a text file, one line per event."""

    def __init__(self, path: Union[str, Path] = "log.txt"):
        self.path = Path(path)

    def __call__(self, event: CreatureDied) -> None:
        # OSError propagates; the event manager isolates failing subscribers
        with open(self.path, 'a', encoding='utf-8') as f:
            f.write(format_death(event) + "\n")
