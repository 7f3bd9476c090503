"""
Log management for arena messages and debugging.

Components never print diagnostics directly; they publish ``LogMessage`` and
``DebugMessage`` events. The LogManager collects them into a bounded,
categorized buffer that the console can display or save to disk.
"""
import os
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, auto
from typing import Optional, TYPE_CHECKING

from ..core.events import DebugMessage, EventType, LogMessage as LogEvent

if TYPE_CHECKING:
    from ..core.event_manager import EventManager


class LogCategory(Enum):
    """Categories for log messages."""
    SYSTEM = auto()      # Startup, configuration
    COMBAT = auto()      # Combat rounds
    POPULATION = auto()  # Creatures added or cleared
    STORAGE = auto()     # Save and load
    INPUT = auto()       # Console commands
    DEBUG = auto()
    WARNING = auto()
    ERROR = auto()


CATEGORY_TAGS = {
    LogCategory.SYSTEM: "SYS",
    LogCategory.COMBAT: "CMB",
    LogCategory.POPULATION: "POP",
    LogCategory.STORAGE: "STO",
    LogCategory.INPUT: "INP",
    LogCategory.DEBUG: "DBG",
    LogCategory.WARNING: "WRN",
    LogCategory.ERROR: "ERR",
}


class LogLevel(Enum):
    """Log levels for filtering."""
    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3


@dataclass
class LogEntry:
    """A single log message with metadata."""
    text: str
    category: LogCategory
    level: LogLevel = LogLevel.INFO
    timestamp: datetime = field(default_factory=datetime.now)

    def format(self, include_timestamp: bool = False, include_category: bool = True) -> str:
        """Format the message for display."""
        parts = []
        if include_timestamp:
            parts.append(f"[{self.timestamp.strftime('%H:%M:%S')}]")
        if include_category:
            parts.append(f"[{CATEGORY_TAGS.get(self.category, '???')}]")
        parts.append(self.text)
        return " ".join(parts)


class LogManager:
    """Collects categorized log messages from the event bus."""

    def __init__(
        self,
        event_manager: "EventManager",
        max_messages: int = 1000,
        default_level: LogLevel = LogLevel.INFO
    ):
        """Initialize the log manager.

        Args:
            event_manager: Event manager to receive log events from
            max_messages: Maximum number of messages kept in the buffer
            default_level: Minimum level returned by ``get_messages``
        """
        self.messages: deque[LogEntry] = deque(maxlen=max_messages)
        self.log_level = default_level
        self.event_manager = event_manager

        self.event_manager.subscribe(
            EventType.LOG_MESSAGE,
            self._handle_log_message_event,
            subscriber_name="LogManager.log_message"
        )
        self.event_manager.subscribe(
            EventType.DEBUG_MESSAGE,
            self._handle_debug_message_event,
            subscriber_name="LogManager.debug_message"
        )

    def _handle_log_message_event(self, event: LogEvent) -> None:
        try:
            category = LogCategory[event.category.upper()]
        except KeyError:
            category = LogCategory.SYSTEM
        try:
            level = LogLevel[event.level.upper()]
        except KeyError:
            level = LogLevel.INFO
        self.log(event.message, category, level)

    def _handle_debug_message_event(self, event: DebugMessage) -> None:
        self.log(f"[{event.source}] {event.message}", LogCategory.DEBUG, LogLevel.DEBUG)

    def log(self, text: str, category: LogCategory = LogCategory.SYSTEM,
            level: LogLevel = LogLevel.INFO) -> None:
        """Add a message to the buffer."""
        self.messages.append(LogEntry(text=text, category=category, level=level))

    def system(self, text: str) -> None:
        self.log(text, LogCategory.SYSTEM)

    def debug(self, text: str) -> None:
        self.log(text, LogCategory.DEBUG, LogLevel.DEBUG)

    def error(self, text: str) -> None:
        self.log(text, LogCategory.ERROR, LogLevel.ERROR)

    def get_messages(self, count: Optional[int] = None,
                     categories: Optional[set[LogCategory]] = None) -> list[LogEntry]:
        """Get recent messages at or above the current level.

        Args:
            count: Maximum number of messages to return (None for all)
            categories: Only include these categories (None for all)
        """
        filtered = [
            msg for msg in self.messages
            if msg.level.value >= self.log_level.value
            and (categories is None or msg.category in categories)
        ]
        if count is not None:
            return filtered[-count:] if count > 0 else []
        return filtered

    def set_log_level(self, level: LogLevel) -> None:
        self.log_level = level

    def save_log_to_file(self, log_dir: str = "logs") -> Optional[str]:
        """Save every buffered message, ignoring the level filter.

        Returns:
            Path of the written file, or None if it could not be written
        """
        filename = f"log_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log"
        filepath = os.path.join(log_dir, filename)
        try:
            os.makedirs(log_dir, exist_ok=True)
            with open(filepath, 'w', encoding='utf-8') as f:
                f.write("npc-arena - Session Log\n")
                f.write(f"Generated: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}\n")
                f.write("=" * 60 + "\n\n")
                if not self.messages:
                    f.write("No messages to save.\n")
                for msg in self.messages:
                    stamp = msg.timestamp.strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]
                    f.write(f"[{stamp}] [{msg.category.name}] {msg.text}\n")
        except OSError as e:
            self.error(f"Failed to save log file: {e}")
            return None

        self.system(f"Session log saved to {filepath}")
        return filepath
