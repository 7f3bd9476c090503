"""
Configuration loader for arena settings.

This module handles loading and parsing of the YAML configuration file that
sets the arena bounds, the death log file and console behavior.
"""
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import yaml

from .data_structures import Position
from .game_enums import DEFAULT_MAX_COORD, DEFAULT_MIN_COORD

DEFAULT_CONFIG_PATH = "assets/config/arena.yaml"


@dataclass
class ArenaConfig:
    """Arena settings shared by the population, storage and console."""
    min_coord: float = DEFAULT_MIN_COORD
    max_coord: float = DEFAULT_MAX_COORD
    death_log_file: str = "log.txt"
    prompt: str = "> "
    echo_deaths: bool = True
    debug_events: bool = False

    def __post_init__(self):
        if self.min_coord > self.max_coord:
            raise ValueError(
                f"Arena bounds are inverted: min_coord={self.min_coord} > max_coord={self.max_coord}"
            )

    def contains(self, x: float, y: float) -> bool:
        """Check a point lies inside the arena, bounds included."""
        return Position(x, y).within_bounds(self.min_coord, self.max_coord)


class ArenaConfigLoader:
    """Loads arena settings from a YAML file, falling back to defaults."""

    def __init__(self, config_path: Optional[str] = None):
        self.config_path = config_path or DEFAULT_CONFIG_PATH
        self._raw: dict[str, Any] = {}

    def _resolve_path(self) -> Path:
        if os.path.isabs(self.config_path):
            return Path(self.config_path)
        # Relative paths are relative to the project root
        project_root = Path(__file__).parent.parent.parent
        return project_root / self.config_path

    def load(self) -> ArenaConfig:
        """
        Load configuration from the YAML file.

        Returns:
            ArenaConfig: Parsed settings, or defaults when the file is missing
            or cannot be parsed

        Raises:
            ValueError: If the file describes inverted arena bounds
        """
        config_file = self._resolve_path()
        if not config_file.exists():
            print(f"Warning: Arena config file not found: {config_file}")
            return ArenaConfig()

        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                self._raw = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            print(f"Error loading arena config: {e}")
            return ArenaConfig()

        try:
            values = self._parse(self._raw)
        except (AttributeError, TypeError, ValueError) as e:
            print(f"Error parsing arena config: {e}")
            return ArenaConfig()

        return ArenaConfig(**values)

    @staticmethod
    def _parse(data: dict[str, Any]) -> dict[str, Any]:
        """Read and coerce the known keys; raises on malformed sections or values."""
        defaults = ArenaConfig()
        arena = data.get('arena', {}) or {}
        logging_section = data.get('logging', {}) or {}
        console = data.get('console', {}) or {}

        return dict(
            min_coord=float(arena.get('min_coord', defaults.min_coord)),
            max_coord=float(arena.get('max_coord', defaults.max_coord)),
            death_log_file=str(logging_section.get('death_log_file', defaults.death_log_file)),
            prompt=str(console.get('prompt', defaults.prompt)),
            echo_deaths=bool(logging_section.get('echo_deaths', defaults.echo_deaths)),
            debug_events=bool(logging_section.get('debug_events', defaults.debug_events)),
        )
