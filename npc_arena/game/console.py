"""
Interactive text console for editing the arena and running combat.

Each console command is a Command object looked up in a CommandRegistry by
its first word. Most commands delegate to an ``action_<name>`` method on
ArenaConsole, the same way key bindings delegate to handler methods. Only
``combat`` reaches the combat resolver.
"""
import math
from abc import ABC, abstractmethod
from typing import Callable, Optional

from ..core.config import ArenaConfig
from ..core.data_structures import format_coordinate
from ..core.event_manager import EventManager
from ..core.events import (
    CreatureAdded, LogMessage, PopulationCleared, PopulationLoaded, PopulationSaved
)
from ..core.game_enums import SPECIES_NAMES, Species
from .combat_resolver import CombatResolver
from .creature import CreatureFactory
from .log_manager import LogManager
from .population import Population
from .storage import load_population_report, save_population

CANCEL_WORDS = ("cancel", "q")

HELP_TEXT = """Arena editor commands:
  help                          - show this help
  add                           - add an NPC (interactive)
  add <species> <name> <x> <y>  - add an NPC in one line (e.g. add Orc Bob 10 20)
  list                          - list all NPCs
  save <file>                   - save all NPCs to a file
  load <file>                   - load NPCs from a file (replaces current NPCs)
  combat <range>                - run one combat round with the given attack range
  clear                         - remove all NPCs
  log [count]                   - show recent log messages
  log save [dir]                - save the session log under dir (default: logs)
  exit                          - quit"""


class Command(ABC):
    """Abstract base class for console commands."""

    @abstractmethod
    def execute(self, console: "ArenaConsole", args: list[str]) -> bool:
        """
        Execute the command.

        Args:
            console: The console instance
            args: Words following the command name

        Returns:
            bool: True if the command completed, False otherwise
        """


class ActionCommand(Command):
    """Command that delegates to ``console.action_<name>(args)``."""

    def __init__(self, action_name: str):
        self.action_name = action_name

    def execute(self, console: "ArenaConsole", args: list[str]) -> bool:
        method = getattr(console, f"action_{self.action_name}", None)
        if method is None:
            return False
        return method(args) is not False


class CommandRegistry:
    """Maps command words to Command instances."""

    def __init__(self):
        self._commands: dict[str, Command] = {}

    def register_command(self, name: str, command: Command) -> None:
        self._commands[name.lower()] = command

    def register_action_method(self, name: str, action_name: Optional[str] = None) -> None:
        """Register ``name`` to call ``console.action_<action_name or name>``."""
        self.register_command(name, ActionCommand(action_name or name))

    def get_command(self, name: str) -> Optional[Command]:
        return self._commands.get(name.lower())


class ArenaConsole:
    """Line-oriented editor over a population."""

    def __init__(
        self,
        population: Population,
        resolver: CombatResolver,
        event_manager: EventManager,
        log_manager: LogManager,
        config: Optional[ArenaConfig] = None,
        input_fn: Callable[[str], str] = input,
        output: Callable[[str], None] = print
    ):
        self.population = population
        self.resolver = resolver
        self.event_manager = event_manager
        self.log_manager = log_manager
        self.config = config or population.config
        self.input_fn = input_fn
        self.output = output
        self.running = False

        self.registry = CommandRegistry()
        for name in ("help", "add", "list", "save", "load", "combat", "clear", "log", "exit"):
            self.registry.register_action_method(name)
        self.registry.register_action_method("quit", "exit")

    # ============== Loop ==============

    def run(self) -> None:
        """Read and execute commands until ``exit`` or end of input."""
        self.running = True
        self.output("Arena editor")
        self.action_help([])
        while self.running:
            try:
                line = self.input_fn(self.config.prompt)
            except EOFError:
                break
            self.execute_line(line)

    def execute_line(self, line: str) -> bool:
        """Execute one command line.

        Returns:
            True if a command ran successfully, False otherwise
        """
        words = line.split()
        if not words:
            return False
        name, args = words[0], words[1:]

        command = self.registry.get_command(name)
        if command is None:
            self.output("Unknown command. Type 'help' for the command list.")
            return False

        self._log(f"Command: {line.strip()}", "INPUT", "DEBUG")
        try:
            return command.execute(self, args)
        except Exception as e:
            # A broken command must never take the console down
            self.log_manager.error(f"Error executing command '{name}': {e}")
            self.output(f"Command '{name}' failed: {e}")
            return False

    def _log(self, message: str, category: str, level: str = "INFO") -> None:
        self.event_manager.publish_immediate(
            LogMessage(
                round_number=self.resolver.rounds_resolved,
                message=message,
                category=category,
                level=level,
                source="ArenaConsole"
            ),
            source="ArenaConsole"
        )

    # ============== Prompts ==============

    def read_line(self, prompt: str) -> Optional[str]:
        """Prompt until non-empty input. Returns None on cancel words or EOF."""
        while True:
            try:
                text = self.input_fn(prompt)
            except EOFError:
                return None
            text = text.strip()
            if not text:
                self.output("Empty input, try again or type 'cancel'/'q' to abort")
                continue
            if text in CANCEL_WORDS:
                return None
            return text

    def read_number(self, prompt: str, low: float, high: float) -> Optional[float]:
        """Prompt until a number in [low, high] is entered. None on cancel or EOF."""
        while True:
            text = self.read_line(prompt)
            if text is None:
                return None
            value = _parse_float(text)
            if value is None:
                self.output("Invalid number, try again or type 'cancel'/'q' to abort")
                continue
            if not low <= value <= high:
                self.output(
                    f"Number is outside [{format_coordinate(low)},{format_coordinate(high)}]. "
                    "Try again or type 'cancel'/'q' to abort"
                )
                continue
            return value

    # ============== Actions ==============

    def action_help(self, args: list[str]) -> bool:
        self.output(HELP_TEXT)
        return True

    def action_add(self, args: list[str]) -> bool:
        if len(args) >= 4:
            added = self._add_inline(args)
            if added is not None:
                return added
        return self._add_interactive()

    def _add_inline(self, args: list[str]) -> Optional[bool]:
        """Try ``species name x y`` arguments. None means fall back to interactive mode."""
        species_name, name = args[0], args[1]
        x, y = _parse_float(args[2]), _parse_float(args[3])
        if x is None or y is None or not self.config.contains(x, y):
            self.output("Invalid inline parameters. Falling back to interactive mode.")
            return None
        if _parse_species(species_name) is None:
            self.output("Unknown species in inline arguments. Falling back to interactive mode.")
            return None
        if self._add_creature(species_name, name, x, y):
            return True
        self.output("Failed to add NPC (duplicate name or coordinates). Falling back to interactive mode.")
        return None

    def _add_interactive(self) -> bool:
        species_names = "|".join(SPECIES_NAMES.values())
        text = self.read_line(f"Species ({species_names}) (or 'cancel'/'q'): ")
        if text is None:
            self.output("Add cancelled")
            return False

        words = text.split()
        if len(words) >= 4:
            x, y = _parse_float(words[2]), _parse_float(words[3])
            if x is None or y is None:
                self.output("Invalid numbers in single-line input. Add cancelled")
                return False
            if _parse_species(words[0]) is None:
                self.output("Unknown NPC species. Add cancelled")
                return False
            if self._add_creature(words[0], words[1], x, y):
                return True
            self.output("Failed to add NPC (duplicate name or coordinates). Add cancelled")
            return False

        species = _parse_species(text)
        if species is None:
            self.output("Unknown NPC species. Add cancelled")
            return False

        name = self.read_line("Name (unique) (or 'cancel'/'q'): ")
        if name is None:
            self.output("Add cancelled")
            return False

        low, high = self.config.min_coord, self.config.max_coord
        bounds = f"({format_coordinate(low)}..{format_coordinate(high)})"
        x = self.read_number(f"x {bounds} (or 'cancel'/'q'): ", low, high)
        if x is None:
            self.output("Add cancelled")
            return False
        y = self.read_number(f"y {bounds} (or 'cancel'/'q'): ", low, high)
        if y is None:
            self.output("Add cancelled")
            return False

        if self._add_creature(species.display_name, name, x, y):
            return True
        self.output("Could not add NPC: duplicate name or invalid coordinates")
        return False

    def _add_creature(self, species_name: str, name: str, x: float, y: float) -> bool:
        creature = CreatureFactory.create(species_name, name, x, y)
        if not self.population.add(creature):
            return False
        self.output(f"Added {creature.species.display_name} '{creature.name}' at {creature.position}")
        self.event_manager.publish_immediate(
            CreatureAdded(
                round_number=self.resolver.rounds_resolved,
                name=creature.name,
                species_name=creature.species.display_name,
                x=creature.x,
                y=creature.y
            ),
            source="ArenaConsole"
        )
        self._log(f"Added {creature.describe()}", "POPULATION")
        return True

    def action_list(self, args: list[str]) -> bool:
        self.output(self.population.format_listing())
        return True

    def action_save(self, args: list[str]) -> bool:
        if not args:
            self.output("Usage: save <file>")
            return False
        path = args[0]
        if not save_population(self.population, path):
            self.output(f"Could not save to file '{path}'")
            self._log(f"Save to {path} failed", "STORAGE", "ERROR")
            return False
        self.output(f"Saved to '{path}'")
        self.event_manager.publish_immediate(
            PopulationSaved(
                round_number=self.resolver.rounds_resolved,
                path=path,
                saved=len(self.population)
            ),
            source="ArenaConsole"
        )
        self._log(f"Saved {len(self.population)} NPCs to {path}", "STORAGE")
        return True

    def action_load(self, args: list[str]) -> bool:
        if not args:
            self.output("Usage: load <file>")
            return False
        path = args[0]
        report = load_population_report(self.population, path)
        if report is None:
            self.output(f"Could not load file '{path}'")
            self._log(f"Load from {path} failed", "STORAGE", "ERROR")
            return False
        self.output(f"Loaded from file '{path}'")
        self.event_manager.publish_immediate(
            PopulationLoaded(
                round_number=self.resolver.rounds_resolved,
                path=path,
                loaded=report.loaded,
                skipped=report.skipped
            ),
            source="ArenaConsole"
        )
        self._log(f"Loaded {report.loaded} NPCs from {path} ({report.skipped} skipped)", "STORAGE")
        return True

    def action_combat(self, args: list[str]) -> bool:
        attack_range = _parse_float(args[0]) if args else None
        if attack_range is None:
            self.output("Usage: combat <range>")
            return False
        if attack_range < 0:
            self.output("Attack range cannot be negative")
            return False

        self.output(f"Starting combat with attack range = {format_coordinate(attack_range)} ...")
        result = self.resolver.resolve_round(self.population, attack_range)
        self.output(f"Combat finished ({len(result.deaths)} killed)")
        self.output(self.population.format_listing())
        return True

    def action_clear(self, args: list[str]) -> bool:
        removed = self.population.clear()
        self.output("All NPCs removed")
        self.event_manager.publish_immediate(
            PopulationCleared(round_number=self.resolver.rounds_resolved, removed=removed),
            source="ArenaConsole"
        )
        self._log(f"Cleared {removed} NPCs", "POPULATION")
        return True

    def action_log(self, args: list[str]) -> bool:
        if args and args[0].lower() == "save":
            return self._save_log(args[1:])
        count = 10
        if args:
            try:
                count = int(args[0])
            except ValueError:
                self.output("Usage: log [count] | log save [dir]")
                return False
        messages = self.log_manager.get_messages(count=count)
        if not messages:
            self.output("No log messages")
        for message in messages:
            self.output(message.format())
        return True

    def _save_log(self, args: list[str]) -> bool:
        log_dir = args[0] if args else "logs"
        filepath = self.log_manager.save_log_to_file(log_dir)
        if filepath is None:
            self.output(f"Could not save log to directory '{log_dir}'")
            return False
        self.output(f"Log saved to '{filepath}'")
        return True

    def action_exit(self, args: list[str]) -> bool:
        self.output("Game over")
        self.running = False
        return True


def _parse_float(text: str) -> Optional[float]:
    try:
        value = float(text)
    except ValueError:
        return None
    # nan and inf are not usable coordinates or ranges
    if not math.isfinite(value):
        return None
    return value


def _parse_species(text: str) -> Optional[Species]:
    try:
        return Species.from_name(text)
    except ValueError:
        return None
