"""
Unit tests for the ArenaConsole command surface.

Input is scripted through an iterator and output captured in a list, so no
test touches the real terminal.
"""
from unittest.mock import Mock

import pytest

from npc_arena.core.events import EventType
from npc_arena.game.combat_resolver import CombatResolver
from npc_arena.game.console import ActionCommand, ArenaConsole, CommandRegistry
from npc_arena.game.log_manager import LogCategory, LogManager


class ScriptedInput:
    """Feeds prepared answers to prompts, raising EOFError when exhausted."""

    def __init__(self, *answers):
        self.answers = list(answers)
        self.prompts = []

    def __call__(self, prompt):
        self.prompts.append(prompt)
        if not self.answers:
            raise EOFError
        return self.answers.pop(0)


@pytest.fixture
def make_console(population, event_manager):
    def _make(*answers):
        output = []
        console = ArenaConsole(
            population,
            CombatResolver(event_manager),
            event_manager,
            LogManager(event_manager),
            input_fn=ScriptedInput(*answers),
            output=output.append,
        )
        return console, output
    return _make


class TestCommandRegistry:

    def test_lookup_is_case_insensitive(self):
        registry = CommandRegistry()
        registry.register_action_method("list")

        assert isinstance(registry.get_command("List"), ActionCommand)
        assert registry.get_command("missing") is None

    def test_action_command_without_method(self, make_console):
        console, _ = make_console()

        assert not ActionCommand("nothing").execute(console, [])

    def test_default_commands(self, make_console):
        console, _ = make_console()

        for name in ("add", "clear", "combat", "exit", "help", "list", "load", "log", "quit", "save"):
            assert isinstance(console.registry.get_command(name), ActionCommand)


class TestAdd:

    def test_inline_add(self, make_console, population):
        console, output = make_console()

        assert console.execute_line("add orc Bob 10 20")

        assert population.names() == ["Bob"]
        assert output == ["Added Orc 'Bob' at (10,20)"]

    def test_inline_duplicate_falls_back_to_interactive(self, make_console, population):
        console, output = make_console("Bear", "Pim", "10", "11")
        console.execute_line("add Orc Bob 10 10")

        assert console.execute_line("add Bear Bob 10 11")

        assert population.names() == ["Bob", "Pim"]
        assert any("Falling back to interactive mode" in line for line in output)

    def test_inline_out_of_bounds_falls_back(self, make_console, population):
        console, output = make_console("q")

        assert not console.execute_line("add Orc Bob 10 900")

        assert len(population) == 0
        assert "Invalid inline parameters. Falling back to interactive mode." in output
        assert output[-1] == "Add cancelled"

    def test_interactive_add(self, make_console, population):
        console, output = make_console("squirrel", "chuck", "10", "12")

        assert console.execute_line("add")

        assert population.get("chuck").species.display_name == "Squirrel"
        assert output[-1] == "Added Squirrel 'chuck' at (10,12)"

    def test_interactive_retries_bad_numbers(self, make_console, population):
        console, output = make_console("Orc", "Bob", "", "abc", "700", "5", "6")

        assert console.execute_line("add")

        assert population.get("Bob").position.x == 5.0
        assert "Empty input, try again or type 'cancel'/'q' to abort" in output
        assert "Invalid number, try again or type 'cancel'/'q' to abort" in output
        assert any(line.startswith("Number is outside [0,500]") for line in output)

    def test_interactive_single_line(self, make_console, population):
        console, _ = make_console("Bear Pim 10 11")

        assert console.execute_line("add")

        assert population.names() == ["Pim"]

    def test_interactive_unknown_species(self, make_console, population):
        console, output = make_console("Dragon")

        assert not console.execute_line("add")

        assert output == ["Unknown NPC species. Add cancelled"]

    @pytest.mark.parametrize("answers", [("cancel",), ("Orc", "q"), ("Orc", "Bob", "cancel"), ("Orc", "Bob", "1")])
    def test_interactive_cancel_or_eof(self, make_console, population, answers):
        console, output = make_console(*answers)

        assert not console.execute_line("add")

        assert len(population) == 0
        assert output[-1] == "Add cancelled"

    def test_interactive_duplicate(self, make_console, population):
        console, output = make_console("Orc", "Bob", "1", "1")
        console.execute_line("add Orc Bob 10 10")

        assert not console.execute_line("add")

        assert output[-1] == "Could not add NPC: duplicate name or invalid coordinates"

    def test_add_publishes_event(self, make_console, event_manager):
        added = Mock()
        event_manager.subscribe(EventType.CREATURE_ADDED, added)
        console, _ = make_console()

        console.execute_line("add Orc Bob 10 20")

        event = added.call_args[0][0]
        assert (event.name, event.species_name, event.x, event.y) == ("Bob", "Orc", 10.0, 20.0)


class TestCombat:

    def test_combat_runs_round(self, make_console, population, event_manager):
        deaths = []
        event_manager.subscribe(EventType.CREATURE_DIED, deaths.append)
        console, output = make_console()
        console.execute_line("add Orc Bob 10 10")
        console.execute_line("add Bear Pim 10 11")

        assert console.execute_line("combat 10")

        assert [(e.killer, e.victim) for e in deaths] == [("Bob", "Pim")]
        assert output[-3:] == [
            "Starting combat with attack range = 10 ...",
            "Combat finished (1 killed)",
            "--- NPCs (1) ---\nOrc Bob (10,10)",
        ]

    def test_negative_range_rejected(self, make_console, population):
        console, output = make_console()
        console.execute_line("add Orc Bob 10 10")
        console.execute_line("add Bear Pim 10 11")
        console.resolver = Mock(wraps=console.resolver)

        assert not console.execute_line("combat -1")

        assert output[-1] == "Attack range cannot be negative"
        console.resolver.resolve_round.assert_not_called()
        assert len(population) == 2

    @pytest.mark.parametrize("line", ["combat", "combat far", "combat nan"])
    def test_combat_usage(self, make_console, line):
        console, output = make_console()

        assert not console.execute_line(line)
        assert output == ["Usage: combat <range>"]


class TestStorageCommands:

    def test_save_and_load(self, make_console, population, tmp_path):
        path = tmp_path / "arena.txt"
        console, output = make_console()
        console.execute_line("add Orc Bob 10 10")

        assert console.execute_line(f"save {path}")
        console.execute_line("clear")
        assert console.execute_line(f"load {path}")

        assert population.names() == ["Bob"]
        assert f"Saved to '{path}'" in output
        assert f"Loaded from file '{path}'" in output

    def test_usage_lines(self, make_console):
        console, output = make_console()

        assert not console.execute_line("save")
        assert not console.execute_line("load")

        assert output == ["Usage: save <file>", "Usage: load <file>"]

    def test_load_missing_file(self, make_console, tmp_path):
        console, output = make_console()
        path = tmp_path / "missing.txt"

        assert not console.execute_line(f"load {path}")

        assert output == [f"Could not load file '{path}'"]

    def test_save_failure(self, make_console, tmp_path):
        console, output = make_console()

        assert not console.execute_line(f"save {tmp_path}")

        assert output == [f"Could not save to file '{tmp_path}'"]


class TestMisc:

    def test_list(self, make_console):
        console, output = make_console()
        console.execute_line("add Bear Pim 10 11")

        console.execute_line("LIST")

        assert output[-1] == "--- NPCs (1) ---\nBear Pim (10,11)"

    def test_clear(self, make_console, population):
        console, output = make_console()
        console.execute_line("add Bear Pim 10 11")

        assert console.execute_line("clear")

        assert len(population) == 0
        assert output[-1] == "All NPCs removed"

    def test_unknown_command(self, make_console):
        console, output = make_console()

        assert not console.execute_line("dance")
        assert output == ["Unknown command. Type 'help' for the command list."]

    def test_blank_line_is_ignored(self, make_console):
        console, output = make_console()

        assert not console.execute_line("   ")
        assert output == []

    def test_help_lists_commands(self, make_console):
        console, output = make_console()

        console.execute_line("help")

        assert "combat <range>" in output[0]

    def test_log_command(self, make_console):
        console, output = make_console()
        console.execute_line("add Bear Pim 10 11")

        assert console.execute_line("log 1")
        assert output[-1] == "[POP] Added Bear Pim (10,11)"

        assert not console.execute_line("log many")
        assert output[-1] == "Usage: log [count] | log save [dir]"

    def test_log_save_writes_session_file(self, make_console, tmp_path):
        console, output = make_console()
        console.execute_line("add Bear Pim 10 11")
        log_dir = tmp_path / "logs"

        assert console.execute_line(f"log save {log_dir}")

        files = list(log_dir.glob("log_*.log"))
        assert len(files) == 1
        assert "[POPULATION] Added Bear Pim (10,11)" in files[0].read_text(encoding="utf-8")
        assert output[-1] == f"Log saved to '{files[0]}'"

    def test_log_save_failure(self, make_console, tmp_path):
        blocker = tmp_path / "not_a_dir"
        blocker.write_text("", encoding="utf-8")
        console, output = make_console()

        assert not console.execute_line(f"log save {blocker}")

        assert output[-1] == f"Could not save log to directory '{blocker}'"

    def test_failing_command_is_reported(self, make_console):
        console, output = make_console()
        console.execute_line("add Orc Bob 10 10")
        console.execute_line("add Bear Pim 10 11")
        console.resolver.resolve_round = Mock(side_effect=RuntimeError("boom"))

        assert not console.execute_line("combat 5")

        assert output[-1] == "Command 'combat' failed: boom"
        errors = console.log_manager.get_messages(categories={LogCategory.ERROR})
        assert errors[-1].text == "Error executing command 'combat': boom"


class TestRunLoop:

    def test_exit_stops_loop(self, make_console):
        console, output = make_console("add Orc Bob 1 1", "exit", "list")

        console.run()

        assert not console.running
        assert output[-1] == "Game over"
        assert console.input_fn.answers == ["list"]

    def test_quit_alias(self, make_console):
        console, output = make_console("quit")

        console.run()

        assert output[-1] == "Game over"

    def test_eof_ends_loop(self, make_console, population):
        console, _ = make_console("add Orc Bob 1 1")

        console.run()

        assert population.names() == ["Bob"]
        assert console.input_fn.prompts[-1] == "> "
