"""
Text record persistence for populations.

One creature per line as ``species name x y``. Loading is forgiving: bad
lines are skipped rather than reported, so a partially damaged file still
loads everything that is valid.
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

from .creature import Creature, CreatureFactory
from .population import Population

PathLike = Union[str, Path]


@dataclass
class LoadReport:
    """Counts gathered while parsing a record file."""
    loaded: int = 0
    malformed: int = 0
    out_of_bounds: int = 0
    duplicates: int = 0
    creatures: list[Creature] = field(default_factory=list)

    @property
    def skipped(self) -> int:
        return self.malformed + self.out_of_bounds + self.duplicates


def save_population(population: Population, path: PathLike) -> bool:
    """Write every creature as a record line.

    Returns:
        True on success, False if the file could not be written
    """
    try:
        with open(path, 'w', encoding='utf-8') as f:
            for creature in population:
                f.write(creature.to_record() + "\n")
    except OSError:
        return False
    return True


def parse_records(lines: list[str], population: Population) -> LoadReport:
    """Parse record lines against the bounds of ``population``.

    The first occurrence of a name wins; later duplicates are skipped.
    """
    report = LoadReport()
    seen: set[str] = set()
    for line in lines:
        if not line.strip():
            continue
        creature = CreatureFactory.from_record(line)
        if creature is None:
            report.malformed += 1
            continue
        if not population.config.contains(creature.x, creature.y):
            report.out_of_bounds += 1
            continue
        if creature.name in seen:
            report.duplicates += 1
            continue
        seen.add(creature.name)
        report.creatures.append(creature)
    report.loaded = len(report.creatures)
    return report


def load_population(population: Population, path: PathLike) -> bool:
    """Replace the population with the creatures stored in ``path``.

    Returns:
        False if the file could not be read (population untouched), True otherwise
    """
    report = load_population_report(population, path)
    return report is not None


def load_population_report(population: Population, path: PathLike) -> Optional[LoadReport]:
    """Like ``load_population`` but returns the parse report, or None on I/O failure."""
    try:
        with open(path, 'r', encoding='utf-8') as f:
            lines = f.read().splitlines()
    except (OSError, UnicodeDecodeError):
        return None

    report = parse_records(lines, population)
    population.replace(report.creatures)
    return report
