"""Population state: the immutable organism snapshot and its working buffer.

An ``Organism`` holds parallel per-cell sequences indexed by cell identity.
The step engine never edits a snapshot; it thaws one into a ``CellBuffer``,
works on the buffer, and freezes the result into the next snapshot.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from agesim.config.constants import INITIAL_SAMPLESIZE
from agesim.config.types import Settings
from agesim.domain.grid import Location


@dataclass(frozen=True)
class Organism:
    """Snapshot of every living cell on the grid."""

    coordinates: tuple[Location, ...]
    ages: tuple[float, ...]
    senescent: tuple[bool, ...]
    genomes: tuple[str, ...]
    settings: Settings
    size: int
    samplesize: int

    def __post_init__(self) -> None:
        lengths = {
            "coordinates": len(self.coordinates),
            "ages": len(self.ages),
            "senescent": len(self.senescent),
            "genomes": len(self.genomes),
        }
        if any(n != self.size for n in lengths.values()):
            raise ValueError(f"per-cell sequences must all have size={self.size}, got {lengths}")
        if len(set(self.coordinates)) != self.size:
            raise ValueError("cell coordinates must be distinct")
        length = self.settings.length
        for loc in self.coordinates:
            if not (0 <= loc.x < length and 0 <= loc.y < length):
                raise ValueError(
                    f"cell at ({loc.x}, {loc.y}) lies outside the {length}x{length} grid"
                )

    def thaw(self) -> CellBuffer:
        """Return a mutable working copy of this snapshot's cells."""
        return CellBuffer(
            settings=self.settings,
            coordinates=list(self.coordinates),
            ages=list(self.ages),
            senescent=list(self.senescent),
            genomes=list(self.genomes),
        )


@dataclass
class CellBuffer:
    """Mutable parallel per-cell lists used while a step is in progress."""

    settings: Settings
    coordinates: list[Location] = field(default_factory=list)
    ages: list[float] = field(default_factory=list)
    senescent: list[bool] = field(default_factory=list)
    genomes: list[str] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.coordinates)

    def append_cell(self, location: Location, age: float, genome: str) -> int:
        """Append a non-senescent cell and return its index."""
        self.coordinates.append(location)
        self.ages.append(age)
        self.senescent.append(False)
        self.genomes.append(genome)
        return len(self.coordinates) - 1

    def freeze(self, samplesize: int) -> Organism:
        return Organism(
            coordinates=tuple(self.coordinates),
            ages=tuple(self.ages),
            senescent=tuple(self.senescent),
            genomes=tuple(self.genomes),
            settings=self.settings,
            size=len(self.coordinates),
            samplesize=samplesize,
        )


def init_organism(settings: Settings) -> Organism:
    """Found a population: one cell of age 0 at the grid centre."""
    centre = settings.length // 2
    buffer = CellBuffer(settings=settings)
    buffer.append_cell(Location(centre, centre), 0.0, settings.genome)
    return buffer.freeze(samplesize=INITIAL_SAMPLESIZE)
