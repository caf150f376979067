"""Domain layer: grid geometry, genome model, and population snapshots."""

from agesim.domain.genome import (
    MalformedGenomeError,
    genomic_difference,
    mutate,
    validate_genome,
)
from agesim.domain.grid import Location, distance, neighbors, within_bounds
from agesim.domain.organism import CellBuffer, Organism, init_organism

__all__ = [
    "CellBuffer",
    "Location",
    "MalformedGenomeError",
    "Organism",
    "distance",
    "genomic_difference",
    "init_organism",
    "mutate",
    "neighbors",
    "validate_genome",
    "within_bounds",
]
