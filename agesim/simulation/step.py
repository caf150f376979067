"""Per-step transition: signal sampling, age estimation, mutation, splitting.

``grow_step`` scans the cells of the incoming snapshot in index order. Reads
of other cells go through a single working buffer, so a cell processed later
in the scan sees genome mutations and daughter cells produced earlier in the
same scan. The incoming snapshot itself is never modified.
"""

from __future__ import annotations

import logging
import math
from random import Random

from agesim.config.constants import SIGNAL_DECAY, SPLIT_BASE_PROBABILITY
from agesim.domain.genome import genomic_difference, mutate, validate_genome
from agesim.domain.grid import Location, distance, neighbors, within_bounds
from agesim.domain.organism import CellBuffer, Organism

logger = logging.getLogger(__name__)


def split_probability(age: float) -> float:
    """Probability that a cell of the given age attempts to split."""
    return SPLIT_BASE_PROBABILITY * math.exp(-age)


def signal_probability(a: Location, b: Location) -> float:
    """Probability that a signal emitted at `a` is received at `b`."""
    return math.exp(-SIGNAL_DECAY * distance(a, b))


def _sample_signals(
    buffer: CellBuffer, index: int, origin: Location, rng: Random
) -> tuple[float, int]:
    """Sample every cell in the buffer (self included) from the point of view of `index`.

    Returns the summed genomic difference over received signals and the number
    of signals received. All-pairs scan: O(n) per cell.
    """
    own_genome = buffer.genomes[index]
    age = 0.0
    samples = 0
    for j in range(len(buffer)):
        prob = signal_probability(buffer.coordinates[j], origin)
        if prob > rng.random():
            samples += 1
            age += genomic_difference(own_genome, buffer.genomes[j])
    return age, samples


def _free_neighbors(origin: Location, length: int, occupied: set[Location]) -> list[Location]:
    """In-grid, unoccupied Moore neighbors of `origin`, in enumeration order."""
    return [
        loc for loc in neighbors(origin) if within_bounds(loc, length) and loc not in occupied
    ]


def grow_step(organism: Organism, rng: Random | None = None) -> Organism:
    """Advance the population by one timestep and return the new snapshot.

    Raises MalformedGenomeError before any draw if a genome has the wrong
    length or a base outside the alphabet.
    """
    if rng is None:
        rng = Random()
    settings = organism.settings
    for genome in organism.genomes:
        validate_genome(genome, settings.genome_length)
    mode = settings.mutation_mode
    buffer = organism.thaw()
    occupied = set(buffer.coordinates)
    total_samples = 0

    for i, origin in enumerate(organism.coordinates):
        pre_age = buffer.ages[i]
        split = split_probability(pre_age) > rng.random()
        candidates = _free_neighbors(origin, settings.length, occupied)
        age, samples = _sample_signals(buffer, i, origin, rng)
        total_samples += samples

        if split:
            if candidates:
                target = rng.choice(candidates)
                daughter = mutate(buffer.genomes[i], settings.growth_rate, rng, mode)
                buffer.append_cell(target, pre_age, daughter)
                occupied.add(target)
                buffer.genomes[i] = mutate(buffer.genomes[i], settings.growth_rate, rng, mode)
            else:
                logger.debug("cell %d at (%d, %d) has no free neighbor", i, origin.x, origin.y)

        buffer.ages[i] = age
        buffer.genomes[i] = mutate(buffer.genomes[i], settings.mutation_rate, rng, mode)

    samplesize = total_samples // organism.size if organism.size else 0
    return buffer.freeze(samplesize=samplesize)
