"""Population statistics: mean age, occupancy, and per-base genome entropy."""

from __future__ import annotations

import math

from agesim.config.constants import BASES, ENTROPY_EPSILON
from agesim.domain.genome import MalformedGenomeError
from agesim.domain.organism import Organism


def mean_age(organism: Organism) -> float:
    """Sum of cell ages normalised by grid area, not by population size."""
    return sum(organism.ages) / organism.settings.area


def occupancy(organism: Organism) -> float:
    """Fraction of grid cells that are occupied."""
    return organism.size / organism.settings.area


def entropy_from_base_counts(counts: list[int], total: int) -> float:
    """Shannon entropy (nats) of base counts normalised by `total`."""
    if total < 1:
        return 0.0
    value = 0.0
    for count in counts:
        p = count / total
        value -= p * math.log(p + ENTROPY_EPSILON)
    return value


def base_counts_at(organism: Organism, position: int) -> list[int]:
    """Count each base of the alphabet at `position` across all genomes."""
    counts = dict.fromkeys(BASES, 0)
    for genome in organism.genomes:
        if position >= len(genome):
            raise MalformedGenomeError(
                f"index value not found: position {position} in genome {genome!r}"
            )
        base = genome[position]
        if base not in counts:
            raise MalformedGenomeError(f"base pair not found: {base!r} in genome {genome!r}")
        counts[base] += 1
    return [counts[b] for b in BASES]


def entropy(organism: Organism) -> list[tuple[str, float]]:
    """Per-position entropy of the population's genomes, in reference order.

    Each entry pairs the reference base at that position with the entropy of
    the base distribution observed there.
    """
    return [
        (ref_base, entropy_from_base_counts(base_counts_at(organism, i), organism.size))
        for i, ref_base in enumerate(organism.settings.genome)
    ]


def mean_entropy(organism: Organism) -> float:
    """Mean of the per-position entropies."""
    values = [value for _, value in entropy(organism)]
    if not values:
        return 0.0
    return sum(values) / len(values)
