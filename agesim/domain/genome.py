"""Genome model: fixed-length strings over the G/C/T/A alphabet.

Mutation is all-or-nothing by default: one threshold draw decides whether
the whole genome is rewritten, with each rewritten base drawn independently.
``MutationMode.PER_BASE`` draws a threshold per base instead.
"""

from __future__ import annotations

from random import Random

from agesim.config.constants import BASES
from agesim.config.types import MutationMode


class MalformedGenomeError(ValueError):
    """A genome has the wrong length or a base outside the alphabet."""


def validate_genome(genome: str, length: int) -> None:
    """Raise MalformedGenomeError unless `genome` is `length` valid bases."""
    if len(genome) != length:
        raise MalformedGenomeError(f"genome length {len(genome)} != expected {length}: {genome!r}")
    for base in genome:
        if base not in BASES:
            raise MalformedGenomeError(f"base pair not found: {base!r} in {genome!r}")


def genomic_difference(g1: str, g2: str) -> float:
    """Hamming distance between two equal-length genomes, as a float count."""
    if len(g1) != len(g2):
        raise MalformedGenomeError(f"cannot compare genomes of length {len(g1)} and {len(g2)}")
    return float(sum(1 for a, b in zip(g1, g2, strict=True) if a != b))


def mutate(
    genome: str,
    rate: float,
    rng: Random,
    mode: MutationMode = MutationMode.WHOLE_GENOME,
) -> str:
    """Return a possibly mutated copy of `genome`."""
    if mode == MutationMode.PER_BASE:
        return "".join(rng.choice(BASES) if rate > rng.random() else base for base in genome)
    threshold = rng.random()
    if rate > threshold:
        return "".join(rng.choice(BASES) for _ in genome)
    return genome
