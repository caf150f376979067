"""Derived read-only statistics over organism snapshots."""

from agesim.metrics.population import (
    base_counts_at,
    entropy,
    entropy_from_base_counts,
    mean_age,
    mean_entropy,
    occupancy,
)

__all__ = [
    "base_counts_at",
    "entropy",
    "entropy_from_base_counts",
    "mean_age",
    "mean_entropy",
    "occupancy",
]
