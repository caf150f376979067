"""Centralized domain constants for cell-population simulations.

All magic numbers that appear across multiple modules are defined here.
Consuming modules should import from this module rather than defining
their own inline literals.
"""

from __future__ import annotations

GRID_LENGTH = 20
"""Default grid side length in cells."""

REFERENCE_GENOME = "GATTACA"
"""Default reference genome carried by the founding cell."""

MUTATION_RATE = 0.00016
"""Default baseline mutation threshold per cell per step."""

GROWTH_RATE = 0.01
"""Default mutation threshold applied to parent and daughter on a split."""

SEED = 1234
"""Default simulation seed."""

NUM_STEPS = 200
"""Default number of simulation steps for a batch run."""

MAX_STEPS = 10_000
"""Upper bound on steps in a single run."""

BASES: str = "GCAT"
"""Genome alphabet."""

SPLIT_BASE_PROBABILITY = 0.02
"""Split probability of a cell with age 0; decays as exp(-age)."""

SIGNAL_DECAY = 0.2
"""Exponential decay constant of signal reception over Euclidean distance."""

ENTROPY_EPSILON = 1e-18
"""Offset inside the logarithm so zero frequencies contribute nothing."""

INITIAL_SAMPLESIZE = 10
"""Placeholder samplesize of a freshly initialised organism."""

FLUSH_THRESHOLD = 8_192
"""Flush per-cell log rows to Parquet once this in-memory row count is reached."""

AGE_COLOR_CEILING = 150.0
"""Minimum age mapped to the top of the age colour gradient."""
