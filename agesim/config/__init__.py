"""Configuration layer: constants and typed config dataclasses."""

from agesim.config.constants import (
    AGE_COLOR_CEILING,
    BASES,
    ENTROPY_EPSILON,
    FLUSH_THRESHOLD,
    GRID_LENGTH,
    GROWTH_RATE,
    INITIAL_SAMPLESIZE,
    MAX_STEPS,
    MUTATION_RATE,
    NUM_STEPS,
    REFERENCE_GENOME,
    SEED,
    SIGNAL_DECAY,
    SPLIT_BASE_PROBABILITY,
)
from agesim.config.types import (
    MutationMode,
    RunConfig,
    Settings,
    SimulationResult,
    StepRecord,
)

__all__ = [
    "AGE_COLOR_CEILING",
    "BASES",
    "ENTROPY_EPSILON",
    "FLUSH_THRESHOLD",
    "GRID_LENGTH",
    "GROWTH_RATE",
    "INITIAL_SAMPLESIZE",
    "MAX_STEPS",
    "MUTATION_RATE",
    "MutationMode",
    "NUM_STEPS",
    "REFERENCE_GENOME",
    "RunConfig",
    "SEED",
    "SIGNAL_DECAY",
    "SPLIT_BASE_PROBABILITY",
    "Settings",
    "SimulationResult",
    "StepRecord",
]
