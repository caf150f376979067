"""Configuration dataclasses and result containers for simulation runs.

All frozen dataclasses that parameterise a run (the immutable per-run
``Settings`` and the batch-runner ``RunConfig``) live here.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

from agesim.config.constants import (
    GRID_LENGTH,
    GROWTH_RATE,
    MAX_STEPS,
    MUTATION_RATE,
    NUM_STEPS,
    REFERENCE_GENOME,
    SEED,
)

if TYPE_CHECKING:
    from agesim.domain.organism import Organism

__all__ = [
    "MutationMode",
    "RunConfig",
    "Settings",
    "SimulationResult",
    "StepRecord",
]

# ---------------------------------------------------------------------------
# Config dataclasses
# ---------------------------------------------------------------------------


class MutationMode(Enum):
    """How a single mutation opportunity is applied to a genome."""

    WHOLE_GENOME = "whole_genome"
    PER_BASE = "per_base"


@dataclass(frozen=True)
class Settings:
    """Immutable parameters of one simulation run."""

    length: int = GRID_LENGTH
    genome: str = REFERENCE_GENOME
    mutation_rate: float = MUTATION_RATE
    growth_rate: float = GROWTH_RATE
    seed: int = SEED
    mutation_mode: MutationMode = MutationMode.WHOLE_GENOME

    def __post_init__(self) -> None:
        if self.length < 1:
            raise ValueError("length must be >= 1")
        if not self.genome:
            raise ValueError("genome must not be empty")
        from agesim.domain.genome import validate_genome

        validate_genome(self.genome, self.genome_length)
        if not 0.0 <= self.mutation_rate <= 1.0:
            raise ValueError("mutation_rate must be in [0.0, 1.0]")
        if not 0.0 <= self.growth_rate <= 1.0:
            raise ValueError("growth_rate must be in [0.0, 1.0]")

    @property
    def genome_length(self) -> int:
        return len(self.genome)

    @property
    def area(self) -> int:
        """Total cell capacity of the grid."""
        return self.length**2

    def to_dict(self) -> dict[str, object]:
        return {
            "length": self.length,
            "genome": self.genome,
            "mutation_rate": self.mutation_rate,
            "growth_rate": self.growth_rate,
            "seed": self.seed,
            "mutation_mode": self.mutation_mode.value,
        }


@dataclass(frozen=True)
class RunConfig:
    """Batch-runner knobs: how many steps, what to persist, how to seed."""

    steps: int = NUM_STEPS
    out_dir: Path | None = None
    seeded: bool = True
    snapshot_interval: int = 10
    log_interval: int = 50
    write_cells: bool = True

    def __post_init__(self) -> None:
        if self.steps < 0:
            raise ValueError("steps must be >= 0")
        if self.steps > MAX_STEPS:
            raise ValueError(f"steps must be <= {MAX_STEPS}")
        if self.snapshot_interval < 1:
            raise ValueError("snapshot_interval must be >= 1")
        if self.log_interval < 1:
            raise ValueError("log_interval must be >= 1")


# ---------------------------------------------------------------------------
# Result containers
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class StepRecord:
    """Population summary recorded once per step for charting."""

    step: int
    size: int
    mean_age: float
    samplesize: int
    mean_entropy: float


@dataclass(frozen=True)
class SimulationResult:
    """Final organism of a run plus the per-step history."""

    organism: Organism
    history: list[StepRecord]

    @property
    def final(self) -> StepRecord:
        return self.history[-1]
