"""Grid-based cell population simulation with genome-signal age estimation."""

from agesim.config.types import MutationMode, RunConfig, Settings, SimulationResult, StepRecord
from agesim.domain.genome import MalformedGenomeError
from agesim.domain.grid import Location
from agesim.domain.organism import Organism, init_organism
from agesim.metrics.population import entropy, mean_age
from agesim.simulation.engine import run_simulation
from agesim.simulation.step import grow_step

__all__ = [
    "Location",
    "MalformedGenomeError",
    "MutationMode",
    "Organism",
    "RunConfig",
    "Settings",
    "SimulationResult",
    "StepRecord",
    "entropy",
    "grow_step",
    "init_organism",
    "mean_age",
    "run_simulation",
]
