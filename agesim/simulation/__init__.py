"""Simulation layer: the per-step transition and the batch run engine."""

from agesim.simulation.engine import record_step, run_simulation, summarize
from agesim.simulation.persistence import flush_cell_columns
from agesim.simulation.step import grow_step, signal_probability, split_probability

__all__ = [
    "flush_cell_columns",
    "grow_step",
    "record_step",
    "run_simulation",
    "signal_probability",
    "split_probability",
    "summarize",
]
