"""Run engine: repeated stepping, history accumulation, and Parquet output."""

from __future__ import annotations

import json
import logging
import random
from pathlib import Path

import pyarrow.parquet as pq

from agesim.config.constants import FLUSH_THRESHOLD
from agesim.config.types import RunConfig, Settings, SimulationResult, StepRecord
from agesim.domain.organism import Organism, init_organism
from agesim.io.schemas import (
    CELLS_FILENAME,
    ENTROPY_FILENAME,
    HISTORY_FILENAME,
    RUN_METADATA_FILENAME,
    RUN_SCHEMA_VERSION,
)
from agesim.metrics.population import entropy, mean_age, mean_entropy
from agesim.simulation.persistence import (
    append_cell_rows,
    flush_cell_columns,
    new_cell_columns,
    write_entropy,
    write_history,
)
from agesim.simulation.step import grow_step

logger = logging.getLogger(__name__)


def record_step(organism: Organism, step: int) -> StepRecord:
    """Summarise one snapshot for the time-series history."""
    return StepRecord(
        step=step,
        size=organism.size,
        mean_age=mean_age(organism),
        samplesize=organism.samplesize,
        mean_entropy=mean_entropy(organism),
    )


def _resolve_rng(settings: Settings, config: RunConfig, rng: random.Random | None) -> random.Random:
    if rng is not None:
        return rng
    if config.seeded:
        return random.Random(settings.seed)
    return random.Random()


def run_simulation(
    settings: Settings,
    config: RunConfig | None = None,
    rng: random.Random | None = None,
) -> SimulationResult:
    """Grow an organism from a single cell for `config.steps` steps.

    History holds the founding snapshot as step 0 followed by one record per
    step. When `config.out_dir` is set, history, per-cell snapshots, final
    entropy, and run metadata are written under ``out_dir/logs``.
    """
    config = config or RunConfig()
    rng = _resolve_rng(settings, config, rng)

    logs_dir: Path | None = None
    if config.out_dir is not None:
        logs_dir = Path(config.out_dir) / "logs"
        logs_dir.mkdir(parents=True, exist_ok=True)

    logger.info(
        "starting run: length=%d genome=%s steps=%d seeded=%s",
        settings.length,
        settings.genome,
        config.steps,
        config.seeded,
    )

    organism = init_organism(settings)
    history = [record_step(organism, 0)]
    write_cells = logs_dir is not None and config.write_cells
    cell_columns = new_cell_columns()
    cell_writer: pq.ParquetWriter | None = None
    cells_path = logs_dir / CELLS_FILENAME if logs_dir is not None else None

    try:
        if write_cells:
            append_cell_rows(cell_columns, organism, 0)
        for step in range(1, config.steps + 1):
            organism = grow_step(organism, rng)
            record = record_step(organism, step)
            history.append(record)
            if step % config.log_interval == 0:
                logger.debug(
                    "step %d: size=%d mean_age=%.6f samplesize=%d",
                    step,
                    record.size,
                    record.mean_age,
                    record.samplesize,
                )
            if write_cells and (step % config.snapshot_interval == 0 or step == config.steps):
                append_cell_rows(cell_columns, organism, step)
                if len(cell_columns["step"]) >= FLUSH_THRESHOLD:
                    cell_writer = flush_cell_columns(cell_columns, cells_path, cell_writer)
        if write_cells:
            cell_writer = flush_cell_columns(cell_columns, cells_path, cell_writer)
    finally:
        if cell_writer is not None:
            cell_writer.close()

    result = SimulationResult(organism=organism, history=history)
    if logs_dir is not None:
        _write_run_artifacts(result, settings, config, logs_dir)

    logger.info(
        "finished run: steps=%d size=%d mean_age=%.6f",
        config.steps,
        organism.size,
        result.final.mean_age,
    )
    return result


def summarize(result: SimulationResult) -> dict[str, int | float]:
    final = result.final
    return {
        "steps": final.step,
        "size": final.size,
        "mean_age": final.mean_age,
        "samplesize": final.samplesize,
        "mean_entropy": final.mean_entropy,
    }


def _write_run_artifacts(
    result: SimulationResult, settings: Settings, config: RunConfig, logs_dir: Path
) -> None:
    write_history(result.history, logs_dir / HISTORY_FILENAME)
    write_entropy(entropy(result.organism), logs_dir / ENTROPY_FILENAME)
    metadata = {
        "schema_version": RUN_SCHEMA_VERSION,
        "settings": settings.to_dict(),
        "steps": config.steps,
        "seeded": config.seeded,
        "snapshot_interval": config.snapshot_interval,
        "summary": summarize(result),
    }
    metadata_path = logs_dir / RUN_METADATA_FILENAME
    metadata_path.write_text(json.dumps(metadata, ensure_ascii=False, indent=2))
