"""Parquet persistence helpers for per-cell snapshots and run summaries."""

from __future__ import annotations

from pathlib import Path

import pyarrow as pa
import pyarrow.parquet as pq

from agesim.config.types import StepRecord
from agesim.domain.organism import Organism
from agesim.io.schemas import CELL_SCHEMA, ENTROPY_SCHEMA, HISTORY_SCHEMA


def new_cell_columns() -> dict[str, list[int | float | bool | str]]:
    return {name: [] for name in CELL_SCHEMA.names}


def append_cell_rows(
    cell_columns: dict[str, list[int | float | bool | str]], organism: Organism, step: int
) -> None:
    """Buffer one row per cell of `organism` at `step`."""
    for cell_id, loc in enumerate(organism.coordinates):
        cell_columns["step"].append(step)
        cell_columns["cell_id"].append(cell_id)
        cell_columns["x"].append(loc.x)
        cell_columns["y"].append(loc.y)
        cell_columns["age"].append(organism.ages[cell_id])
        cell_columns["senescent"].append(organism.senescent[cell_id])
        cell_columns["genome"].append(organism.genomes[cell_id])


def flush_cell_columns(
    cell_columns: dict[str, list[int | float | bool | str]],
    cells_path: Path,
    cell_writer: pq.ParquetWriter | None,
) -> pq.ParquetWriter | None:
    """Write accumulated cell rows to Parquet and clear in-memory buffers."""
    if not cell_columns["step"]:
        return cell_writer
    table = pa.Table.from_pydict(cell_columns, schema=CELL_SCHEMA)
    if cell_writer is None:
        cell_writer = pq.ParquetWriter(cells_path, CELL_SCHEMA)
    cell_writer.write_table(table)
    for values in cell_columns.values():
        values.clear()
    return cell_writer


def write_history(history: list[StepRecord], history_path: Path) -> None:
    table = pa.Table.from_pydict(
        {
            "step": [r.step for r in history],
            "size": [r.size for r in history],
            "mean_age": [r.mean_age for r in history],
            "samplesize": [r.samplesize for r in history],
            "mean_entropy": [r.mean_entropy for r in history],
        },
        schema=HISTORY_SCHEMA,
    )
    pq.write_table(table, history_path)


def write_entropy(entropies: list[tuple[str, float]], entropy_path: Path) -> None:
    table = pa.Table.from_pydict(
        {
            "position": list(range(len(entropies))),
            "base": [base for base, _ in entropies],
            "entropy": [value for _, value in entropies],
        },
        schema=ENTROPY_SCHEMA,
    )
    pq.write_table(table, entropy_path)
