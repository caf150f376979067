"""Parquet schema definitions for simulation artifacts.

All Arrow schemas used for persisting run history, per-cell snapshots, and
per-position entropy are centralised here so that the run engine and the
plotting layer work against the same column contracts.
"""

from __future__ import annotations

import pyarrow as pa

RUN_SCHEMA_VERSION = 1

HISTORY_SCHEMA = pa.schema(
    [
        ("step", pa.int64()),
        ("size", pa.int64()),
        ("mean_age", pa.float64()),
        ("samplesize", pa.int64()),
        ("mean_entropy", pa.float64()),
    ]
)

CELL_SCHEMA = pa.schema(
    [
        ("step", pa.int64()),
        ("cell_id", pa.int64()),
        ("x", pa.int64()),
        ("y", pa.int64()),
        ("age", pa.float64()),
        ("senescent", pa.bool_()),
        ("genome", pa.string()),
    ]
)

ENTROPY_SCHEMA = pa.schema(
    [
        ("position", pa.int64()),
        ("base", pa.string()),
        ("entropy", pa.float64()),
    ]
)

HISTORY_FILENAME = "history.parquet"
CELLS_FILENAME = "cells.parquet"
ENTROPY_FILENAME = "entropy.parquet"
RUN_METADATA_FILENAME = "run.json"
