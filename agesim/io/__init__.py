"""Artifact I/O: Parquet schemas and file-name contracts."""

from agesim.io.schemas import (
    CELL_SCHEMA,
    CELLS_FILENAME,
    ENTROPY_FILENAME,
    ENTROPY_SCHEMA,
    HISTORY_FILENAME,
    HISTORY_SCHEMA,
    RUN_METADATA_FILENAME,
    RUN_SCHEMA_VERSION,
)

__all__ = [
    "CELL_SCHEMA",
    "CELLS_FILENAME",
    "ENTROPY_FILENAME",
    "ENTROPY_SCHEMA",
    "HISTORY_FILENAME",
    "HISTORY_SCHEMA",
    "RUN_METADATA_FILENAME",
    "RUN_SCHEMA_VERSION",
]
