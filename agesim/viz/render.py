"""Matplotlib-based rendering of organism snapshots and run history."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

import matplotlib.pyplot as plt
import numpy as np
import pyarrow.compute as pc
import pyarrow.parquet as pq
from matplotlib.colors import LinearSegmentedColormap

from agesim.config.constants import AGE_COLOR_CEILING
from agesim.config.types import StepRecord
from agesim.domain.organism import Organism
from agesim.viz.theme import DEFAULT_THEME, Theme

# ---------------------------------------------------------------------------
# Cell-fill helpers
# ---------------------------------------------------------------------------


def _age_cmap(theme: Theme = DEFAULT_THEME) -> LinearSegmentedColormap:
    cmap = LinearSegmentedColormap.from_list("age", list(theme.age_colors))
    cmap.set_bad(theme.empty_cell_color)
    return cmap


def _build_age_grid(
    positions: Sequence[tuple[int, int]], ages: Sequence[float], length: int
) -> np.ndarray:
    """Return (L, L) float array of relative ages in [0, 1]; NaN marks empty cells.

    Ages are scaled by max(AGE_COLOR_CEILING, oldest age). Out-of-bounds
    positions are silently skipped.
    """
    grid = np.full((length, length), np.nan)
    if not ages:
        return grid
    scale = max(AGE_COLOR_CEILING, max(ages))
    for (x, y), age in zip(positions, ages, strict=True):
        if 0 <= x < length and 0 <= y < length:
            grid[y, x] = min(age / scale, 1.0)
    return grid


def _apply_theme(fig: plt.Figure, axes: Sequence[plt.Axes], theme: Theme) -> None:
    """Paint figure and axes backgrounds, spines, ticks, and labels with theme colours."""
    fig.patch.set_facecolor(theme.figure_bg_color)
    for ax in axes:
        ax.set_facecolor(theme.axes_bg_color)
        ax.tick_params(colors=theme.text_color)
        ax.xaxis.label.set_color(theme.text_color)
        ax.yaxis.label.set_color(theme.text_color)
        ax.title.set_color(theme.text_color)
        for spine in ax.spines.values():
            spine.set_edgecolor(theme.text_color)


def _save(fig: plt.Figure, output_path: Path, theme: Theme) -> None:
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output_path, dpi=theme.figure_dpi, facecolor=fig.get_facecolor())
    plt.close(fig)


# ---------------------------------------------------------------------------
# Grid rendering
# ---------------------------------------------------------------------------


def render_cell_grid(
    positions: Sequence[tuple[int, int]],
    ages: Sequence[float],
    length: int,
    output_path: Path,
    title: str | None = None,
    theme: Theme = DEFAULT_THEME,
) -> None:
    """Paint each occupied cell with its age colour and save the figure."""
    grid = _build_age_grid(positions, ages, length)
    fig, ax = plt.subplots(figsize=(6, 6))
    ax.imshow(
        np.ma.masked_invalid(grid),
        cmap=_age_cmap(theme),
        vmin=0.0,
        vmax=1.0,
        origin="upper",
        aspect="equal",
        interpolation="nearest",
    )
    if length <= 50:
        for i in range(length + 1):
            ax.axvline(i - 0.5, color=theme.grid_line_color, linewidth=0.3)
            ax.axhline(i - 0.5, color=theme.grid_line_color, linewidth=0.3)
    ax.set_xticks([])
    ax.set_yticks([])
    if title:
        ax.set_title(title)
    _apply_theme(fig, [ax], theme)
    fig.tight_layout()
    _save(fig, output_path, theme)


def render_organism(
    organism: Organism,
    output_path: Path,
    title: str | None = None,
    theme: Theme = DEFAULT_THEME,
) -> None:
    """Render an organism snapshot; reads coordinates, ages, and grid length only."""
    render_cell_grid(
        positions=[loc.as_tuple() for loc in organism.coordinates],
        ages=list(organism.ages),
        length=organism.settings.length,
        output_path=output_path,
        title=title,
        theme=theme,
    )


# ---------------------------------------------------------------------------
# Charts
# ---------------------------------------------------------------------------


def render_history(
    history: Sequence[StepRecord],
    output_path: Path,
    theme: Theme = DEFAULT_THEME,
) -> None:
    """Mean age (left axis) and organism size (right axis) over time."""
    steps = [r.step for r in history]
    fig, ax_age = plt.subplots(figsize=(8, 5))
    ax_size = ax_age.twinx()
    ax_age.plot(steps, [r.mean_age for r in history], color=theme.age_line_color, label="Age")
    ax_size.plot(steps, [r.size for r in history], color=theme.size_line_color, label="Size")
    ax_age.set_xlabel("Step")
    ax_age.set_ylabel("Age")
    ax_size.set_ylabel("Size")
    ax_age.ticklabel_format(axis="y", style="sci", scilimits=(0, 0))
    max_size = max((r.size for r in history), default=1)
    ax_size.set_ylim(0, max_size + 10)
    ax_age.set_title("Mean Age and Organism Size over Time", fontsize=12)
    _apply_theme(fig, [ax_age, ax_size], theme)
    fig.tight_layout()
    _save(fig, output_path, theme)


def render_entropy(
    entropies: Sequence[tuple[str, float]],
    output_path: Path,
    theme: Theme = DEFAULT_THEME,
) -> None:
    """Bar chart of per-position entropy labelled by the reference base."""
    fig, ax = plt.subplots(figsize=(max(4, 0.6 * len(entropies)), 4))
    positions = np.arange(len(entropies))
    ax.bar(positions, [value for _, value in entropies], color=theme.entropy_bar_color)
    ax.set_xticks(positions)
    ax.set_xticklabels([base for base, _ in entropies])
    ax.set_xlabel("Reference base")
    ax.set_ylabel("Entropy (nats)")
    ax.set_ylim(bottom=0.0)
    ax.grid(True, axis="y", alpha=0.3)
    _apply_theme(fig, [ax], theme)
    fig.tight_layout()
    _save(fig, output_path, theme)


# ---------------------------------------------------------------------------
# Artifact loading
# ---------------------------------------------------------------------------


def load_history(history_path: Path) -> list[StepRecord]:
    rows = pq.read_table(history_path).to_pylist()
    return [
        StepRecord(
            step=int(row["step"]),
            size=int(row["size"]),
            mean_age=float(row["mean_age"]),
            samplesize=int(row["samplesize"]),
            mean_entropy=float(row["mean_entropy"]),
        )
        for row in sorted(rows, key=lambda r: int(r["step"]))
    ]


def load_entropy(entropy_path: Path) -> list[tuple[str, float]]:
    rows = pq.read_table(entropy_path).to_pylist()
    rows.sort(key=lambda r: int(r["position"]))
    return [(str(r["base"]), float(r["entropy"])) for r in rows]


def load_cells(cells_path: Path, step: int | None = None) -> tuple[int, list[dict[str, object]]]:
    """Return (step, rows) for `step`, or for the last recorded step when None.

    Raises ValueError when the requested step was not recorded.
    """
    table = pq.read_table(cells_path)
    if table.num_rows == 0:
        raise ValueError(f"No cell rows in {cells_path}")
    if step is None:
        step = int(pc.max(table.column("step")).as_py())
    rows = table.filter(pc.equal(table.column("step"), step)).to_pylist()
    if not rows:
        raise ValueError(f"No cell rows for step={step} in {cells_path}")
    return step, sorted(rows, key=lambda r: int(r["cell_id"]))
