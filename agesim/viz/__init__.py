"""Visualization layer: themes, grid renderer, and history charts."""

from agesim.viz.render import (
    load_cells,
    load_entropy,
    load_history,
    render_cell_grid,
    render_entropy,
    render_history,
    render_organism,
)
from agesim.viz.theme import DARK_THEME, DEFAULT_THEME, REGISTERED_THEMES, Theme, get_theme

__all__ = [
    "DARK_THEME",
    "DEFAULT_THEME",
    "REGISTERED_THEMES",
    "Theme",
    "get_theme",
    "load_cells",
    "load_entropy",
    "load_history",
    "render_cell_grid",
    "render_entropy",
    "render_history",
    "render_organism",
]
