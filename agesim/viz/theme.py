"""Visualization theme presets for organism and history renderers.

Themes are frozen dataclasses that group all styling constants together so
renderers accept a ``Theme`` instance instead of hard-coded colours.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Theme:
    """Complete collection of visualization style tokens."""

    # Age gradient, young to old
    age_colors: tuple[str, ...] = ("deeppink", "gold", "seagreen")
    empty_cell_color: str = "#F0F0F0"
    grid_line_color: str = "#CCCCCC"

    # Figure chrome shared by every renderer
    figure_bg_color: str = "white"
    axes_bg_color: str = "white"
    text_color: str = "black"

    # History chart
    age_line_color: str = "red"
    size_line_color: str = "blue"
    entropy_bar_color: str = "tab:purple"
    figure_dpi: int = 150


DEFAULT_THEME = Theme()

DARK_THEME = Theme(
    empty_cell_color="#1A1A1A",
    grid_line_color="#333333",
    figure_bg_color="#111111",
    axes_bg_color="#1A1A1A",
    text_color="#E0E0E0",
    age_line_color="#FF6B6B",
    size_line_color="#4FC3F7",
    entropy_bar_color="#CE93D8",
)

REGISTERED_THEMES: dict[str, Theme] = {
    "default": DEFAULT_THEME,
    "dark": DARK_THEME,
}


def get_theme(name: str) -> Theme:
    """Look up a registered theme by name."""
    try:
        return REGISTERED_THEMES[name]
    except KeyError as exc:
        valid = ", ".join(sorted(REGISTERED_THEMES))
        raise ValueError(f"unknown theme {name!r}; must be one of {valid}") from exc
