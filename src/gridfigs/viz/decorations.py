"""Grid, reference line and axis line presets."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from gridfigs.viz.chart_spec import Decoration, GridWeight

if TYPE_CHECKING:
    from matplotlib.axes import Axes

GRID_STYLES: dict[GridWeight, dict[str, Any]] = {
    GridWeight.LIGHT: {"color": "#D9D9D9", "linewidth": 0.6},
    GridWeight.HEAVY: {"color": "#1A1A1A", "linewidth": 1.0},
    GridWeight.ON_GRAY: {"color": "#FFFFFF", "linewidth": 0.9},
}

PANEL_BACKGROUNDS: dict[GridWeight, str] = {
    GridWeight.ON_GRAY: "#EBEBEB",
}

# The diagonal must stay visible on a white panel even when grids are light.
DIAGONAL_STYLES: dict[GridWeight, dict[str, Any]] = {
    GridWeight.LIGHT: {"color": "#8C8C8C", "linewidth": 0.8},
    GridWeight.HEAVY: {"color": "#1A1A1A", "linewidth": 1.2},
    GridWeight.ON_GRAY: {"color": "#FFFFFF", "linewidth": 1.2},
}

_GRID_AXIS: dict[Decoration, str] = {
    Decoration.FULL_GRID: "both",
    Decoration.HORIZONTAL: "y",
    Decoration.VERTICAL: "x",
}


def apply_decoration(
    ax: Axes,
    decoration: Decoration,
    weight: GridWeight = GridWeight.LIGHT,
) -> None:
    """Draw the grid lines or reference line of a decoration preset.

    Grid lines are drawn behind the data. Horizontal lines follow the y
    ticks, vertical lines the x ticks; the diagonal is the ``y = x`` line.
    """
    ax.grid(False)
    ax.set_axisbelow(True)
    if weight in PANEL_BACKGROUNDS:
        ax.set_facecolor(PANEL_BACKGROUNDS[weight])

    if decoration in _GRID_AXIS:
        ax.grid(True, axis=_GRID_AXIS[decoration], **GRID_STYLES[weight])
    elif decoration == Decoration.DIAGONAL:
        ax.axline((0, 0), slope=1, zorder=0, **DIAGONAL_STYLES[weight])


def apply_axis_lines(ax: Axes, show: bool = True) -> None:
    """Show or hide the left/bottom axis lines and tick marks."""
    for side in ("top", "right"):
        ax.spines[side].set_visible(False)
    for side in ("left", "bottom"):
        ax.spines[side].set_visible(show)
    if not show:
        ax.tick_params(axis="both", length=0)
