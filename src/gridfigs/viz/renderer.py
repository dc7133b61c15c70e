"""Turn a :class:`~gridfigs.viz.chart_spec.ChartSpec` into a matplotlib Figure.

The renderer only translates parameters; every drawing primitive is a
plain matplotlib call.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import matplotlib.dates as mdates
import matplotlib.pyplot as plt
import matplotlib.ticker as mticker
import numpy as np
import pandas as pd

from gridfigs.viz.chart_spec import ChartSpec, Geometry, TickFormat
from gridfigs.viz.decorations import apply_axis_lines, apply_decoration
from gridfigs.viz.figure_dimensions import get_figsize
from gridfigs.viz.plot_config import (
    DEFAULT_COLOR,
    MARKER_CYCLE,
    SHAPES,
    color_for,
    display_label,
    setup_style,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from matplotlib.axes import Axes
    from matplotlib.figure import Figure

logger = logging.getLogger(__name__)


def render(spec: ChartSpec, context: str = "paper") -> Figure:
    """Render a chart specification.

    Parameters
    ----------
    spec:
        Validated or unvalidated chart specification.
    context:
        Seaborn plotting context.

    Returns
    -------
    matplotlib Figure with a single axes.

    Raises
    ------
    RenderError
        If the specification fails :meth:`ChartSpec.validate`.
    """
    spec.validate()
    setup_style(context)

    fig, ax = plt.subplots(figsize=get_figsize(spec.figsize))
    _DRAWERS[spec.geometry](ax, spec)
    _apply_scales(ax, spec)
    apply_decoration(ax, spec.decoration, spec.grid_weight)
    apply_axis_lines(ax, spec.axis_lines)

    if spec.direct_labels:
        _label_line_ends(ax, spec)
    elif spec.legend and ax.get_legend_handles_labels()[0]:
        ax.legend(loc="best")

    if spec.title:
        ax.set_title(spec.title, fontweight="bold")

    logger.debug(
        "Rendered %s chart (%s, %s grid)",
        spec.geometry,
        spec.decoration,
        spec.grid_weight,
    )
    return fig


# ---------------------------------------------------------------------------
# Group helpers
# ---------------------------------------------------------------------------


def _levels(values: pd.Series) -> list[Any]:
    """Distinct values in category order, else order of appearance."""
    if isinstance(values.dtype, pd.CategoricalDtype):
        present = set(values.dropna())
        return [c for c in values.cat.categories if c in present]
    return list(pd.unique(values.dropna()))


def _palette(spec: ChartSpec) -> dict[str, str] | None:
    return dict(spec.scales.palette) if spec.scales.palette else None


def _group_colors(spec: ChartSpec, column: str) -> dict[Any, str]:
    palette = _palette(spec)
    return {
        level: color_for(str(level), i, palette)
        for i, level in enumerate(_levels(spec.data[column]))
    }


# ---------------------------------------------------------------------------
# Geometries
# ---------------------------------------------------------------------------


def _draw_lines(ax: Axes, spec: ChartSpec) -> None:
    m = spec.mapping
    if m.color is None:
        data = spec.data.sort_values(m.x, kind="stable")
        ax.plot(data[m.x], data[m.y], color=DEFAULT_COLOR, linewidth=1.5)
        return

    colors = _group_colors(spec, m.color)
    for level, color in colors.items():
        sub = spec.data[spec.data[m.color] == level].sort_values(m.x, kind="stable")
        ax.plot(
            sub[m.x],
            sub[m.y],
            color=color,
            linewidth=1.5,
            label=display_label(str(level)),
        )


def _draw_points(ax: Axes, spec: ChartSpec) -> None:
    m = spec.mapping
    keys = list(dict.fromkeys(c for c in (m.color, m.shape) if c is not None))
    if not keys:
        ax.scatter(
            spec.data[m.x],
            spec.data[m.y],
            color=DEFAULT_COLOR,
            s=22,
            edgecolor="white",
            linewidth=0.4,
        )
        return

    colors = _group_colors(spec, m.color) if m.color else {}
    markers: dict[Any, str] = {}
    if m.shape:
        for i, level in enumerate(_levels(spec.data[m.shape])):
            fallback = MARKER_CYCLE[i % len(MARKER_CYCLE)]
            markers[level] = SHAPES.get(str(level), fallback)

    for combo, sub in spec.data.groupby(keys, observed=True, sort=False):
        combo_values = combo if isinstance(combo, tuple) else (combo,)
        values = dict(zip(keys, combo_values, strict=True))
        label = " / ".join(
            display_label(str(v)) for v in dict.fromkeys(combo_values)
        )
        ax.scatter(
            sub[m.x],
            sub[m.y],
            color=colors.get(values.get(m.color), DEFAULT_COLOR),
            marker=markers.get(values.get(m.shape), "o"),
            s=22,
            edgecolor="white",
            linewidth=0.4,
            alpha=0.9,
            label=label,
        )


def _draw_columns(ax: Axes, spec: ChartSpec) -> None:
    _draw_bars(ax, spec, category=spec.mapping.x, value=spec.mapping.y, vertical=True)


def _draw_hbars(ax: Axes, spec: ChartSpec) -> None:
    _draw_bars(ax, spec, category=spec.mapping.y, value=spec.mapping.x, vertical=False)


def _draw_bars(
    ax: Axes,
    spec: ChartSpec,
    category: str,
    value: str,
    vertical: bool,
) -> None:
    data = spec.data
    levels = _levels(data[category])
    positions = {level: i for i, level in enumerate(levels)}
    draw = ax.bar if vertical else ax.barh
    width_kw = "width" if vertical else "height"

    color_col = spec.mapping.color
    if color_col is None:
        batches = [(None, DEFAULT_COLOR, data)]
    else:
        colors = _group_colors(spec, color_col)
        batches = [
            (display_label(str(level)), color, data[data[color_col] == level])
            for level, color in colors.items()
        ]

    for label, color, sub in batches:
        pos = [positions[c] for c in sub[category]]
        draw(
            pos,
            sub[value].to_numpy(dtype=float),
            color=color,
            label=label,
            **{width_kw: 0.7},
        )

    ticks = np.arange(len(levels))
    tick_labels = [display_label(str(level)) for level in levels]
    if vertical:
        ax.set_xticks(ticks, tick_labels)
    else:
        ax.set_yticks(ticks, tick_labels)


_DRAWERS: dict[Geometry, Callable[[Axes, ChartSpec], None]] = {
    Geometry.LINE: _draw_lines,
    Geometry.POINT: _draw_points,
    Geometry.COLUMN: _draw_columns,
    Geometry.BAR: _draw_hbars,
}


# ---------------------------------------------------------------------------
# Scales and labels
# ---------------------------------------------------------------------------


def _apply_scales(ax: Axes, spec: ChartSpec) -> None:
    scales = spec.scales
    m = spec.mapping
    ax.set_xlabel(m.x if scales.x_label is None else scales.x_label)
    ax.set_ylabel(m.y if scales.y_label is None else scales.y_label)

    if scales.x_limits is not None:
        ax.set_xlim(*_limits(scales.x_limits, scales.x_format))
    if scales.y_limits is not None:
        ax.set_ylim(*_limits(scales.y_limits, scales.y_format))

    _format_axis(ax.xaxis, scales.x_format)
    _format_axis(ax.yaxis, scales.y_format)

    if scales.equal_aspect:
        ax.set_aspect("equal", adjustable="box")


def _limits(limits: tuple[Any, Any], fmt: TickFormat) -> tuple[Any, Any]:
    if fmt == TickFormat.DATE:
        return pd.Timestamp(limits[0]), pd.Timestamp(limits[1])
    return limits


def _format_axis(axis: Any, fmt: TickFormat) -> None:
    if fmt == TickFormat.PERCENT:
        axis.set_major_formatter(mticker.PercentFormatter(xmax=100, decimals=0))
    elif fmt == TickFormat.DATE:
        axis.set_major_locator(mdates.YearLocator())
        axis.set_major_formatter(mdates.DateFormatter("%Y"))


def _label_line_ends(ax: Axes, spec: ChartSpec) -> None:
    """Write each group's name just right of its last point."""
    m = spec.mapping
    colors = _group_colors(spec, m.color)
    for level, color in colors.items():
        sub = spec.data[spec.data[m.color] == level].dropna(subset=[m.y])
        if sub.empty:
            continue
        last = sub.loc[sub[m.x].idxmax()]
        x = last[m.x]
        if isinstance(x, pd.Timestamp):
            x = mdates.date2num(x)
        ax.annotate(
            display_label(str(level)),
            xy=(x, last[m.y]),
            xytext=(4, 0),
            textcoords="offset points",
            va="center",
            color=color,
            fontsize="small",
            annotation_clip=False,
        )
    ax.margins(x=0.02)
